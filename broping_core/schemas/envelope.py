"""
broping response envelope schemas
"""

from typing import Any

import pydantic


class Envelope(pydantic.BaseModel):
    """
    Envelope: shared wrapper for every response sent by the API

    The field `Content` holds the payload of a successful request, which is
    either the requested resource or a `KeyConfirmation` for write operations.
    It's the empty string for any kind of failure. The field `Error` contains
    a short human-readable message about the problem, which is empty on success.
    The field `StatusCode` repeats the HTTP status code of the response, so
    that clients have exactly one parsing path regardless of the outcome.
    """

    Content: Any = ""
    Error: str = ""
    StatusCode: pydantic.NonNegativeInt


class KeyConfirmation(pydantic.BaseModel):
    Key: str
