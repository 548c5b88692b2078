"""
broping response envelope codec

Every response body of the API, successful or not, is an ``Envelope``.
Encoding never fails the transport: if the payload can't be serialized,
a fixed-shape internal error body is written with status code 500 instead.
"""

import json
import logging
from typing import Any, Dict, Optional, Union

from fastapi.encoders import jsonable_encoder
from fastapi.responses import Response

from .. import schemas
from ..persistence.keys import Key


logger = logging.getLogger(__name__)

MEDIA_TYPE = "application/json; charset=utf-8"
INTERNAL_ERROR_FORMAT = '{{"Error": {},"StatusCode":{}}}'


def build_internal_error_message(message: str) -> bytes:
    return INTERNAL_ERROR_FORMAT.format(json.dumps(message), 500).encode("utf-8")


def write(status_code: int, body: bytes, headers: Optional[Dict[str, str]] = None) -> Response:
    response = Response(content=body, status_code=status_code, media_type=MEDIA_TYPE, headers=headers)
    response.headers["X-Content-Type-Options"] = "nosniff"
    return response


def write_response(
        content: Any,
        status_code: int,
        error: Union[str, Exception, None] = None,
        headers: Optional[Dict[str, str]] = None
) -> Response:
    """
    Wrap the content into an envelope and return the encoded response

    :param content: payload of the response (use an empty string for errors)
    :param status_code: HTTP status code of the response, repeated in the envelope
    :param error: optional error message or exception that caused the failure
    :param headers: optional additional headers of the response
    :return: response with the JSON-encoded envelope as body
    """

    try:
        envelope = schemas.Envelope(
            Content=jsonable_encoder(content),
            Error=str(error) if error is not None else "",
            StatusCode=status_code
        )
        body = json.dumps(envelope.model_dump(), ensure_ascii=False, allow_nan=False).encode("utf-8")
    except (TypeError, ValueError) as exc:
        logger.exception(f"Failed to encode response envelope with status code {status_code}")
        return write(500, build_internal_error_message(str(exc)))
    return write(status_code, body, headers)


def reply_key(key: Key) -> Response:
    """
    Return the confirmation of a successful write operation, carrying the encoded key
    """

    return write_response(schemas.KeyConfirmation(Key=key.encode()), 200)
