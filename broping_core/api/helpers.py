"""
Generic helper library for the core REST API
"""

import json
import logging

import pydantic
from fastapi import Request

from .base import MalformedBody, MissingBody
from .resources import ResourceKind, ResourceType


logger = logging.getLogger(__name__)


async def decode_body(request: Request, kind: ResourceKind[ResourceType]) -> ResourceType:
    """
    Decode the JSON body of the request into a resource of the given kind

    A JSON ``null`` yields the zero value of the resource, so that the
    usual validation of the (then empty) identifier takes place afterwards.
    Values of the wrong JSON type are rejected by the strict fields of the
    schemas instead of being converted (integers for floats are fine).

    :param request: incoming request whose body should be decoded
    :param kind: descriptor of the expected kind of resource
    :return: resulting resource as pydantic model
    :raises MissingBody: when the request has no or an empty body
    :raises MalformedBody: when the body is no valid JSON or doesn't match the resource schema
    """

    raw = await request.body()
    if not raw.strip():
        raise MissingBody()

    try:
        data = json.loads(raw)
    except ValueError as exc:
        logger.debug(f"Invalid JSON in request body @ '{request.method} {request.url.path}': {exc}")
        raise MalformedBody(f"Request body is not valid JSON: {exc}", str(exc)) from exc

    if data is None:
        return kind.zero()
    if not isinstance(data, dict):
        raise MalformedBody(f"Request body must be a JSON object, not {type(data).__name__}")

    try:
        return kind.schema.model_validate(data)
    except pydantic.ValidationError as exc:
        msgs = "; ".join(
            f"{'.'.join(str(loc) for loc in error['loc'])}: {error['msg']}"
            for error in exc.errors()
        )
        raise MalformedBody(f"Request body doesn't describe a valid {kind.name}: {msgs}", str(exc)) from exc
