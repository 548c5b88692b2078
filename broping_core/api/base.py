"""
broping REST API base library
"""

import logging
from typing import Any, Dict, Optional

from fastapi import HTTPException, Request, Response
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import envelope


logger = logging.getLogger(__name__)


async def handle_generic_exception(request: Request, _: Exception):
    logger.exception("Unhandled exception caught in base exception handler!")
    return envelope.write_response(
        "",
        500,
        "Unexpected server error. The requested action wasn't completed successfully."
    )


async def handle_request_validation_error(request: Request, exc: RequestValidationError):
    msgs = "; ".join([error["msg"] for error in exc.errors()])
    logger.debug(f"Invalid request @ '{request.method} {request.url.path}': {msgs}")
    return envelope.write_response("", 400, f"Failed to process the request: {msgs}")


class APIException(HTTPException):
    """
    Base class for any kind of generic API exception

    The ``message`` ends up in the ``Error`` field of the response
    envelope, while the optional ``detail`` is only used for logging.
    """

    def __init__(
            self,
            status_code: int,
            detail: Optional[str] = None,
            message: Optional[str] = None,
            headers: Optional[Dict[str, Any]] = None
    ):
        super().__init__(status_code=status_code, detail=detail, headers=headers)
        self.message = message

    @classmethod
    async def handle(cls, request: Request, exc: StarletteHTTPException) -> Response:
        """
        Handle exceptions in a generic way to produce response envelopes
        """

        status_code = getattr(exc, "status_code", 500)
        message = getattr(exc, "message", None) or exc.detail or type(exc).__name__

        logger.debug(
            f"{type(exc).__name__}: {message} @ '{request.method} "
            f"{request.url.path}' (details: {exc.detail})"
        )
        return envelope.write_response("", status_code, message, headers=getattr(exc, "headers", None))


class BadRequest(APIException):
    """
    Exception when the user probably messed something up

    The `message` field must be user-friendly and not too informative!
    """

    def __init__(self, message: str, detail: Optional[str] = None):
        super().__init__(status_code=400, detail=detail, message=message)


class NotFound(APIException):
    """
    Exception when a requested resource was not found in the system
    """

    def __init__(self, message: str, detail: Optional[str] = None):
        super().__init__(status_code=404, detail=detail, message=message)


class InternalServerException(APIException):
    """
    Exception for problems within the server implementation or its database
    """

    def __init__(self, message: str, detail: Optional[str] = None):
        super().__init__(status_code=500, detail=detail, message=message)


class MissingBody(BadRequest):
    def __init__(self, detail: Optional[str] = None):
        super().__init__("Request doesn't contain a body", detail)


class MalformedBody(BadRequest):
    pass


class MissingIdentifier(BadRequest):
    pass


class IdentifierMismatch(BadRequest):
    """
    Exception when the identifier in the body doesn't match the one in the path
    """

    def __init__(self, detail: Optional[str] = None):
        super().__init__("Invalid Request", detail)


class AlreadyExists(BadRequest):
    pass


class NotExists(NotFound):
    pass


class StoreFailure(InternalServerException):
    pass
