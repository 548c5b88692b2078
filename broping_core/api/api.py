"""
broping core REST API definitions

The API exposes users and bars as independent resources. Both kinds of
resources are identified by a natural identifier chosen by the client,
which must be unique for the kind of resource. Resources are never
removed: deleting a resource disables it, but it can still be read.

The API always returns JSON-encoded data using the same envelope for every
response, regardless of the status code. The field `Content` holds the
payload of a successful request, or the empty string otherwise. The field
`Error` holds a human-readable message for failed requests, while the field
`StatusCode` repeats the HTTP status code. Successful write operations return
an object with the opaque `Key` of the affected resource as `Content`.

The following status codes are used:

1. `200` (OK) for any successful request.
2. `400` (Bad Request) when the body is missing or malformed, the identifier
   is empty, the identifier has already been used or the identifier of the
   path doesn't match the identifier in the body.
3. `404` (Not Found) when there's no resource for the given identifier.
4. `500` (Internal Server Error) when the database failed.
"""

import logging.config
from typing import Callable, Dict, Optional

import fastapi
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import base
from .routers import ROUTERS
from .. import schemas, __version__
from ..persistence import database
from ..settings import Settings


DEFAULT_EXCEPTION_HANDLERS = {
    StarletteHTTPException: base.APIException.handle,
    RequestValidationError: base.handle_request_validation_error,
    Exception: base.handle_generic_exception
}


def register_routers(app: fastapi.FastAPI, routers: Optional[list] = None):
    """
    Register the routers of all resource controllers on the given application
    """

    for router in routers if routers is not None else ROUTERS:
        app.include_router(router)


def create_app(
        settings: Optional[Settings] = None,
        configure_logging: bool = True,
        configure_database: bool = True,
        exception_handlers: Optional[Dict[Exception, Callable]] = None
) -> fastapi.FastAPI:
    """
    Create a new ``FastAPI`` instance using the specified settings and switches

    This function is conveniently used to allow overwriting the settings
    before launching the application as well as to allow multiple ``FastAPI``
    instances in one program, which in turn makes unit testing much easier.

    :param settings: optional Settings instance (would be created if not present)
    :param configure_logging: switch whether to configure logging
    :param configure_database: switch whether to configure the database
    :param exception_handlers: optional mapping of exception classes to handlers
        (the default handlers produce response envelopes for all errors)
    :return: new ``FastAPI`` instance
    """

    if settings is None:
        settings = Settings()

    if configure_logging:
        logging.config.dictConfig(settings.logging.model_dump())
    logger = logging.getLogger(__name__)
    logger.debug("Starting application...")

    if configure_database:
        database.init(settings.database.connection, settings.database.debug_sql)

    app = fastapi.FastAPI(
        title="broping core REST API",
        version=__version__,
        description=__doc__,
        responses={400: {"model": schemas.Envelope}}
    )

    handlers = exception_handlers or DEFAULT_EXCEPTION_HANDLERS
    for exc in handlers:
        app.add_exception_handler(exc, handlers[exc])

    register_routers(app)
    logger.debug(f"Registered {len(app.routes)} routes")
    return app


class APIWrapper:
    """
    Wrapper class around the FastAPI main object, accessible via the ``app`` property

    There should be only one global instance of this object, which should only
    export its functionality to hold the ``app`` property. This wrapper can be
    used to allow easy command-line usage via ``uvicorn`` calls. Example:

    .. code-block::

        uvicorn broping_core.api.api:api.app
    """

    def __init__(self):
        self._app: Optional[fastapi.FastAPI] = None

    def set_app(self, application: fastapi.FastAPI):
        if not isinstance(application, fastapi.FastAPI):
            raise TypeError
        self._app = application

    @property
    def app(self) -> fastapi.FastAPI:
        """
        Return the ``app`` instance (or create it with default settings if it doesn't exist)
        """

        if self._app is not None:
            return self._app
        self._app = create_app()
        return self._app


api = APIWrapper()
