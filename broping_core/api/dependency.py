"""
broping API dependency library
"""

import logging
from typing import Generator

import sqlalchemy.exc
from fastapi import Depends, Request
from sqlalchemy.orm import Session

from ..persistence import database
from ..persistence.store import DocumentStore


def get_session() -> Generator[Session, None, bool]:
    """
    Return a generator to handle database sessions gracefully
    """

    logger = logging.getLogger(__name__)
    session = database.get_new_session()

    try:
        yield session
        session.flush()
    except sqlalchemy.exc.SQLAlchemyError as exc:
        logger.exception(f"{type(exc).__name__}: {str(exc)}")
        session.rollback()
        raise
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
    return True


class LocalRequestData:
    """
    Collection of core dependencies used by all path operations

    This class stores references to the objects that will almost
    certainly be used by request handlers (path operations), most
    importantly the document store bound to the request's own
    database session. Nothing of it is shared between requests.
    """

    def __init__(
            self,
            request: Request,
            session: Session = Depends(get_session)
    ):
        self.request = request
        self.store = DocumentStore(session, logging.getLogger("broping_core.persistence.store"))
