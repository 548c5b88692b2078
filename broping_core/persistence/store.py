"""
broping document store on top of the entity table

The store knows nothing about the structure of the documents. It only
maps keys to JSON documents and performs exactly one write per call,
without any retries. A store is bound to one database session, which
is usually scoped to the lifetime of a single request.
"""

import copy
import logging
from typing import Optional

import sqlalchemy
import sqlalchemy.exc
from sqlalchemy.orm import Session

from .keys import Key
from .models import Entity
from ..misc.logger import enforce_logger


class StoreError(Exception):
    """
    Exception when the backing database failed to complete an operation
    """


class EntityNotFound(LookupError):
    """
    Exception when no entity has been stored for a key
    """

    def __init__(self, key: Key):
        super().__init__(f"No entity found for {key}")
        self.key = key


class EntityExists(Exception):
    """
    Exception when a create-only write found an entity for its key
    """

    def __init__(self, key: Key):
        super().__init__(f"Entity {key} already exists")
        self.key = key


class DocumentStore:
    def __init__(self, session: Session, logger: Optional[logging.Logger] = None):
        self.session = session
        self.logger = enforce_logger(logger or logging.getLogger(__name__))

    def get(self, key: Key) -> dict:
        """
        Return a copy of the document stored for the given key

        :raises EntityNotFound: when nothing is stored for the key
        :raises StoreError: when the database query failed
        """

        try:
            entity = self.session.get(Entity, (key.kind, key.name))
        except sqlalchemy.exc.SQLAlchemyError as exc:
            self.logger.exception(f"Failed to load {key}")
            raise StoreError(f"Failed to load {key}: {type(exc).__name__}") from exc
        if entity is None:
            raise EntityNotFound(key)
        return copy.deepcopy(entity.content)

    def put(self, key: Key, document: dict) -> Key:
        """
        Store the document for the given key, overwriting the existing one

        :raises StoreError: when the database failed to store the document
        """

        try:
            entity = self.session.get(Entity, (key.kind, key.name))
            if entity is None:
                self.session.add(Entity(kind=key.kind, name=key.name, content=document))
            else:
                entity.content = document
            self.session.commit()
        except sqlalchemy.exc.SQLAlchemyError as exc:
            self.session.rollback()
            self.logger.exception(f"Failed to store {key}")
            raise StoreError(f"Failed to store {key}: {type(exc).__name__}") from exc
        self.logger.debug(f"Stored {key}")
        return key

    def insert(self, key: Key, document: dict) -> Key:
        """
        Store the document for the given key only if there's no entity for it yet

        The primary key of the entity table makes this operation atomic,
        so two concurrent inserts of the same key can't both succeed.

        :raises EntityExists: when an entity for that key has already been stored
        :raises StoreError: when the database failed to store the document
        """

        try:
            self.session.execute(sqlalchemy.insert(Entity).values(kind=key.kind, name=key.name, content=document))
            self.session.commit()
        except sqlalchemy.exc.IntegrityError as exc:
            self.session.rollback()
            self.logger.debug(f"Rejected duplicate insert of {key}")
            raise EntityExists(key) from exc
        except sqlalchemy.exc.SQLAlchemyError as exc:
            self.session.rollback()
            self.logger.exception(f"Failed to insert {key}")
            raise StoreError(f"Failed to insert {key}: {type(exc).__name__}") from exc
        self.logger.debug(f"Inserted {key}")
        return key
