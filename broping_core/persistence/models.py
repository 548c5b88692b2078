"""
broping core database models
"""

import datetime

from sqlalchemy import JSON, Column, DateTime, FetchedValue, String
from sqlalchemy.sql import func

from .database import Base


class Entity(Base):
    """
    Model representing one stored document, identified by its kind and its name

    The document itself is kept as opaque JSON content. Entities are never
    removed by the API, since resources are disabled via their ``Active`` flag.
    """

    __tablename__ = "entities"

    kind: str = Column(String(255), nullable=False, primary_key=True)
    """Namespace of the entity, e.g. 'User' or 'Bar'"""
    name: str = Column(String(255), nullable=False, primary_key=True)
    """Natural identifier of the entity, unique within its kind"""
    content: dict = Column(JSON, nullable=False)
    created: datetime.datetime = Column(DateTime, server_default=func.now())
    modified: datetime.datetime = Column(DateTime, server_onupdate=FetchedValue(), server_default=func.now(), onupdate=func.now())

    def __repr__(self) -> str:
        return f"Entity(kind={self.kind!r}, name={self.name!r})"
