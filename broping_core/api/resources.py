"""
broping library of the generic resource handling

Every kind of resource (e.g. users or bars) follows the same rules:

1. The key of a resource is derived from its kind and its natural identifier.
2. A resource can only be created if there's no other resource with the same
   key, regardless whether that one is still active or has been disabled.
   Newly created resources are always active.
3. Resources are never removed from the store. Deleting a resource just
   clears its ``Active`` flag, so the identifier can't be used again.
4. Reading a resource returns the stored document as-is, i.e. disabled
   resources can still be read by clients.
"""

import logging
from typing import Generic, Optional, Type, TypeVar

import pydantic

from .base import AlreadyExists, IdentifierMismatch, MissingIdentifier, NotExists, StoreFailure
from ..misc.logger import enforce_logger
from ..persistence.keys import Key, derive_key
from ..persistence.store import DocumentStore, EntityExists, EntityNotFound, StoreError
from .. import schemas


ResourceType = TypeVar("ResourceType", bound=pydantic.BaseModel)


class ResourceKind(Generic[ResourceType]):
    """
    Descriptor of one kind of resource

    :param name: name of the kind, used as namespace for the keys
    :param schema: pydantic model of the resource
    :param identifier_field: name of the attribute holding the natural identifier
    :param label: human-readable name of the identifier used in error messages
    """

    def __init__(self, name: str, schema: Type[ResourceType], identifier_field: str, label: str):
        self.name = name
        self.schema = schema
        self.identifier_field = identifier_field
        self.label = label

    def identify(self, resource: ResourceType) -> str:
        return getattr(resource, self.identifier_field)

    def zero(self) -> ResourceType:
        return self.schema()

    def __repr__(self) -> str:
        return f"ResourceKind(name={self.name!r}, schema={self.schema.__name__})"


USERS: ResourceKind[schemas.User] = ResourceKind("User", schemas.User, "username", "Username")
BARS: ResourceKind[schemas.Bar] = ResourceKind("Bar", schemas.Bar, "id", "ID")


class ResourceService(Generic[ResourceType]):
    """
    Generic create, read, update and soft-delete operations of one kind of resource

    The service works on the store it's been given and doesn't keep any other
    state, so it's cheap to create one service per request. Every operation
    issues at most one write to the store and never retries a failed write.
    """

    def __init__(
            self,
            kind: ResourceKind[ResourceType],
            store: DocumentStore,
            logger: Optional[logging.Logger] = None
    ):
        self.kind = kind
        self.store = store
        self.logger = enforce_logger(logger or logging.getLogger(__name__))

    def key_of(self, identifier: str) -> Key:
        return derive_key(self.kind.name, identifier)

    def fetch(self, identifier: str) -> ResourceType:
        """
        Return the resource identified by the given identifier

        :raises NotExists: when there's no resource for that identifier
        :raises StoreFailure: when the store failed to look up the resource
        """

        key = self.key_of(identifier)
        try:
            document = self.store.get(key)
        except EntityNotFound as exc:
            raise NotExists(f"{self.kind.label} {identifier} does not exist", str(exc)) from exc
        except StoreError as exc:
            raise StoreFailure(str(exc)) from exc
        return self.kind.schema.model_validate(document)

    def exists(self, identifier: str) -> bool:
        try:
            self.fetch(identifier)
        except NotExists:
            return False
        return True

    def read(self, identifier: str) -> ResourceType:
        """
        Return the stored resource verbatim, including its current ``Active`` flag
        """

        return self.fetch(identifier)

    def create(self, resource: ResourceType) -> Key:
        """
        Store the given resource as a new, active resource of this kind

        :raises MissingIdentifier: when the resource has an empty identifier
        :raises AlreadyExists: when a resource with this identifier has been created before
        :raises StoreFailure: when the store failed to write the resource
        """

        identifier = self.kind.identify(resource)
        if not identifier:
            raise MissingIdentifier(f"{self.kind.label} is mandatory")
        if self.exists(identifier):
            raise AlreadyExists(f"{self.kind.label} already exists", f"identifier={identifier!r}")

        resource = resource.model_copy(update={"active": True})
        key = self.key_of(identifier)
        self.logger.debug(f"Creating {key}...")
        try:
            return self.store.insert(key, resource.document())
        except EntityExists as exc:
            raise AlreadyExists(f"{self.kind.label} already exists", str(exc)) from exc
        except StoreError as exc:
            raise StoreFailure(str(exc)) from exc

    def update(self, identifier: str, resource: ResourceType) -> Key:
        """
        Replace the resource identified by the given identifier completely

        The ``Active`` flag is stored as given by the new resource. Note that
        the identifier of the new resource must equal the existing one,
        since renaming a resource is not supported.

        :raises NotExists: when there's no resource for that identifier
        :raises IdentifierMismatch: when the new resource carries another identifier
        :raises StoreFailure: when the store failed to write the resource
        """

        self.fetch(identifier)
        if self.kind.identify(resource) != identifier:
            raise IdentifierMismatch(
                f"Received {self.kind.label.lower()} {self.kind.identify(resource)!r} for {identifier!r}"
            )
        self.logger.debug(f"Updating {self.key_of(identifier)}...")
        return self._put(identifier, resource)

    def soft_delete(self, identifier: str) -> Key:
        """
        Disable the resource identified by the given identifier without removing it

        :raises NotExists: when there's no resource for that identifier
        :raises StoreFailure: when the store failed to write the resource
        """

        resource = self.fetch(identifier).model_copy(update={"active": False})
        self.logger.debug(f"Disabling {self.key_of(identifier)}...")
        return self._put(identifier, resource)

    def _put(self, identifier: str, resource: ResourceType) -> Key:
        try:
            return self.store.put(self.key_of(identifier), resource.document())
        except StoreError as exc:
            raise StoreFailure(str(exc)) from exc
