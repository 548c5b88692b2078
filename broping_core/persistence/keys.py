"""
broping key derivation for stored entities
"""

import json
import base64
from typing import NamedTuple


class Key(NamedTuple):
    """
    Key of a stored entity, namespaced by the kind of the resource

    Two keys are equal if and only if both kind and name are equal,
    so equal names of different kinds never collide.
    """

    kind: str
    name: str

    def encode(self) -> str:
        """
        Return the opaque, URL-safe string representation of this key
        """

        raw = json.dumps([self.kind, self.name], ensure_ascii=False, separators=(",", ":"))
        return base64.urlsafe_b64encode(raw.encode("utf-8")).decode("ascii").rstrip("=")

    @classmethod
    def decode(cls, encoded: str) -> "Key":
        """
        Return the key of a string that has been created by ``encode``

        :raises ValueError: when the string is not a valid encoded key
        """

        padding = "=" * (-len(encoded) % 4)
        try:
            parts = json.loads(base64.urlsafe_b64decode(encoded + padding).decode("utf-8"))
        except ValueError as exc:
            raise ValueError(f"Invalid encoded key {encoded!r}") from exc
        if not isinstance(parts, list) or len(parts) != 2 or not all(isinstance(p, str) for p in parts):
            raise ValueError(f"Invalid encoded key {encoded!r}")
        return cls(*parts)

    def __str__(self) -> str:
        return f"{self.kind}({self.name!r})"


def derive_key(kind: str, identifier: str) -> Key:
    return Key(kind, identifier)
