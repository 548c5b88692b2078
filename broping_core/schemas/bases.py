"""
broping schemas for the persisted resources

Field names follow the JSON shape of the stored documents (e.g. ``Username``
or ``Location``). The lower-case attribute names are accepted on input, too.
Any missing field takes its zero value, as does a field set to ``null``.
Unknown fields are silently ignored. Values are never converted between
JSON types, except that integers are accepted as coordinates.
"""

import pydantic


class _Document(pydantic.BaseModel):
    model_config = pydantic.ConfigDict(populate_by_name=True, extra="ignore")

    @pydantic.model_validator(mode="before")
    @classmethod
    def drop_null_fields(cls, data):
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data

    def document(self) -> dict:
        """
        Return the JSON-compatible representation as it will be persisted and sent to clients
        """

        return self.model_dump(mode="json", by_alias=True)


class GeoPoint(_Document):
    lat: float = pydantic.Field(0.0, alias="Lat", strict=True, ge=-90, le=90)
    lng: float = pydantic.Field(0.0, alias="Lng", strict=True, ge=-180, le=180)


class User(_Document):
    username: str = pydantic.Field("", alias="Username", strict=True)
    password: str = pydantic.Field("", alias="Password", strict=True)
    email: str = pydantic.Field("", alias="Email", strict=True)
    active: bool = pydantic.Field(False, alias="Active", strict=True)


class Bar(_Document):
    id: str = pydantic.Field("", alias="Id", strict=True)
    name: str = pydantic.Field("", alias="Name", strict=True)
    location: GeoPoint = pydantic.Field(default_factory=GeoPoint, alias="Location")
    active: bool = pydantic.Field(False, alias="Active", strict=True)
