"""Pydantic models describing type schema files."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field, field_validator

from sheetgraph.domain.model import PropertyDescriptor, TypeDescriptor

if TYPE_CHECKING:
    from pathlib import Path


def _blank_to_none(value: object) -> object:
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return value


class SchemaBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class PropertyPayload(SchemaBaseModel):
    name: str
    path: str | None = None
    type_name: str | None = Field(default=None, alias="typeName")
    required: bool = False

    _normalize_type_name = field_validator("type_name", "path", mode="before")(_blank_to_none)

    def to_descriptor(self) -> PropertyDescriptor:
        return PropertyDescriptor(
            name=self.name,
            path=self.path or self.name,
            type_name=self.type_name,
            required=self.required,
        )


class TypeSchemaPayload(SchemaBaseModel):
    name: str
    properties: list[PropertyPayload] | None = Field(default=None, alias="propertiesList")

    def to_descriptor(self) -> TypeDescriptor:
        properties = (
            None
            if self.properties is None
            else tuple(prop.to_descriptor() for prop in self.properties)
        )
        return TypeDescriptor(name=self.name, properties=properties)


class TypeSchemaFile(SchemaBaseModel):
    types: list[TypeSchemaPayload]

    def to_descriptors(self) -> list[TypeDescriptor]:
        return [payload.to_descriptor() for payload in self.types]


def load_type_schemas(path: Path) -> list[TypeDescriptor]:
    """Read and validate a JSON type schema file."""

    with path.open(encoding="utf-8") as handle:
        payload = json.load(handle)
    return TypeSchemaFile.model_validate(payload).to_descriptors()


def descriptor_to_payload(descriptor: TypeDescriptor) -> dict[str, object]:
    """Serialise a descriptor in the schema-file shape (used for storage)."""

    payload = TypeSchemaPayload(
        name=descriptor.name,
        properties=None
        if descriptor.properties is None
        else [
            PropertyPayload(
                name=prop.name,
                path=prop.path,
                type_name=prop.type_name,
                required=prop.required,
            )
            for prop in descriptor.properties
        ],
    )
    return payload.model_dump(by_alias=True)
