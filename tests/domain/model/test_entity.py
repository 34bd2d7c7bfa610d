from __future__ import annotations

from datetime import datetime

import pytest

from sheetgraph.domain.model import Entity, PropertyDescriptor, RelationshipRef, Rights


def test_relationship_ref_requires_exactly_one_key() -> None:
    with pytest.raises(ValueError, match="exactly one of id or alias"):
        RelationshipRef()

    with pytest.raises(ValueError, match="exactly one of id or alias"):
        RelationshipRef(id="1", alias="one")


def test_new_entity_is_empty() -> None:
    entity = Entity(type="Person")

    assert entity.doc == {}
    assert entity.rel == {}
    assert entity.alias is None
    assert entity.mac is None
    assert entity.is_resolved


def test_pending_references_lists_placeholders_only() -> None:
    department = Entity(type="Department", id="42")
    entity = Entity(
        type="Person",
        rel={
            "Department": department,
            "Manager": RelationshipRef(alias="boss"),
            "Team": {"doc": {"size": 3}},
        },
    )

    assert entity.pending_references == {"Manager": RelationshipRef(alias="boss")}
    assert not entity.is_resolved


def test_as_document_nests_related_entities() -> None:
    department = Entity(type="Department", doc={"title": "Sales"}, id="42", alias="sales")
    entity = Entity(
        type="Person",
        doc={"name": "Ada", "hired": datetime(2024, 1, 1)},
        rel={"Department": department, "Manager": RelationshipRef(id="7")},
        alias="ada",
        mac={"admin": Rights(query=True)},
    )

    document = entity.as_document()

    assert document["rel"] == {
        "Department": {
            "type": "Department",
            "doc": {"title": "Sales"},
            "rel": {},
            "id": "42",
            "alias": "sales",
        },
        "Manager": {"id": "7"},
    }
    assert document["alias"] == "ada"
    assert document["mac"] == {
        "admin": {"query": True, "update": False, "remove": False, "create": False}
    }
    assert "id" not in document


def test_property_descriptor_defaults() -> None:
    prop = PropertyDescriptor(name="Department", type_name="Department")

    assert prop.path == "Department"
    assert prop.is_relationship
    assert prop.id_column == "Department:id"
    assert prop.alias_column == "Department:alias"
    assert not PropertyDescriptor(name="name").is_relationship


def test_rights_from_mapping_ignores_unknown_keys() -> None:
    rights = Rights.from_mapping({"query": "x", "create": 1, "delete": True})

    assert rights == Rights(query=True, create=True)
    assert rights.as_dict() == {"query": True, "update": False, "remove": False, "create": True}
