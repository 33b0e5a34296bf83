"""Tests for DynamoDB item marshaling."""

from __future__ import annotations

import logging
from decimal import Decimal

import pytest
from pydantic import BaseModel, Field, ValidationError

from iri import ID, IRI, Entity, new
from iri.attributes import from_item, to_item


class Article(Entity):
    title: str


class Measured(Entity):
    model_config = {"frozen": True, "alias_generator": str.upper}

    score: float
    count: int
    tags: list[str] = []


class Edge(BaseModel):
    source: ID
    target: IRI


class Aliased(Entity):
    ref: ID = Field(default_factory=ID, serialization_alias="REF")


class MaybeLinked(Entity):
    ref: ID | None = None


class TestToItem:
    def test_identifier_is_string_attribute(self) -> None:
        item = to_item(Article(id=new("a:b"), title="t"))
        assert item == {"id": {"S": "a:b"}, "title": {"S": "t"}}

    def test_root_is_empty_string(self) -> None:
        item = to_item(Article(id=new(""), title="t"))
        assert item["id"] == {"S": ""}

    def test_zero_segments_is_null(self) -> None:
        item = to_item(Article(id=ID(IRI(())), title="t"))
        assert item["id"] == {"NULL": True}

    def test_id_key_survives_alias_generator(self) -> None:
        item = to_item(Measured(id=new("m:1"), SCORE=0.5, COUNT=3, TAGS=["x"]))
        assert item == {
            "id": {"S": "m:1"},
            "SCORE": {"N": "0.5"},
            "COUNT": {"N": "3"},
            "TAGS": {"L": [{"S": "x"}]},
        }

    def test_plain_identifier_fields(self) -> None:
        item = to_item(Edge(source=new("a"), target=IRI.parse("a:b")))
        assert item == {"source": {"S": "a"}, "target": {"S": "a:b"}}

    def test_logs_at_debug(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.DEBUG, logger="iri"):
            to_item(Article(id=new("a"), title="t"))
        assert "Marshalled Article into 2 attributes" in caplog.text


class TestFromItem:
    @pytest.mark.parametrize("text", ["", "a", "a:b", "a:b:c"])
    def test_round_trip(self, text: str) -> None:
        record = Article(id=new(text), title="t")
        assert from_item(Article, to_item(record)) == record

    def test_null_identifier_is_root(self) -> None:
        record = from_item(Article, {"id": {"NULL": True}, "title": {"S": "t"}})
        assert record.id == new("")

    def test_numbers_and_lists(self) -> None:
        item = {
            "id": {"S": "m:1"},
            "SCORE": {"N": "0.5"},
            "COUNT": {"N": "3"},
            "TAGS": {"L": [{"S": "x"}]},
        }
        record = from_item(Measured, item)
        assert record.score == 0.5
        assert record.count == 3
        assert record.tags == ["x"]

    def test_plain_identifier_fields(self) -> None:
        edge = Edge(source=new("a"), target=IRI.parse("a:b"))
        assert from_item(Edge, to_item(edge)) == edge

    def test_missing_field_surfaces_validation_error(self) -> None:
        with pytest.raises(ValidationError):
            from_item(Article, {"id": {"S": "a"}})

    def test_linked_items_share_string_values(self) -> None:
        parent = Article(id=new("blog"), title="index")
        child = Article(id=parent.id.heir("post"), title="post")
        parent_item = to_item(parent)
        child_item = to_item(child)
        assert child.id.prefix() == parent_item["id"]["S"]
        assert from_item(Article, child_item).id.parent() == parent.id


class TestDecimalHandling:
    def test_floats_become_decimal_strings(self) -> None:
        item = to_item(Measured(id=new("m"), SCORE=1.25, COUNT=0))
        assert item["SCORE"] == {"N": str(Decimal("1.25"))}


class TestUnusualIdentifierFields:
    def test_serialization_alias_zero_segments_is_null(self) -> None:
        item = to_item(Aliased(id=new("a"), ref=ID(IRI(()))))
        assert item["REF"] == {"NULL": True}
        assert "ref" not in item

    def test_serialization_alias_round_trip(self) -> None:
        record = Aliased(id=new("a"), ref=new("b:c"))
        item = to_item(record)
        assert item["REF"] == {"S": "b:c"}
        assert from_item(Aliased, item) == record

    def test_optional_zero_segments_is_null(self) -> None:
        item = to_item(MaybeLinked(id=new("a"), ref=ID(IRI(()))))
        assert item["ref"] == {"NULL": True}

    def test_optional_value_is_string_attribute(self) -> None:
        record = MaybeLinked(id=new("a"), ref=new("b:c"))
        item = to_item(record)
        assert item["ref"] == {"S": "b:c"}
        assert from_item(MaybeLinked, item) == record

    def test_optional_null_decodes_as_none(self) -> None:
        record = MaybeLinked(id=new("a"))
        item = to_item(record)
        assert item["ref"] == {"NULL": True}
        assert from_item(MaybeLinked, item).ref is None
