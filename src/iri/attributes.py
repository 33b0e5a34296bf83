"""DynamoDB item marshaling for records that carry identifiers.

Identifier fields (``IRI`` or ``ID``, optionally inside a union such as
``ID | None``) go through their own attribute contract so they are stored
as plain string attributes; everything else goes through boto3's type
(de)serializer.
"""

from __future__ import annotations

import json
import logging
import types
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, TypeVar, Union, get_args, get_origin

from boto3.dynamodb.types import TypeDeserializer, TypeSerializer
from pydantic import BaseModel
from pydantic.fields import FieldInfo

from iri.core import IRI
from iri.identity import ID

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)

_serializer = TypeSerializer()
_deserializer = TypeDeserializer()


@dataclass(frozen=True)
class _Slot:
    """Where one model field lives in an item and how it validates."""

    name: str
    validation_key: str
    identifier: type[IRI | ID] | None
    nullable: bool


def _identifier_type(annotation: Any) -> tuple[type[IRI | ID] | None, bool]:
    """Return the identifier type inside *annotation* and whether None is allowed."""
    if isinstance(annotation, type) and issubclass(annotation, (IRI, ID)):
        return annotation, False
    if get_origin(annotation) in (Union, types.UnionType):
        members = get_args(annotation)
        for member in members:
            if isinstance(member, type) and issubclass(member, (IRI, ID)):
                return member, type(None) in members
    return None, False


def _serialization_key(name: str, info: FieldInfo) -> str:
    return info.serialization_alias or info.alias or name


def _validation_key(name: str, info: FieldInfo) -> str:
    if isinstance(info.validation_alias, str):
        return info.validation_alias
    return info.alias or name


def _slots(model: type[BaseModel]) -> dict[str, _Slot]:
    """Map item attribute key -> slot for every field of *model*."""
    slots: dict[str, _Slot] = {}
    for name, info in model.model_fields.items():
        identifier, nullable = _identifier_type(info.annotation)
        slots[_serialization_key(name, info)] = _Slot(
            name=name,
            validation_key=_validation_key(name, info),
            identifier=identifier,
            nullable=nullable,
        )
    return slots


def to_item(record: BaseModel) -> dict[str, dict[str, Any]]:
    """Marshal *record* into a DynamoDB item keyed by serialization alias.

    Floats are carried as :class:`~decimal.Decimal`, as boto3 requires.
    """
    data = json.loads(record.model_dump_json(by_alias=True), parse_float=Decimal)
    item = {key: _serializer.serialize(value) for key, value in data.items()}
    for key, slot in _slots(type(record)).items():
        value = getattr(record, slot.name)
        if key in item and isinstance(value, (IRI, ID)):
            item[key] = value.to_attribute_value()
    logger.debug("Marshalled %s into %d attributes", type(record).__name__, len(item))
    return item


def from_item(model: type[M], item: dict[str, dict[str, Any]]) -> M:
    """Unmarshal a DynamoDB *item* into an instance of *model*.

    A NULL identifier attribute decodes as None when the field allows it,
    and as the root identity otherwise.  Validation errors surface from
    pydantic unchanged.
    """
    slots = _slots(model)
    data: dict[str, Any] = {}
    for key, value in item.items():
        slot = slots.get(key)
        if slot is None:
            data[key] = _deserializer.deserialize(value)
        elif slot.identifier is None:
            data[slot.validation_key] = _deserializer.deserialize(value)
        elif slot.nullable and value.get("NULL"):
            data[slot.validation_key] = None
        else:
            if "S" not in value:
                logger.debug("Attribute %r has no string value; decoding as root", key)
            data[slot.validation_key] = slot.identifier.from_attribute_value(value)
    return model.model_validate(data)
