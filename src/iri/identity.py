"""Typed identity built over :class:`~iri.core.IRI`.

Records get a distinct identifier by composing :class:`Entity` (or by
declaring an :class:`ID` field), never by subclassing a shared base
identifier::

    class Article(Entity):
        title: str

    Article(id=new("blog:%s", "post"), title="t")

Code that only needs an identifier accepts any :class:`Thing`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable

from pydantic import BaseModel, Field, GetCoreSchemaHandler
from pydantic_core import core_schema

from iri.core import IRI, identifier_schema

logger = logging.getLogger(__name__)


def _format(pattern: str, args: tuple[Any, ...]) -> str:
    try:
        return pattern % args
    except (TypeError, ValueError):
        logger.debug("Pattern %r does not match %d arguments", pattern, len(args))
        return f"{pattern}%!(EXTRA {', '.join(map(str, args))})"


@runtime_checkable
class Thing(Protocol):
    """Anything with an identity."""

    def identity(self) -> ID: ...


@dataclass(frozen=True, slots=True)
class ID:
    """Unique identity of a thing; delegates everything to its :class:`IRI`."""

    iri: IRI = field(default_factory=IRI)

    @classmethod
    def new(cls, pattern: str, *args: Any) -> ID:
        """Parse a compact IRI, formatting *pattern* with *args* first if given.

        Never fails: when *pattern* and *args* disagree, the arguments are
        appended as ``%!(EXTRA a, b)`` instead of being substituted.
        """
        if args:
            return cls(IRI.parse(_format(pattern, args)))
        return cls(IRI.parse(pattern))

    @classmethod
    def parse(cls, text: str) -> ID:
        return cls(IRI.parse(text))

    def __str__(self) -> str:
        return str(self.iri)

    def prefix(self, rank: int = 1) -> str:
        return self.iri.prefix(rank)

    def suffix(self, rank: int = 1) -> str:
        return self.iri.suffix(rank)

    def parent(self, rank: int = 1) -> ID:
        return type(self)(self.iri.parent(rank))

    def heir(self, segment: str) -> ID:
        return type(self)(self.iri.heir(segment))

    def path(self) -> str:
        return self.iri.path()

    def eq(self, other: ID) -> bool:
        return self.iri.eq(other.iri)

    def segments(self) -> tuple[str, ...]:
        return self.iri.segments()

    def identity(self) -> ID:
        return self

    def to_iri(self) -> IRI:
        """Expose the untyped identifier."""
        return self.iri

    def to_attribute_value(self) -> dict[str, Any]:
        return self.iri.to_attribute_value()

    @classmethod
    def from_attribute_value(cls, value: dict[str, Any]) -> ID:
        return cls(IRI.from_attribute_value(value))

    @classmethod
    def __get_pydantic_core_schema__(
        cls,
        source: type[Any],
        handler: GetCoreSchemaHandler,
    ) -> core_schema.CoreSchema:
        return identifier_schema(cls, cls.parse)


def new(pattern: str, *args: Any) -> ID:
    """Shorthand for :meth:`ID.new`."""
    return ID.new(pattern, *args)


class Entity(BaseModel):
    """Base for records that carry an identity under the ``id`` key.

    Declaring ``id: ID`` directly on any model is the composition route
    and behaves the same in both formats; this base only saves the field
    declaration and adds :meth:`identity`.

    The explicit alias outranks any ``alias_generator`` a subclass
    configures, so every record exports its identity the same way in
    JSON and in DynamoDB items.
    """

    model_config = {"frozen": True}

    id: ID = Field(default_factory=ID, alias="id")

    def identity(self) -> ID:
        return self.id
