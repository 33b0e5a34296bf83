"""Compact IRI: an immutable sequence of colon-delimited segments.

``a:b:c`` names "c" under "b" under "a".  The empty string parses to the
root identity ``("",)``; every navigation method returns a new value and
never touches the receiver.

Serialization boundaries:
- pydantic (JSON): the canonical ``a:b:c`` string
- DynamoDB attribute values: ``{"S": "a:b:c"}``, or ``{"NULL": True}``
  for a zero-segment sequence
"""

from __future__ import annotations

import posixpath
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from boto3.dynamodb.types import TypeSerializer
from pydantic import GetCoreSchemaHandler
from pydantic_core import core_schema

DELIMITER = ":"

_serializer = TypeSerializer()


def _check_rank(rank: int) -> None:
    if rank < 0:
        msg = f"rank must be non-negative, got {rank}"
        raise ValueError(msg)


def _join_path(segments: tuple[str, ...]) -> str:
    """Join segments as a slash path, skipping empty ones, then clean it."""
    parts = [s for s in segments if s]
    if not parts:
        return ""
    cleaned = posixpath.normpath("/".join(parts))
    # POSIX keeps exactly two leading slashes; a clean path does not.
    if cleaned.startswith("//"):
        cleaned = "/" + cleaned.lstrip("/")
    return cleaned


@dataclass(frozen=True, slots=True)
class IRI:
    """Internationalized Resource Identifier in its compact form."""

    seq: tuple[str, ...] = ("",)

    def __post_init__(self) -> None:
        if isinstance(self.seq, str):
            msg = f"IRI takes a sequence of segments; use IRI.parse({self.seq!r})"
            raise TypeError(msg)
        # Accept any iterable but always own an immutable copy.
        if not isinstance(self.seq, tuple):
            object.__setattr__(self, "seq", tuple(self.seq))

    @classmethod
    def parse(cls, text: str) -> IRI:
        """Split *text* on ``:``.  Never fails; ``""`` yields the root."""
        return cls(tuple(text.split(DELIMITER)))

    def __str__(self) -> str:
        return DELIMITER.join(self.seq)

    def prefix(self, rank: int = 1) -> str:
        """Return the segments left after dropping the last *rank*.

        A single-segment IRI returns itself for the default rank rather
        than an empty string.
        """
        _check_rank(rank)
        if rank == 1 and len(self.seq) == 1:
            return DELIMITER.join(self.seq)

        n = len(self.seq) - rank
        if n < 0:
            return ""
        return DELIMITER.join(self.seq[:n])

    def suffix(self, rank: int = 1) -> str:
        """Return the last *rank* segments; empty for a single segment."""
        _check_rank(rank)
        if len(self.seq) == 1:
            return ""

        n = max(len(self.seq) - rank, 0)
        return DELIMITER.join(self.seq[n:])

    def parent(self, rank: int = 1) -> IRI:
        """Return the ancestor *rank* generations up, bottoming out at root."""
        _check_rank(rank)
        n = len(self.seq) - rank
        if n <= 0:
            return type(self)(("",))
        return type(self)(self.seq[:n])

    def heir(self, segment: str) -> IRI:
        """Return the child IRI named *segment*."""
        if self.seq == ("",):
            return type(self)((segment,))
        return type(self)((*self.seq, segment))

    def path(self) -> str:
        return _join_path(self.seq)

    def eq(self, other: IRI) -> bool:
        return self.seq == other.seq

    def segments(self) -> tuple[str, ...]:
        return self.seq

    # --- DynamoDB attribute values ---

    def to_attribute_value(self) -> dict[str, Any]:
        """Marshal as a string attribute so items can cross-reference by value."""
        if not self.seq:
            return _serializer.serialize(None)
        return _serializer.serialize(str(self))

    @classmethod
    def from_attribute_value(cls, value: dict[str, Any]) -> IRI:
        """Parse the ``S`` member; a NULL or missing string gives the root."""
        return cls.parse(value.get("S") or "")

    # --- pydantic integration ---

    @classmethod
    def __get_pydantic_core_schema__(
        cls,
        source: type[Any],
        handler: GetCoreSchemaHandler,
    ) -> core_schema.CoreSchema:
        return identifier_schema(cls, cls.parse)


def identifier_schema(cls: type[Any], parse: Callable[[str], Any]) -> core_schema.CoreSchema:
    """Core schema shared by :class:`IRI` and :class:`~iri.identity.ID`.

    JSON input must be a string; Python input may also be an instance.
    Both modes serialize to the canonical string.
    """
    from_str = core_schema.no_info_after_validator_function(parse, core_schema.str_schema())
    return core_schema.json_or_python_schema(
        json_schema=from_str,
        python_schema=core_schema.union_schema(
            [core_schema.is_instance_schema(cls), from_str],
        ),
        serialization=core_schema.plain_serializer_function_ser_schema(
            str,
            return_schema=core_schema.str_schema(),
        ),
    )
