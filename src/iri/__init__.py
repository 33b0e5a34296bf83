"""Compact, hierarchical identifiers (``a:b:c``) for tree-structured resources."""

from iri.core import IRI
from iri.identity import ID, Entity, Thing, new

__all__ = ["ID", "IRI", "Entity", "Thing", "new"]
