"""Shared pytest fixtures for iri tests."""

from __future__ import annotations

import logging
from collections.abc import Generator

import pytest

from iri import ID, new


@pytest.fixture
def ladder() -> list[ID]:
    """Identifiers of depth 0..5: ``""``, ``a``, ``a:b`` ... ``a:b:c:d:e``."""
    return [new(""), new("a"), new("a:b"), new("a:b:c"), new("a:b:c:d"), new("a:b:c:d:e")]


@pytest.fixture
def deep() -> ID:
    return new("a:b:c:d:e")


@pytest.fixture
def _restore_logging() -> Generator[None]:
    """Restore root and ``iri`` logger state after a test."""
    root = logging.getLogger()
    root_handlers = root.handlers[:]
    root_level = root.level
    iri_logger = logging.getLogger("iri")
    iri_handlers = iri_logger.handlers[:]
    iri_level = iri_logger.level
    iri_propagate = iri_logger.propagate
    yield
    root.handlers = root_handlers
    root.setLevel(root_level)
    iri_logger.handlers = iri_handlers
    iri_logger.setLevel(iri_level)
    iri_logger.propagate = iri_propagate
