"""Shared test fixtures."""

import sys

import pytest

# Ensure src is in path
sys.path.insert(0, "src")

from dataclasses import dataclass

from patchconfig import MappingRegistry, clean, get_registry


@dataclass
class FixturePerson:
    name: str
    age: int
    email: str | None = None


@pytest.fixture
def registry():
    """Fresh MappingRegistry instance."""
    return MappingRegistry()


@pytest.fixture
def default_registry():
    """The process-wide registry, cleaned before and after the test."""
    clean()
    yield get_registry()
    clean()


@pytest.fixture
def person_cls():
    return FixturePerson
