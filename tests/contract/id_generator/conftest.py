"""Fixtures for id_generator contract tests."""

from collections.abc import Iterable

import pytest

from staybook.adapters.id_generators import ConfirmationCodeGenerator, ULIDGenerator
from staybook.interfaces.id_generator import IdGenerator
from tests.fixtures.datagen import SimpleIdGenerator


@pytest.fixture(params=["ulid", "simple", "confirmation_code"])
def id_generator(request: pytest.FixtureRequest) -> Iterable[IdGenerator]:
    """A fresh IdGenerator of each kind, the sequential test one included."""
    match request.param:
        case "ulid":
            yield ULIDGenerator()
        case "simple":
            yield SimpleIdGenerator()
        case "confirmation_code":
            yield ConfirmationCodeGenerator()
        case _:
            raise ValueError(f"unknown id generator type: {request.param}")


@pytest.fixture(params=["ulid", "simple"])
def monotonic_id_generator(request: pytest.FixtureRequest) -> Iterable[IdGenerator]:
    """Generators whose ids sort in generation order."""
    match request.param:
        case "ulid":
            yield ULIDGenerator()
        case "simple":
            yield SimpleIdGenerator()
        case _:
            raise ValueError(f"unknown monotonic id generator type: {request.param}")
