# tests/conftest.py
from unittest.mock import MagicMock

import pytest

from rental.data.memory_repository import InMemoryRentalCardRepository
from rental.domain.card import FixedTermPolicy, Item, MemberRef, RentalCard
from rental.events.event_interface import EventEmitter
from rental.services.rental_card_service import RentalCardService


@pytest.fixture
def member():
    """A library member"""
    return MemberRef(id="member-1", name="Jane Reader")


@pytest.fixture
def items():
    """Five distinct catalog items plus a spare"""
    return [Item(no=i, title=f"Book {i}") for i in range(1, 7)]


@pytest.fixture
def card(member):
    """A freshly issued rental card"""
    return RentalCard.create(member)


@pytest.fixture
def policy():
    """The default 14-day rental term"""
    return FixedTermPolicy(14)


@pytest.fixture
async def repository():
    """A connected in-memory repository"""
    repo = InMemoryRentalCardRepository()
    await repo.connect()
    yield repo
    await repo.disconnect()


@pytest.fixture
def emitter():
    """A private event emitter with a wildcard recorder attached"""
    bus = EventEmitter()
    bus.recorder = MagicMock()
    bus.on_any(bus.recorder)
    return bus


@pytest.fixture
def service(repository, policy, emitter):
    """A rental card service wired to the in-memory repository"""
    return RentalCardService(repository, term_policy=policy, emitter=emitter)
