"""Shared fixtures."""

from collections.abc import Callable
from datetime import datetime

import pytest

from evoting.domain.entities import UserRole
from tests.fixtures.entity_factories import (
    ADMIN_ID,
    CANDIDATE_USER_IDS,
    NOW,
    VOTER_IDS,
    WITNESS_ID,
    create_user,
)
from tests.fixtures.in_memory_uow import InMemoryStore, InMemoryUnitOfWork


@pytest.fixture
def clock() -> Callable[[], datetime]:
    return lambda: NOW


@pytest.fixture
def store() -> InMemoryStore:
    """Store seeded with an admin, a witness, four candidate users and voters."""
    store = InMemoryStore()
    store.add(create_user(id=ADMIN_ID, role=UserRole.ADMIN))
    store.add(create_user(id=WITNESS_ID, role=UserRole.WITNESS))
    for user_id in CANDIDATE_USER_IDS:
        store.add(create_user(id=user_id, role=UserRole.CANDIDATE))
    for user_id in VOTER_IDS:
        store.add(create_user(id=user_id))
    return store


@pytest.fixture
def uow(store: InMemoryStore) -> InMemoryUnitOfWork:
    return InMemoryUnitOfWork(store)
