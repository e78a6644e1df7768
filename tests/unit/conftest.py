"""Fixtures shared by the unit tests."""

from unittest.mock import AsyncMock

import pytest

from src.auc_common.locks import LotLockRegistry
from tests.unit.factories import (
    NOW,
    FakeArchiveRepository,
    FakeBidRepository,
    FakeLotRepository,
    RecordingNotifier,
)


@pytest.fixture
def db():
    return AsyncMock()


@pytest.fixture
def bid_repo() -> FakeBidRepository:
    return FakeBidRepository()


@pytest.fixture
def lot_repo(bid_repo: FakeBidRepository) -> FakeLotRepository:
    return FakeLotRepository(bid_repo)


@pytest.fixture
def archive_repo() -> FakeArchiveRepository:
    return FakeArchiveRepository()


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def locks() -> LotLockRegistry:
    return LotLockRegistry()


@pytest.fixture
def clock():
    return lambda: NOW
