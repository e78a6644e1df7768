"""Tests for auc_common.database.unit_of_work."""

from unittest.mock import AsyncMock

import pytest
from sqlalchemy.exc import OperationalError

from src.auc_common.database import unit_of_work
from src.auc_common.errors import BidTooLowError, StorageError


@pytest.mark.asyncio
async def test_commits_on_success() -> None:
    db = AsyncMock()
    async with unit_of_work(db):
        pass
    db.commit.assert_awaited_once()
    db.rollback.assert_not_awaited()


@pytest.mark.asyncio
async def test_driver_failure_becomes_storage_error() -> None:
    db = AsyncMock()
    with pytest.raises(StorageError):
        async with unit_of_work(db):
            raise OperationalError("INSERT", {}, Exception("connection reset"))
    db.rollback.assert_awaited_once()
    db.commit.assert_not_awaited()


@pytest.mark.asyncio
async def test_domain_error_passes_through() -> None:
    db = AsyncMock()
    with pytest.raises(BidTooLowError):
        async with unit_of_work(db):
            raise BidTooLowError(100)
    db.rollback.assert_awaited_once()
