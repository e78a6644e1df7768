"""Tests for auc_common.locks and auc_common.notifier."""

import asyncio
import json
import logging
from unittest.mock import AsyncMock

import pytest

from src.auc_common.enums import NotifyAction
from src.auc_common.locks import LotLockRegistry
from src.auc_common.notifier import RedisLotNotifier, notify_quietly
from tests.unit.factories import BrokenNotifier, RecordingNotifier


class TestLotLockRegistry:
    def test_same_lot_same_lock(self) -> None:
        locks = LotLockRegistry()
        assert locks.for_lot("L1") is locks.for_lot("L1")
        assert locks.for_lot("L1") is not locks.for_lot("L2")

    def test_discard_forgets_idle_lock(self) -> None:
        locks = LotLockRegistry()
        locks.for_lot("L1")
        locks.discard("L1")
        assert len(locks) == 0

    @pytest.mark.asyncio
    async def test_discard_keeps_held_lock(self) -> None:
        locks = LotLockRegistry()
        async with locks.for_lot("L1"):
            locks.discard("L1")
            assert len(locks) == 1

    @pytest.mark.asyncio
    async def test_serialises_writers_on_one_lot(self) -> None:
        locks = LotLockRegistry()
        trace: list[str] = []

        async def writer(tag: str) -> None:
            async with locks.for_lot("L1"):
                trace.append(f"{tag}-in")
                await asyncio.sleep(0)
                trace.append(f"{tag}-out")

        await asyncio.gather(writer("a"), writer("b"))
        assert trace == ["a-in", "a-out", "b-in", "b-out"]


class TestRedisLotNotifier:
    @pytest.mark.asyncio
    async def test_publishes_json_message(self) -> None:
        redis = AsyncMock()
        notifier = RedisLotNotifier(redis_factory=AsyncMock(return_value=redis), channel="ch")

        await notifier.notify("L1", NotifyAction.BID)

        channel, raw = redis.publish.call_args.args
        message = json.loads(raw)
        assert channel == "ch"
        assert message["type"] == "item_updated"
        assert message["action"] == "bid"
        assert message["lot_id"] == "L1"
        assert isinstance(message["timestamp"], int)


class TestNotifyQuietly:
    @pytest.mark.asyncio
    async def test_delivers(self) -> None:
        notifier = RecordingNotifier()
        await notify_quietly(notifier, "L1", NotifyAction.ADDED)
        assert notifier.sent == [("L1", NotifyAction.ADDED)]

    @pytest.mark.asyncio
    async def test_failure_is_logged_not_raised(self, caplog) -> None:
        with caplog.at_level(logging.WARNING):
            await notify_quietly(BrokenNotifier(), "L1", NotifyAction.BID)
        assert "notification dropped" in caplog.text
