"""Lot change fan-out over Redis Pub/Sub.

Best-effort: subscribers use these messages only to refresh views sooner.
Services publish through notify_quietly() after their transaction commits,
so a failed publish is logged and dropped and never undoes the write.

Message format on settings.NOTIFY_CHANNEL:
    {"type": "item_updated", "action": "bid", "lot_id": "...", "timestamp": 1700000000000}
"""

import json
import logging
import time
from collections.abc import Awaitable, Callable
from typing import Protocol

import redis.asyncio as aioredis

from config.settings import settings
from src.auc_common.enums import NotifyAction
from src.auc_common.redis_client import get_redis

logger = logging.getLogger(__name__)


class LotNotifierProtocol(Protocol):
    async def notify(self, lot_id: str, action: NotifyAction) -> None: ...


class RedisLotNotifier:
    """Publish-only notifier; no acknowledgement, no retry."""

    def __init__(
        self,
        redis_factory: Callable[[], Awaitable[aioredis.Redis]] = get_redis,
        channel: str | None = None,
    ) -> None:
        self._redis_factory = redis_factory
        self._channel = channel or settings.NOTIFY_CHANNEL

    async def notify(self, lot_id: str, action: NotifyAction) -> None:
        message = json.dumps(
            {
                "type": "item_updated",
                "action": action.value,
                "lot_id": lot_id,
                "timestamp": int(time.time() * 1000),
            }
        )
        redis = await self._redis_factory()
        await redis.publish(self._channel, message)


async def notify_quietly(
    notifier: LotNotifierProtocol, lot_id: str, action: NotifyAction
) -> None:
    try:
        await notifier.notify(lot_id, action)
    except Exception as exc:  # noqa: BLE001
        logger.warning(
            "Lot notification dropped: lot=%s action=%s error=%r",
            lot_id,
            action.value,
            exc,
        )
