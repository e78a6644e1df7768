"""Per-lot mutual exclusion for ledger writes.

place / remove / sync on the same lot run one at a time inside this process.
Multi-process deployments additionally rely on the conditional UPDATE and
SELECT ... FOR UPDATE issued by the lot repository.
"""

import asyncio
from collections import defaultdict


class LotLockRegistry:
    def __init__(self) -> None:
        self._locks: dict[str, asyncio.Lock] = defaultdict(asyncio.Lock)

    def for_lot(self, lot_id: str) -> asyncio.Lock:
        return self._locks[lot_id]

    def discard(self, lot_id: str) -> None:
        """Forget a deleted lot's lock unless someone is holding it."""
        lock = self._locks.get(lot_id)
        if lock is not None and not lock.locked():
            del self._locks[lot_id]

    def __len__(self) -> int:
        return len(self._locks)


_registry: LotLockRegistry | None = None


def get_lot_locks() -> LotLockRegistry:
    global _registry  # noqa: PLW0603
    if _registry is None:
        _registry = LotLockRegistry()
    return _registry
