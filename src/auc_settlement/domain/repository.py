# src/auc_settlement/domain/repository.py
"""Archive repository Protocol — reporting snapshots of settled lots."""

from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.auc_settlement.domain.models import ArchivedResult


class ArchiveRepositoryProtocol(Protocol):
    async def upsert_result(self, db: AsyncSession, result: ArchivedResult) -> None: ...

    async def list_results(
        self, db: AsyncSession, limit: int, offset: int
    ) -> list[ArchivedResult]: ...
