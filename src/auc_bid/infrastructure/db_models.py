"""SQLAlchemy ORM model for the bids table.

Used for type reference only — persistence.py uses raw text() SQL.
Alembic migrations (002_create_bids.py) are the authoritative DDL source.
"""

from datetime import datetime

from sqlalchemy import BigInteger, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from src.auc_common.database import Base


class BidORM(Base):
    __tablename__ = "bids"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    lot_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("lots.id", ondelete="CASCADE"), nullable=False
    )
    price: Mapped[int] = mapped_column(BigInteger, nullable=False)
    units_requested: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    bidder_name: Mapped[str] = mapped_column(String(64), nullable=False)
    bidder_identity: Mapped[str | None] = mapped_column(String(128))
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
