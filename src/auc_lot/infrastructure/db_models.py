"""SQLAlchemy ORM model for the lots table.

Used for type reference only — persistence.py uses raw text() SQL.
Alembic migrations (001_create_lots.py) are the authoritative DDL source.
"""

from datetime import datetime

from sqlalchemy import BigInteger, DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from src.auc_common.database import Base


class LotORM(Base):
    __tablename__ = "lots"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    starting_price: Mapped[int] = mapped_column(BigInteger, nullable=False)
    unit_quantity: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    close_time: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    current_bid: Mapped[int] = mapped_column(BigInteger, nullable=False)
    leading_bidder_name: Mapped[str | None] = mapped_column(String(64))
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
