"""001: create lots table

Revision ID: 001
Revises:
Create Date: 2026-10-19
"""
from typing import Sequence, Union
from alembic import op

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE OR REPLACE FUNCTION fn_touch_updated_at()
        RETURNS TRIGGER AS $$
        BEGIN
            NEW.updated_at = NOW();
            RETURN NEW;
        END;
        $$ LANGUAGE plpgsql;
    """)
    op.execute("""
        CREATE TABLE lots (
            id                      VARCHAR(64)     PRIMARY KEY,
            name                    VARCHAR(200)    NOT NULL,
            starting_price          BIGINT          NOT NULL,
            unit_quantity           INT             NOT NULL DEFAULT 1,
            close_time              TIMESTAMPTZ,
            current_bid             BIGINT          NOT NULL,
            leading_bidder_name     VARCHAR(64),
            created_at              TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            updated_at              TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_lots_starting_price_gte_0  CHECK (starting_price >= 0),
            CONSTRAINT ck_lots_unit_quantity_gte_1   CHECK (unit_quantity >= 1),
            CONSTRAINT ck_lots_current_bid_floor     CHECK (current_bid >= starting_price)
        );
    """)
    op.execute("CREATE INDEX idx_lots_created_at ON lots (created_at DESC);")
    op.execute("""
        CREATE TRIGGER trg_lots_updated_at
            BEFORE UPDATE ON lots
            FOR EACH ROW EXECUTE FUNCTION fn_touch_updated_at();
    """)
    op.execute(
        "COMMENT ON COLUMN lots.current_bid IS "
        "'Cached leader price; the bids ledger is authoritative';"
    )


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS lots CASCADE;")
    op.execute("DROP FUNCTION IF EXISTS fn_touch_updated_at();")
