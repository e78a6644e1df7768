"""002: create bids table (the ledger)

Revision ID: 002
Revises: 001
Create Date: 2026-10-19
"""
from typing import Sequence, Union
from alembic import op

revision: str = "002"
down_revision: Union[str, None] = "001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE bids (
            id                  VARCHAR(64)     PRIMARY KEY,
            lot_id              VARCHAR(64)     NOT NULL REFERENCES lots(id) ON DELETE CASCADE,
            price               BIGINT          NOT NULL,
            units_requested     INT             NOT NULL DEFAULT 1,
            bidder_name         VARCHAR(64)     NOT NULL,
            bidder_identity     VARCHAR(128),
            created_at          TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_bids_price_gt_0        CHECK (price > 0),
            CONSTRAINT ck_bids_units_gte_1       CHECK (units_requested >= 1)
        );
    """)
    op.execute(
        "CREATE INDEX idx_bids_lot_priority ON bids (lot_id, price DESC, created_at ASC);"
    )
    op.execute("CREATE INDEX idx_bids_bidder_identity ON bids (bidder_identity);")
    op.execute("COMMENT ON TABLE bids IS 'Bid ledger — insert and admin delete only, never updated';")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS bids CASCADE;")
