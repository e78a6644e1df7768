"""003: create auction_results_archive table

Revision ID: 003
Revises: 002
Create Date: 2026-10-19
"""
from typing import Sequence, Union
from alembic import op

revision: str = "003"
down_revision: Union[str, None] = "002"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # No FK to lots: the snapshot outlives a deleted lot
    op.execute("""
        CREATE TABLE auction_results_archive (
            lot_id                  VARCHAR(64)     PRIMARY KEY,
            lot_name                VARCHAR(200)    NOT NULL,
            starting_price          BIGINT          NOT NULL,
            final_bid               BIGINT          NOT NULL,
            unit_quantity           INT             NOT NULL,
            close_time              TIMESTAMPTZ,
            winning_bids            JSONB           NOT NULL DEFAULT '[]'::jsonb,
            total_winning_amount    BIGINT          NOT NULL DEFAULT 0,
            archived_at             TIMESTAMPTZ     NOT NULL DEFAULT NOW()
        );
    """)
    op.execute(
        "CREATE INDEX idx_archive_close_time ON auction_results_archive (close_time DESC);"
    )


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS auction_results_archive CASCADE;")
