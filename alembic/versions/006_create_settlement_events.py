"""006: create settlement_events table

Revision ID: 006
Revises: 005
Create Date: 2026-10-19
"""
from typing import Sequence, Union
from alembic import op

revision: str = "006"
down_revision: Union[str, None] = "005"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE settlement_events (
            id              BIGSERIAL       PRIMARY KEY,
            event_type      VARCHAR(30)     NOT NULL,
            digest          CHAR(66)        NOT NULL,
            order_kind      VARCHAR(20)     NOT NULL,
            actor           VARCHAR(42)     NOT NULL,
            payload         JSONB           NOT NULL DEFAULT '{}'::jsonb,
            created_at      TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_settlement_events_type CHECK (
                event_type IN ('ORDER_FULFILLED', 'ORDER_CANCELLED')
            )
        );
    """)
    op.execute("CREATE INDEX idx_settlement_events_digest ON settlement_events (digest);")
    op.execute("CREATE INDEX idx_settlement_events_actor ON settlement_events (actor, created_at DESC);")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS settlement_events CASCADE;")
