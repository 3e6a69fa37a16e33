"""004: create asset balances and operator approvals

Revision ID: 004
Revises: 003
Create Date: 2026-10-19
"""
from typing import Sequence, Union
from alembic import op

revision: str = "004"
down_revision: Union[str, None] = "003"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE asset_balances (
            contract        VARCHAR(42)     NOT NULL,
            token_id        NUMERIC(78, 0)  NOT NULL,
            owner           VARCHAR(42)     NOT NULL,
            quantity        NUMERIC(78, 0)  NOT NULL DEFAULT 0,
            created_at      TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            updated_at      TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            PRIMARY KEY (contract, token_id, owner),
            CONSTRAINT ck_asset_balances_gte_0 CHECK (quantity >= 0)
        );
    """)
    op.execute("CREATE INDEX idx_asset_balances_owner ON asset_balances (owner, contract);")
    op.execute("""
        CREATE TABLE asset_approvals (
            contract        VARCHAR(42)     NOT NULL,
            owner           VARCHAR(42)     NOT NULL,
            operator        VARCHAR(42)     NOT NULL,
            approved        BOOLEAN         NOT NULL DEFAULT FALSE,
            created_at      TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            updated_at      TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            PRIMARY KEY (contract, owner, operator)
        );
    """)


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS asset_approvals CASCADE;")
    op.execute("DROP TABLE IF EXISTS asset_balances CASCADE;")
