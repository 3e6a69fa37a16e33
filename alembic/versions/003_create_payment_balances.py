"""003: create native/token balances and token allowances

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
    op.execute("""
        CREATE TABLE native_balances (
            account         VARCHAR(42)     PRIMARY KEY,
            balance         NUMERIC(78, 0)  NOT NULL DEFAULT 0,
            created_at      TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            updated_at      TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_native_balances_gte_0 CHECK (balance >= 0)
        );
    """)
    op.execute("""
        CREATE TABLE token_balances (
            token           VARCHAR(42)     NOT NULL,
            account         VARCHAR(42)     NOT NULL,
            balance         NUMERIC(78, 0)  NOT NULL DEFAULT 0,
            created_at      TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            updated_at      TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            PRIMARY KEY (token, account),
            CONSTRAINT ck_token_balances_gte_0 CHECK (balance >= 0)
        );
    """)
    op.execute("""
        CREATE TABLE token_allowances (
            token           VARCHAR(42)     NOT NULL,
            owner           VARCHAR(42)     NOT NULL,
            spender         VARCHAR(42)     NOT NULL,
            amount          NUMERIC(78, 0)  NOT NULL DEFAULT 0,
            created_at      TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            updated_at      TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            PRIMARY KEY (token, owner, spender),
            CONSTRAINT ck_token_allowances_gte_0 CHECK (amount >= 0)
        );
    """)
    op.execute("COMMENT ON TABLE native_balances IS 'Native currency custody, smallest unit (wei)';")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS token_allowances CASCADE;")
    op.execute("DROP TABLE IF EXISTS token_balances CASCADE;")
    op.execute("DROP TABLE IF EXISTS native_balances CASCADE;")
