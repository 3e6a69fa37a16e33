"""002: create marketplace config tables and seed defaults

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
        CREATE TABLE marketplace_settings (
            id              SMALLINT        PRIMARY KEY DEFAULT 1,
            fee_address     VARCHAR(42)     NOT NULL,
            fee_bps         INT             NOT NULL DEFAULT 0,
            updated_at      TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_marketplace_settings_singleton CHECK (id = 1),
            CONSTRAINT ck_marketplace_settings_fee_bps CHECK (fee_bps BETWEEN 0 AND 10000)
        );
    """)
    op.execute("""
        CREATE TABLE tradable_tokens (
            token_address   VARCHAR(42)     PRIMARY KEY,
            enabled         BOOLEAN         NOT NULL DEFAULT TRUE,
            created_at      TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            updated_at      TIMESTAMPTZ     NOT NULL DEFAULT NOW()
        );
    """)
    op.execute("""
        CREATE TABLE sign_prefixes (
            scheme          SMALLINT        PRIMARY KEY,
            prefix          VARCHAR(64)     NOT NULL,
            updated_at      TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_sign_prefixes_scheme CHECK (scheme IN (0, 1))
        );
    """)
    for table in ("marketplace_settings", "tradable_tokens", "sign_prefixes"):
        op.execute(f"""
            CREATE TRIGGER trg_{table}_updated_at
                BEFORE UPDATE ON {table}
                FOR EACH ROW EXECUTE FUNCTION fn_update_timestamp();
        """)

    # Seed: no fee until an operator sets one
    op.execute("""
        INSERT INTO marketplace_settings (id, fee_address, fee_bps)
        VALUES (1, '0x0000000000000000000000000000000000000000', 0);
    """)
    # 0 = Klaytn, 1 = Ethereum personal-sign prefixes
    op.execute("""
        INSERT INTO sign_prefixes (scheme, prefix) VALUES
            (0, E'\\x19Klaytn Signed Message:\\n'),
            (1, E'\\x19Ethereum Signed Message:\\n');
    """)


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS sign_prefixes CASCADE;")
    op.execute("DROP TABLE IF EXISTS tradable_tokens CASCADE;")
    op.execute("DROP TABLE IF EXISTS marketplace_settings CASCADE;")
