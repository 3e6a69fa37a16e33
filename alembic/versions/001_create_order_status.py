"""001: create common functions and order_status table

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
        CREATE OR REPLACE FUNCTION fn_update_timestamp()
        RETURNS TRIGGER AS $$
        BEGIN
            NEW.updated_at = NOW();
            RETURN NEW;
        END;
        $$ LANGUAGE plpgsql;
    """)
    # A digest with no row is OPEN; rows are written once and never updated
    op.execute("""
        CREATE TABLE order_status (
            digest          CHAR(66)        PRIMARY KEY,
            order_kind      VARCHAR(20)     NOT NULL,
            status          VARCHAR(20)     NOT NULL,
            created_at      TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_order_status_digest CHECK (digest LIKE '0x%'),
            CONSTRAINT ck_order_status_kind CHECK (
                order_kind IN (
                    'UNIQUE_SALE', 'MULTI_SALE', 'MULTI_BUNDLE_SALE',
                    'UNIQUE_OFFER', 'MULTI_OFFER'
                )
            ),
            CONSTRAINT ck_order_status_status CHECK (status IN ('CANCELLED', 'FULFILLED'))
        );
    """)
    op.execute("COMMENT ON TABLE order_status IS 'Order ledger: consumed order digests, terminal status only';")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS order_status CASCADE;")
    op.execute("DROP FUNCTION IF EXISTS fn_update_timestamp();")
