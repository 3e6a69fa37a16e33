"""MarketplaceConfigRepository: raw SQL persistence for admin settings.

marketplace_settings is a single-row table (id = 1) seeded by migration 002.
"""
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.mx_common.enums import SignScheme
from src.mx_common.errors import MarketplaceNotConfiguredError
from src.mx_marketplace.domain.models import MarketplaceConfig

_GET_SETTINGS_SQL = text("""
    SELECT fee_address, fee_bps FROM marketplace_settings WHERE id = 1
""")

_LIST_TRADABLE_SQL = text("""
    SELECT token_address FROM tradable_tokens WHERE enabled
""")

_LIST_PREFIXES_SQL = text("""
    SELECT scheme, prefix FROM sign_prefixes
""")

_SET_FEE_ADDRESS_SQL = text("""
    UPDATE marketplace_settings SET fee_address = :fee_address, updated_at = NOW()
    WHERE id = 1
    RETURNING id
""")

_SET_FEE_BPS_SQL = text("""
    UPDATE marketplace_settings SET fee_bps = :fee_bps, updated_at = NOW()
    WHERE id = 1
    RETURNING id
""")

_UPSERT_TRADABLE_SQL = text("""
    INSERT INTO tradable_tokens (token_address, enabled)
    VALUES (:token_address, :enabled)
    ON CONFLICT (token_address) DO UPDATE
        SET enabled = EXCLUDED.enabled, updated_at = NOW()
""")

_UPSERT_PREFIX_SQL = text("""
    INSERT INTO sign_prefixes (scheme, prefix)
    VALUES (:scheme, :prefix)
    ON CONFLICT (scheme) DO UPDATE
        SET prefix = EXCLUDED.prefix, updated_at = NOW()
""")


class MarketplaceConfigRepository:
    """Concrete implementation of MarketplaceConfigRepositoryProtocol."""

    async def load(self, db: AsyncSession) -> MarketplaceConfig:
        row = (await db.execute(_GET_SETTINGS_SQL)).fetchone()
        if row is None:
            raise MarketplaceNotConfiguredError()
        tokens = (await db.execute(_LIST_TRADABLE_SQL)).fetchall()
        prefixes = (await db.execute(_LIST_PREFIXES_SQL)).fetchall()
        return MarketplaceConfig(
            fee_address=row.fee_address,
            fee_bps=row.fee_bps,
            tradable_tokens=frozenset(t.token_address for t in tokens),
            sign_prefixes={SignScheme(p.scheme): p.prefix for p in prefixes},
        )

    async def set_fee_address(self, address: str, db: AsyncSession) -> None:
        result = await db.execute(_SET_FEE_ADDRESS_SQL, {"fee_address": address})
        if result.fetchone() is None:
            raise MarketplaceNotConfiguredError()

    async def set_fee_bps(self, fee_bps: int, db: AsyncSession) -> None:
        result = await db.execute(_SET_FEE_BPS_SQL, {"fee_bps": fee_bps})
        if result.fetchone() is None:
            raise MarketplaceNotConfiguredError()

    async def set_tradable_token(self, token: str, enabled: bool, db: AsyncSession) -> None:
        await db.execute(_UPSERT_TRADABLE_SQL, {"token_address": token, "enabled": enabled})

    async def set_sign_prefix(self, scheme: SignScheme, prefix: str, db: AsyncSession) -> None:
        await db.execute(_UPSERT_PREFIX_SQL, {"scheme": int(scheme), "prefix": prefix})
