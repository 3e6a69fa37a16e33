"""Admin application service: marketplace economics and operator custody.

Every mutation validates its input, runs in its own transaction and is logged
at INFO; the settlement engine picks the change up on its next config load.
"""
import logging
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from src.mx_asset.infrastructure.custody import SqlAssetCustody
from src.mx_common.addresses import normalize_address
from src.mx_common.basis_points import validate_bps
from src.mx_common.database import unit_of_work
from src.mx_common.enums import SignScheme
from src.mx_marketplace.domain.models import MarketplaceConfig
from src.mx_marketplace.domain.repository import MarketplaceConfigRepositoryProtocol
from src.mx_marketplace.infrastructure.persistence import MarketplaceConfigRepository
from src.mx_payment.infrastructure.transport import SqlPaymentTransport

logger = logging.getLogger(__name__)


def config_to_dict(config: MarketplaceConfig) -> dict[str, Any]:
    return {
        "fee_address": config.fee_address,
        "fee_bps": config.fee_bps,
        "tradable_tokens": sorted(config.tradable_tokens),
        "sign_prefixes": {
            scheme.name: prefix for scheme, prefix in sorted(config.sign_prefixes.items())
        },
    }


class AdminService:
    def __init__(
        self,
        config_repo: MarketplaceConfigRepositoryProtocol | None = None,
        transport: SqlPaymentTransport | None = None,
        custody: SqlAssetCustody | None = None,
    ) -> None:
        self._config_repo: MarketplaceConfigRepositoryProtocol = (
            config_repo or MarketplaceConfigRepository()
        )
        self._transport = transport or SqlPaymentTransport()
        self._custody = custody or SqlAssetCustody()

    async def get_config(self, db: AsyncSession) -> dict[str, Any]:
        return config_to_dict(await self._config_repo.load(db))

    # ------------------------------------------------------------------
    # Marketplace economics
    # ------------------------------------------------------------------

    async def set_fee_address(self, address: str, db: AsyncSession) -> dict[str, Any]:
        fee_address = normalize_address(address)
        await self._commit(self._config_repo.set_fee_address(fee_address, db), db)
        logger.info("fee address set: %s", fee_address)
        return {"fee_address": fee_address}

    async def set_fee_bps(self, fee_bps: int, db: AsyncSession) -> dict[str, Any]:
        validate_bps(fee_bps)
        await self._commit(self._config_repo.set_fee_bps(fee_bps, db), db)
        logger.info("fee set: %d bps", fee_bps)
        return {"fee_bps": fee_bps}

    async def set_tradable_token(
        self, token: str, enabled: bool, db: AsyncSession
    ) -> dict[str, Any]:
        token_address = normalize_address(token)
        await self._commit(
            self._config_repo.set_tradable_token(token_address, enabled, db), db
        )
        logger.info("tradable token %s enabled=%s", token_address, enabled)
        return {"token": token_address, "enabled": enabled}

    async def set_sign_prefix(
        self, scheme: SignScheme, prefix: str, db: AsyncSession
    ) -> dict[str, Any]:
        await self._commit(self._config_repo.set_sign_prefix(scheme, prefix, db), db)
        logger.info("sign prefix for %s set: %r", scheme.name, prefix)
        return {"scheme": scheme.name, "prefix": prefix}

    # ------------------------------------------------------------------
    # Operator custody (deposits into the ledger)
    # ------------------------------------------------------------------

    async def credit_native(
        self, account: str, amount: int, db: AsyncSession
    ) -> dict[str, Any]:
        owner = normalize_address(account)
        balance = await self._commit(self._transport.deposit_native(owner, amount, db), db)
        logger.info("native credit: account=%s amount=%d", owner, amount)
        return {"account": owner, "balance": balance}

    async def credit_token(
        self, token: str, account: str, amount: int, db: AsyncSession
    ) -> dict[str, Any]:
        token_address = normalize_address(token)
        owner = normalize_address(account)
        balance = await self._commit(
            self._transport.deposit_token(token_address, owner, amount, db), db
        )
        logger.info("token credit: token=%s account=%s amount=%d", token_address, owner, amount)
        return {"token": token_address, "account": owner, "balance": balance}

    async def credit_asset(
        self, contract: str, account: str, asset_id: int, quantity: int, db: AsyncSession
    ) -> dict[str, Any]:
        contract_address = normalize_address(contract)
        owner = normalize_address(account)
        balance = await self._commit(
            self._custody.credit(contract_address, owner, asset_id, quantity, db), db
        )
        logger.info(
            "asset credit: contract=%s id=%d account=%s quantity=%d",
            contract_address, asset_id, owner, quantity,
        )
        return {
            "asset_contract": contract_address,
            "asset_id": asset_id,
            "account": owner,
            "balance": balance,
        }

    @staticmethod
    async def _commit(pending: Any, db: AsyncSession) -> Any:
        async with unit_of_work(db):
            result = await pending
        return result
