"""MarketplaceConfigRepository Protocol: interface contract for config storage."""
from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.mx_common.enums import SignScheme
from src.mx_marketplace.domain.models import MarketplaceConfig


class MarketplaceConfigRepositoryProtocol(Protocol):
    async def load(self, db: AsyncSession) -> MarketplaceConfig: ...

    async def set_fee_address(self, address: str, db: AsyncSession) -> None: ...

    async def set_fee_bps(self, fee_bps: int, db: AsyncSession) -> None: ...

    async def set_tradable_token(self, token: str, enabled: bool, db: AsyncSession) -> None: ...

    async def set_sign_prefix(self, scheme: SignScheme, prefix: str, db: AsyncSession) -> None: ...
