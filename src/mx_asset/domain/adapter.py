"""AssetTransferAdapter Protocol: capability interface to the token contracts.

Covers both unique assets (quantity is always 1) and fungible-multi assets.
The exchange never mints or burns; it only moves units it has been approved
to move on the owner's behalf.
"""
from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession


class AssetTransferAdapter(Protocol):
    async def transfer(
        self,
        contract: str,
        sender: str,
        recipient: str,
        asset_id: int,
        quantity: int,
        db: AsyncSession,
    ) -> None: ...

    async def is_approved_for_all(
        self, contract: str, owner: str, operator: str, db: AsyncSession
    ) -> bool: ...

    async def balance_of(
        self, contract: str, owner: str, asset_id: int, db: AsyncSession
    ) -> int: ...
