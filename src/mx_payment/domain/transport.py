"""PaymentTransport Protocol: value movement capability consumed by PaymentManager.

Native currency moves from the caller's attached value; fungible tokens move
through transferFrom against an allowance the owner granted the marketplace.
Every method runs inside the caller's transaction and raises on failure.
"""
from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.mx_common.enums import LedgerEntryType


class PaymentTransport(Protocol):
    async def transfer_native(
        self,
        sender: str,
        recipient: str,
        amount: int,
        entry_type: LedgerEntryType,
        reference_id: str,
        db: AsyncSession,
    ) -> None: ...

    async def allowance(
        self, token: str, owner: str, spender: str, db: AsyncSession
    ) -> int: ...

    async def transfer_from(
        self,
        token: str,
        owner: str,
        spender: str,
        recipient: str,
        amount: int,
        entry_type: LedgerEntryType,
        reference_id: str,
        db: AsyncSession,
    ) -> None: ...
