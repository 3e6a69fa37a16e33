# src/mx_order/domain/repository.py
"""OrderLedger Protocol: interface contract for the order status store."""
from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.mx_common.enums import OrderKind, OrderStatus


class OrderLedgerProtocol(Protocol):
    async def get_status(self, digest: str, db: AsyncSession) -> OrderStatus: ...

    async def mark_fulfilled(self, digest: str, kind: OrderKind, db: AsyncSession) -> None:
        """OPEN -> FULFILLED, else AlreadySoldError / AlreadyCancelledError."""
        ...

    async def mark_cancelled(self, digest: str, kind: OrderKind, db: AsyncSession) -> None:
        """OPEN -> CANCELLED, else AlreadySoldError / AlreadyCancelledError."""
        ...
