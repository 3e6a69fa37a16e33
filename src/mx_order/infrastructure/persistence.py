# src/mx_order/infrastructure/persistence.py
"""OrderLedgerRepository: raw SQL order status store.

OPEN is implicit: an order digest with no row has never been consumed.
Both transitions are a single INSERT ... ON CONFLICT DO NOTHING, so the
primary key on digest is the test-and-set: of two concurrent attempts on the
same digest exactly one inserts, the other sees the winner's status.
"""
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.mx_common.enums import OrderKind, OrderStatus
from src.mx_common.errors import AlreadyCancelledError, AlreadySoldError, InternalError

# ---------------------------------------------------------------------------
# SQL statements
# ---------------------------------------------------------------------------

_CLAIM_DIGEST_SQL = text("""
    INSERT INTO order_status (digest, order_kind, status)
    VALUES (:digest, :order_kind, :status)
    ON CONFLICT (digest) DO NOTHING
    RETURNING digest
""")

_GET_STATUS_SQL = text("""
    SELECT status FROM order_status WHERE digest = :digest
""")


# ---------------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------------


class OrderLedgerRepository:
    """Concrete implementation of OrderLedgerProtocol using raw SQL."""

    async def get_status(self, digest: str, db: AsyncSession) -> OrderStatus:
        row = (await db.execute(_GET_STATUS_SQL, {"digest": digest})).fetchone()
        return OrderStatus(row.status) if row else OrderStatus.OPEN

    async def mark_fulfilled(self, digest: str, kind: OrderKind, db: AsyncSession) -> None:
        await self._transition(digest, kind, OrderStatus.FULFILLED, db)

    async def mark_cancelled(self, digest: str, kind: OrderKind, db: AsyncSession) -> None:
        await self._transition(digest, kind, OrderStatus.CANCELLED, db)

    async def _transition(
        self, digest: str, kind: OrderKind, target: OrderStatus, db: AsyncSession
    ) -> None:
        result = await db.execute(
            _CLAIM_DIGEST_SQL,
            {"digest": digest, "order_kind": kind.value, "status": target.value},
        )
        if result.fetchone() is not None:
            return
        current = await self.get_status(digest, db)
        raise_for_consumed(current)


def raise_for_consumed(status: OrderStatus) -> None:
    """Map the terminal status that blocked a transition to its error."""
    if status == OrderStatus.FULFILLED:
        raise AlreadySoldError()
    if status == OrderStatus.CANCELLED:
        raise AlreadyCancelledError()
    raise InternalError(f"order status conflict without a terminal row: {status}")
