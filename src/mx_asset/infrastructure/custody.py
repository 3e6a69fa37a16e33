"""SqlAssetCustody: AssetTransferAdapter over the service's asset tables.

asset_balances holds (contract, token_id, owner) -> quantity. A unique asset
is simply a row with quantity 1. Debits use a conditional UPDATE ... RETURNING;
0 rows means the owner does not hold enough units.
"""
import logging

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.mx_common.errors import InsufficientAssetBalanceError

logger = logging.getLogger(__name__)

_DEBIT_ASSET_SQL = text("""
    UPDATE asset_balances
    SET quantity = quantity - :quantity, updated_at = NOW()
    WHERE contract = :contract AND token_id = :token_id AND owner = :owner
      AND quantity >= :quantity
    RETURNING quantity
""")

_CREDIT_ASSET_SQL = text("""
    INSERT INTO asset_balances (contract, token_id, owner, quantity)
    VALUES (:contract, :token_id, :owner, :quantity)
    ON CONFLICT (contract, token_id, owner) DO UPDATE
        SET quantity = asset_balances.quantity + EXCLUDED.quantity, updated_at = NOW()
    RETURNING quantity
""")

_GET_BALANCE_SQL = text("""
    SELECT quantity FROM asset_balances
    WHERE contract = :contract AND token_id = :token_id AND owner = :owner
""")

_GET_APPROVAL_SQL = text("""
    SELECT approved FROM asset_approvals
    WHERE contract = :contract AND owner = :owner AND operator = :operator
""")

_SET_APPROVAL_SQL = text("""
    INSERT INTO asset_approvals (contract, owner, operator, approved)
    VALUES (:contract, :owner, :operator, :approved)
    ON CONFLICT (contract, owner, operator) DO UPDATE
        SET approved = EXCLUDED.approved, updated_at = NOW()
""")


class SqlAssetCustody:
    """Concrete AssetTransferAdapter using raw SQL."""

    async def transfer(
        self,
        contract: str,
        sender: str,
        recipient: str,
        asset_id: int,
        quantity: int,
        db: AsyncSession,
    ) -> None:
        row = (
            await db.execute(
                _DEBIT_ASSET_SQL,
                {"contract": contract, "token_id": asset_id, "owner": sender, "quantity": quantity},
            )
        ).fetchone()
        if row is None:
            raise InsufficientAssetBalanceError(sender, asset_id)
        await self.credit(contract, recipient, asset_id, quantity, db)

    async def is_approved_for_all(
        self, contract: str, owner: str, operator: str, db: AsyncSession
    ) -> bool:
        row = (
            await db.execute(
                _GET_APPROVAL_SQL, {"contract": contract, "owner": owner, "operator": operator}
            )
        ).fetchone()
        return bool(row and row.approved)

    async def balance_of(
        self, contract: str, owner: str, asset_id: int, db: AsyncSession
    ) -> int:
        row = (
            await db.execute(
                _GET_BALANCE_SQL, {"contract": contract, "token_id": asset_id, "owner": owner}
            )
        ).fetchone()
        return int(row.quantity) if row else 0

    async def credit(
        self, contract: str, owner: str, asset_id: int, quantity: int, db: AsyncSession
    ) -> int:
        """Deposit units into custody (operator action, also the receiving leg)."""
        row = (
            await db.execute(
                _CREDIT_ASSET_SQL,
                {"contract": contract, "token_id": asset_id, "owner": owner, "quantity": quantity},
            )
        ).fetchone()
        return int(row.quantity)

    async def set_approval_for_all(
        self, contract: str, owner: str, operator: str, approved: bool, db: AsyncSession
    ) -> None:
        await db.execute(
            _SET_APPROVAL_SQL,
            {"contract": contract, "owner": owner, "operator": operator, "approved": approved},
        )
        logger.info(
            "approval %s: owner=%s operator=%s approved=%s", contract, owner, operator, approved
        )
