"""DB helper for ledger_entries: one row per balance movement.

Called within the caller's transaction; amount is signed (negative = debit).
asset is ZERO_ADDRESS for native currency, else the token contract.
"""
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.mx_common.enums import LedgerEntryType

_INSERT_LEDGER_SQL = text("""
    INSERT INTO ledger_entries
        (account, asset, entry_type, amount, balance_after, reference_id)
    VALUES (:account, :asset, :entry_type, :amount, :balance_after, :reference_id)
""")


async def write_ledger(
    account: str,
    asset: str,
    entry_type: LedgerEntryType,
    amount: int,
    balance_after: int,
    reference_id: str,
    db: AsyncSession,
) -> None:
    """Insert one row into ledger_entries within the caller's transaction."""
    await db.execute(
        _INSERT_LEDGER_SQL,
        {
            "account": account,
            "asset": asset,
            "entry_type": entry_type.value,
            "amount": amount,
            "balance_after": balance_after,
            "reference_id": reference_id,
        },
    )
