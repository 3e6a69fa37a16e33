"""SqlPaymentTransport: PaymentTransport over the service's own balance tables.

All balance-mutating operations use atomic PostgreSQL UPDATE ... RETURNING.
A result of 0 rows means a business constraint was violated (insufficient
balance or allowance).

Transaction ownership: the CALLER starts and commits the transaction.
"""
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.mx_common.addresses import ZERO_ADDRESS
from src.mx_common.enums import LedgerEntryType
from src.mx_common.errors import InsufficientAllowanceError, InsufficientFundsError
from src.mx_payment.infrastructure.ledger import write_ledger

# ---------------------------------------------------------------------------
# SQL: native currency
# ---------------------------------------------------------------------------

_DEBIT_NATIVE_SQL = text("""
    UPDATE native_balances
    SET balance = balance - :amount, updated_at = NOW()
    WHERE account = :account AND balance >= :amount
    RETURNING balance
""")

_CREDIT_NATIVE_SQL = text("""
    INSERT INTO native_balances (account, balance)
    VALUES (:account, :amount)
    ON CONFLICT (account) DO UPDATE
        SET balance = native_balances.balance + EXCLUDED.balance, updated_at = NOW()
    RETURNING balance
""")

_GET_NATIVE_SQL = text("""
    SELECT balance FROM native_balances WHERE account = :account
""")

# ---------------------------------------------------------------------------
# SQL: fungible tokens
# ---------------------------------------------------------------------------

_DEBIT_TOKEN_SQL = text("""
    UPDATE token_balances
    SET balance = balance - :amount, updated_at = NOW()
    WHERE token = :token AND account = :account AND balance >= :amount
    RETURNING balance
""")

_CREDIT_TOKEN_SQL = text("""
    INSERT INTO token_balances (token, account, balance)
    VALUES (:token, :account, :amount)
    ON CONFLICT (token, account) DO UPDATE
        SET balance = token_balances.balance + EXCLUDED.balance, updated_at = NOW()
    RETURNING balance
""")

_GET_TOKEN_SQL = text("""
    SELECT balance FROM token_balances WHERE token = :token AND account = :account
""")

_SPEND_ALLOWANCE_SQL = text("""
    UPDATE token_allowances
    SET amount = amount - :amount, updated_at = NOW()
    WHERE token = :token AND owner = :owner AND spender = :spender AND amount >= :amount
    RETURNING amount
""")

_SET_ALLOWANCE_SQL = text("""
    INSERT INTO token_allowances (token, owner, spender, amount)
    VALUES (:token, :owner, :spender, :amount)
    ON CONFLICT (token, owner, spender) DO UPDATE
        SET amount = EXCLUDED.amount, updated_at = NOW()
""")

_GET_ALLOWANCE_SQL = text("""
    SELECT amount FROM token_allowances
    WHERE token = :token AND owner = :owner AND spender = :spender
""")


class SqlPaymentTransport:
    """Concrete PaymentTransport using raw SQL."""

    # ------------------------------------------------------------------
    # PaymentTransport
    # ------------------------------------------------------------------

    async def transfer_native(
        self,
        sender: str,
        recipient: str,
        amount: int,
        entry_type: LedgerEntryType,
        reference_id: str,
        db: AsyncSession,
    ) -> None:
        row = (
            await db.execute(_DEBIT_NATIVE_SQL, {"account": sender, "amount": amount})
        ).fetchone()
        if row is None:
            raise InsufficientFundsError(sender, amount)
        await write_ledger(
            sender, ZERO_ADDRESS, LedgerEntryType.PAYMENT, -amount, row.balance,
            reference_id, db,
        )
        await self.deposit_native(recipient, amount, db, entry_type, reference_id)

    async def allowance(
        self, token: str, owner: str, spender: str, db: AsyncSession
    ) -> int:
        row = (
            await db.execute(
                _GET_ALLOWANCE_SQL, {"token": token, "owner": owner, "spender": spender}
            )
        ).fetchone()
        return int(row.amount) if row else 0

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
    ) -> None:
        params = {"token": token, "owner": owner, "spender": spender, "amount": amount}
        if (await db.execute(_SPEND_ALLOWANCE_SQL, params)).fetchone() is None:
            raise InsufficientAllowanceError(amount, await self.allowance(token, owner, spender, db))
        row = (
            await db.execute(
                _DEBIT_TOKEN_SQL, {"token": token, "account": owner, "amount": amount}
            )
        ).fetchone()
        if row is None:
            raise InsufficientFundsError(owner, amount)
        await write_ledger(
            owner, token, LedgerEntryType.PAYMENT, -amount, row.balance, reference_id, db
        )
        await self.deposit_token(token, recipient, amount, db, entry_type, reference_id)

    # ------------------------------------------------------------------
    # Operator / owner helpers
    # ------------------------------------------------------------------

    async def deposit_native(
        self,
        account: str,
        amount: int,
        db: AsyncSession,
        entry_type: LedgerEntryType = LedgerEntryType.DEPOSIT,
        reference_id: str = "",
    ) -> int:
        row = (
            await db.execute(_CREDIT_NATIVE_SQL, {"account": account, "amount": amount})
        ).fetchone()
        await write_ledger(
            account, ZERO_ADDRESS, entry_type, amount, row.balance, reference_id, db
        )
        return int(row.balance)

    async def deposit_token(
        self,
        token: str,
        account: str,
        amount: int,
        db: AsyncSession,
        entry_type: LedgerEntryType = LedgerEntryType.DEPOSIT,
        reference_id: str = "",
    ) -> int:
        row = (
            await db.execute(
                _CREDIT_TOKEN_SQL, {"token": token, "account": account, "amount": amount}
            )
        ).fetchone()
        await write_ledger(account, token, entry_type, amount, row.balance, reference_id, db)
        return int(row.balance)

    async def approve(
        self, token: str, owner: str, spender: str, amount: int, db: AsyncSession
    ) -> None:
        await db.execute(
            _SET_ALLOWANCE_SQL,
            {"token": token, "owner": owner, "spender": spender, "amount": amount},
        )

    async def native_balance_of(self, account: str, db: AsyncSession) -> int:
        row = (await db.execute(_GET_NATIVE_SQL, {"account": account})).fetchone()
        return int(row.balance) if row else 0

    async def token_balance_of(self, token: str, account: str, db: AsyncSession) -> int:
        row = (
            await db.execute(_GET_TOKEN_SQL, {"token": token, "account": account})
        ).fetchone()
        return int(row.balance) if row else 0
