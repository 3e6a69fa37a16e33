"""In-memory stand-ins for the settlement collaborators, plus order builders.

FakeSession.begin_nested() snapshots every registered store and restores it
if the block raises, so engine tests observe the same all-or-nothing
behaviour a PostgreSQL savepoint gives the SQL implementations.
"""

import copy
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Any
from unittest.mock import AsyncMock

from eth_account import Account

from src.mx_common.addresses import ZERO_ADDRESS
from src.mx_common.enums import LedgerEntryType, OrderKind, OrderStatus, SignScheme
from src.mx_common.errors import (
    InsufficientAllowanceError,
    InsufficientAssetBalanceError,
    InsufficientFundsError,
)
from src.mx_marketplace.domain.models import MarketplaceConfig
from src.mx_order.domain.authenticator import sign_order
from src.mx_order.domain.models import OfferOrder, SaleOrder, Signature
from src.mx_order.infrastructure.persistence import raise_for_consumed
from src.mx_payment.domain.manager import PaymentManager
from src.mx_settlement.engine.engine import SettlementEngine

OPERATOR = "0x000000000000000000000000000000000000dEaD"
ASSET_CONTRACT = "0x1111111111111111111111111111111111111111"
PAY_TOKEN = "0x2222222222222222222222222222222222222222"
FEE_ADDRESS = "0x3333333333333333333333333333333333333333"
ROYALTY_RECEIVER = "0x4444444444444444444444444444444444444444"
NOW = 1_700_000_000

PREFIXES = {
    SignScheme.KLAYTN: "\x19Klaytn Signed Message:\n",
    SignScheme.ETHEREUM: "\x19Ethereum Signed Message:\n",
}


class _Snapshotting:
    def snapshot(self) -> dict[str, Any]:
        return copy.deepcopy(self.__dict__)

    def restore(self, state: dict[str, Any]) -> None:
        self.__dict__.clear()
        self.__dict__.update(state)


class FakeLedger(_Snapshotting):
    def __init__(self) -> None:
        self.statuses: dict[str, OrderStatus] = {}

    async def get_status(self, digest: str, db: Any) -> OrderStatus:
        return self.statuses.get(digest, OrderStatus.OPEN)

    async def mark_fulfilled(self, digest: str, kind: OrderKind, db: Any) -> None:
        self._claim(digest, OrderStatus.FULFILLED)

    async def mark_cancelled(self, digest: str, kind: OrderKind, db: Any) -> None:
        self._claim(digest, OrderStatus.CANCELLED)

    def _claim(self, digest: str, target: OrderStatus) -> None:
        if digest in self.statuses:
            raise_for_consumed(self.statuses[digest])
        self.statuses[digest] = target


class FakeConfigRepo(_Snapshotting):
    def __init__(self, config: MarketplaceConfig) -> None:
        self.config = config

    async def load(self, db: Any) -> MarketplaceConfig:
        return self.config

    async def set_fee_address(self, address: str, db: Any) -> None:
        self.config.fee_address = address

    async def set_fee_bps(self, fee_bps: int, db: Any) -> None:
        self.config.fee_bps = fee_bps

    async def set_tradable_token(self, token: str, enabled: bool, db: Any) -> None:
        tokens = set(self.config.tradable_tokens)
        if enabled:
            tokens.add(token)
        else:
            tokens.discard(token)
        self.config.tradable_tokens = frozenset(tokens)

    async def set_sign_prefix(self, scheme: SignScheme, prefix: str, db: Any) -> None:
        self.config.sign_prefixes[scheme] = prefix


class FakeTransport(_Snapshotting):
    def __init__(self) -> None:
        self.native: dict[str, int] = {}
        self.tokens: dict[tuple[str, str], int] = {}
        self.allowances: dict[tuple[str, str, str], int] = {}
        self.journal: list[tuple[str, str, LedgerEntryType, int]] = []

    async def transfer_native(
        self,
        sender: str,
        recipient: str,
        amount: int,
        entry_type: LedgerEntryType,
        reference_id: str,
        db: Any,
    ) -> None:
        if self.native.get(sender, 0) < amount:
            raise InsufficientFundsError(sender, amount)
        self.native[sender] -= amount
        self.native[recipient] = self.native.get(recipient, 0) + amount
        self.journal.append((recipient, ZERO_ADDRESS, entry_type, amount))

    async def allowance(self, token: str, owner: str, spender: str, db: Any) -> int:
        return self.allowances.get((token, owner, spender), 0)

    async def transfer_from(
        self,
        token: str,
        owner: str,
        spender: str,
        recipient: str,
        amount: int,
        entry_type: LedgerEntryType,
        reference_id: str,
        db: Any,
    ) -> None:
        allowed = self.allowances.get((token, owner, spender), 0)
        if allowed < amount:
            raise InsufficientAllowanceError(amount, allowed)
        if self.tokens.get((token, owner), 0) < amount:
            raise InsufficientFundsError(owner, amount)
        self.allowances[(token, owner, spender)] = allowed - amount
        self.tokens[(token, owner)] -= amount
        self.tokens[(token, recipient)] = self.tokens.get((token, recipient), 0) + amount
        self.journal.append((recipient, token, entry_type, amount))


class FakeAssets(_Snapshotting):
    def __init__(self) -> None:
        self.balances: dict[tuple[str, int, str], int] = {}
        self.approvals: set[tuple[str, str, str]] = set()

    async def transfer(
        self,
        contract: str,
        sender: str,
        recipient: str,
        asset_id: int,
        quantity: int,
        db: Any,
    ) -> None:
        if self.balances.get((contract, asset_id, sender), 0) < quantity:
            raise InsufficientAssetBalanceError(sender, asset_id)
        self.balances[(contract, asset_id, sender)] -= quantity
        key = (contract, asset_id, recipient)
        self.balances[key] = self.balances.get(key, 0) + quantity

    async def is_approved_for_all(
        self, contract: str, owner: str, operator: str, db: Any
    ) -> bool:
        return (contract, owner, operator) in self.approvals

    async def balance_of(self, contract: str, owner: str, asset_id: int, db: Any) -> int:
        return self.balances.get((contract, asset_id, owner), 0)


class FakeSession:
    """AsyncSession stand-in; SQL helpers (events) hit the execute mock."""

    def __init__(self, *stores: _Snapshotting) -> None:
        self._stores = stores
        self.execute = AsyncMock()
        self.commit = AsyncMock()
        self.rollback = AsyncMock()

    @asynccontextmanager
    async def begin_nested(self) -> AsyncIterator[None]:
        saved = [store.snapshot() for store in self._stores]
        try:
            yield
        except BaseException:
            for store, state in zip(self._stores, saved):
                store.restore(state)
            raise


@dataclass
class Market:
    engine: SettlementEngine
    db: FakeSession
    ledger: FakeLedger
    config_repo: FakeConfigRepo
    transport: FakeTransport
    assets: FakeAssets
    seller: Any  # eth_account LocalAccount
    buyer: Any

    @property
    def config(self) -> MarketplaceConfig:
        return self.config_repo.config

    def fund_native(self, account: str, amount: int) -> None:
        self.transport.native[account] = self.transport.native.get(account, 0) + amount

    def fund_token(self, account: str, amount: int, allowance: int | None = None) -> None:
        key = (PAY_TOKEN, account)
        self.transport.tokens[key] = self.transport.tokens.get(key, 0) + amount
        self.transport.allowances[(PAY_TOKEN, account, OPERATOR)] = (
            amount if allowance is None else allowance
        )

    def give_asset(self, owner: str, asset_id: int, quantity: int = 1) -> None:
        self.assets.balances[(ASSET_CONTRACT, asset_id, owner)] = quantity
        self.assets.approvals.add((ASSET_CONTRACT, owner, OPERATOR))

    def asset_balance(self, owner: str, asset_id: int) -> int:
        return self.assets.balances.get((ASSET_CONTRACT, asset_id, owner), 0)


def build_market() -> Market:
    ledger = FakeLedger()
    config_repo = FakeConfigRepo(
        MarketplaceConfig(
            fee_address=FEE_ADDRESS,
            fee_bps=1000,
            tradable_tokens=frozenset({PAY_TOKEN}),
            sign_prefixes=dict(PREFIXES),
        )
    )
    transport = FakeTransport()
    assets = FakeAssets()
    engine = SettlementEngine(
        config_repo=config_repo,
        ledger=ledger,
        payments=PaymentManager(transport, OPERATOR),
        assets=assets,
        operator=OPERATOR,
        clock=lambda: NOW,
    )
    return Market(
        engine=engine,
        db=FakeSession(ledger, config_repo, transport, assets),
        ledger=ledger,
        config_repo=config_repo,
        transport=transport,
        assets=assets,
        seller=Account.create(),
        buyer=Account.create(),
    )


# ---------------------------------------------------------------------------
# Order builders
# ---------------------------------------------------------------------------


def make_sale(
    seller: str,
    kind: OrderKind = OrderKind.UNIQUE_SALE,
    token_ids: tuple[int, ...] = (1,),
    quantities: tuple[int, ...] = (),
    price: int = 1000,
    payment_token: str = ZERO_ADDRESS,
    reserve_buyer: str = ZERO_ADDRESS,
    royalty_bps: int = 0,
    expire_timestamp: int = NOW + 3600,
    salt: int = 1,
    sign_scheme: SignScheme = SignScheme.ETHEREUM,
    asset_contract: str = ASSET_CONTRACT,
) -> SaleOrder:
    return SaleOrder(
        kind=kind,
        royalty_receiver=ROYALTY_RECEIVER,
        seller=seller,
        asset_contract=asset_contract,
        payment_token=payment_token,
        reserve_buyer=reserve_buyer,
        token_ids=token_ids,
        quantities=quantities,
        royalty_bps=royalty_bps,
        price=price,
        expire_timestamp=expire_timestamp,
        unique_salt=salt.to_bytes(32, "big"),
        sign_scheme=sign_scheme,
    )


def make_offer(
    seller: str,
    buyer: str,
    kind: OrderKind = OrderKind.UNIQUE_OFFER,
    token_id: int = 1,
    quantity: int = 1,
    price: int = 1000,
    payment_token: str = PAY_TOKEN,
    royalty_bps: int = 0,
    expire_timestamp: int = NOW + 3600,
    sign_scheme: SignScheme = SignScheme.ETHEREUM,
) -> OfferOrder:
    return OfferOrder(
        kind=kind,
        royalty_receiver=ROYALTY_RECEIVER,
        seller=seller,
        buyer=buyer,
        asset_contract=ASSET_CONTRACT,
        payment_token=payment_token,
        token_id=token_id,
        quantity=quantity,
        royalty_bps=royalty_bps,
        price=price,
        expire_timestamp=expire_timestamp,
        sign_scheme=sign_scheme,
    )


def sign(order: SaleOrder | OfferOrder, account: Any) -> Signature:
    """Sign with the prefix of the order's own scheme, as a wallet would."""
    return sign_order(order, bytes(account.key), PREFIXES[order.sign_scheme])
