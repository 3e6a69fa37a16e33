from dataclasses import dataclass

from src.mx_common.enums import OrderKind


@dataclass(frozen=True)
class SettlementReceipt:
    """Outcome of one settled order, returned to the submitter."""

    digest: str
    kind: OrderKind
    buyer: str
    seller: str
    quantity: int  # buy quantity for MULTI_SALE and offers, 1 for whole-order kinds
    total_price: int
    fee: int
    royalty: int
    seller_proceeds: int
