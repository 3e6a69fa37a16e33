"""Global enums: values must match DB CHECK constraints exactly."""

from enum import Enum, IntEnum


class OrderKind(str, Enum):
    """Order variant: decides codec profile, price semantics and asset movement."""
    UNIQUE_SALE = "UNIQUE_SALE"
    MULTI_SALE = "MULTI_SALE"
    MULTI_BUNDLE_SALE = "MULTI_BUNDLE_SALE"
    UNIQUE_OFFER = "UNIQUE_OFFER"
    MULTI_OFFER = "MULTI_OFFER"

    @property
    def is_offer(self) -> bool:
        return self in (OrderKind.UNIQUE_OFFER, OrderKind.MULTI_OFFER)


class OrderStatus(str, Enum):
    # OPEN is never stored: absence of a ledger row means the order is open
    OPEN = "OPEN"
    CANCELLED = "CANCELLED"
    FULFILLED = "FULFILLED"


class SignScheme(IntEnum):
    """Personal-sign prefix profile. Encoded as uint8 inside every order digest."""
    KLAYTN = 0
    ETHEREUM = 1


class LedgerEntryType(str, Enum):
    DEPOSIT = "DEPOSIT"
    PAYMENT = "PAYMENT"
    FEE_REVENUE = "FEE_REVENUE"
    ROYALTY_REVENUE = "ROYALTY_REVENUE"
    SALE_PROCEEDS = "SALE_PROCEEDS"


class SettlementEventType(str, Enum):
    ORDER_FULFILLED = "ORDER_FULFILLED"
    ORDER_CANCELLED = "ORDER_CANCELLED"
