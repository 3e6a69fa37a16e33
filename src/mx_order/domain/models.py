"""Order domain models: frozen dataclasses, no SQLAlchemy dependency.

An order is immutable once signed; its digest (see codec.py) is its identity.
Addresses are checksummed hex strings, amounts are int in the smallest unit.
"""
from dataclasses import dataclass

from src.mx_common.basis_points import BPS_DENOMINATOR
from src.mx_common.enums import OrderKind, SignScheme

SALT_LENGTH = 32
UINT256_MAX = 2**256 - 1

_SALE_KINDS = (OrderKind.UNIQUE_SALE, OrderKind.MULTI_SALE, OrderKind.MULTI_BUNDLE_SALE)
_OFFER_KINDS = (OrderKind.UNIQUE_OFFER, OrderKind.MULTI_OFFER)


@dataclass(frozen=True)
class Signature:
    v: int  # 27/28 (0/1 accepted)
    r: bytes  # 32 bytes
    s: bytes  # 32 bytes


@dataclass(frozen=True)
class SaleOrder:
    """Seller-initiated listing.

    Shapes per kind:
      UNIQUE_SALE       token_ids=(id, ...)  quantities=()      price = whole set
      MULTI_SALE        token_ids=(id,)      quantities=(q,)    price = per unit
      MULTI_BUNDLE_SALE token_ids=(id, ...)  quantities=(q,...) price = whole bundle
    """

    kind: OrderKind
    royalty_receiver: str
    seller: str
    asset_contract: str
    payment_token: str  # ZERO_ADDRESS = native currency
    reserve_buyer: str  # ZERO_ADDRESS = anyone may buy
    token_ids: tuple[int, ...]
    quantities: tuple[int, ...]
    royalty_bps: int
    price: int
    expire_timestamp: int
    unique_salt: bytes
    sign_scheme: SignScheme

    def __post_init__(self) -> None:
        if self.kind not in _SALE_KINDS:
            raise ValueError(f"{self.kind} is not a sale order kind")
        _check_common(self.royalty_bps, self.price, self.expire_timestamp)
        if len(self.unique_salt) != SALT_LENGTH:
            raise ValueError(f"unique_salt must be {SALT_LENGTH} bytes")
        if not self.token_ids:
            raise ValueError("token_ids must not be empty")
        if self.kind == OrderKind.UNIQUE_SALE and self.quantities:
            raise ValueError("unique sale orders carry no quantities")
        if self.kind == OrderKind.MULTI_SALE and (
            len(self.token_ids) != 1 or len(self.quantities) != 1
        ):
            raise ValueError("multi sale orders carry exactly one token_id and quantity")
        if self.kind == OrderKind.MULTI_BUNDLE_SALE and len(self.quantities) != len(
            self.token_ids
        ):
            raise ValueError("bundle token_ids and quantities must have equal length")
        if any(q <= 0 for q in self.quantities):
            raise ValueError("quantities must be positive")
        _check_uint256("token_ids", *self.token_ids)
        _check_uint256("quantities", *self.quantities)

    @property
    def signer(self) -> str:
        return self.seller

    @property
    def quantity(self) -> int:
        """Units on offer for MULTI_SALE; 1 otherwise (order is taken whole)."""
        return self.quantities[0] if self.kind == OrderKind.MULTI_SALE else 1


@dataclass(frozen=True)
class OfferOrder:
    """Buyer-initiated bid naming a specific seller. Always paid in a registered token."""

    kind: OrderKind
    royalty_receiver: str
    seller: str
    buyer: str
    asset_contract: str
    payment_token: str
    token_id: int
    quantity: int  # always 1 for UNIQUE_OFFER
    royalty_bps: int
    price: int  # total for the whole quantity
    expire_timestamp: int
    sign_scheme: SignScheme

    def __post_init__(self) -> None:
        if self.kind not in _OFFER_KINDS:
            raise ValueError(f"{self.kind} is not an offer order kind")
        _check_common(self.royalty_bps, self.price, self.expire_timestamp)
        if self.kind == OrderKind.UNIQUE_OFFER and self.quantity != 1:
            raise ValueError("unique offers cover exactly one unit")
        if self.quantity <= 0:
            raise ValueError("quantity must be positive")
        _check_uint256("token_id", self.token_id)
        _check_uint256("quantity", self.quantity)

    @property
    def signer(self) -> str:
        return self.buyer


Order = SaleOrder | OfferOrder


def _check_common(royalty_bps: int, price: int, expire_timestamp: int) -> None:
    if not (0 <= royalty_bps <= BPS_DENOMINATOR):
        raise ValueError(f"royalty must be between 0 and {BPS_DENOMINATOR} bps")
    _check_uint256("price", price)
    _check_uint256("expire_timestamp", expire_timestamp)


def _check_uint256(field: str, *values: int) -> None:
    """Every numeric order field is signed as a uint256."""
    if any(not (0 <= v <= UINT256_MAX) for v in values):
        raise ValueError(f"{field} must be between 0 and 2**256 - 1")
