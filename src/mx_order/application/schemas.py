"""Wire schemas for signed orders.

Addresses arrive as hex strings in any case and are checksummed on the way in.
Byte fields (signature r/s, unique salt) are 0x-prefixed 32-byte hex.
Amounts are JSON integers (or decimal strings for values beyond 2**53).
"""
from typing import Annotated, Literal

from eth_utils import decode_hex, is_address, is_hex, to_checksum_address
from pydantic import BaseModel, Field, field_validator, model_validator

from src.mx_common.addresses import ZERO_ADDRESS
from src.mx_common.enums import OrderKind, SignScheme
from src.mx_order.domain.models import SALT_LENGTH, OfferOrder, SaleOrder, Signature


def _checksum(v: str) -> str:
    if not is_address(v):
        raise ValueError(f"invalid address: {v}")
    return to_checksum_address(v)


def _hex32(v: str) -> str:
    if not is_hex(v) or len(decode_hex(v)) != SALT_LENGTH:
        raise ValueError("must be 0x-prefixed 32-byte hex")
    return v.lower()


class SignatureIn(BaseModel):
    v: int
    r: str
    s: str

    @field_validator("r", "s")
    @classmethod
    def part_is_bytes32(cls, v: str) -> str:
        return _hex32(v)

    def to_domain(self) -> Signature:
        return Signature(v=self.v, r=decode_hex(self.r), s=decode_hex(self.s))


class SaleOrderIn(BaseModel):
    kind: Literal["UNIQUE_SALE", "MULTI_SALE", "MULTI_BUNDLE_SALE"]
    royalty_receiver: str = ZERO_ADDRESS
    seller: str
    asset_contract: str
    payment_token: str = ZERO_ADDRESS
    reserve_buyer: str = ZERO_ADDRESS
    token_ids: list[int]
    quantities: list[int] = Field(default_factory=list)
    royalty_bps: int = 0
    price: int
    expire_timestamp: int
    unique_salt: str
    sign_scheme: SignScheme = SignScheme.ETHEREUM

    @field_validator(
        "royalty_receiver", "seller", "asset_contract", "payment_token", "reserve_buyer"
    )
    @classmethod
    def checksum_address(cls, v: str) -> str:
        return _checksum(v)

    @field_validator("unique_salt")
    @classmethod
    def salt_is_bytes32(cls, v: str) -> str:
        return _hex32(v)

    @model_validator(mode="after")
    def shape_matches_kind(self) -> "SaleOrderIn":
        self.to_domain()
        return self

    def to_domain(self) -> SaleOrder:
        return SaleOrder(
            kind=OrderKind(self.kind),
            royalty_receiver=self.royalty_receiver,
            seller=self.seller,
            asset_contract=self.asset_contract,
            payment_token=self.payment_token,
            reserve_buyer=self.reserve_buyer,
            token_ids=tuple(self.token_ids),
            quantities=tuple(self.quantities),
            royalty_bps=self.royalty_bps,
            price=self.price,
            expire_timestamp=self.expire_timestamp,
            unique_salt=decode_hex(self.unique_salt),
            sign_scheme=self.sign_scheme,
        )


class OfferOrderIn(BaseModel):
    kind: Literal["UNIQUE_OFFER", "MULTI_OFFER"]
    royalty_receiver: str = ZERO_ADDRESS
    seller: str
    buyer: str
    asset_contract: str
    payment_token: str
    token_id: int
    quantity: int = 1
    royalty_bps: int = 0
    price: int
    expire_timestamp: int
    sign_scheme: SignScheme = SignScheme.ETHEREUM

    @field_validator(
        "royalty_receiver", "seller", "buyer", "asset_contract", "payment_token"
    )
    @classmethod
    def checksum_address(cls, v: str) -> str:
        return _checksum(v)

    @model_validator(mode="after")
    def shape_matches_kind(self) -> "OfferOrderIn":
        self.to_domain()
        return self

    def to_domain(self) -> OfferOrder:
        return OfferOrder(
            kind=OrderKind(self.kind),
            royalty_receiver=self.royalty_receiver,
            seller=self.seller,
            buyer=self.buyer,
            asset_contract=self.asset_contract,
            payment_token=self.payment_token,
            token_id=self.token_id,
            quantity=self.quantity,
            royalty_bps=self.royalty_bps,
            price=self.price,
            expire_timestamp=self.expire_timestamp,
            sign_scheme=self.sign_scheme,
        )


OrderIn = Annotated[SaleOrderIn | OfferOrderIn, Field(discriminator="kind")]


class OrderBody(BaseModel):
    order: OrderIn


class DigestResponse(BaseModel):
    digest: str
    kind: str
    signer: str


class OrderStatusResponse(BaseModel):
    digest: str
    status: str


class CancelOrderResponse(BaseModel):
    digest: str
    status: str
