"""Order codec: deterministic digest of an order's fields.

digest = keccak256(abi.encodePacked(fields...)), fields in the fixed order below.
Arrays are inlined element by element (each as uint256), not hashed as a
sub-structure. This layout is the off-ledger signing contract: wallets build
the same bytes, so any change here breaks every outstanding signature.

  UNIQUE_SALE       royaltyReceiver, seller, assetContract, paymentToken,
                    reserveBuyer, tokenIds[...], royalty, price,
                    expireTimestamp, uniqueSalt(bytes32), signScheme(uint8)
  MULTI_SALE        header, tokenId, quantity, royalty, unitPrice,
                    expireTimestamp, uniqueSalt, signScheme
  MULTI_BUNDLE_SALE header, tokenIds[...], quantities[...], royalty,
                    bundlePrice, expireTimestamp, uniqueSalt, signScheme
  UNIQUE_OFFER      royaltyReceiver, seller, buyer, assetContract,
                    paymentToken, tokenId, royalty, price,
                    expireTimestamp, signScheme
  MULTI_OFFER       as UNIQUE_OFFER with quantity after tokenId

address = 20 bytes, uint256 = 32 bytes big-endian, uint8 = 1 byte.
"""
from typing import cast

from eth_abi.packed import encode_packed
from eth_utils import keccak

from src.mx_common.enums import OrderKind
from src.mx_order.domain.models import OfferOrder, Order, SaleOrder

_ADDRESS = "address"
_UINT = "uint256"


def _sale_layout(order: SaleOrder) -> tuple[list[str], list[object]]:
    types = [_ADDRESS] * 5
    values: list[object] = [
        order.royalty_receiver,
        order.seller,
        order.asset_contract,
        order.payment_token,
        order.reserve_buyer,
    ]
    # MULTI_SALE inlines (tokenId, quantity); bundles inline ids then quantities
    for token_id in order.token_ids:
        types.append(_UINT)
        values.append(token_id)
    for quantity in order.quantities:
        types.append(_UINT)
        values.append(quantity)
    types += [_UINT, _UINT, _UINT, "bytes32", "uint8"]
    values += [
        order.royalty_bps,
        order.price,
        order.expire_timestamp,
        order.unique_salt,
        int(order.sign_scheme),
    ]
    return types, values


def _offer_layout(order: OfferOrder) -> tuple[list[str], list[object]]:
    types = [_ADDRESS] * 5 + [_UINT]
    values: list[object] = [
        order.royalty_receiver,
        order.seller,
        order.buyer,
        order.asset_contract,
        order.payment_token,
        order.token_id,
    ]
    if order.kind == OrderKind.MULTI_OFFER:
        types.append(_UINT)
        values.append(order.quantity)
    types += [_UINT, _UINT, _UINT, "uint8"]
    values += [
        order.royalty_bps,
        order.price,
        order.expire_timestamp,
        int(order.sign_scheme),
    ]
    return types, values


def encode_order(order: Order) -> bytes:
    """Packed encoding of the order fields (the digest pre-image)."""
    if order.kind.is_offer:
        types, values = _offer_layout(cast(OfferOrder, order))
    else:
        types, values = _sale_layout(cast(SaleOrder, order))
    return encode_packed(types, values)


def order_digest(order: Order) -> bytes:
    """32-byte keccak256 digest identifying the order."""
    return keccak(encode_order(order))


def digest_hex(order: Order) -> str:
    """0x-prefixed lowercase hex digest: the Order Ledger key."""
    return "0x" + order_digest(order).hex()
