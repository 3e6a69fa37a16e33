"""Signature authenticator: recovers the signer of an order digest.

Signing convention (wallet "personal sign"):

    signed_hash = keccak256(prefix ‖ decimal(len(digest)) ‖ digest)

The digest is always 32 bytes, so the length string is "32". The prefix is
chosen by the order's sign scheme from the marketplace's prefix table, e.g.
"\\x19Ethereum Signed Message:\\n" or "\\x19Klaytn Signed Message:\\n".

Recovery failures are authorization failures (SignatureMismatchError), never
crashes.
"""
from collections.abc import Mapping

from eth_keys import keys
from eth_keys.exceptions import BadSignature, ValidationError
from eth_utils import keccak

from src.mx_common.addresses import is_zero_address, same_address
from src.mx_common.enums import SignScheme
from src.mx_common.errors import SignatureMismatchError, UnknownSignSchemeError
from src.mx_order.domain.codec import order_digest
from src.mx_order.domain.models import Order, Signature

_SIG_PART_LENGTH = 32


def resolve_prefix(scheme: int, prefixes: Mapping[SignScheme, str]) -> str:
    """Look up the prefix for scheme; unknown or unconfigured schemes are errors."""
    try:
        known = SignScheme(scheme)
    except ValueError:
        raise UnknownSignSchemeError(scheme) from None
    prefix = prefixes.get(known)
    if not prefix:
        raise UnknownSignSchemeError(scheme)
    return prefix


def prefixed_hash(digest: bytes, prefix: str) -> bytes:
    return keccak(prefix.encode("utf-8") + str(len(digest)).encode("ascii") + digest)


def recover_signer(digest: bytes, signature: Signature, prefix: str) -> str:
    """Return the checksummed address that produced signature over digest."""
    v = signature.v - 27 if signature.v >= 27 else signature.v
    if v not in (0, 1):
        raise SignatureMismatchError()
    if len(signature.r) != _SIG_PART_LENGTH or len(signature.s) != _SIG_PART_LENGTH:
        raise SignatureMismatchError()
    r = int.from_bytes(signature.r, "big")
    s = int.from_bytes(signature.s, "big")
    if r == 0 or s == 0:
        raise SignatureMismatchError()
    try:
        sig = keys.Signature(vrs=(v, r, s))
        public_key = sig.recover_public_key_from_msg_hash(prefixed_hash(digest, prefix))
    except (BadSignature, ValidationError, ValueError):
        raise SignatureMismatchError() from None
    address = public_key.to_checksum_address()
    if is_zero_address(address):
        raise SignatureMismatchError()
    return address


def verify_signer(
    order: Order,
    signature: Signature,
    expected: str,
    prefixes: Mapping[SignScheme, str],
) -> str:
    """Recover the order signer and require it to be expected.

    Raises:
        UnknownSignSchemeError: order.sign_scheme has no configured prefix.
        SignatureMismatchError: bad signature or a different signer.
    """
    prefix = resolve_prefix(order.sign_scheme, prefixes)
    signer = recover_signer(order_digest(order), signature, prefix)
    if not same_address(signer, expected):
        raise SignatureMismatchError()
    return signer


def sign_order(order: Order, private_key: bytes, prefix: str) -> Signature:
    """Sign an order the way wallets do. Used by off-ledger tooling and tests."""
    sig = keys.PrivateKey(private_key).sign_msg_hash(
        prefixed_hash(order_digest(order), prefix)
    )
    return Signature(
        v=sig.v + 27,
        r=sig.r.to_bytes(_SIG_PART_LENGTH, "big"),
        s=sig.s.to_bytes(_SIG_PART_LENGTH, "big"),
    )
