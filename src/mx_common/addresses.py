"""Account address helpers.

Addresses travel as EIP-55 checksummed hex strings everywhere in the service,
so plain string equality is address equality once normalised.
"""

from eth_utils import is_address, to_checksum_address

from src.mx_common.errors import InvalidAddressError

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"


def normalize_address(value: str) -> str:
    """Return the checksummed form of value or raise InvalidAddressError."""
    if not isinstance(value, str) or not is_address(value):
        raise InvalidAddressError(str(value))
    return to_checksum_address(value)


def is_zero_address(value: str) -> bool:
    return int(value, 16) == 0


def same_address(a: str, b: str) -> bool:
    return a.lower() == b.lower()
