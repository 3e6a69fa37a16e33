"""Integer basis-point arithmetic.

All amounts are int in the smallest currency unit. No float, no Decimal.
10000 bps = 100%.
"""

from src.mx_common.errors import InvalidBasisPointsError

BPS_DENOMINATOR = 10_000


def validate_bps(bps: int) -> None:
    """Validate that bps is in the range [0, 10000]."""
    if not (0 <= bps <= BPS_DENOMINATOR):
        raise InvalidBasisPointsError(bps)


def apply_bps(amount: int, bps: int) -> int:
    """Floor share of amount: amount * bps // 10000."""
    if amount == 0 or bps == 0:
        return 0
    return amount * bps // BPS_DENOMINATOR
