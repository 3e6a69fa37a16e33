"""Marketplace configuration: read on every settlement, mutated only by admins."""
from dataclasses import dataclass, field

from src.mx_common.addresses import ZERO_ADDRESS, same_address
from src.mx_common.enums import SignScheme


@dataclass
class MarketplaceConfig:
    fee_address: str = ZERO_ADDRESS
    fee_bps: int = 0
    tradable_tokens: frozenset[str] = frozenset()
    sign_prefixes: dict[SignScheme, str] = field(default_factory=dict)

    def is_tradable(self, token: str) -> bool:
        return any(same_address(token, t) for t in self.tradable_tokens)
