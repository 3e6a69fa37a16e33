"""Unit-test fixtures: an in-memory market wired to a real SettlementEngine."""

import pytest

from settlement_fakes import Market, build_market


@pytest.fixture
def market() -> Market:
    return build_market()
