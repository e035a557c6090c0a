import pytest

from crypto_stats.store import PriceSeriesStore

from .price_fixtures import HOUR, JAN_1, JAN_2, make_records


@pytest.fixture
def btc_eth_store():
    """BTC swings between 90 and 150, ETH never moves."""
    return PriceSeriesStore.build({
        "BTC": make_records("BTC", [(3000, 90.0), (1000, 100.0), (2000, 150.0)]),
        "ETH": make_records("ETH", [(1000, 50.0), (2000, 50.0), (3000, 50.0)]),
    })


@pytest.fixture
def daily_store():
    """
    Prices spread over two days:
    - BTC is calm on Jan 1 (range 0.1) and wild on Jan 2 (range 1.0)
    - ETH moves 50% on Jan 1, has no records on Jan 2
    - DOGE has a single record one millisecond before Jan 2
    """
    return PriceSeriesStore.build({
        "BTC": make_records("BTC", [
            (JAN_1 + HOUR, 100.0), (JAN_1 + 2 * HOUR, 110.0),
            (JAN_2 + HOUR, 100.0), (JAN_2 + 5 * HOUR, 200.0),
        ]),
        "ETH": make_records("ETH", [
            (JAN_1 + HOUR, 10.0), (JAN_1 + 3 * HOUR, 15.0),
        ]),
        "DOGE": make_records("DOGE", [
            (JAN_2 - 1, 0.1),
        ]),
    })
