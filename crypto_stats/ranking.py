import math
from typing import Iterable, List

from .models import NormalizedPriceRange
from .store import PriceSeriesStore


def normalized_range(prices: Iterable[float]) -> float:
    """
    (max - min) / min over the given prices.

    A zero minimum does not raise: the IEEE-754 result is returned instead,
    inf for a positive spread and nan when every price is zero.
    """
    prices = list(prices)
    if not prices:
        raise ValueError("normalized_range() requires at least one price")

    min_price = min(prices)
    max_price = max(prices)
    spread = max_price - min_price

    if min_price == 0:
        return math.copysign(math.inf, min_price) if spread else math.nan
    return spread / min_price


def _ranking_key(entry: NormalizedPriceRange):
    # nan sorts after every number, ties by symbol
    if math.isnan(entry.range):
        return (1, 0.0, entry.symbol)
    return (0, -entry.range, entry.symbol)


def rank_ranges(ranges: Iterable[NormalizedPriceRange]) -> List[NormalizedPriceRange]:
    """Orders ranges from most to least volatile, equal ranges by symbol."""
    return sorted(ranges, key=_ranking_key)


def rank_all(store: PriceSeriesStore) -> List[NormalizedPriceRange]:
    """Normalized range of every symbol's full series, most volatile first."""
    return rank_ranges(
        NormalizedPriceRange(symbol=symbol, range=normalized_range(record.price for record in series))
        for symbol, series in store.items()
    )
