from typing import Optional, Sequence

from .exceptions import EmptySeries
from .models import CryptoStatistics, PriceRecord


def compute_statistics(series: Sequence[PriceRecord], symbol: Optional[str] = None) -> CryptoStatistics:
    """
    Computes min, max, oldest and newest over a series sorted by timestamp.

    The oldest and newest records are the first and last elements, so the
    series must already be in chronological order (as the store keeps it).
    """
    if not series:
        raise EmptySeries("Cannot compute statistics for an empty price series.")

    min_price = max_price = series[0].price
    for record in series:
        if record.price < min_price:
            min_price = record.price
        elif record.price > max_price:
            max_price = record.price

    return CryptoStatistics(
        symbol=(symbol or series[0].symbol).upper(),
        oldest=series[0],
        newest=series[-1],
        min=min_price,
        max=max_price,
    )
