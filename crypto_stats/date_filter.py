import datetime
import re
from typing import List, Sequence, Union

from .exceptions import InvalidDate, NoDataForDate
from .models import NormalizedPriceRange, PriceRecord
from .ranking import normalized_range, rank_ranges
from .store import PriceSeriesStore

_EPOCH = datetime.datetime(1970, 1, 1, tzinfo=datetime.timezone.utc)
_DATE_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


def utc_date(timestamp: int) -> datetime.date:
    """Calendar date (UTC) of an epoch-millisecond timestamp."""
    return (_EPOCH + datetime.timedelta(milliseconds=timestamp)).date()


def parse_calendar_date(text: str) -> datetime.date:
    """Parses a strict yyyy-mm-dd date."""
    if not _DATE_PATTERN.fullmatch(text):
        raise InvalidDate(text)
    try:
        return datetime.date.fromisoformat(text)
    except ValueError:
        raise InvalidDate(text)


def records_on_date(series: Sequence[PriceRecord], date: datetime.date) -> List[PriceRecord]:
    return [record for record in series if utc_date(record.timestamp) == date]


def peak_on_date(store: PriceSeriesStore, date: Union[str, datetime.date]) -> NormalizedPriceRange:
    """
    Finds the symbol with the highest normalized range on one UTC calendar date.

    Only records falling on that date count, and symbols without any are left
    out. Equal ranges resolve to the alphabetically first symbol.
    """
    if isinstance(date, str):
        date = parse_calendar_date(date)

    ranges = []
    for symbol, series in store.items():
        prices = [record.price for record in records_on_date(series, date)]
        if prices:
            ranges.append(NormalizedPriceRange(symbol=symbol, range=normalized_range(prices)))

    if not ranges:
        raise NoDataForDate(date.isoformat())

    return rank_ranges(ranges)[0]
