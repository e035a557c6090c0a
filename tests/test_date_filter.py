import datetime
import math

import pytest

from crypto_stats.date_filter import parse_calendar_date, peak_on_date, records_on_date, utc_date
from crypto_stats.exceptions import InvalidDate, NoDataForDate
from crypto_stats.store import PriceSeriesStore

from .price_fixtures import HOUR, JAN_1, JAN_2, make_records


def test_utc_date_boundaries():
    assert utc_date(JAN_2) == datetime.date(2022, 1, 2)
    assert utc_date(JAN_2 - 1) == datetime.date(2022, 1, 1)
    assert utc_date(0) == datetime.date(1970, 1, 1)
    assert utc_date(-1) == datetime.date(1969, 12, 31)


@pytest.mark.parametrize("text, expected", [
    ("2022-01-02", datetime.date(2022, 1, 2)),
    ("2020-02-29", datetime.date(2020, 2, 29)),
])
def test_parse_calendar_date(text, expected):
    assert parse_calendar_date(text) == expected


@pytest.mark.parametrize("text", ["2022-1-2", "02-01-2022", "2022/01/02", "2022-13-01", "2021-02-29", "", "yesterday"])
def test_parse_calendar_date_rejects_bad_input(text):
    with pytest.raises(InvalidDate):
        parse_calendar_date(text)


def test_records_on_date_excludes_neighbouring_days(daily_store):
    records = records_on_date(daily_store.lookup("BTC"), datetime.date(2022, 1, 1))
    assert [record.price for record in records] == [100.0, 110.0]


def test_peak_on_date_uses_only_that_days_records(daily_store):
    peak = peak_on_date(daily_store, "2022-01-01")

    # ETH moves 50% on Jan 1, BTC only 10%
    assert peak.symbol == "ETH"
    assert peak.range == pytest.approx(0.5)


def test_peak_on_date_ignores_record_one_millisecond_before_midnight(daily_store):
    peak = peak_on_date(daily_store, datetime.date(2022, 1, 2))

    assert peak.symbol == "BTC"
    assert peak.range == pytest.approx(1.0)


def test_peak_on_date_record_before_midnight_counts_for_previous_day():
    store = PriceSeriesStore.build({"DOGE": make_records("DOGE", [(JAN_2 - 1, 0.1)])})

    assert peak_on_date(store, "2022-01-01").symbol == "DOGE"
    with pytest.raises(NoDataForDate):
        peak_on_date(store, "2022-01-02")


def test_peak_on_date_no_data_raises(daily_store):
    with pytest.raises(NoDataForDate) as exc_info:
        peak_on_date(daily_store, "2021-06-15")
    assert exc_info.value.date == "2021-06-15"


def test_peak_on_date_invalid_date_raises(daily_store):
    with pytest.raises(InvalidDate):
        peak_on_date(daily_store, "15-06-2021")


def test_peak_on_date_tie_resolves_to_first_symbol():
    store = PriceSeriesStore.build({
        "SOL": make_records("SOL", [(JAN_1, 10.0), (JAN_1 + HOUR, 20.0)]),
        "ADA": make_records("ADA", [(JAN_1, 1.0), (JAN_1 + HOUR, 2.0)]),
    })
    assert peak_on_date(store, "2022-01-01").symbol == "ADA"


def test_peak_on_date_single_record_symbol_has_zero_range():
    store = PriceSeriesStore.build({"BTC": make_records("BTC", [(JAN_1, 10.0)])})
    peak = peak_on_date(store, "2022-01-01")
    assert peak.symbol == "BTC"
    assert peak.range == 0.0


def test_peak_on_date_zero_price_propagates_infinity():
    store = PriceSeriesStore.build({
        "BTC": make_records("BTC", [(JAN_1, 10.0), (JAN_1 + HOUR, 20.0)]),
        "SHIB": make_records("SHIB", [(JAN_1, 0.0), (JAN_1 + HOUR, 0.5)]),
    })
    peak = peak_on_date(store, "2022-01-01")
    assert peak.symbol == "SHIB"
    assert math.isinf(peak.range)


def test_peak_on_date_is_idempotent(daily_store):
    assert peak_on_date(daily_store, "2022-01-01") == peak_on_date(daily_store, "2022-01-01")
