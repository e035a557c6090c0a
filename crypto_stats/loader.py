import csv
import math
import re
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, List, Mapping, Iterable

from .config import DATA_DIRECTORY, DATA_FILE_PATTERN, MALFORMED_RECORD_POLICY
from .date_filter import utc_date
from .exceptions import MalformedRecord, StartupDataMissing
from .logger import service_logger
from .models import PriceRecord

MALFORMED_POLICIES = ("fail", "skip")

# Plain ASCII numbers only, no digit separators
_TIMESTAMP_PATTERN = re.compile(r"[+-]?[0-9]+")
_PRICE_PATTERN = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")


class PriceLoader(ABC):
    """Source of price records, grouped by symbol."""

    @abstractmethod
    def load(self) -> Mapping[str, Iterable[PriceRecord]]:
        """Returns every record the source holds, keyed by uppercase symbol."""


class InMemoryLoader(PriceLoader):
    """Loader over records that are already in memory."""

    def __init__(self, records_by_symbol: Mapping[str, Iterable[PriceRecord]]):
        self._records_by_symbol = {symbol: list(records) for symbol, records in records_by_symbol.items()}

    def load(self) -> Dict[str, List[PriceRecord]]:
        return {symbol: list(records) for symbol, records in self._records_by_symbol.items()}


def symbol_from_filename(path: Path) -> str:
    """BTC_values.csv -> BTC"""
    return path.name.split("_")[0].upper()


def parse_row(row: List[str], symbol: str, source: str, line_number: int) -> PriceRecord:
    """
    Parses one ``timestamp,<unused>,price`` row into a PriceRecord.

    Timestamps must be integer epoch milliseconds within the range of
    ``datetime`` (years 1 to 9999); prices must be finite decimal numbers.
    """
    if len(row) < 3:
        raise MalformedRecord(source, line_number, f"expected 3 fields, got {len(row)}")

    if any("\ufffd" in field for field in row):
        raise MalformedRecord(source, line_number, "invalid UTF-8 bytes")

    raw_timestamp = row[0].strip()
    if not _TIMESTAMP_PATTERN.fullmatch(raw_timestamp):
        raise MalformedRecord(source, line_number, f"invalid timestamp '{row[0]}'")
    timestamp = int(raw_timestamp)

    try:
        utc_date(timestamp)
    except OverflowError:
        raise MalformedRecord(source, line_number, f"timestamp out of range '{row[0]}'")

    raw_price = row[2].strip()
    if not _PRICE_PATTERN.fullmatch(raw_price):
        raise MalformedRecord(source, line_number, f"invalid price '{row[2]}'")
    price = float(raw_price)

    if not math.isfinite(price):
        raise MalformedRecord(source, line_number, f"non-finite price '{row[2]}'")

    return PriceRecord(timestamp=timestamp, symbol=symbol, price=price)


class CsvDirectoryLoader(PriceLoader):
    """
    Loads one price file per symbol from a directory.

    Files are matched by ``pattern`` (``BTC_values.csv``, ``ETH_values.csv``, ...),
    the symbol is the part of the file name before the first underscore and
    the first line of every file is a header.
    """

    def __init__(
        self,
        directory: str = DATA_DIRECTORY,
        pattern: str = DATA_FILE_PATTERN,
        malformed_policy: str = MALFORMED_RECORD_POLICY,
    ):
        if malformed_policy not in MALFORMED_POLICIES:
            raise ValueError(f"Invalid malformed record policy '{malformed_policy}'. Use one of {MALFORMED_POLICIES}.")
        self.directory = Path(directory)
        self.pattern = pattern
        self.malformed_policy = malformed_policy

    def discover(self) -> List[Path]:
        """Returns the matching data files in name order."""
        if not self.directory.is_dir():
            raise StartupDataMissing(str(self.directory.resolve()))
        return sorted(path for path in self.directory.glob(self.pattern) if path.is_file())

    def load_file(self, path: Path) -> List[PriceRecord]:
        symbol = symbol_from_filename(path)
        records = []
        # undecodable bytes become U+FFFD and are reported per row by parse_row
        with open(path, newline="", encoding="utf-8", errors="replace") as f:
            reader = csv.reader(f)
            next(reader, None)  # header
            for row in reader:
                # csv line_num counts the header, so it matches the file line
                line_number = reader.line_num
                if not any(field.strip() for field in row):
                    continue
                try:
                    records.append(parse_row(row, symbol, path.name, line_number))
                except MalformedRecord as e:
                    if self.malformed_policy == "fail":
                        raise
                    service_logger.warning(f"Skipping malformed record: {e}")
        return records

    def load(self) -> Dict[str, List[PriceRecord]]:
        files = self.discover()
        if not files:
            raise StartupDataMissing(
                str(self.directory.resolve()), reason=f"No files matching '{self.pattern}' in data folder"
            )

        records_by_symbol: Dict[str, List[PriceRecord]] = {}
        for path in files:
            records = self.load_file(path)
            records_by_symbol.setdefault(symbol_from_filename(path), []).extend(records)
            service_logger.info({
                "event": "symbol_loaded", "symbol": symbol_from_filename(path),
                "source": path.name, "entries": len(records)
            })
        return records_by_symbol
