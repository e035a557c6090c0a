from types import MappingProxyType
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Tuple

from .exceptions import SymbolMismatch, UnknownSymbol
from .logger import service_logger
from .models import PriceRecord

Series = Tuple[PriceRecord, ...]


class PriceSeriesStore:
    """
    Immutable snapshot of every loaded price series, keyed by uppercase symbol.

    Each series is a tuple sorted by timestamp and is never empty. The store is
    built once at startup and only exposes read operations, so request handlers
    can share it without locking.
    """

    def __init__(self, series_by_symbol: Mapping[str, Series]):
        self._series = MappingProxyType(dict(series_by_symbol))

    @classmethod
    def build(cls, records_by_symbol: Mapping[str, Iterable[PriceRecord]]) -> "PriceSeriesStore":
        """
        Sorts each symbol's records by timestamp and freezes the result.

        The sort is stable, so records sharing a timestamp keep the order the
        loader produced them in. Symbols without records are left out.
        """
        series_by_symbol: Dict[str, Series] = {}
        for raw_symbol, records in records_by_symbol.items():
            symbol = raw_symbol.upper()
            series = tuple(sorted(records, key=lambda record: record.timestamp))

            if not series:
                service_logger.warning(f"Skipping {symbol}: no price records loaded.")
                continue

            for record in series:
                if record.symbol != symbol:
                    raise SymbolMismatch(expected=symbol, actual=record.symbol)

            if symbol in series_by_symbol:
                # Two sources mapped onto one symbol, merge and re-sort.
                series = tuple(sorted(series_by_symbol[symbol] + series, key=lambda record: record.timestamp))
            series_by_symbol[symbol] = series

        return cls(series_by_symbol)

    @classmethod
    def from_loader(cls, loader) -> "PriceSeriesStore":
        """Builds the store from any object exposing ``load() -> {symbol: records}``."""
        return cls.build(loader.load())

    def lookup(self, symbol: str) -> Optional[Series]:
        """Case-insensitive lookup. Returns None for an unknown symbol."""
        return self._series.get(symbol.upper())

    def get_series(self, symbol: str) -> Series:
        series = self.lookup(symbol)
        if series is None:
            raise UnknownSymbol(symbol)
        return series

    def symbols(self) -> List[str]:
        return sorted(self._series)

    def items(self) -> Iterator[Tuple[str, Series]]:
        """Yields (symbol, series) pairs in symbol order."""
        for symbol in self.symbols():
            yield symbol, self._series[symbol]

    def record_count(self) -> int:
        return sum(len(series) for series in self._series.values())

    def __contains__(self, symbol: object) -> bool:
        return isinstance(symbol, str) and symbol.upper() in self._series

    def __len__(self) -> int:
        return len(self._series)

    def __repr__(self) -> str:
        return f"PriceSeriesStore(symbols={self.symbols()}, records={self.record_count()})"
