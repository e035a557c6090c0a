"""Error taxonomy for the price statistics service.

Everything raised on purpose derives from :class:`CryptoDataError`, so the HTTP
layer can register a single family of handlers. Errors that signal a bad
argument also derive from :class:`ValueError`.
"""


class CryptoDataError(Exception):
    """Base class for price data errors."""


class UnknownSymbol(CryptoDataError):
    """Raised when a symbol is not present in the store."""

    def __init__(self, symbol: str):
        self.symbol = symbol
        super().__init__(f"Cryptocurrency not supported: {symbol}")


class NoDataForDate(CryptoDataError):
    """Raised when no symbol has a price record on the requested date."""

    def __init__(self, date):
        self.date = date
        super().__init__(f"No data found for date: {date}")


class InvalidDate(CryptoDataError, ValueError):
    """Raised when a date is not a real calendar date in yyyy-mm-dd form."""

    def __init__(self, value: str):
        self.value = value
        super().__init__(f"Invalid date '{value}'. Expected format yyyy-MM-dd.")


class StartupDataMissing(CryptoDataError):
    """Raised at startup when the price data location is absent or empty."""

    def __init__(self, path: str, reason: str = "Data folder not found"):
        self.path = path
        super().__init__(f"{reason}: {path}")


class MalformedRecord(CryptoDataError, ValueError):
    """Raised when a row of a price file cannot be parsed."""

    def __init__(self, source: str, line_number: int, reason: str):
        self.source = source
        self.line_number = line_number
        self.reason = reason
        super().__init__(f"{source}:{line_number}: {reason}")


class SymbolMismatch(CryptoDataError, ValueError):
    """Raised when a record is filed under a symbol other than its own."""

    def __init__(self, expected: str, actual: str):
        self.expected = expected
        self.actual = actual
        super().__init__(f"Record for symbol '{actual}' filed under '{expected}'.")


class EmptySeries(CryptoDataError, ValueError):
    """Raised when statistics are requested for a series with no records."""
