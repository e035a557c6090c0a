import math
from typing import List

from pydantic import BaseModel, ConfigDict, field_serializer

# --- Core Data Unit ---

class PriceRecord(BaseModel):
    """A single price observation for one symbol."""
    model_config = ConfigDict(frozen=True)

    timestamp: int  # epoch milliseconds, UTC
    symbol: str
    price: float


# --- Derived Query Models ---

class CryptoStatistics(BaseModel):
    """Summary statistics over the full price series of a symbol."""
    symbol: str
    oldest: PriceRecord
    newest: PriceRecord
    min: float
    max: float


class NormalizedPriceRange(BaseModel):
    """
    Scale-free volatility of a symbol: (max - min) / min over a price subset.
    A zero minimum yields inf or nan, which is kept as-is in the model and
    written as "Infinity", "-Infinity" or "NaN" in JSON output.
    """
    model_config = ConfigDict(frozen=True)

    symbol: str
    range: float

    @field_serializer("range", when_used="json")
    def serialize_range(self, value: float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        return value


# --- Service Models ---

class HealthResponse(BaseModel):
    status: str
    symbols: List[str]
    records: int


class ErrorResponse(BaseModel):
    detail: str
