from contextlib import asynccontextmanager
from typing import List

from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse
import uvicorn

from .config import SERVICE_HOST, SERVICE_PORT
from .date_filter import peak_on_date
from .exceptions import InvalidDate, NoDataForDate, StartupDataMissing, UnknownSymbol
from .loader import CsvDirectoryLoader
from .logger import service_logger
from .models import CryptoStatistics, ErrorResponse, HealthResponse, NormalizedPriceRange
from .ranking import rank_all
from .statistics import compute_statistics
from .store import PriceSeriesStore


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Loads all price files once before the first request is served.
    Any loading error propagates and aborts startup.
    """
    loader = CsvDirectoryLoader()
    store = PriceSeriesStore.from_loader(loader)
    if len(store) == 0:
        raise StartupDataMissing(str(loader.directory.resolve()), reason="No price records loaded")
    app.state.store = store
    service_logger.info({
        "event": "store_ready", "symbols": store.symbols(), "records": store.record_count()
    })
    yield


app = FastAPI(title="Crypto Price Statistics", lifespan=lifespan)


def get_store(request: Request) -> PriceSeriesStore:
    """Returns the read-only store built at startup."""
    return request.app.state.store


@app.exception_handler(UnknownSymbol)
async def unknown_symbol_handler(request: Request, exc: UnknownSymbol):
    service_logger.warning(f"Statistics requested for unknown symbol '{exc.symbol}'")
    return JSONResponse(status_code=404, content={"detail": str(exc)})


@app.exception_handler(NoDataForDate)
async def no_data_for_date_handler(request: Request, exc: NoDataForDate):
    service_logger.warning(f"No price data on {exc.date}")
    return JSONResponse(status_code=404, content={"detail": str(exc)})


@app.exception_handler(InvalidDate)
async def invalid_date_handler(request: Request, exc: InvalidDate):
    service_logger.warning(f"Rejected date '{exc.value}'")
    return JSONResponse(status_code=400, content={"detail": str(exc)})


@app.get(
    "/cryptocurrency/statistics/{symbol}",
    response_model=CryptoStatistics,
    responses={404: {"model": ErrorResponse}},
)
def fetch_statistics(symbol: str, store: PriceSeriesStore = Depends(get_store)):
    """
    Oldest, newest, min and max price of a symbol (case-insensitive).
    """
    return compute_statistics(store.get_series(symbol), symbol=symbol)


@app.get("/cryptocurrency/normalized-ranges", response_model=List[NormalizedPriceRange])
def retrieve_normalized_ranges(store: PriceSeriesStore = Depends(get_store)):
    """
    All symbols ordered by normalized range, (max - min) / min, descending.
    """
    return rank_all(store)


@app.get(
    "/cryptocurrency/highest-normalized/{date}",
    response_model=NormalizedPriceRange,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
def fetch_highest_normalized(date: str, store: PriceSeriesStore = Depends(get_store)):
    """
    The symbol with the highest normalized range on a UTC date (yyyy-MM-dd).
    """
    return peak_on_date(store, date)


@app.get("/health", response_model=HealthResponse)
def health(store: PriceSeriesStore = Depends(get_store)):
    return HealthResponse(status="ok", symbols=store.symbols(), records=store.record_count())


if __name__ == "__main__":
    uvicorn.run(app, host=SERVICE_HOST, port=SERVICE_PORT)
