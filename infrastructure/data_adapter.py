import json
import logging
import os
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Iterable, Optional
import pandas as pd
import yfinance as yf
from pydantic import ValidationError
from domain.constants import BENCHMARK_TICKER, DATA_SOURCE, RETURN_DECIMALS
from domain.errors import MissingSeries
from domain.models import MonthlyObservation, SeriesMetadata, StockInfo
from domain.series import ReturnSeries

DEFAULT_DATA_DIR = Path(__file__).resolve().parents[1] / "data"
DATA_DIR_ENV_VAR = "GROWTH_DATA_DIR"


def default_data_dir() -> Path:
    override = os.environ.get(DATA_DIR_ENV_VAR)
    return Path(override) if override else DEFAULT_DATA_DIR


class MarketDataAdapter:
    @staticmethod
    def fetch_monthly_closes(ticker: str, start_date: date, end_date: date) -> pd.Series:
        df = yf.download(
            ticker,
            start=start_date,
            end=end_date,
            interval="1mo",
            auto_adjust=False,
            progress=False,
        )

        if df.empty:
            raise ValueError(f"No data found for {ticker} in the given date range")

        if isinstance(df.columns, pd.MultiIndex):
            df.columns = df.columns.droplevel(1)

        column = 'Adj Close' if 'Adj Close' in df.columns else 'Close'
        closes = df[column].dropna()
        if closes.empty:
            raise ValueError(f"No closing prices found for {ticker}")
        return closes


def monthly_returns_from_closes(ticker: str, closes: pd.Series) -> ReturnSeries:
    """
    Turns month-end closes into percentage returns.

    Each return is tagged with the month of the later close and rounded to
    two decimals. The first close only serves as the base for the second.
    """
    closes = closes.sort_index()
    previous = closes.shift(1)
    returns = ((closes - previous) / previous * 100).iloc[1:].round(RETURN_DECIMALS)

    observations = [
        MonthlyObservation(year=stamp.year, month=stamp.month, return_pct=float(value))
        for stamp, value in returns.items()
    ]
    observations.sort(key=lambda obs: obs.date_key)
    return ReturnSeries(ticker, observations)


def build_metadata(series: ReturnSeries, name: str,
                   last_updated: Optional[datetime] = None) -> SeriesMetadata:
    date_range = series.date_range()
    if date_range is None:
        raise ValueError(f"Cannot describe empty series for {series.ticker}")
    return SeriesMetadata(
        ticker=series.ticker,
        name=name,
        last_updated=last_updated or datetime.now(timezone.utc),
        data_source=DATA_SOURCE,
        total_months=len(series),
        date_range=date_range,
    )


class SeriesRepository:
    """
    Reads and writes the JSON return fixtures.

    Layout under ``data_dir``::

        sp500-data.json / sp500-metadata.json     benchmark
        stocks/<TICKER>-data.json                 comparison instruments
        stocks/<TICKER>-metadata.json
        stocks/index.json                         instruments that were fetched
    """

    def __init__(self, data_dir: Path):
        self.data_dir = Path(data_dir)
        self.stocks_dir = self.data_dir / "stocks"

    def _paths(self, ticker: str) -> tuple[Path, Path]:
        if ticker == BENCHMARK_TICKER:
            return self.data_dir / "sp500-data.json", self.data_dir / "sp500-metadata.json"
        return (
            self.stocks_dir / f"{ticker}-data.json",
            self.stocks_dir / f"{ticker}-metadata.json",
        )

    def load_benchmark(self) -> ReturnSeries:
        return self.load(BENCHMARK_TICKER)

    def load(self, ticker: str) -> ReturnSeries:
        data_path, _ = self._paths(ticker)
        logging.info(f"Loading return series for {ticker} from {data_path}")

        if not data_path.exists():
            logging.warning(f"No return data file for {ticker}")
            raise MissingSeries(ticker, "data file not found")

        try:
            records = json.loads(data_path.read_text(encoding="utf-8"))
            series = ReturnSeries.from_records(ticker, records)
        except (json.JSONDecodeError, ValidationError, TypeError) as exc:
            logging.warning(f"Unreadable return data for {ticker}: {exc}")
            raise MissingSeries(ticker, "data file is unreadable") from exc

        if len(series) == 0:
            raise MissingSeries(ticker, "data file is empty")

        logging.info(f"Loaded {len(series)} months for {ticker}")
        return series

    def load_metadata(self, ticker: str = BENCHMARK_TICKER) -> Optional[SeriesMetadata]:
        _, metadata_path = self._paths(ticker)
        if not metadata_path.exists():
            return None
        try:
            return SeriesMetadata.model_validate_json(metadata_path.read_text(encoding="utf-8"))
        except ValidationError as exc:
            logging.warning(f"Ignoring invalid metadata for {ticker}: {exc}")
            return None

    def available_stocks(self) -> list[StockInfo]:
        index_path = self.stocks_dir / "index.json"
        if not index_path.exists():
            return []
        entries = json.loads(index_path.read_text(encoding="utf-8"))
        return [StockInfo.model_validate(entry) for entry in entries]

    def save(self, series: ReturnSeries, metadata: SeriesMetadata) -> Path:
        data_path, metadata_path = self._paths(series.ticker)
        data_path.parent.mkdir(parents=True, exist_ok=True)

        data_path.write_text(json.dumps(series.to_records(), indent=2), encoding="utf-8")
        metadata_path.write_text(
            metadata.model_dump_json(by_alias=True, indent=2), encoding="utf-8"
        )
        return data_path

    def save_index(self, stocks: Iterable[StockInfo]) -> Path:
        self.stocks_dir.mkdir(parents=True, exist_ok=True)
        index_path = self.stocks_dir / "index.json"
        index_path.write_text(
            json.dumps([stock.model_dump() for stock in stocks], indent=2),
            encoding="utf-8",
        )
        return index_path
