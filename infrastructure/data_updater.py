"""
Refreshes the JSON return fixtures from Yahoo Finance.

Usage: python -m infrastructure.data_updater [--data-dir DIR] [--tickers AAPL,MSFT] [--skip-benchmark]
"""

import argparse
import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import Optional, Sequence
from domain.constants import (
    BENCHMARK_NAME,
    BENCHMARK_TICKER,
    FETCH_CONCURRENCY,
    HISTORY_START,
    STOCK_CATALOG,
)
from domain.models import StockInfo
from infrastructure.data_adapter import (
    MarketDataAdapter,
    SeriesRepository,
    build_metadata,
    default_data_dir,
    monthly_returns_from_closes,
)


@dataclass
class UpdateReport:
    succeeded: list[StockInfo] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)


def update_instrument(repository: SeriesRepository, adapter: MarketDataAdapter,
                      stock: StockInfo, end_date: date) -> bool:
    logging.info(f"Fetching data for {stock.ticker} ({stock.name})")
    try:
        closes = adapter.fetch_monthly_closes(stock.ticker, HISTORY_START, end_date)
        series = monthly_returns_from_closes(stock.ticker, closes)
        metadata = build_metadata(series, stock.name)
        repository.save(series, metadata)
    except Exception as exc:
        logging.warning(f"Error updating {stock.ticker}: {exc}")
        return False

    logging.info(
        f"Processed {len(series)} months for {stock.ticker} "
        f"({metadata.date_range.start.year}-{metadata.date_range.start.month} to "
        f"{metadata.date_range.end.year}-{metadata.date_range.end.month})"
    )
    return True


def update_all(repository: SeriesRepository, adapter: MarketDataAdapter,
               stocks: Sequence[StockInfo], include_benchmark: bool = True,
               end_date: Optional[date] = None) -> UpdateReport:
    end_date = end_date or date.today()
    report = UpdateReport()

    if include_benchmark:
        benchmark = StockInfo(ticker=BENCHMARK_TICKER, name=BENCHMARK_NAME)
        if not update_instrument(repository, adapter, benchmark, end_date):
            report.failed.append(BENCHMARK_TICKER)

    with ThreadPoolExecutor(max_workers=FETCH_CONCURRENCY) as pool:
        outcomes = list(pool.map(
            lambda stock: update_instrument(repository, adapter, stock, end_date),
            stocks,
        ))

    for stock, ok in zip(stocks, outcomes):
        if ok:
            report.succeeded.append(stock)
        else:
            report.failed.append(stock.ticker)

    if stocks:
        # Keep instruments fetched by earlier runs; fresh entries replace old ones.
        index = {stock.ticker: stock for stock in repository.available_stocks()}
        index.update((stock.ticker, stock) for stock in report.succeeded)
        repository.save_index(index.values())
    return report


def _parse_tickers(raw: str) -> list[StockInfo]:
    names = dict(STOCK_CATALOG)
    tickers = [part.strip().upper() for part in raw.split(",") if part.strip()]
    return [StockInfo(ticker=t, name=names.get(t, t)) for t in tickers]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="update-return-data",
        description="Download monthly returns for the benchmark and comparison stocks.",
    )
    parser.add_argument("--data-dir", type=Path, default=None)
    parser.add_argument(
        "--tickers",
        default="",
        help="Comma separated tickers; defaults to the full stock catalog.",
    )
    parser.add_argument("--skip-benchmark", action="store_true")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    logging.basicConfig(
        level=logging.INFO,
        format='[%(asctime)s] [LOG] %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    args = build_parser().parse_args(argv)

    stocks = _parse_tickers(args.tickers) if args.tickers else [
        StockInfo(ticker=ticker, name=name) for ticker, name in STOCK_CATALOG
    ]
    repository = SeriesRepository(args.data_dir or default_data_dir())
    report = update_all(
        repository,
        MarketDataAdapter(),
        stocks,
        include_benchmark=not args.skip_benchmark,
    )

    logging.info(f"Successfully fetched {len(report.succeeded)} stocks")
    if report.failed:
        logging.warning(f"Failed to fetch {len(report.failed)}: {', '.join(report.failed)}")
    logging.info(f"Data saved to: {repository.data_dir}")

    wrote_anything = bool(report.succeeded) or (
        not args.skip_benchmark and BENCHMARK_TICKER not in report.failed
    )
    return 0 if wrote_anything else 1


if __name__ == "__main__":
    raise SystemExit(main())
