"""
Historical Returns Growth Calculator

A Streamlit application that replays historical monthly S&P 500 returns
against a starting amount and a monthly contribution, optionally side by
side with an individual stock or fund.

Return data is read from the JSON fixtures written by
`python -m infrastructure.data_updater`.
"""

import streamlit as st
import logging
from domain.constants import (
    BENCHMARK_NAME,
    BENCHMARK_TICKER,
    DEFAULT_MONTHLY_CONTRIBUTION,
    DEFAULT_START_YEAR,
    DEFAULT_STARTING_AMOUNT,
    MAX_CHART_POINTS,
    MONTH_NAMES,
)
from domain.errors import FilterEmpty, InvalidRequest, MissingSeries
from domain.series import ReturnSeries
from application.simulation_service import SimulationService
from infrastructure.data_adapter import SeriesRepository, default_data_dir
from infrastructure.ui.components import UIComponents

logging.basicConfig(
    level=logging.INFO,
    format='[%(asctime)s] [LOG] %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)


@st.cache_data
def load_series(data_dir: str, ticker: str) -> ReturnSeries:
    return SeriesRepository(data_dir).load(ticker)


def month_selector(label: str, default_month: int, key: str) -> int:
    return st.sidebar.selectbox(
        label,
        options=list(range(1, 13)),
        index=default_month - 1,
        format_func=lambda m: MONTH_NAMES[m - 1],
        key=key,
    )


def year_selector(label: str, first_year: int, last_year: int, default_year: int, key: str) -> int:
    years = list(range(last_year, first_year - 1, -1))
    default_year = min(max(default_year, first_year), last_year)
    return st.sidebar.selectbox(label, options=years, index=years.index(default_year), key=key)


st.set_page_config(layout="wide")

data_dir = default_data_dir()
repository = SeriesRepository(data_dir)
service = SimulationService()

try:
    benchmark = load_series(str(data_dir), BENCHMARK_TICKER)
except MissingSeries as exc:
    logging.error(f"Benchmark data unavailable: {exc}")
    st.error(
        f"Failed to load {BENCHMARK_NAME} historical data. Please run: "
        "`python -m infrastructure.data_updater`"
    )
    st.stop()

earliest = benchmark[0]
latest = benchmark[-1]

UIComponents.render_header(earliest.year, latest.year)
UIComponents.render_explanation()

# --- Sidebar Inputs ---
st.sidebar.header("Investment")
starting_amount = st.sidebar.number_input(
    "Starting Amount ($)",
    min_value=0.0,
    value=DEFAULT_STARTING_AMOUNT,
    step=1000.0,
)
monthly_contribution = st.sidebar.number_input(
    "Monthly Contribution ($)",
    min_value=0.0,
    value=DEFAULT_MONTHLY_CONTRIBUTION,
    step=100.0,
    help="Added at the start of every month after the first.",
)

st.sidebar.header("Period")
start_month = month_selector("Start Month", 1, "start-month")
start_year = year_selector("Start Year", earliest.year, latest.year, DEFAULT_START_YEAR, "start-year")
end_month = month_selector("End Month", latest.month, "end-month")
end_year = year_selector("End Year", earliest.year, latest.year, latest.year, "end-year")

st.sidebar.header("Comparison")
stocks = {stock.ticker: stock.name for stock in repository.available_stocks()}
comparison_ticker = st.sidebar.selectbox(
    "Compare with",
    options=[None] + sorted(stocks),
    format_func=lambda t: "None" if t is None else f"{t} - {stocks[t]}",
)

if st.sidebar.button("Calculate Returns", type="primary"):
    logging.info("--- 'Calculate Returns' button clicked ---")
    try:
        request = service.build_request(
            starting_amount, monthly_contribution,
            start_year, start_month, end_year, end_month,
        )
        if comparison_ticker is None:
            result = service.simulate(benchmark, request)
            UIComponents.render_summary(result)
            UIComponents.render_growth_chart(
                service.chart_frame(result, BENCHMARK_NAME, MAX_CHART_POINTS)
            )
            UIComponents.render_raw_data(service.trajectory_frame(result))
        else:
            other = load_series(str(data_dir), comparison_ticker)
            comparison = service.compare(benchmark, other, request)
            comparison_name = stocks[comparison_ticker]
            UIComponents.render_comparison_summary(comparison, BENCHMARK_NAME, comparison_name)
            UIComponents.render_growth_chart(
                service.comparison_chart_frame(
                    comparison, BENCHMARK_NAME, comparison_name, MAX_CHART_POINTS
                )
            )
            UIComponents.render_raw_data(service.comparison_frame(comparison))
    except InvalidRequest as exc:
        for reason in exc.reasons:
            st.error(reason)
    except FilterEmpty:
        st.error("No data available for the selected date range")
    except MissingSeries as exc:
        st.error(f"No data available for {exc.ticker}")
else:
    st.info("Choose your inputs in the sidebar and click 'Calculate Returns'.")

UIComponents.render_data_source(repository.load_metadata())
