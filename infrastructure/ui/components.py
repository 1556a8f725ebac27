from typing import Optional
import streamlit as st
import pandas as pd
import altair as alt
from domain.models import ComparisonResult, SeriesMetadata, SimulationResult
from domain.constants import BENCHMARK_NAME, DATA_SOURCE, DENSE_CHART_THRESHOLD


def format_currency(value: float) -> str:
    sign = "-" if value < 0 else ""
    return f"{sign}${abs(value):,.2f}"


def format_return(value: float) -> str:
    return f"{value:+.2f}%"


class UIComponents:
    @staticmethod
    def render_header(first_year: int, last_year: int):
        st.title(f"📈 Historical {BENCHMARK_NAME} Returns")
        st.markdown(
            f"Calculate investment growth based on historical data "
            f"({first_year}-{last_year}), optionally compared against an individual stock or fund."
        )

    @staticmethod
    def render_explanation():
        with st.expander("How this Calculator Works", expanded=False):
            st.markdown(
                """
                The calculator replays real monthly returns over the period you choose.

                * **Starting Amount** is invested at the start of the first month.
                * **Monthly Contribution** is added at the *start* of every following
                    month, before that month's return is applied.
                * Each month's percentage return compounds on the running balance, so
                    the order of good and bad months matters.
                * **Total Gains** is the final value minus everything you put in, and
                    **Total Return** expresses those gains as a percentage of your contributions.

                When a comparison stock is selected, both series are simulated with the
                same amounts and the same date range. If the two instruments do not have
                data for exactly the same months, their totals can differ slightly.
                """
            )

    @staticmethod
    def render_summary(result: SimulationResult, title: Optional[str] = None):
        if title:
            st.markdown(f"#### {title}")
        st.metric("Final Portfolio Value", format_currency(result.final_value))
        c1, c2 = st.columns(2)
        c1.metric("Total Contributions", format_currency(result.total_contributions))
        c2.metric("Total Gains", format_currency(result.total_gains))
        st.metric("Total Return", format_return(result.total_return_pct))

    @staticmethod
    def render_comparison_summary(comparison: ComparisonResult,
                                  benchmark_name: str, comparison_name: str):
        col1, col2 = st.columns(2)
        with col1:
            UIComponents.render_summary(comparison.benchmark, benchmark_name)
        with col2:
            UIComponents.render_summary(comparison.comparison, comparison_name)

        difference = comparison.value_difference
        leader = comparison_name if difference >= 0 else benchmark_name
        st.info(f"**{leader}** finished ahead by {format_currency(abs(difference))}.")

        if not comparison.aligned:
            st.warning(
                "The two instruments do not have data for exactly the same months. "
                "The chart lines up values by date."
            )

    @staticmethod
    def render_growth_chart(chart_data: pd.DataFrame):
        point_count = chart_data.groupby('Series').size().max()
        line = alt.Chart(chart_data).mark_line(
            interpolate='linear',
            point=bool(point_count < DENSE_CHART_THRESHOLD),
        ).encode(
            x=alt.X('Date:T', axis=alt.Axis(title='Date', format="%Y-%m", labelAngle=-45)),
            y=alt.Y('Value:Q', title='Value ($)', axis=alt.Axis(format='$,.0f')),
            color=alt.Color('Series:N', title='Series'),
            tooltip=[
                alt.Tooltip('Label:N', title='Month'),
                alt.Tooltip('Series:N'),
                alt.Tooltip('Value:Q', format='$,.2f'),
            ],
        ).interactive()

        st.subheader("Portfolio Growth Over Time")
        st.altair_chart(line, width='stretch')

    @staticmethod
    def render_raw_data(frame: pd.DataFrame):
        with st.expander("Show Monthly Values"):
            st.dataframe(frame)

    @staticmethod
    def render_data_source(metadata: Optional[SeriesMetadata]):
        if metadata is None:
            st.caption(f"Data from {DATA_SOURCE}. Last updated: Unknown")
            return
        st.caption(
            f"Data from {metadata.data_source}. "
            f"Last updated: {metadata.last_updated.strftime('%Y-%m-%d')}"
        )
