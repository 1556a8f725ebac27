import logging
import pandas as pd
from pydantic import ValidationError
from domain.account import GrowthAccount
from domain.calculations import date_key, downsample, total_return_pct
from domain.constants import MAX_CHART_POINTS
from domain.errors import FilterEmpty, InvalidRequest
from domain.models import ComparisonResult, SimulationRequest, SimulationResult, TrajectoryPoint
from domain.series import ReturnSeries


class SimulationService:
    def build_request(
        self,
        starting_amount: float,
        monthly_contribution: float,
        start_year: int,
        start_month: int,
        end_year: int,
        end_month: int
    ) -> SimulationRequest:
        try:
            return SimulationRequest(
                starting_amount=starting_amount,
                monthly_contribution=monthly_contribution,
                start_key=date_key(start_year, start_month),
                end_key=date_key(end_year, end_month),
            )
        except ValidationError as exc:
            reasons = [_describe_error(error) for error in exc.errors()]
            logging.info(f"Rejected simulation request: {reasons}")
            raise InvalidRequest(reasons) from exc

    def simulate(self, series: ReturnSeries, request: SimulationRequest) -> SimulationResult:
        observations = series.window(request.start_key, request.end_key)
        if not observations:
            raise FilterEmpty(request.start_key, request.end_key)

        logging.info(
            f"Simulating {series.ticker} over {len(observations)} months "
            f"({observations[0].label} to {observations[-1].label})"
        )
        account = GrowthAccount(request.starting_amount, request.monthly_contribution)

        trajectory = []
        for observation in observations:
            account.apply_monthly_tick(observation.return_pct)
            trajectory.append(
                TrajectoryPoint(
                    label=observation.label,
                    date_key=observation.date_key,
                    portfolio_value=account.value,
                    cumulative_contributions=account.total_contributions,
                )
            )

        return SimulationResult(
            final_value=account.value,
            total_contributions=account.total_contributions,
            total_gains=account.gains,
            total_return_pct=total_return_pct(account.value, account.total_contributions),
            trajectory=tuple(trajectory),
        )

    def compare(
        self,
        benchmark: ReturnSeries,
        comparison: ReturnSeries,
        request: SimulationRequest
    ) -> ComparisonResult:
        result = ComparisonResult(
            benchmark_ticker=benchmark.ticker,
            comparison_ticker=comparison.ticker,
            benchmark=self.simulate(benchmark, request),
            comparison=self.simulate(comparison, request),
        )
        if not result.aligned:
            logging.warning(
                f"{benchmark.ticker} and {comparison.ticker} cover different months; "
                "trajectories are keyed by date, not by position"
            )
        return result

    def trajectory_frame(self, result: SimulationResult) -> pd.DataFrame:
        """DateKey-indexed view of a trajectory."""
        frame = pd.DataFrame(
            {
                'Label': [p.label for p in result.trajectory],
                'Portfolio Value': [p.portfolio_value for p in result.trajectory],
                'Contributions': [p.cumulative_contributions for p in result.trajectory],
            },
            index=pd.Index(result.date_keys, name='Date Key'),
        )
        return frame

    def comparison_frame(self, comparison: ComparisonResult) -> pd.DataFrame:
        """
        Joins both trajectories on their date keys.

        Months present in only one series show up as NaN in the other's
        column instead of being matched by position.
        """
        benchmark = self.trajectory_frame(comparison.benchmark)
        other = self.trajectory_frame(comparison.comparison)
        joined = benchmark[['Portfolio Value']].rename(
            columns={'Portfolio Value': comparison.benchmark_ticker}
        ).join(
            other[['Portfolio Value']].rename(
                columns={'Portfolio Value': comparison.comparison_ticker}
            ),
            how='outer',
        )
        labels = benchmark['Label'].combine_first(other['Label'])
        joined.insert(0, 'Label', labels)
        return joined.sort_index()

    def chart_frame(
        self,
        result: SimulationResult,
        name: str,
        max_points: int = MAX_CHART_POINTS
    ) -> pd.DataFrame:
        """Long-form, downsampled rows ready for plotting one trajectory."""
        sampled = downsample(result.trajectory, max_points)
        logging.info(f"Charting {name}: {len(sampled)} of {len(result.trajectory)} points")

        values = pd.DataFrame(
            {
                'Date': pd.to_datetime([p.label for p in sampled], format='%Y-%m'),
                'Label': [p.label for p in sampled],
                'Series': name,
                'Value': [p.portfolio_value for p in sampled],
            }
        )
        contributions = values.assign(
            Series=f"{name} Contributions",
            Value=[p.cumulative_contributions for p in sampled],
        )
        return pd.concat([values, contributions], ignore_index=True)

    def comparison_chart_frame(
        self,
        comparison: ComparisonResult,
        benchmark_name: str,
        comparison_name: str,
        max_points: int = MAX_CHART_POINTS
    ) -> pd.DataFrame:
        # Each trajectory keeps its own index set; rows are matched by date when plotted.
        benchmark = self.chart_frame(comparison.benchmark, benchmark_name, max_points)
        other = self.chart_frame(comparison.comparison, comparison_name, max_points)
        other = other[other['Series'] == comparison_name]
        return pd.concat([benchmark, other], ignore_index=True)


def _describe_error(error: dict) -> str:
    location = ".".join(str(part) for part in error.get("loc", ()))
    message = error.get("msg", "invalid value").removeprefix("Value error, ")
    if location:
        return f"{location}: {message}"
    return message
