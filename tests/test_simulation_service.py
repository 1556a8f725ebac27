import math
import pytest
from application.simulation_service import SimulationService
from domain.calculations import date_key
from domain.errors import FilterEmpty, InvalidRequest
from domain.models import MonthlyObservation, SimulationRequest
from domain.series import ReturnSeries


def make_series(ticker, rows):
    return ReturnSeries(
        ticker,
        [MonthlyObservation(year=y, month=m, return_pct=r) for y, m, r in rows],
    )


def make_request(starting_amount, monthly_contribution, start, end):
    return SimulationRequest(
        starting_amount=starting_amount,
        monthly_contribution=monthly_contribution,
        start_key=date_key(*start),
        end_key=date_key(*end),
    )


@pytest.fixture
def service():
    return SimulationService()


@pytest.fixture
def two_year_series():
    """24 months of mildly varying returns for 2019-2020."""
    rows = []
    for i in range(24):
        year, month = 2019 + i // 12, i % 12 + 1
        rows.append((year, month, [1.5, -0.75, 2.25, 0.0][i % 4]))
    return make_series("^GSPC", rows)


class TestScenarios:
    def test_single_lump_sum_gain_then_loss(self, service):
        series = make_series("^GSPC", [(2020, 1, 10.0), (2020, 2, -10.0)])
        request = make_request(1000.0, 0.0, (2020, 1), (2020, 2))

        result = service.simulate(series, request)

        assert result.trajectory[0].portfolio_value == pytest.approx(1100.0)
        assert result.final_value == pytest.approx(990.0)
        assert result.total_contributions == pytest.approx(1000.0)
        assert result.total_gains == pytest.approx(-10.0)
        assert result.total_return_pct == pytest.approx(-1.0)

    def test_contribution_only_with_flat_returns(self, service):
        series = make_series(
            "^GSPC", [(2020, 1, 0.0), (2020, 2, 0.0), (2020, 3, 0.0), (2020, 4, 0.0)]
        )
        request = make_request(0.0, 100.0, (2020, 1), (2020, 4))

        result = service.simulate(series, request)

        assert result.final_value == 300.0
        assert result.total_contributions == 300.0
        assert result.total_gains == 0.0
        assert [p.portfolio_value for p in result.trajectory] == [0.0, 100.0, 200.0, 300.0]

    def test_three_flat_months_fund_two_contributions(self, service):
        series = make_series("^GSPC", [(2020, 1, 0.0), (2020, 2, 0.0), (2020, 3, 0.0)])
        request = make_request(0.0, 100.0, (2020, 1), (2020, 3))

        result = service.simulate(series, request)

        assert result.final_value == 200.0
        assert result.total_contributions == 200.0

    def test_window_before_series_start_is_empty(self, service):
        series = make_series("^GSPC", [(2020, 1, 1.0), (2020, 2, 1.0)])
        request = make_request(1000.0, 0.0, (2010, 1), (2015, 12))

        with pytest.raises(FilterEmpty) as excinfo:
            service.simulate(series, request)

        assert excinfo.value.start_key == date_key(2010, 1)
        assert excinfo.value.end_key == date_key(2015, 12)

    def test_total_loss_month_zeroes_the_portfolio(self, service):
        series = make_series("^GSPC", [(2020, 1, 5.0), (2020, 2, -100.0), (2020, 3, 20.0)])
        request = make_request(1000.0, 0.0, (2020, 1), (2020, 3))

        result = service.simulate(series, request)

        assert result.final_value == 0.0
        assert result.total_return_pct == pytest.approx(-100.0)


class TestSimulationProperties:
    def test_is_deterministic(self, service, two_year_series):
        request = make_request(10000.0, 500.0, (2019, 1), (2020, 12))

        first = service.simulate(two_year_series, request)
        second = service.simulate(two_year_series, request)

        assert first == second

    @pytest.mark.parametrize(
        "window, expected_months",
        [
            pytest.param(((2019, 1), (2020, 12)), 24, id="full_series"),
            pytest.param(((2019, 6), (2019, 9)), 4, id="inclusive_bounds"),
            pytest.param(((2018, 1), (2019, 3)), 3, id="window_starts_before_data"),
            pytest.param(((2020, 11), (2025, 1)), 2, id="window_ends_after_data"),
        ],
    )
    def test_contribution_accounting(self, service, two_year_series, window, expected_months):
        request = make_request(1000.0, 250.0, *window)

        result = service.simulate(two_year_series, request)

        assert len(result.trajectory) == expected_months
        assert result.total_contributions == pytest.approx(1000.0 + 250.0 * (expected_months - 1))
        assert result.trajectory[-1].cumulative_contributions == result.total_contributions

    def test_last_point_matches_summary(self, service, two_year_series):
        request = make_request(5000.0, 100.0, (2019, 1), (2020, 12))

        result = service.simulate(two_year_series, request)

        assert result.trajectory[-1].portfolio_value == result.final_value
        assert result.total_gains == pytest.approx(result.final_value - result.total_contributions)

    def test_zero_returns_have_no_drift(self, service):
        rows = [(2000 + i // 12, i % 12 + 1, 0.0) for i in range(240)]
        series = make_series("^GSPC", rows)
        request = make_request(1234.56, 78.9, (2000, 1), (2019, 12))

        result = service.simulate(series, request)

        assert result.final_value == result.total_contributions
        assert result.total_return_pct == 0.0

    def test_trajectory_is_chronological(self, service, two_year_series):
        request = make_request(1000.0, 0.0, (2019, 1), (2020, 12))

        result = service.simulate(two_year_series, request)

        keys = [p.date_key for p in result.trajectory]
        assert keys == sorted(keys)
        assert result.trajectory[0].label == "2019-01"
        assert result.trajectory[-1].label == "2020-12"

    def test_first_point_is_post_return_starting_amount(self, service, two_year_series):
        request = make_request(1000.0, 500.0, (2019, 1), (2020, 12))

        result = service.simulate(two_year_series, request)

        assert result.trajectory[0].portfolio_value == pytest.approx(1015.0)
        assert result.trajectory[0].cumulative_contributions == 1000.0


class TestBuildRequest:
    def test_valid_request(self, service):
        request = service.build_request(10000.0, 500.0, 2020, 1, 2024, 6)

        assert request.start_key == date_key(2020, 1)
        assert request.end_key == date_key(2024, 6)

    @pytest.mark.parametrize(
        "args, fragment",
        [
            pytest.param((-1.0, 500.0, 2020, 1, 2024, 6), "starting_amount", id="negative_start"),
            pytest.param((100.0, -5.0, 2020, 1, 2024, 6), "monthly_contribution", id="negative_contribution"),
            pytest.param((0.0, 0.0, 2020, 1, 2024, 6), "cannot both be zero", id="both_zero"),
            pytest.param((100.0, 0.0, 2020, 6, 2020, 6), "End date must be after start date", id="same_month"),
            pytest.param((100.0, 0.0, 2021, 1, 2020, 12), "End date must be after start date", id="reversed"),
        ],
    )
    def test_invalid_request(self, service, args, fragment):
        with pytest.raises(InvalidRequest) as excinfo:
            service.build_request(*args)

        assert any(fragment in reason for reason in excinfo.value.reasons)
        assert isinstance(excinfo.value, ValueError)


class TestComparison:
    def test_aligned_series_share_contributions(self, service):
        index = make_series("^GSPC", [(2020, 1, 1.0), (2020, 2, 2.0), (2020, 3, -1.0)])
        stock = make_series("AAPL", [(2020, 1, 5.0), (2020, 2, -3.0), (2020, 3, 4.0)])
        request = make_request(1000.0, 100.0, (2020, 1), (2020, 3))

        comparison = service.compare(index, stock, request)

        assert comparison.aligned
        assert comparison.benchmark.total_contributions == comparison.comparison.total_contributions
        assert comparison.benchmark == service.simulate(index, request)
        assert comparison.comparison == service.simulate(stock, request)
        assert comparison.value_difference == pytest.approx(
            comparison.comparison.final_value - comparison.benchmark.final_value
        )

    def test_misaligned_calendars_are_flagged(self, service):
        index = make_series("^GSPC", [(2020, 1, 1.0), (2020, 2, 2.0), (2020, 3, -1.0)])
        stock = make_series("META", [(2020, 2, 5.0), (2020, 3, -3.0)])
        request = make_request(1000.0, 100.0, (2020, 1), (2020, 3))

        comparison = service.compare(index, stock, request)

        assert not comparison.aligned
        assert comparison.benchmark.total_contributions == pytest.approx(1200.0)
        assert comparison.comparison.total_contributions == pytest.approx(1100.0)

    def test_comparison_frame_joins_on_date(self, service):
        index = make_series("^GSPC", [(2020, 1, 0.0), (2020, 2, 0.0), (2020, 3, 0.0)])
        stock = make_series("META", [(2020, 2, 0.0), (2020, 3, 0.0)])
        request = make_request(1000.0, 0.0, (2020, 1), (2020, 3))

        frame = service.comparison_frame(service.compare(index, stock, request))

        assert list(frame.index) == [date_key(2020, 1), date_key(2020, 2), date_key(2020, 3)]
        assert list(frame["Label"]) == ["2020-01", "2020-02", "2020-03"]
        assert math.isnan(frame.loc[date_key(2020, 1), "META"])
        assert frame.loc[date_key(2020, 3), "^GSPC"] == 1000.0

    def test_missing_comparison_window_raises(self, service):
        index = make_series("^GSPC", [(2020, 1, 1.0), (2020, 2, 2.0)])
        stock = make_series("NEW", [(2023, 1, 1.0)])
        request = make_request(1000.0, 0.0, (2020, 1), (2020, 2))

        with pytest.raises(FilterEmpty):
            service.compare(index, stock, request)


class TestChartFrames:
    def test_trajectory_frame_is_keyed_by_date(self, service, two_year_series):
        request = make_request(1000.0, 10.0, (2019, 1), (2020, 12))
        result = service.simulate(two_year_series, request)

        frame = service.trajectory_frame(result)

        assert frame.index.name == "Date Key"
        assert frame.index[0] == date_key(2019, 1)
        assert frame["Portfolio Value"].iloc[-1] == result.final_value
        assert frame["Contributions"].iloc[-1] == result.total_contributions

    def test_chart_frame_is_downsampled_and_keeps_final_point(self, service):
        rows = [(2000 + i // 12, i % 12 + 1, 0.5) for i in range(250)]
        result = service.simulate(
            make_series("^GSPC", rows), make_request(1000.0, 100.0, (2000, 1), (2020, 10))
        )

        frame = service.chart_frame(result, "S&P 500", max_points=100)

        values = frame[frame["Series"] == "S&P 500"]
        contributions = frame[frame["Series"] == "S&P 500 Contributions"]
        assert len(values) == len(contributions) == 84
        assert values["Value"].iloc[-1] == result.final_value
        assert contributions["Value"].iloc[-1] == result.total_contributions
        assert values["Label"].iloc[-1] == result.trajectory[-1].label
        assert list(values["Label"]) == list(contributions["Label"])

    def test_comparison_chart_frame_has_both_series(self, service, two_year_series):
        stock = make_series("AAPL", [(o.year, o.month, 1.0) for o in two_year_series])
        request = make_request(1000.0, 10.0, (2019, 1), (2020, 12))

        frame = service.comparison_chart_frame(
            service.compare(two_year_series, stock, request), "S&P 500", "Apple Inc."
        )

        assert set(frame["Series"]) == {"S&P 500", "S&P 500 Contributions", "Apple Inc."}
        assert (frame["Series"] == "Apple Inc.").sum() == 24
