from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel
from domain.calculations import date_key, format_label


class MonthlyObservation(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    year: int
    month: int = Field(ge=1, le=12)
    return_pct: float = Field(alias="return")

    @property
    def date_key(self) -> int:
        return date_key(self.year, self.month)

    @property
    def label(self) -> str:
        return format_label(self.year, self.month)


class SimulationRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    starting_amount: float = Field(ge=0)
    monthly_contribution: float = Field(ge=0)
    start_key: int
    end_key: int

    @field_validator("end_key")
    @classmethod
    def end_after_start(cls, v: int, info) -> int:
        if "start_key" in info.data and v <= info.data["start_key"]:
            raise ValueError("End date must be after start date")
        return v

    @model_validator(mode="after")
    def has_money_to_invest(self) -> "SimulationRequest":
        if self.starting_amount + self.monthly_contribution <= 0:
            raise ValueError(
                "Starting amount and monthly contribution cannot both be zero"
            )
        return self


class TrajectoryPoint(BaseModel):
    model_config = ConfigDict(frozen=True)

    label: str
    date_key: int
    portfolio_value: float
    cumulative_contributions: float


class SimulationResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    final_value: float
    total_contributions: float
    total_gains: float
    total_return_pct: float
    trajectory: tuple[TrajectoryPoint, ...]

    @property
    def date_keys(self) -> tuple[int, ...]:
        return tuple(point.date_key for point in self.trajectory)


class ComparisonResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    benchmark_ticker: str
    comparison_ticker: str
    benchmark: SimulationResult
    comparison: SimulationResult

    @property
    def aligned(self) -> bool:
        """True when both trajectories cover exactly the same months."""
        return set(self.benchmark.date_keys) == set(self.comparison.date_keys)

    @property
    def value_difference(self) -> float:
        return self.comparison.final_value - self.benchmark.final_value


class YearMonth(BaseModel):
    model_config = ConfigDict(frozen=True)

    year: int
    month: int = Field(ge=1, le=12)


class DateRange(BaseModel):
    model_config = ConfigDict(frozen=True)

    start: YearMonth
    end: YearMonth


class SeriesMetadata(BaseModel):
    model_config = ConfigDict(
        frozen=True, alias_generator=to_camel, populate_by_name=True
    )

    ticker: str
    name: str
    last_updated: datetime
    data_source: str
    total_months: int = Field(ge=0)
    date_range: DateRange


class StockInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    ticker: str
    name: str
