from typing import Iterable, Iterator, Optional
from domain.models import DateRange, MonthlyObservation, YearMonth


class ReturnSeries:
    """
    Read-only, chronologically ordered monthly returns for one instrument.

    Ordering and uniqueness per (year, month) are established by whoever
    builds the series; they are not re-checked here.
    """

    def __init__(self, ticker: str, observations: Iterable[MonthlyObservation]):
        self.ticker = ticker
        self._observations = tuple(observations)

    @classmethod
    def from_records(cls, ticker: str, records: Iterable[dict]) -> "ReturnSeries":
        return cls(ticker, (MonthlyObservation.model_validate(r) for r in records))

    def __len__(self) -> int:
        return len(self._observations)

    def __iter__(self) -> Iterator[MonthlyObservation]:
        return iter(self._observations)

    def __getitem__(self, index: int) -> MonthlyObservation:
        return self._observations[index]

    def __repr__(self) -> str:
        return f"ReturnSeries({self.ticker!r}, months={len(self)})"

    @property
    def observations(self) -> tuple[MonthlyObservation, ...]:
        return self._observations

    def window(self, start_key: int, end_key: int) -> tuple[MonthlyObservation, ...]:
        return tuple(
            obs for obs in self._observations
            if start_key <= obs.date_key <= end_key
        )

    def date_range(self) -> Optional[DateRange]:
        if not self._observations:
            return None
        first = self._observations[0]
        last = self._observations[-1]
        return DateRange(
            start=YearMonth(year=first.year, month=first.month),
            end=YearMonth(year=last.year, month=last.month),
        )

    def to_records(self) -> list[dict]:
        return [obs.model_dump(by_alias=True) for obs in self._observations]
