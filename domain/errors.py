from typing import Optional


class GrowthCalculatorError(Exception):
    """Base class for conditions reported back to the caller of the engine."""


class InvalidRequest(GrowthCalculatorError, ValueError):
    def __init__(self, reasons: list[str]):
        self.reasons = reasons
        super().__init__("; ".join(reasons))


class FilterEmpty(GrowthCalculatorError):
    def __init__(self, start_key: int, end_key: int):
        self.start_key = start_key
        self.end_key = end_key
        super().__init__(
            f"No data available between date keys {start_key} and {end_key}"
        )


class MissingSeries(GrowthCalculatorError):
    def __init__(self, ticker: str, detail: Optional[str] = None):
        self.ticker = ticker
        message = f"No return series available for {ticker}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)
