from domain.calculations import growth_factor


class GrowthAccount:
    def __init__(self, starting_amount: float, monthly_contribution: float):
        self.value = starting_amount
        self.total_contributions = starting_amount
        self.monthly_contribution = monthly_contribution
        self.months_elapsed = 0

    def apply_monthly_tick(self, return_pct: float) -> None:
        # The first month only holds the starting amount.
        if self.months_elapsed > 0:
            self._contribute()

        self._apply_return(return_pct)
        self.months_elapsed += 1

    def _contribute(self) -> None:
        self.value += self.monthly_contribution
        self.total_contributions += self.monthly_contribution

    def _apply_return(self, return_pct: float) -> None:
        self.value *= growth_factor(return_pct)

    @property
    def gains(self) -> float:
        return self.value - self.total_contributions
