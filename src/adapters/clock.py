from datetime import date


class SystemClock:
    def today(self) -> date:
        return date.today()


class FixedClock:
    """Clock pinned to a single date, for reproducible runs."""

    def __init__(self, today: date) -> None:
        self._today = today

    def today(self) -> date:
        return self._today
