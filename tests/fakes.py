from datetime import date

TODAY = date(2024, 5, 20)


class FixedClock:
    """Clock pinned to one calendar day; millis still advance per call."""

    def __init__(self, today: date = TODAY, millis: int = 1_716_163_200_000):
        self._today = today
        self._millis = millis

    def today(self) -> date:
        return self._today

    def now_millis(self) -> int:
        self._millis += 1
        return self._millis
