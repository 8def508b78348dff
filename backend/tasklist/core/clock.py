import time
from datetime import date
from typing import Protocol

from fastapi import Request


class Clock(Protocol):
    def today(self) -> date: ...

    def now_millis(self) -> int: ...


class SystemClock:
    """Wall clock. ``today`` is the local calendar date, never UTC."""

    def today(self) -> date:
        return date.today()

    def now_millis(self) -> int:
        return int(time.time() * 1000)


def get_clock(request: Request) -> Clock:
    return request.app.state.clock
