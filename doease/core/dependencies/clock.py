"""Clock dependency; tests override it with a FixedClock."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends

from doease.core.utils.dates import Clock, SystemClock

_system_clock = SystemClock()


def get_clock() -> Clock:
    return _system_clock


ClockDep = Annotated[Clock, Depends(get_clock)]
