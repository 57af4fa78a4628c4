# app/core/clock.py

from datetime import datetime, timezone
from typing import Callable

Clock = Callable[[], datetime]


def utcnow() -> datetime:
    # o banco guarda DateTime sem timezone (UTC implícito)
    return datetime.now(tz=timezone.utc).replace(tzinfo=None)
