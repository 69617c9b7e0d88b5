"""Clock overlay text — time, date and a greeting for the hour."""

from dataclasses import dataclass
from datetime import datetime


def greeting_for(hour: int) -> str:
    if 5 <= hour < 12:
        return "GOOD MORNING"
    if 12 <= hour < 17:
        return "GOOD AFTERNOON"
    if 17 <= hour < 22:
        return "GOOD EVENING"
    return "GOOD NIGHT"


@dataclass(frozen=True)
class ClockText:
    hours: str
    minutes: str
    date: str  # "19 OCT"
    day: str   # "MONDAY"
    greeting: str


def clock_text(now: datetime) -> ClockText:
    return ClockText(
        hours=f"{now.hour:02d}",
        minutes=f"{now.minute:02d}",
        date=f"{now.day} {now.strftime('%b').upper()}",
        day=now.strftime("%A").upper(),
        greeting=greeting_for(now.hour),
    )
