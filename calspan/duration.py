"""Non-negative time magnitudes in milliseconds.

A Duration carries no anchor in time; intervals consume it to shift, grow or
resize themselves. Calendar units (months, years) use the fixed
approximations from ``calspan.util``.
"""

import re
from dataclasses import dataclass
from datetime import timedelta
from functools import total_ordering

from calspan.util import DAY, HOUR, MINUTE, MONTH, SECOND, WEEK, YEAR

_ISO8601 = re.compile(
    r"^P(?:(?P<years>\d+)Y)?(?:(?P<months>\d+)M)?(?:(?P<weeks>\d+)W)?"
    r"(?:(?P<days>\d+)D)?"
    r"(?:T(?:(?P<hours>\d+)H)?(?:(?P<minutes>\d+)M)?"
    r"(?:(?P<seconds>\d+(?:\.\d+)?)S)?)?$"
)

SCALES = {
    "years": YEAR,
    "months": MONTH,
    "weeks": WEEK,
    "days": DAY,
    "hours": HOUR,
    "minutes": MINUTE,
    "seconds": SECOND,
}


@total_ordering
@dataclass(frozen=True)
class Duration:
    milliseconds: int

    def __post_init__(self) -> None:
        # Always a magnitude: sign is dropped, fractions round to the millisecond
        object.__setattr__(self, "milliseconds", abs(round(self.milliseconds)))

    @classmethod
    def from_milliseconds(cls, milliseconds: float) -> "Duration":
        return cls(milliseconds)

    @classmethod
    def from_seconds(cls, seconds: float) -> "Duration":
        return cls(seconds * SECOND)

    @classmethod
    def from_minutes(cls, minutes: float) -> "Duration":
        return cls(minutes * MINUTE)

    @classmethod
    def from_hours(cls, hours: float) -> "Duration":
        return cls(hours * HOUR)

    @classmethod
    def from_days(cls, days: float) -> "Duration":
        return cls(days * DAY)

    @classmethod
    def from_weeks(cls, weeks: float) -> "Duration":
        return cls(weeks * WEEK)

    @classmethod
    def from_months(cls, months: float) -> "Duration":
        """Approximate: every month counts as 30 days."""
        return cls(months * MONTH)

    @classmethod
    def from_years(cls, years: float) -> "Duration":
        """Approximate: every year counts as 365 days."""
        return cls(years * YEAR)

    @classmethod
    def from_timedelta(cls, delta: timedelta) -> "Duration":
        return cls(delta // timedelta(milliseconds=1))

    @classmethod
    def parse(cls, text: str) -> "Duration":
        """Parse an ISO-8601 duration such as ``"P1Y2M3DT4H5M6.5S"``.

        Years and months use the fixed 365/30 day approximations. At least one
        component must be present; ``"P"`` and ``"PT"`` are rejected.

        Raises:
            ValueError: If the text is not a valid ISO-8601 duration
        """
        match = _ISO8601.match(text.strip())
        if match is None or not any(match.groupdict().values()):
            raise ValueError(
                f"Invalid ISO 8601 duration: {text!r}\n"
                f"Expected the form P[nY][nM][nW][nD][T[nH][nM][nS]]\n"
                f"Examples: 'P1D', 'PT1H30M', 'P1Y2M3DT4H5M6S'"
            )

        total = 0.0
        for unit, value in match.groupdict().items():
            if value is not None:
                total += float(value) * SCALES[unit]
        return cls(total)

    @property
    def seconds(self) -> int:
        return self.milliseconds // SECOND

    @property
    def minutes(self) -> int:
        return self.milliseconds // MINUTE

    @property
    def hours(self) -> int:
        return self.milliseconds // HOUR

    @property
    def days(self) -> int:
        return self.milliseconds // DAY

    def to_timedelta(self) -> timedelta:
        return timedelta(milliseconds=self.milliseconds)

    def isoformat(self) -> str:
        """Exact ISO-8601 rendering using days and a time part (no Y/M/W)."""
        days, rest = divmod(self.milliseconds, DAY)
        hours, rest = divmod(rest, HOUR)
        minutes, rest = divmod(rest, MINUTE)
        seconds, millis = divmod(rest, SECOND)

        date_part = f"{days}D" if days else ""
        time_part = ""
        if hours:
            time_part += f"{hours}H"
        if minutes:
            time_part += f"{minutes}M"
        if seconds or millis:
            time_part += f"{seconds}.{millis:03d}S" if millis else f"{seconds}S"

        if not date_part and not time_part:
            return "PT0S"
        return f"P{date_part}" + (f"T{time_part}" if time_part else "")

    def __add__(self, other: "Duration") -> "Duration":
        if not isinstance(other, Duration):
            return NotImplemented
        return Duration(self.milliseconds + other.milliseconds)

    def __mul__(self, factor: int) -> "Duration":
        if not isinstance(factor, int):
            return NotImplemented
        return Duration(self.milliseconds * factor)

    __rmul__ = __mul__

    def __lt__(self, other: "Duration") -> bool:
        if not isinstance(other, Duration):
            return NotImplemented
        return self.milliseconds < other.milliseconds

    def __str__(self) -> str:
        return self.isoformat()
