from . import constructors
from .bounds import Bounds
from .constructors import (
    after,
    around,
    before,
    from_day,
    from_iso8601,
    from_month,
    from_quarter,
    from_week,
    from_year,
    this_month,
    this_week,
    this_year,
    today,
)
from .duration import Duration
from .errors import IndexOutOfRange, InvalidRange
from .formatting import display, format_interval
from .interval import Interval
from .sequence import Sequence
from .util import DAY, DEFAULT_BOUNDS, HOUR, MINUTE, SECOND, WEEK

__all__ = [
    "Interval",
    "Sequence",
    "Bounds",
    "Duration",
    "InvalidRange",
    "IndexOutOfRange",
    "DEFAULT_BOUNDS",
    "constructors",
    "after",
    "around",
    "before",
    "from_day",
    "from_iso8601",
    "from_month",
    "from_quarter",
    "from_week",
    "from_year",
    "today",
    "this_week",
    "this_month",
    "this_year",
    "format_interval",
    "display",
    "SECOND",
    "MINUTE",
    "HOUR",
    "DAY",
    "WEEK",
]
