"""Calendar helpers: day offsets, percent positions and day scales.

All arithmetic is done on calendar dates; a ``datetime`` is truncated to
its date first, so time of day never shifts a position.
"""
import calendar
from datetime import date, datetime, timedelta
from typing import Iterator, Optional

_EXTRA_FORMATS = ('%Y/%m/%d', '%m/%d/%Y', '%d.%m.%Y', '%b %d %Y', '%d %b %Y')


def as_date(d):
    if isinstance(d, datetime):
        return d.date()
    return d


def clamp(n, lo, hi):
    return min(max(n, lo), hi)


def day_offset(a, b) -> int:
    """Signed number of calendar days from ``a`` to ``b``."""
    return (as_date(b) - as_date(a)).days


def day_span(a, b) -> int:
    """``day_offset`` clamped at zero, for span math."""
    return max(0, day_offset(a, b))


def to_percent(d, start, end) -> float:
    span = max(1, day_span(start, end))
    offset = clamp(day_span(start, d), 0, span)
    return offset / span * 100.0


def day_scale(start, end) -> Iterator[date]:
    start = as_date(start)
    for i in range(day_span(start, end) + 1):
        yield start + timedelta(days=i)


def parse_date(value) -> Optional[date]:
    """Best-effort conversion of a raw field to a date; None when unusable."""
    if value is None or value is False:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None
    s = value.strip()
    if not s:
        return None
    iso = s[:-1] + '+00:00' if s.endswith('Z') else s
    try:
        return datetime.fromisoformat(iso).date()
    except ValueError:
        pass
    for fmt in _EXTRA_FORMATS:
        try:
            return datetime.strptime(s, fmt).date()
        except ValueError:
            continue
    return None


def ymd(d) -> str:
    return as_date(d).isoformat()


def start_of_month(d) -> date:
    return date(d.year, d.month, 1)


def end_of_month(d) -> date:
    return date(d.year, d.month, calendar.monthrange(d.year, d.month)[1])


def add_months(d, n) -> date:
    """First day of the month ``n`` months away from ``d``."""
    idx = d.year * 12 + (d.month - 1) + n
    return date(idx // 12, idx % 12 + 1, 1)


def day_ticks(window, today=None):
    ticks = []
    for i, d in enumerate(day_scale(window.start, window.end)):
        ticks.append({
            'date': d.isoformat(),
            'label': d.strftime('%b') if d.day == 1 else str(d.day),
            'monthStart': d.day == 1 or i == 0,
            'isToday': today is not None and d == today,
        })
    return ticks
