from datetime import datetime

import pytz

from .dates import clamp, to_percent


def local_today(tz_name='UTC'):
    """Today's date in ``tz_name``; unknown zones fall back to UTC."""
    try:
        tz = pytz.timezone(tz_name)
    except pytz.UnknownTimeZoneError:
        tz = pytz.utc
    return datetime.now(tz).date()


def today_percent(window, today):
    if not window.contains(today):
        return None
    return to_percent(today, window.start, window.end)


def autoscroll_offset(total_width, viewport_width, today_pct):
    """Scroll position that centers the today marker, or None when off-window."""
    if today_pct is None:
        return None
    x = total_width * today_pct / 100.0 - viewport_width / 2.0
    return clamp(x, 0, total_width)
