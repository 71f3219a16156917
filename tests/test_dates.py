from datetime import date, datetime

from tasktrack.dates import (
    add_months, day_offset, day_scale, day_span, day_ticks, end_of_month, parse_date, to_percent,
)
from tasktrack.models import Window

D1 = date(2025, 1, 1)
D11 = date(2025, 1, 11)


def test_day_offset_is_signed_and_span_is_clamped():
    assert day_offset(D1, D11) == 10
    assert day_offset(D11, D1) == -10
    assert day_span(D11, D1) == 0


def test_day_offset_ignores_time_of_day():
    assert day_offset(datetime(2025, 1, 1, 23, 59), datetime(2025, 1, 2, 0, 1)) == 1


def test_to_percent_bounds_and_monotonic():
    values = [to_percent(d, D1, D11) for d in day_scale(D1, D11)]
    assert values[0] == 0
    assert values[-1] == 100
    assert values == sorted(values)
    assert all(0 <= v <= 100 for v in values)


def test_to_percent_clamps_outside_window():
    assert to_percent(date(2024, 12, 1), D1, D11) == 0
    assert to_percent(date(2025, 3, 1), D1, D11) == 100


def test_single_day_window():
    assert to_percent(D1, D1, D1) == 0


def test_day_scale_is_inclusive_and_restartable():
    scale = list(day_scale(D1, D11))
    assert len(scale) == 11
    assert scale[0] == D1 and scale[-1] == D11
    assert list(day_scale(D1, D11)) == scale
    assert list(day_scale(D1, D1)) == [D1]


def test_parse_date_variants():
    assert parse_date('2025-01-05') == date(2025, 1, 5)
    assert parse_date('2025-01-05T10:30:00Z') == date(2025, 1, 5)
    assert parse_date('01/05/2025') == date(2025, 1, 5)
    assert parse_date(datetime(2025, 1, 5, 8)) == date(2025, 1, 5)
    assert parse_date('') is None
    assert parse_date('-') is None
    assert parse_date('not a date') is None
    assert parse_date(12345) is None


def test_month_helpers():
    assert end_of_month(date(2024, 2, 10)) == date(2024, 2, 29)
    assert add_months(date(2025, 1, 31), 1) == date(2025, 2, 1)
    assert add_months(date(2025, 1, 15), -1) == date(2024, 12, 1)
    w = Window.month(date(2025, 12, 9))
    assert (w.start, w.end) == (date(2025, 12, 1), date(2025, 12, 31))
    assert w.shift_months(1).start == date(2026, 1, 1)


def test_day_ticks_labels():
    ticks = day_ticks(Window(date(2025, 1, 30), date(2025, 2, 2)), today=date(2025, 2, 1))
    assert [t['label'] for t in ticks] == ['30', '31', 'Feb', '2']
    assert ticks[0]['monthStart'] and ticks[2]['monthStart']
    assert [t['isToday'] for t in ticks] == [False, False, True, False]
