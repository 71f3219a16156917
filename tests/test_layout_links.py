from datetime import date

import pytest

from tasktrack.layout import layout
from tasktrack.links import resolve_links
from tasktrack.models import Dependency, RowGeometry, Task


def _task(id, d1, d2, deps=()):
    return Task(id=id, title=id, start=date(2025, 1, d1), end=date(2025, 1, d2),
                depends_on=tuple(Dependency(t, ty) for t, ty in deps))


def test_rows_follow_order_and_spans(jan):
    a, b = _task('A', 1, 3), _task('B', 4, 6)
    pos = layout([a, b], jan)
    assert list(pos) == ['A', 'B']
    assert pos['A'].row == 0 and pos['B'].row == 1
    assert pos['A'].left_pct == 0
    assert pos['A'].right_pct == pytest.approx(20)
    assert pos['B'].left_pct == pytest.approx(30)


def test_zero_duration_keeps_minimum_width(jan):
    pos = layout([_task('M', 5, 5)], jan)['M']
    assert pos.right_pct - pos.left_pct == 0
    assert pos.width_pct == 0.5


def test_finish_to_start_link(jan):
    a, b = _task('A', 1, 3), _task('B', 4, 6, [('A', 'FS')])
    links = resolve_links([a, b], layout([a, b], jan), RowGeometry(width=1000))
    assert len(links) == 1
    link = links[0]
    assert (link.from_id, link.to_id, link.type) == ('A', 'B', 'FS')
    assert len(link.path) == 4
    (x1, y1), (mx, my), (mx2, y2), (x2, y2b) = link.path
    assert x1 == pytest.approx(200)
    assert x2 == pytest.approx(300)
    assert mx == mx2 == pytest.approx(212)
    assert (y1, my) == (26, 26)
    assert y2 == y2b == 70
    assert link.to_dict()['d'].startswith('M 200 26 L 212 26')


@pytest.mark.parametrize('dep_type,expected', [
    ('SS', (0, 300)),
    ('FF', (200, 500)),
    ('SF', (0, 500)),
])
def test_anchor_by_type(jan, dep_type, expected):
    a, b = _task('A', 1, 3), _task('B', 4, 6, [('A', dep_type)])
    link = resolve_links([a, b], layout([a, b], jan))[0]
    assert (link.path[0][0], link.path[-1][0]) == pytest.approx(expected)


def test_backwards_link_bends_left(jan):
    a, b = _task('A', 5, 8), _task('B', 1, 2, [('A', 'FS')])
    link = resolve_links([a, b], layout([a, b], jan))[0]
    assert link.path[1][0] == pytest.approx(link.path[0][0] - 12)


def test_dangling_edges_are_skipped(jan):
    b = _task('B', 4, 6, [('gone', 'FS'), ('also-gone', 'SS')])
    assert resolve_links([b], layout([b], jan)) == []


def test_cycles_are_drawn(jan):
    a, b = _task('A', 1, 3, [('B', 'FS')]), _task('B', 4, 6, [('A', 'FS')])
    links = resolve_links([a, b], layout([a, b], jan))
    assert {(l.from_id, l.to_id) for l in links} == {('A', 'B'), ('B', 'A')}


def test_geometry_height():
    assert RowGeometry().height_for(3) == 8 + 3 * 44
