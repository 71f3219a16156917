"""Single entry point for the timeline view."""
import logging

from .dates import day_ticks
from .filters import filter_options, visible_tasks
from .layout import layout
from .links import resolve_links
from .models import Filters, Row, RowGeometry, Timeline
from .normalize import normalize_tasks, sort_tasks
from .today import autoscroll_offset, local_today, today_percent

log = logging.getLogger(__name__)


def compute_timeline(raw_tasks, window, filters=None, viewer=None, geometry=None,
                     today=None, viewport_width=None):
    geometry = geometry or RowGeometry()
    today = today or local_today()
    result = normalize_tasks(raw_tasks)
    tasks = sort_tasks(result.tasks)

    visible = visible_tasks(tasks, window, filters or Filters(), viewer)
    positions = layout(visible, window)
    links = resolve_links(visible, positions, geometry)
    today_pct = today_percent(window, today)

    scroll_left = None
    if viewport_width is not None:
        scroll_left = autoscroll_offset(geometry.width, viewport_width, today_pct)

    log.debug('timeline %s..%s: %d/%d tasks visible, %d links',
              window.start, window.end, len(visible), len(tasks), len(links))
    return Timeline(
        window=window,
        rows=[Row(t, positions[t.id]) for t in visible],
        links=links,
        today_pct=today_pct,
        filter_options=filter_options(tasks),
        days=day_ticks(window, today),
        dropped=result.dropped,
        height=geometry.height_for(len(visible)),
        scroll_left=scroll_left,
    )
