from collections import OrderedDict

from .dates import to_percent
from .models import LayoutPosition


def layout(visible, window):
    """One row per visible task, in the order given.

    Overlapping tasks are never packed onto a shared row.
    """
    positions = OrderedDict()
    for row, task in enumerate(visible):
        positions[task.id] = LayoutPosition(
            row=row,
            left_pct=to_percent(task.start, window.start, window.end),
            right_pct=to_percent(task.end, window.start, window.end),
        )
    return positions
