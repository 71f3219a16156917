"""Dependency links between laid-out tasks.

Each link joins an anchor on the predecessor's bar to an anchor on the
successor's bar, chosen by the dependency type, and is routed as a
three-segment orthogonal path.
"""
import logging

from .models import Link, RowGeometry

log = logging.getLogger(__name__)

# type -> (predecessor edge, successor edge)
ANCHORS = {
    'FS': ('finish', 'start'),
    'SS': ('start', 'start'),
    'FF': ('finish', 'finish'),
    'SF': ('start', 'finish'),
}


def _edge(position, which):
    return position.left_pct if which == 'start' else position.right_pct


def anchor_pcts(dep_type, pred, succ):
    pred_edge, succ_edge = ANCHORS.get(dep_type, ANCHORS['FS'])
    return _edge(pred, pred_edge), _edge(succ, succ_edge)


def route(x1, y1, x2, y2, elbow=12.0):
    mid_x = x1 + (elbow if x2 >= x1 else -elbow)
    return ((x1, y1), (mid_x, y1), (mid_x, y2), (x2, y2))


def resolve_links(visible, positions, geometry=None):
    """Links for every dependency whose predecessor has a position.

    Edges to tasks that are filtered out or outside the window are
    skipped. Cycles are drawn as declared.
    """
    geometry = geometry or RowGeometry()
    out = []
    skipped = 0
    for task in visible:
        to_pos = positions.get(task.id)
        if to_pos is None:
            continue
        for dep in task.depends_on:
            from_pos = positions.get(dep.target_id)
            if from_pos is None:
                skipped += 1
                continue
            from_pct, to_pct = anchor_pcts(dep.type, from_pos, to_pos)
            path = route(
                geometry.x_for(from_pct), geometry.y_for(from_pos.row),
                geometry.x_for(to_pct), geometry.y_for(to_pos.row),
                geometry.elbow,
            )
            out.append(Link(from_id=dep.target_id, to_id=task.id, type=dep.type, path=path))
    if skipped:
        log.debug('skipped %d dependency edges to tasks without a position', skipped)
    return out
