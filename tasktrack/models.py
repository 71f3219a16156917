"""Data types for the timeline core.

Tasks are produced by ``normalize``; everything else (positions, links)
is derived per computation pass and never persisted.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional, Tuple

from .dates import add_months, end_of_month, start_of_month

DEP_TYPES = ('FS', 'SS', 'FF', 'SF')
STATUSES = ('PLANNED', 'IN_PROGRESS', 'BLOCKED', 'DONE', 'COMPLETED')
ROLES = ('admin', 'lead', 'assignee')
ALL = 'all'


@dataclass(frozen=True)
class Dependency:
    target_id: str
    type: str = 'FS'

    def to_dict(self):
        return {'targetId': self.target_id, 'type': self.type}


@dataclass(frozen=True)
class Task:
    id: str
    title: str
    start: date
    end: date
    status: str = 'IN_PROGRESS'
    depends_on: Tuple[Dependency, ...] = ()
    project: str = ''
    project_id: str = ''
    assigned: str = ''
    lead: str = ''

    def to_dict(self):
        return {
            'id': self.id,
            'title': self.title,
            'start': self.start.isoformat(),
            'end': self.end.isoformat(),
            'status': self.status,
            'dependsOn': [d.to_dict() for d in self.depends_on],
            'project': self.project,
            'projectId': self.project_id,
            'assigned': self.assigned,
            'lead': self.lead,
        }


@dataclass(frozen=True)
class Window:
    """Inclusive date range shown by one layout pass."""
    start: date
    end: date

    def __post_init__(self):
        if self.end < self.start:
            raise ValueError(f'window end {self.end} is before start {self.start}')

    @classmethod
    def month(cls, d: date) -> 'Window':
        return cls(start_of_month(d), end_of_month(d))

    def shift_months(self, n: int) -> 'Window':
        return Window.month(add_months(self.start, n))

    def contains(self, d: date) -> bool:
        return self.start <= d <= self.end

    def to_dict(self):
        return {'from': self.start.isoformat(), 'to': self.end.isoformat()}


@dataclass(frozen=True)
class Filters:
    project: str = ALL
    assignee: str = ALL
    status: str = ALL

    def to_dict(self):
        return {'project': self.project, 'assignee': self.assignee, 'status': self.status}


@dataclass(frozen=True)
class LayoutPosition:
    row: int
    left_pct: float
    right_pct: float

    @property
    def width_pct(self) -> float:
        # zero-duration tasks stay visible as a sliver
        return max(0.5, self.right_pct - self.left_pct)

    def to_dict(self):
        return {
            'row': self.row,
            'leftPct': self.left_pct,
            'rightPct': self.right_pct,
            'widthPct': self.width_pct,
        }


@dataclass(frozen=True)
class RowGeometry:
    width: float = 1000.0
    row_height: float = 36.0
    row_gap: float = 8.0
    top: float = 8.0
    elbow: float = 12.0

    def x_for(self, pct: float) -> float:
        return pct / 100.0 * self.width

    def y_for(self, row: int) -> float:
        return self.top + row * (self.row_height + self.row_gap) + self.row_height / 2

    def height_for(self, rows: int) -> float:
        return self.top + rows * (self.row_height + self.row_gap)


@dataclass(frozen=True)
class Link:
    from_id: str
    to_id: str
    type: str
    path: Tuple[Tuple[float, float], ...]

    @property
    def svg_path(self) -> str:
        (x1, y1), *rest = self.path
        return f'M {x1:g} {y1:g} ' + ' '.join(f'L {x:g} {y:g}' for x, y in rest)

    def to_dict(self):
        return {
            'fromId': self.from_id,
            'toId': self.to_id,
            'type': self.type,
            'path': [list(p) for p in self.path],
            'd': self.svg_path,
        }


@dataclass
class Viewer:
    """Advisory identity used to narrow a task list to "my tasks"."""
    name: str
    role: str = 'assignee'

    @property
    def sees_everything(self) -> bool:
        return self.role in ('admin', 'owner')


@dataclass
class Row:
    task: Task
    position: LayoutPosition

    def to_dict(self):
        return {'task': self.task.to_dict(), 'position': self.position.to_dict()}


@dataclass
class Timeline:
    window: Window
    rows: list
    links: list
    today_pct: Optional[float]
    filter_options: dict
    days: list = field(default_factory=list)
    dropped: int = 0
    height: float = 0.0
    scroll_left: Optional[float] = None

    def to_dict(self):
        return {
            'window': self.window.to_dict(),
            'rows': [r.to_dict() for r in self.rows],
            'links': [l.to_dict() for l in self.links],
            'todayPct': self.today_pct,
            'scrollLeft': self.scroll_left,
            'filterOptions': self.filter_options,
            'days': self.days,
            'dropped': self.dropped,
            'height': self.height,
        }
