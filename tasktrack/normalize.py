"""Turn loosely shaped task records into canonical ``Task`` objects.

Records come from several generations of the storage format, so every
field is looked up through a list of aliases. Nothing here raises on bad
input: a record without a usable start date is dropped, anything else
falls back to a default.
"""
import logging
import re
from collections import namedtuple

from .coerce import coerce_to_array
from .dates import parse_date, ymd
from .models import DEP_TYPES, Dependency, Task

log = logging.getLogger(__name__)

START_FIELDS = ('startDate', 'started', 'start', 'from', 'date')
END_FIELDS = ('dueDate', 'due', 'end', 'to', 'finish')
TITLE_FIELDS = ('title', 'task', 'name')
DEPENDENCY_FIELDS = ('dependsOn', 'dependencies', 'predecessors')
DEP_ID_KEYS = ('id', 'taskId', 'targetId', 'ref')
PRIORITIES = ('Low', 'Medium', 'High')

NormalizeResult = namedtuple('NormalizeResult', ['tasks', 'dropped'])

_WS = re.compile(r'\s+')


def normalize_status(value, default='IN_PROGRESS'):
    s = _WS.sub('_', str(value or '').strip())
    return s.upper() if s else default


def normalize_dep_type(value):
    ty = str(value or 'FS').strip().upper()
    return ty if ty in DEP_TYPES else 'FS'


def normalize_priority(value):
    s = str(value or '').strip().capitalize()
    return s if s in PRIORITIES else 'Low'


def clean_text(value):
    if value is None:
        return ''
    return str(value).strip()


def first_of(raw, names, default=None):
    for name in names:
        v = raw.get(name)
        if v not in (None, ''):
            return v
    return default


def _first_date(raw, names):
    for name in names:
        d = parse_date(raw.get(name))
        if d is not None:
            return d
    return None


def _split_token(token):
    ident, _, ty = str(token).partition(':')
    return ident.strip(), normalize_dep_type(ty)


def parse_dependencies(value):
    """Parse any of the stored dependency shapes into ``Dependency`` tuples.

    Accepted: a list of mappings (``{"id": .., "type": ..}`` and
    aliases), a list of ``"id:type"`` strings, or one comma separated
    string of such tokens. Entries without an id are dropped.
    """
    if not value:
        return ()
    if isinstance(value, str):
        tokens = [t.strip() for t in value.split(',') if t.strip()]
        return tuple(Dependency(i, ty) for i, ty in map(_split_token, tokens) if i)
    if not isinstance(value, (list, tuple)):
        return ()
    out = []
    for item in value:
        if isinstance(item, dict):
            ident = clean_text(first_of(item, DEP_ID_KEYS, ''))
            ty = normalize_dep_type(item.get('type'))
        elif item is None:
            continue
        else:
            ident, ty = _split_token(item)
        if ident:
            out.append(Dependency(ident, ty))
    return tuple(out)


def normalize_task(raw, index):
    """Return a ``Task`` or ``None`` when the record has no usable start."""
    if not isinstance(raw, dict):
        return None
    start = _first_date(raw, START_FIELDS)
    if start is None:
        return None
    end = _first_date(raw, END_FIELDS) or start
    if end < start:
        end = start
    ident = clean_text(first_of(raw, ('id', '_id')))
    return Task(
        id=ident or f't-{index}',
        title=clean_text(first_of(raw, TITLE_FIELDS, 'Untitled')),
        start=start,
        end=end,
        status=normalize_status(raw.get('status')),
        depends_on=parse_dependencies(first_of(raw, DEPENDENCY_FIELDS)),
        project=clean_text(raw.get('project')),
        project_id=clean_text(raw.get('projectId')),
        assigned=clean_text(raw.get('assigned')),
        lead=clean_text(raw.get('lead')),
    )


def normalize_tasks(payload):
    tasks = []
    dropped = 0
    for i, raw in enumerate(coerce_to_array(payload)):
        task = normalize_task(raw, i)
        if task is None:
            dropped += 1
            log.debug('dropping record %d without a usable start date', i)
            continue
        tasks.append(task)
    if dropped:
        log.info('normalized %d tasks, dropped %d without a start date', len(tasks), dropped)
    return NormalizeResult(tasks, dropped)


def sort_tasks(tasks):
    return sorted(tasks, key=lambda t: (t.start, t.end))


def _date_field(value):
    d = parse_date(value)
    return ymd(d) if d else ''


def normalize_record(raw, index):
    """Shape a stored record for the task table (list view).

    Unlike ``normalize_task`` this keeps records without dates; the table
    shows every task.
    """
    raw = raw if isinstance(raw, dict) else {}
    project = raw.get('project')
    deps = parse_dependencies(first_of(raw, DEPENDENCY_FIELDS))
    return {
        'id': clean_text(first_of(raw, ('id', '_id'))) or f't-{index}',
        'projectId': clean_text(raw.get('projectId')) or clean_text(project) or 'unassigned',
        'project': clean_text(project) or 'Untitled Project',
        'task': clean_text(first_of(raw, TITLE_FIELDS, 'Untitled')),
        'number': raw.get('number') if isinstance(raw.get('number'), int) else None,
        'status': normalize_status(raw.get('status')),
        'priority': normalize_priority(raw.get('priority')),
        'assigned': clean_text(raw.get('assigned')),
        'lead': clean_text(raw.get('lead')),
        'startDate': _date_field(raw.get('startDate')),
        'dueDate': _date_field(raw.get('dueDate')),
        'note': clean_text(raw.get('note')),
        'dependsOn': [d.to_dict() for d in deps],
    }
