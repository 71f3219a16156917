"""Editing helpers for one project's task sheet.

Tasks on a sheet carry a display ``number``; dependencies are entered by
number and stored by id.
"""
import uuid

from .dates import parse_date, ymd
from .normalize import (
    DEPENDENCY_FIELDS, clean_text, first_of, normalize_dep_type, normalize_priority, normalize_status,
    parse_dependencies,
)


def _iso_or_blank(value):
    d = parse_date(value)
    return ymd(d) if d else ''


def _edit_shape(raw, project_id, position, index):
    number = raw.get('number')
    return {
        'id': clean_text(first_of(raw, ('id', '_id'))) or f't-{index}',
        'projectId': str(raw.get('projectId') or project_id),
        'project': raw.get('project') or 'Untitled Project',
        'number': number if isinstance(number, int) and not isinstance(number, bool) else position + 1,
        'task': raw.get('task') or '',
        'status': normalize_status(raw.get('status')),
        'priority': normalize_priority(raw.get('priority')),
        'lead': str(raw.get('lead') or '').strip(),
        'assigned': str(raw.get('assigned') or '').strip(),
        'dependsOn': [d.to_dict() for d in parse_dependencies(first_of(raw, DEPENDENCY_FIELDS))],
        'startDate': _iso_or_blank(raw.get('startDate')),
        'dueDate': _iso_or_blank(raw.get('dueDate')),
        'note': raw.get('note') or '',
    }


def project_tasks(records, project_id):
    """Sheet rows for ``project_id``; fallback ids use the position in ``records``."""
    pid = str(project_id)
    mine = [(i, r) for i, r in enumerate(records)
            if isinstance(r, dict) and str(r.get('projectId') or r.get('project_id') or '') == pid]
    return [_edit_shape(r, pid, position, index) for position, (index, r) in enumerate(mine)]


def next_number(tasks):
    return max((int(t.get('number') or 0) for t in tasks), default=0) + 1


def new_task(project_id, project, number, lead='', assigned=''):
    return {
        'id': str(uuid.uuid4()),
        'projectId': project_id,
        'project': project or 'New Project',
        'number': number,
        'task': '',
        'status': 'IN_PROGRESS',
        'priority': 'Low',
        'lead': lead,
        'assigned': assigned,
        'dependsOn': [],
        'startDate': '',
        'dueDate': '',
        'note': '',
    }


def find_by_number(tasks, number):
    try:
        number = int(number)
    except (TypeError, ValueError):
        return None
    return next((t for t in tasks if int(t.get('number') or 0) == number), None)


def add_dependency(task, tasks, target_number, dep_type='FS'):
    """Add an edge from ``task`` to the sheet task numbered ``target_number``.

    Self edges and duplicates are ignored. Returns True when added.
    """
    target = find_by_number(tasks, target_number)
    if target is None or target['id'] == task['id']:
        return False
    dep_type = normalize_dep_type(dep_type)
    deps = task.setdefault('dependsOn', [])
    if any(d['targetId'] == target['id'] and d['type'] == dep_type for d in deps):
        return False
    deps.append({'targetId': target['id'], 'type': dep_type})
    return True


def to_storage(task):
    """Shape written back to the task file."""
    return {
        'id': task['id'],
        'projectId': task['projectId'],
        'project': task['project'],
        'number': task.get('number'),
        'task': task.get('task', ''),
        'status': normalize_status(task.get('status')),
        'priority': task.get('priority'),
        'assigned': task.get('assigned') or '',
        'lead': task.get('lead') or '',
        'startDate': task.get('startDate') or '-',
        'dueDate': task.get('dueDate') or '-',
        'note': task.get('note') or '-',
        'dependsOn': [f"{d['targetId']}:{d.get('type') or 'FS'}" for d in task.get('dependsOn') or []],
    }
