"""Flat JSON task file: read wholesale, heal legacy shapes, write wholesale."""
import logging

from .coerce import coerce_to_array
from .errors import BadRequest, EmptyOverwrite, NotFound
from .jsonstore import read_json, write_json

log = logging.getLogger(__name__)


def upsert_by_id(existing, changes):
    merged = list(existing)
    index = {t.get('id'): i for i, t in enumerate(merged) if isinstance(t, dict) and t.get('id')}
    for c in changes:
        if not isinstance(c, dict) or not c.get('id'):
            continue
        i = index.get(c['id'])
        if i is None:
            index[c['id']] = len(merged)
            merged.append(dict(c))
        else:
            merged[i] = {**merged[i], **c}
    return merged


def _has_id(record):
    return record.get('id') is not None and str(record['id']).strip() != ''


def _fill_missing_ids(tasks):
    """Give id-less records a stable ``t-<index>`` id; returns how many changed."""
    taken = {str(t['id']).strip() for t in tasks if isinstance(t, dict) and _has_id(t)}
    filled = 0
    for i, t in enumerate(tasks):
        if not isinstance(t, dict) or _has_id(t):
            continue
        ident = str(t.get('_id') or '').strip() or f't-{i}'
        while ident in taken:
            ident = f'{ident}-{i}'
        t['id'] = ident
        taken.add(ident)
        filled += 1
    return filled


class TaskStore:
    def __init__(self, path):
        self.path = path

    def _read_raw(self):
        return read_json(self.path, default=None)

    def list(self):
        """Always a flat list of records with ids.

        A file in a legacy shape, or holding records without an id, is
        rewritten healed.
        """
        data = self._read_raw()
        if data is None:
            return []
        tasks = coerce_to_array(data)
        filled = _fill_missing_ids(tasks)
        if not isinstance(data, list) or filled:
            log.info('healing %s: rewriting %s payload as a flat list of %d tasks (%d ids assigned)',
                     self.path, type(data).__name__, len(tasks), filled)
            self.write(tasks)
        return tasks

    def write(self, tasks):
        write_json(self.path, list(tasks))

    def replace_all(self, payload, allow_empty=False):
        incoming = coerce_to_array(payload)
        if not incoming and not allow_empty:
            raise EmptyOverwrite()
        self.write(incoming)
        log.info('replaced task file with %d tasks', len(incoming))
        return len(incoming)

    def upsert_project(self, project_id, payload):
        """Merge ``payload`` into the stored list by id.

        Only records whose ``projectId`` equals ``project_id`` are
        applied. Returns ``(updated, total)``.
        """
        changes = coerce_to_array(payload)
        if project_id:
            changes = [t for t in changes if isinstance(t, dict) and t.get('projectId') == project_id]
        existing = self.list()
        if not changes:
            return 0, len(existing)
        merged = upsert_by_id(existing, changes)
        self.write(merged)
        log.info('upserted %d tasks for project %s (total %d)', len(changes), project_id, len(merged))
        return len(changes), len(merged)

    def delete(self, task_id):
        task_id = str(task_id or '').strip()
        if not task_id:
            raise BadRequest('id param required')
        existing = self.list()
        remaining = [t for t in existing if not (isinstance(t, dict) and str(t.get('id')) == task_id)]
        if len(remaining) == len(existing):
            raise NotFound('task not found')
        self.write(remaining)
        log.info('deleted task %s', task_id)
        return len(remaining)
