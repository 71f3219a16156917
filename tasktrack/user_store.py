"""Role buckets of user names, persisted as ``{"admin": [], "lead": [], "assignee": []}``.

A name lives in at most one bucket; comparisons are case-insensitive.
"""
import logging

from .errors import BadRequest, NotFound
from .jsonstore import read_json, write_json
from .models import ROLES

log = logging.getLogger(__name__)


def empty_buckets():
    return {r: [] for r in ROLES}


def sanitize_name(name):
    return str(name or '').strip()


def sanitize_role(role):
    r = str(role or '').strip().lower()
    return r if r in ROLES else None


def remove_from_all(buckets, name):
    needle = name.lower()
    for r in buckets:
        buckets[r] = [n for n in buckets[r] if n.lower() != needle]


def _count(buckets):
    return sum(len(v) for v in buckets.values())


class UserDirectory:
    def __init__(self, path):
        self.path = path

    def buckets(self):
        data = read_json(self.path, default=None)
        if data is None:
            data = empty_buckets()
            write_json(self.path, data)
        out = empty_buckets()
        if isinstance(data, dict):
            for r in ROLES:
                names = data.get(r) if isinstance(data.get(r), list) else []
                out[r] = [n for n in map(sanitize_name, names) if n]
        return out

    def _save(self, buckets):
        write_json(self.path, buckets)

    def find_role(self, name, buckets=None):
        buckets = buckets or self.buckets()
        lower = name.lower()
        return next((r for r in ROLES if any(n.lower() == lower for n in buckets[r])), None)

    def add(self, name, role=None):
        name = sanitize_name(name)
        if not name:
            raise BadRequest('name required')
        role = sanitize_role(role) or 'assignee'
        data = self.buckets()
        remove_from_all(data, name)
        data[role].append(name)
        self._save(data)
        log.info('added user %r as %s', name, role)
        return data

    def update(self, name, role=None, new_name=None, index=None):
        """Move, rename and/or reposition a user."""
        current = sanitize_name(name)
        if not current:
            raise BadRequest('name param required')
        data = self.buckets()
        original_role = self.find_role(current, data)
        if original_role is None:
            raise NotFound('user not found')

        role_to_use = sanitize_role(role) or original_role
        final_name = sanitize_name(new_name) if new_name is not None else ''
        final_name = final_name or current

        remove_from_all(data, current)
        remove_from_all(data, final_name)
        names = data[role_to_use]
        at = len(names) if not isinstance(index, int) or isinstance(index, bool) else max(0, min(index, len(names)))
        names.insert(at, final_name)
        self._save(data)
        log.info('updated user %r -> %r (%s, position %d)', current, final_name, role_to_use, at)
        return data

    def reorder(self, role, names):
        role = sanitize_role(role)
        if not role:
            raise BadRequest('role must be assignee|lead|admin')
        if not isinstance(names, list):
            raise BadRequest('names[] required')
        data = self.buckets()
        belongs = {n.lower() for n in data[role]}
        seen = set()
        ordered = []
        for n in filter(None, map(sanitize_name, names)):
            key = n.lower()
            if key in belongs and key not in seen:
                seen.add(key)
                ordered.append(n)
        ordered.extend(n for n in data[role] if n.lower() not in seen)
        data[role] = ordered
        self._save(data)
        return data

    def remove(self, name):
        name = sanitize_name(name)
        if not name:
            raise BadRequest('name param required')
        data = self.buckets()
        before = _count(data)
        remove_from_all(data, name)
        if _count(data) == before:
            raise NotFound('user not found')
        self._save(data)
        log.info('removed user %r', name)

    def members(self):
        """Flat ``{"name", "role"}`` list sorted by name, for assignment pickers."""
        data = self.buckets()
        rows = [{'name': n, 'role': r} for r in ROLES for n in data[r]]
        return sorted(rows, key=lambda m: m['name'].casefold())

    def view_options(self):
        """One "view as" entry per role: the first name in its bucket."""
        data = self.buckets()
        return [{'role': r, 'name': data[r][0], 'label': f'{r.capitalize()} - {data[r][0]}'}
                for r in ROLES if data[r]]
