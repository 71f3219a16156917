"""Locked, atomic JSON file helpers."""
import json
import logging
import os
import tempfile

import portalocker

from .errors import StoreError

log = logging.getLogger(__name__)


def read_json(path, default=None):
    """Load ``path`` under a shared lock; missing file returns ``default``."""
    if not os.path.exists(path):
        return default
    with open(path, 'r', encoding='utf-8') as f:
        portalocker.lock(f, portalocker.LOCK_SH)
        try:
            raw = f.read()
        finally:
            portalocker.unlock(f)
    if not raw.strip():
        return default
    try:
        return json.loads(raw)
    except ValueError as e:
        log.error('corrupt JSON in %s: %s', path, e)
        raise StoreError(f'Failed to parse {os.path.basename(path)}') from e


def write_json(path, data):
    """Replace ``path`` with ``data`` while holding ``<path>.lock`` exclusively.

    The payload goes to a temp file in the same directory first, so readers
    see either the old file or the new one.
    """
    folder = os.path.dirname(path)
    os.makedirs(folder, exist_ok=True)
    with open(path + '.lock', 'w') as lock_f:
        portalocker.lock(lock_f, portalocker.LOCK_EX)
        fd, staged = tempfile.mkstemp(dir=folder, prefix='.' + os.path.basename(path) + '.')
        try:
            with os.fdopen(fd, 'w', encoding='utf-8') as out:
                json.dump(data, out, indent=2, ensure_ascii=False)
            os.replace(staged, path)
        except OSError as e:
            log.error('could not write %s: %s', path, e)
            raise StoreError(f'Failed to save {os.path.basename(path)}') from e
        finally:
            if os.path.exists(staged):
                os.remove(staged)
            portalocker.unlock(lock_f)
    log.debug('wrote %s (%d records)', path, len(data) if isinstance(data, (list, dict)) else 0)
