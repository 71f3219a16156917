"""Visibility rules: window overlap, picker filters and viewer scope."""
import locale

from .models import ALL, STATUSES, Filters
from .viewer import name_matches

# filter key -> Task attribute
FILTER_FIELDS = {'project': 'project', 'assignee': 'assigned', 'status': 'status'}


def overlaps(task, window):
    return task.end >= window.start and task.start <= window.end


def apply_filters(tasks, filters=None):
    filters = filters or Filters()
    active = [(attr, getattr(filters, key)) for key, attr in FILTER_FIELDS.items()
              if getattr(filters, key) != ALL]
    return [t for t in tasks if all(getattr(t, attr) == want for attr, want in active)]


def scope_for_viewer(tasks, viewer):
    """Narrow ``tasks`` to what ``viewer`` works on; ``None`` means no scoping."""
    if viewer is None or viewer.sees_everything:
        return list(tasks)
    attr = 'lead' if viewer.role == 'lead' else 'assigned'
    return [t for t in tasks if name_matches(viewer.name, getattr(t, attr))]


def visible_tasks(tasks, window, filters=None, viewer=None):
    in_window = [t for t in tasks if overlaps(t, window)]
    return scope_for_viewer(apply_filters(in_window, filters), viewer)


def _sort_key(value):
    return (locale.strxfrm(value.casefold()), value)


def distinct_options(tasks, field):
    values = {getattr(t, field) for t in tasks}
    values.discard('')
    return [ALL] + sorted(values, key=_sort_key)


def status_options(tasks):
    extra = {t.status for t in tasks} - set(STATUSES)
    extra.discard('')
    return [ALL, *STATUSES, *sorted(extra)]


def filter_options(tasks):
    """Picker values, always computed over the full task set."""
    return {
        'project': distinct_options(tasks, 'project'),
        'assignee': distinct_options(tasks, 'assigned'),
        'status': status_options(tasks),
    }
