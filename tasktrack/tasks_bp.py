from flask import Blueprint, current_app, jsonify, request

from .normalize import normalize_record
from .viewer import current_viewer, name_matches

tasks_bp = Blueprint('tasks', __name__, url_prefix='/api/tasks')


def _store():
    return current_app.extensions['tasktrack']['tasks']


def _mine_requested():
    return request.args.get('mine', '0') in ('1', 'true', 'True')


def _scope_records(records):
    """Raw-record version of the viewer scope used by the timeline."""
    viewer = current_viewer()
    if viewer is None or viewer.sees_everything:
        return records
    field = 'lead' if viewer.role == 'lead' else 'assigned'
    return [r for r in records if isinstance(r, dict) and name_matches(viewer.name, r.get(field))]


@tasks_bp.get('')
def list_tasks():
    # GET always returns a flat array; a legacy-shaped file is healed on read
    tasks = _store().list()
    if _mine_requested():
        tasks = _scope_records(tasks)
    return jsonify(tasks)


@tasks_bp.get('/table')
def task_table():
    records = [normalize_record(r, i) for i, r in enumerate(_store().list())]
    if _mine_requested():
        records = _scope_records(records)
    records.sort(key=lambda r: r['number'] or 0)
    return jsonify(records)


@tasks_bp.post('')
def replace_tasks():
    payload = request.get_json(force=True, silent=True)
    allow_empty = str(request.args.get('allowEmpty', '0')) == '1'
    count = _store().replace_all(payload, allow_empty=allow_empty)
    return jsonify({'success': True, 'count': count})


@tasks_bp.put('/<project_id>')
def upsert_project_tasks(project_id):
    payload = request.get_json(force=True, silent=True)
    updated, total = _store().upsert_project(project_id, payload)
    return jsonify({'success': True, 'updated': updated, 'total': total})


@tasks_bp.delete('/<task_id>')
def delete_task(task_id):
    total = _store().delete(task_id)
    return jsonify({'success': True, 'deleted': 1, 'total': total})
