from flask import Blueprint, current_app, jsonify, request

from .errors import BadRequest, NotFound
from .projects import add_dependency, new_task, next_number, project_tasks, to_storage
from .viewer import current_viewer

projects_bp = Blueprint('projects', __name__, url_prefix='/api/projects')


def _store():
    return current_app.extensions['tasktrack']['tasks']


def _body():
    data = request.get_json(force=True, silent=True)
    return data if isinstance(data, dict) else {}


def _save(project_id, tasks):
    _store().upsert_project(project_id, [to_storage(t) for t in tasks])


@projects_bp.get('/<project_id>/tasks')
def get_project_tasks(project_id):
    tasks = project_tasks(_store().list(), project_id)
    name = tasks[0]['project'] if tasks else 'New Project'
    return jsonify({'success': True, 'project': name, 'tasks': tasks})


@projects_bp.post('/<project_id>/tasks')
def create_project_task(project_id):
    data = _body()
    tasks = project_tasks(_store().list(), project_id)
    viewer = current_viewer()
    lead = next((t['lead'] for t in tasks if t['lead']), '') or (viewer.name if viewer else '')
    task = new_task(
        project_id,
        data.get('project') or (tasks[0]['project'] if tasks else None),
        next_number(tasks),
        lead=data.get('lead') or lead,
        assigned=data.get('assigned') or (viewer.name if viewer else ''),
    )
    for key in ('task', 'priority', 'status', 'startDate', 'dueDate', 'note'):
        if data.get(key):
            task[key] = data[key]
    _save(project_id, [task])
    return jsonify({'success': True, 'task': task}), 201


@projects_bp.post('/<project_id>/tasks/<task_id>/dependencies')
def create_dependency(project_id, task_id):
    data = _body()
    if data.get('target') is None:
        raise BadRequest('target task number required')
    tasks = project_tasks(_store().list(), project_id)
    task = next((t for t in tasks if t['id'] == task_id), None)
    if task is None:
        raise NotFound('task not found')
    added = add_dependency(task, tasks, data.get('target'), data.get('type', 'FS'))
    if added:
        _save(project_id, [task])
    return jsonify({'success': True, 'added': added, 'dependsOn': task['dependsOn']})
