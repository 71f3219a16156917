from flask import Blueprint, current_app, jsonify, request

users_bp = Blueprint('users', __name__, url_prefix='/api/users')


def _directory():
    return current_app.extensions['tasktrack']['users']


def _body():
    data = request.get_json(force=True, silent=True)
    return data if isinstance(data, dict) else {}


@users_bp.get('')
def list_users():
    return jsonify(_directory().buckets())


@users_bp.get('/members')
def list_members():
    return jsonify(_directory().members())


@users_bp.get('/view-options')
def view_options():
    return jsonify(_directory().view_options())


@users_bp.post('')
def add_user():
    data = _body()
    users = _directory().add(data.get('name'), data.get('role'))
    return jsonify({'success': True, 'users': users}), 201


# registered before /<name> so "reorder" is never taken for a user name
@users_bp.patch('/reorder')
def reorder_users():
    data = _body()
    users = _directory().reorder(data.get('role'), data.get('names'))
    return jsonify({'success': True, 'users': users})


@users_bp.put('/<name>')
def update_user(name):
    data = _body()
    users = _directory().update(
        name,
        role=data.get('role'),
        new_name=data.get('newName'),
        index=data.get('index'),
    )
    return jsonify({'success': True, 'users': users})


@users_bp.delete('/<name>')
def delete_user(name):
    _directory().remove(name)
    return jsonify({'success': True})
