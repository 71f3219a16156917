import json

import pytest

from tasktrack.errors import BadRequest, NotFound
from tasktrack.user_store import UserDirectory


@pytest.fixture()
def users(tmp_path):
    return UserDirectory(str(tmp_path / 'user.json'))


def test_file_created_with_empty_buckets(users):
    assert users.buckets() == {'admin': [], 'lead': [], 'assignee': []}
    with open(users.path, encoding='utf-8') as f:
        assert json.load(f) == {'admin': [], 'lead': [], 'assignee': []}


def test_add_defaults_role_and_dedupes_across_roles(users):
    users.add('  Sam ', 'bogus')
    assert users.buckets()['assignee'] == ['Sam']
    users.add('sam', 'lead')
    assert users.buckets() == {'admin': [], 'lead': ['sam'], 'assignee': []}
    with pytest.raises(BadRequest):
        users.add('   ')


def test_update_moves_renames_and_positions(users):
    for n in ('Ann', 'Bob', 'Cy'):
        users.add(n, 'assignee')
    users.update('Cy', index=0)
    assert users.buckets()['assignee'] == ['Cy', 'Ann', 'Bob']
    users.update('Bob', role='lead', new_name='Robert')
    assert users.buckets()['lead'] == ['Robert']
    users.update('Ann', index=99)
    assert users.buckets()['assignee'] == ['Cy', 'Ann']
    with pytest.raises(NotFound):
        users.update('nobody')


def test_reorder_keeps_omitted_names_last(users):
    for n in ('Ann', 'Bob', 'Cy'):
        users.add(n, 'lead')
    data = users.reorder('lead', ['cy', 'Stranger', 'Cy', 'Ann'])
    assert data['lead'] == ['cy', 'Ann', 'Bob']
    with pytest.raises(BadRequest):
        users.reorder('boss', [])
    with pytest.raises(BadRequest):
        users.reorder('lead', None)


def test_remove(users):
    users.add('Ann')
    users.remove('ANN')
    assert users.buckets()['assignee'] == []
    with pytest.raises(NotFound):
        users.remove('Ann')


def test_members_and_view_options(users):
    users.add('zed', 'admin')
    users.add('Amy', 'assignee')
    users.add('Lou', 'lead')
    assert [m['name'] for m in users.members()] == ['Amy', 'Lou', 'zed']
    assert [(o['role'], o['name']) for o in users.view_options()] == [
        ('admin', 'zed'), ('lead', 'Lou'), ('assignee', 'Amy')]


def test_garbage_file_is_read_as_empty(users, tmp_path):
    (tmp_path / 'user.json').write_text(json.dumps({'admin': 'x', 'lead': ['', ' Lou ']}), encoding='utf-8')
    assert users.buckets() == {'admin': [], 'lead': ['Lou'], 'assignee': []}
