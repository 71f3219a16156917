from tasktrack.projects import add_dependency, new_task, next_number, project_tasks, to_storage

RECORDS = [
    {'id': 'a', 'projectId': 'p1', 'project': 'Apollo', 'task': 'Design', 'number': 1,
     'dependsOn': [], 'startDate': '2025-01-01', 'status': 'in progress'},
    {'id': 'b', 'project_id': 'p1', 'project': 'Apollo', 'task': 'Build', 'dependsOn': ['a:SS']},
    {'id': 'c', 'projectId': 'p2', 'task': 'Other'},
    'not-a-record',
]


def test_project_tasks_numbers_and_shapes():
    tasks = project_tasks(RECORDS, 'p1')
    assert [t['id'] for t in tasks] == ['a', 'b']
    assert [t['number'] for t in tasks] == [1, 2]
    assert tasks[0]['status'] == 'IN_PROGRESS'
    assert tasks[1]['projectId'] == 'p1'
    assert tasks[1]['dependsOn'] == [{'targetId': 'a', 'type': 'SS'}]
    assert tasks[1]['startDate'] == ''


def test_next_number_and_new_task():
    tasks = project_tasks(RECORDS, 'p1')
    assert next_number(tasks) == 3
    assert next_number([]) == 1
    t = new_task('p1', None, 3, lead='Lee')
    assert t['project'] == 'New Project'
    assert t['number'] == 3 and t['lead'] == 'Lee' and t['dependsOn'] == []


def test_add_dependency_by_number():
    tasks = project_tasks(RECORDS, 'p1')
    a, b = tasks
    assert add_dependency(a, tasks, 2, 'ff')
    assert a['dependsOn'] == [{'targetId': 'b', 'type': 'FF'}]
    assert not add_dependency(a, tasks, 2, 'FF')
    assert not add_dependency(a, tasks, 1)
    assert not add_dependency(a, tasks, 42)
    assert not add_dependency(a, tasks, 'x')


def test_to_storage_shape():
    task = project_tasks(RECORDS, 'p1')[1]
    stored = to_storage(task)
    assert stored['dependsOn'] == ['a:SS']
    assert stored['startDate'] == '-'
    assert stored['note'] == '-'
    assert stored['projectId'] == 'p1'


def test_records_without_id_get_ids_from_their_file_position():
    records = [{'id': 'x', 'projectId': 'p2'}, {'projectId': 'p1', 'task': 'Old'}, {'id': ' ', 'projectId': 'p1'}]
    first = project_tasks(records, 'p1')
    assert [t['id'] for t in first] == ['t-1', 't-2']
    assert [t['id'] for t in project_tasks(records, 'p1')] == ['t-1', 't-2']
    assert [t['number'] for t in first] == [1, 2]


def test_sheet_reads_every_dependency_alias():
    records = [{'id': 'a', 'projectId': 'p1'}, {'id': 'b', 'projectId': 'p1', 'predecessors': 'a:SF'}]
    assert project_tasks(records, 'p1')[1]['dependsOn'] == [{'targetId': 'a', 'type': 'SF'}]
