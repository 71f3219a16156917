import json
from datetime import date

import pytest

from tasktrack import create_app


@pytest.fixture()
def app(tmp_path):
    return create_app({
        'TESTING': True,
        'SECRET_KEY': 'testing',
        'DATA_DIR': str(tmp_path),
        'LOG_LEVEL': 'WARNING',
        'TIMEZONE': 'UTC',
    })


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def write_tasks(tmp_path):
    def _write(data):
        (tmp_path / 'taskData.json').write_text(json.dumps(data), encoding='utf-8')
    return _write


@pytest.fixture()
def jan():
    from tasktrack.models import Window
    # 10-day span keeps percentages round
    return Window(date(2025, 1, 1), date(2025, 1, 11))
