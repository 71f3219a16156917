"""Project/task tracker: JSON-file CRUD API and Gantt timeline layout."""
import os

from flask import Flask, jsonify

from .config import ENV_OVERRIDES, Config
from .errors import register_error_handlers
from .logging_setup import setup_logging
from .task_store import TaskStore
from .timeline import compute_timeline
from .user_store import UserDirectory
from . import viewer

__all__ = ['create_app', 'compute_timeline']


def create_app(config=None):
    app = Flask(__name__)
    app.config.from_object(Config)
    for env_key, (cfg_key, parse) in ENV_OVERRIDES.items():
        if os.environ.get(env_key):
            app.config[cfg_key] = parse(os.environ[env_key])
    if config:
        app.config.update(config)

    setup_logging(app.config['LOG_LEVEL'], app.config.get('LOG_JSON', False), app=app)
    app.json.sort_keys = False

    data_dir = app.config['DATA_DIR']
    os.makedirs(data_dir, exist_ok=True)
    app.extensions['tasktrack'] = {
        'tasks': TaskStore(os.path.join(data_dir, app.config['TASKS_FILENAME'])),
        'users': UserDirectory(os.path.join(data_dir, app.config['USERS_FILENAME'])),
    }

    viewer.init_app(app)
    register_error_handlers(app)

    from .tasks_bp import tasks_bp
    from .users_bp import users_bp
    from .projects_bp import projects_bp
    from .timeline_bp import timeline_bp
    app.register_blueprint(tasks_bp)
    app.register_blueprint(users_bp)
    app.register_blueprint(projects_bp)
    app.register_blueprint(timeline_bp)

    @app.get('/health')
    def health():
        return jsonify({'success': True})

    app.logger.info('tasktrack ready, data dir %s', data_dir)
    return app
