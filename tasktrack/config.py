import os


def parse_flag(raw):
    return str(raw).strip().lower() in ('1', 'true', 'yes', 'on')


def _env_flag(name, default=False):
    raw = os.environ.get(name)
    if raw is None:
        return default
    return parse_flag(raw)


class Config:
    # Use environment variable for secret key (fallback only for dev)
    SECRET_KEY = os.environ.get('SECRET_KEY', 'dev-insecure-change-me')
    DATA_DIR = os.environ.get('TASKTRACK_DATA_DIR') or os.path.join(os.getcwd(), 'data')
    TASKS_FILENAME = 'taskData.json'
    USERS_FILENAME = 'user.json'
    TIMEZONE = os.environ.get('TASKTRACK_TIMEZONE', 'UTC')
    LOG_LEVEL = os.environ.get('TASKTRACK_LOG_LEVEL', 'INFO')
    LOG_JSON = _env_flag('TASKTRACK_LOG_JSON')

    # Timeline canvas geometry (pixels)
    TIMELINE_WIDTH = float(os.environ.get('TIMELINE_WIDTH', 1000))
    ROW_HEIGHT = float(os.environ.get('ROW_HEIGHT', 36))
    ROW_GAP = float(os.environ.get('ROW_GAP', 8))
    ROW_TOP = float(os.environ.get('ROW_TOP', 8))
    LINK_ELBOW = float(os.environ.get('LINK_ELBOW', 12))


# Re-read on every create_app: environment variable -> (config key, parser)
ENV_OVERRIDES = {
    'SECRET_KEY': ('SECRET_KEY', str),
    'TASKTRACK_DATA_DIR': ('DATA_DIR', str),
    'TASKTRACK_TIMEZONE': ('TIMEZONE', str),
    'TASKTRACK_LOG_LEVEL': ('LOG_LEVEL', str),
    'TASKTRACK_LOG_JSON': ('LOG_JSON', parse_flag),
    'TIMELINE_WIDTH': ('TIMELINE_WIDTH', float),
    'ROW_HEIGHT': ('ROW_HEIGHT', float),
    'ROW_GAP': ('ROW_GAP', float),
    'ROW_TOP': ('ROW_TOP', float),
    'LINK_ELBOW': ('LINK_ELBOW', float),
}
