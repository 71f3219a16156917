"""Logging configuration for the tracker.

Modules log through ``logging.getLogger(__name__)``; ``setup_logging``
attaches a single console handler to the ``tasktrack`` logger. The Flask
app is named ``tasktrack`` too, so ``app.logger`` shares that handler.
"""
import json
import logging
from datetime import datetime

DETAILED_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(module)s:%(funcName)s:%(lineno)d - %(message)s'


class JsonFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record):
        entry = {
            'timestamp': datetime.fromtimestamp(record.created).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'module': record.module,
            'function': record.funcName,
            'line': record.lineno,
            'message': record.getMessage(),
        }
        if record.exc_info:
            entry['exception'] = self.formatException(record.exc_info)
        return json.dumps(entry)


def setup_logging(level='INFO', json_output=False, app=None):
    logger = logging.getLogger('tasktrack')
    logger.setLevel(level)
    logger.handlers.clear()

    handler = logging.StreamHandler()
    handler.setLevel(level)
    if json_output:
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter(DETAILED_FORMAT, datefmt='%Y-%m-%d %H:%M:%S'))
    logger.addHandler(handler)
    logger.propagate = False

    if app is not None:
        app.logger.setLevel(level)
    logger.debug('logging initialized at %s', level)
    return logger
