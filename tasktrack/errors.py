"""Exception types shared by the stores and the HTTP layer."""
import logging

from flask import jsonify, request
from werkzeug.exceptions import HTTPException

log = logging.getLogger(__name__)


class TrackerError(Exception):
    status_code = 500

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class BadRequest(TrackerError):
    status_code = 400


class NotFound(TrackerError):
    status_code = 404


class EmptyOverwrite(BadRequest):
    """Raised when a full replace would wipe the task file."""

    def __init__(self):
        super().__init__('Refusing to overwrite with empty list. Pass ?allowEmpty=1 to force.')


class StoreError(TrackerError):
    """The backing JSON file could not be read or written."""


def register_error_handlers(app):
    @app.errorhandler(TrackerError)
    def _tracker_error(e):
        if e.status_code >= 500:
            log.error('%s failed: %s', _endpoint(), e.message)
        return jsonify({'success': False, 'error': e.message}), e.status_code

    @app.errorhandler(HTTPException)
    def _http_error(e):
        return jsonify({'success': False, 'error': e.description}), e.code

    @app.errorhandler(Exception)
    def _unexpected(e):
        log.exception('%s failed', _endpoint())
        return jsonify({'success': False, 'error': 'Internal server error'}), 500


def _endpoint():
    return f'{request.method} {request.path}'
