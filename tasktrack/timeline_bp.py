from datetime import date, datetime

from flask import Blueprint, Response, current_app, jsonify, request

from .chart import render_png
from .errors import BadRequest
from .models import ALL, Filters, RowGeometry, Window
from .timeline import compute_timeline
from .today import local_today
from .viewer import current_viewer

timeline_bp = Blueprint('timeline', __name__)


def _geometry():
    cfg = current_app.config
    width = request.args.get('width', type=float) or cfg['TIMELINE_WIDTH']
    return RowGeometry(
        width=width,
        row_height=cfg['ROW_HEIGHT'],
        row_gap=cfg['ROW_GAP'],
        top=cfg['ROW_TOP'],
        elbow=cfg['LINK_ELBOW'],
    )


def _parse_day(name):
    raw = request.args.get(name)
    try:
        return date.fromisoformat(raw)
    except (TypeError, ValueError):
        raise BadRequest(f'{name} must be YYYY-MM-DD')


def _window(today):
    if request.args.get('from') or request.args.get('to'):
        start, end = _parse_day('from'), _parse_day('to')
        if end < start:
            raise BadRequest('to must not be before from')
        return Window(start, end)
    month = request.args.get('month')
    if month:
        try:
            anchor = datetime.strptime(month, '%Y-%m').date()
        except ValueError:
            raise BadRequest('month must be YYYY-MM')
    else:
        anchor = today
    window = Window.month(anchor)
    shift = request.args.get('shift', type=int)
    return window.shift_months(shift) if shift else window


def _filters():
    return Filters(
        project=request.args.get('project', ALL),
        assignee=request.args.get('assignee', ALL),
        status=request.args.get('status', ALL),
    )


def _compute():
    today = local_today(current_app.config['TIMEZONE'])
    geometry = _geometry()
    viewer = current_viewer() if request.args.get('mine', '0') in ('1', 'true', 'True') else None
    timeline = compute_timeline(
        current_app.extensions['tasktrack']['tasks'].list(),
        _window(today),
        filters=_filters(),
        viewer=viewer,
        geometry=geometry,
        today=today,
        viewport_width=request.args.get('viewport', type=float),
    )
    return timeline, geometry


@timeline_bp.get('/api/timeline')
def timeline_json():
    timeline, _ = _compute()
    return jsonify(timeline.to_dict())


@timeline_bp.get('/timeline.png')
def timeline_png():
    timeline, geometry = _compute()
    png = render_png(timeline, geometry, title=request.args.get('title'))
    return Response(png, mimetype='image/png')
