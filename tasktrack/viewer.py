"""Who is looking at the tracker.

Identity is advisory: it narrows "my tasks" views and nothing is
enforced. It arrives with each request (``X-Viewer-Name`` /
``X-Viewer-Role`` headers or ``viewer`` / ``role`` query parameters)
and is handed to the filter engine explicitly.
"""
from flask_login import AnonymousUserMixin, LoginManager, UserMixin

from .models import ROLES, Viewer

login_manager = LoginManager()


def _name_parts(name):
    s = str(name or '').strip().lower()
    if not s:
        return None
    local = s.split('@')[0] if '@' in s else s
    first = s.split()[0]
    return s, local, first


def name_matches(who, candidate):
    """Loose match between a viewer name and a stored name.

    ``"sam@example.com"``, ``"Sam"`` and ``"sam lee"`` all match each
    other: full names, e-mail local parts and first words are compared.
    """
    w = _name_parts(who)
    c = _name_parts(candidate)
    if not w or not c:
        return False
    w_full, w_local, w_first = w
    c_full, c_local, c_first = c
    return (
        c_full == w_full
        or c_local == w_local
        or c_first == w_first
        or w_local == c_first
        or w_first == c_local
    )


class WebViewer(UserMixin, Viewer):
    def get_id(self):
        return f'{self.role}|{self.name}'


class AnonymousViewer(AnonymousUserMixin):
    name = ''
    role = None


def sanitize_role(role):
    r = str(role or '').strip().lower()
    if r == 'owner' or r in ROLES:
        return r
    return None


@login_manager.request_loader
def load_viewer_from_request(request):
    name = (request.headers.get('X-Viewer-Name') or request.args.get('viewer') or '').strip()
    if not name:
        return None
    role = sanitize_role(request.headers.get('X-Viewer-Role') or request.args.get('role')) or 'assignee'
    return WebViewer(name=name, role=role)


def current_viewer():
    """The request's viewer as a plain ``Viewer``, or None when anonymous."""
    from flask_login import current_user
    if not getattr(current_user, 'is_authenticated', False):
        return None
    return Viewer(name=current_user.name, role=current_user.role)


def init_app(app):
    login_manager.anonymous_user = AnonymousViewer
    login_manager.init_app(app)
