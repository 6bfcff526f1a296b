"""Authentication routes and decorators."""
from functools import wraps

from flask import Blueprint, abort, current_app, g, jsonify, request, session
from flask_babel import gettext as _

from studiotrack.domain.constants import ADMIN, EDITOR
from studiotrack.models import db, User
from studiotrack.services import team

auth_bp = Blueprint('auth', __name__, url_prefix='/auth')


def _payload():
    return request.get_json(silent=True) or {}


def _sign_in(user):
    session.clear()
    session['user_id'] = user['id']
    session['user_role'] = user['role']
    session['user_name'] = user['name']


# ==================== RBAC Decorators (MUST be defined before routes that use them) ====================

def login_required(f):
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if 'user_id' not in session:
            abort(401, _('Sign in to continue.'))
        user = db.session.get(User, session['user_id'])
        if user is None:
            # Profile was removed while the session was open
            session.clear()
            abort(401, _('Your account no longer exists.'))
        g.user = user.to_dict()
        return f(*args, **kwargs)
    return decorated_function


def role_required(roles):
    def decorator(f):
        @wraps(f)
        @login_required
        def decorated_function(*args, **kwargs):
            if g.user['role'] not in roles:
                abort(403, _('You do not have permission for this action.'))
            return f(*args, **kwargs)
        return decorated_function
    return decorator


def admin_required(f):
    return role_required([ADMIN])(f)


# ==================== Routes ====================

@auth_bp.route('/register', methods=['POST'])
def register():
    data = _payload()
    if data.get('password') != data.get('confirm_password', data.get('password')):
        abort(400, _('Passwords do not match.'))
    user = team.register(
        data.get('name'),
        data.get('email'),
        data.get('password'),
        data.get('role', EDITOR),
    )
    _sign_in(user)
    return jsonify(user), 201


@auth_bp.route('/login', methods=['POST'])
def login():
    data = _payload()
    user = team.authenticate(data.get('email'), data.get('password'))
    _sign_in(user)
    current_app.logger.info('User %s signed in', user['email'])
    return jsonify(user)


@auth_bp.route('/logout', methods=['POST'])
def logout():
    session.clear()
    return jsonify(status='signed out')


@auth_bp.route('/me')
@login_required
def me():
    return jsonify(g.user)


@auth_bp.route('/profile', methods=['PUT'])
@login_required
def profile():
    data = _payload()
    new_password = data.get('new_password')
    if new_password and new_password != data.get('confirm_password'):
        abort(400, _('Passwords do not match.'))
    user = team.update_profile(g.user['id'], data.get('name'), new_password)
    session['user_name'] = user['name']
    return jsonify(user)
