"""Team routes - listing members and admin user management."""
from flask import Blueprint, abort, current_app, g, jsonify, request
from flask_babel import gettext as _

from studiotrack.domain.constants import EDITOR
from studiotrack.domain.state import remove_user
from studiotrack.routes.auth import admin_required, login_required
from studiotrack.services import team
from studiotrack.services.projects import load_state

team_bp = Blueprint('team', __name__, url_prefix='/team')


@team_bp.route('')
@login_required
def users_list():
    return jsonify(team.list_users())


@team_bp.route('', methods=['POST'])
@admin_required
def create_user():
    """Add a member; without a chosen password the configured default is used."""
    data = request.get_json(silent=True) or {}
    password = data.get('password') or current_app.config['DEFAULT_MEMBER_PASSWORD']
    user = team.add_member(data.get('name'), data.get('email'), data.get('role', EDITOR), password)
    return jsonify(user), 201


@team_bp.route('/<user_id>/role', methods=['PUT'])
@admin_required
def update_user_role(user_id):
    data = request.get_json(silent=True) or {}
    return jsonify(team.set_role(user_id, data.get('role'), g.user['id']))


@team_bp.route('/<user_id>', methods=['DELETE'])
@admin_required
def delete_user(user_id):
    """Remove a member's profile. Their id stays on projects they were assigned to."""
    if request.args.get('confirm') != 'true':
        abort(400, _('Confirm the removal with confirm=true.'))
    state = load_state(g.user)
    team.delete_user(user_id, g.user['id'])
    state = remove_user(state, user_id)
    return jsonify(deleted=True, users=state.users)
