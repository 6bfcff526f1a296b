"""Project routes - CRUD on the aggregate plus time logs, versions and comments."""
from flask import Blueprint, abort, g, jsonify, request
from flask_babel import gettext as _

from studiotrack.domain.records import group_deliverables, module_names
from studiotrack.domain.state import remove_project, replace_project, select_project
from studiotrack.domain.views import filter_projects, project_team, visible_projects
from studiotrack.routes.auth import admin_required, login_required
from studiotrack.services import projects as service

projects_bp = Blueprint('projects', __name__)


def _payload():
    return request.get_json(silent=True) or {}


def _detail(state):
    """Selected project with its team and content tree resolved."""
    project = state.selected_project
    return dict(
        project,
        team=project_team(project, state.users),
        modules=module_names(project['deliverables']),
        content=[
            {'group': group, 'deliverables': items}
            for group, items in group_deliverables(project)
        ],
    )


def _respond(project_id, updated, status=200):
    state = select_project(service.load_state(g.user), project_id)
    state = replace_project(state, updated)
    return jsonify(_detail(state)), status


@projects_bp.route('/projects')
@login_required
def project_list():
    state = service.load_state(g.user)
    projects = visible_projects(g.user, state.projects)
    projects = filter_projects(projects, request.args.get('q'), request.args.get('status'))
    return jsonify(projects)


@projects_bp.route('/projects', methods=['POST'])
@admin_required
def project_create():
    project = service.create_project(_payload())
    return _respond(project['id'], project, 201)


@projects_bp.route('/projects/<project_id>')
@login_required
def project_detail(project_id):
    project = service.get_project(project_id, g.user)
    return _respond(project_id, project)


@projects_bp.route('/projects/<project_id>', methods=['PUT'])
@admin_required
def project_update(project_id):
    project = service.update_project(project_id, _payload(), g.user)
    return _respond(project_id, project)


@projects_bp.route('/projects/<project_id>/status', methods=['PATCH'])
@login_required
def project_status(project_id):
    project = service.change_status(project_id, _payload().get('status'), g.user)
    return _respond(project_id, project)


@projects_bp.route('/projects/<project_id>', methods=['DELETE'])
@admin_required
def project_delete(project_id):
    """Delete the project with its deliverables, comments and logs. Irreversible."""
    if request.args.get('confirm') != 'true':
        abort(400, _('Deleting a project cannot be undone. Confirm with confirm=true.'))
    state = service.load_state(g.user)
    service.delete_project(project_id, g.user)
    state = remove_project(state, project_id)
    return jsonify(deleted=True, projects=visible_projects(g.user, state.projects))


@projects_bp.route('/projects/<project_id>/time-logs', methods=['POST'])
@login_required
def project_log_time(project_id):
    data = _payload()
    project = service.log_time(
        project_id, g.user, data.get('hours'), data.get('date'), data.get('description'),
    )
    return _respond(project_id, project, 201)


@projects_bp.route('/time-logs', methods=['POST'])
@login_required
def quick_log_time():
    """Log hours from anywhere, naming an In Progress project in the body."""
    data = _payload()
    project_id = data.get('project_id')
    if not project_id:
        abort(400, _('Choose a project.'))
    project = service.log_time(
        project_id, g.user, data.get('hours'), data.get('date'), data.get('description'),
        active_only=True,
    )
    return _respond(project_id, project, 201)


@projects_bp.route('/projects/<project_id>/deliverables/<deliverable_id>/versions', methods=['POST'])
@login_required
def deliverable_add_version(project_id, deliverable_id):
    data = _payload()
    project = service.submit_version(
        project_id, deliverable_id, g.user,
        data.get('version_type'), data.get('link'), data.get('notes'),
    )
    return _respond(project_id, project, 201)


@projects_bp.route('/projects/<project_id>/comments', methods=['POST'])
@login_required
def project_comment(project_id):
    project = service.post_comment(project_id, g.user, _payload().get('text'))
    return _respond(project_id, project, 201)
