"""Dashboard route - stats, workload chart and board columns."""
from flask import Blueprint, current_app, g, jsonify, request

from studiotrack.domain.views import (
    dashboard_stats, filter_projects, projects_by_status, visible_projects, workload_chart,
)
from studiotrack.routes.auth import login_required
from studiotrack.services.projects import load_state

dashboard_bp = Blueprint('dashboard', __name__)


@dashboard_bp.route('/dashboard')
@login_required
def dashboard():
    state = load_state(g.user)
    projects = visible_projects(g.user, state.projects)
    projects = filter_projects(projects, request.args.get('q'), request.args.get('status'))
    return jsonify(
        stats=dashboard_stats(g.user, state.projects),
        workload=workload_chart(projects, current_app.config['WORKLOAD_CHART_LIMIT']),
        board=projects_by_status(projects),
        projects=projects,
    )
