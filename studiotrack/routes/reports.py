"""Report routes - hour extracts across projects."""
from flask import Blueprint, Response, jsonify, request

from studiotrack.domain.records import check_iso_date
from studiotrack.domain.views import build_report
from studiotrack.routes.auth import admin_required
from studiotrack.services.export import report_to_csv
from studiotrack.services.projects import load_state

reports_bp = Blueprint('reports', __name__, url_prefix='/reports')


def _report():
    args = request.args
    start = args.get('start') or None
    end = args.get('end') or None
    if start:
        check_iso_date(start, 'start')
    if end:
        check_iso_date(end, 'end')
    state = load_state()
    return build_report(
        state.projects,
        state.users,
        project_id=args.get('project_id') or None,
        user_id=args.get('user_id') or None,
        start_date=start,
        end_date=end,
    )


@reports_bp.route('')
@admin_required
def report():
    return jsonify(_report())


@reports_bp.route('/export.csv')
@admin_required
def export_report():
    return Response(
        report_to_csv(_report()),
        mimetype='text/csv',
        headers={'Content-disposition': 'attachment; filename=hours_report.csv'}
    )
