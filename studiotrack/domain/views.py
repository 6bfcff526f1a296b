"""Derived views over the in-memory project and user collections.

Every function here is pure: it takes lists of project/user dicts and returns
new values. Nothing is cached, callers recompute on every request.
"""
from datetime import date

from studiotrack.domain.constants import (
    ADMIN, ALL, CANCELLED, CRITICAL, FINISHED, IN_PROGRESS, PAUSED, REMOVED_USER, UNKNOWN_ROLE,
)


def _as_date(value):
    if value is None or isinstance(value, date):
        return value
    # ISO strings, with or without a time part
    return date.fromisoformat(str(value)[:10])


def visible_projects(user, projects):
    if user['role'] == ADMIN:
        return list(projects)
    return [p for p in projects if user['id'] in (p.get('editor_ids') or [])]


def is_critical(project, today=None):
    """Active project that is over its hour budget or past its deadline."""
    if project['status'] in (FINISHED, CANCELLED):
        return False
    today = today or date.today()
    over_budget = (project.get('hours_used') or 0) > (project.get('hours_budgeted') or 0)
    deadline = _as_date(project.get('deadline'))
    overdue = deadline is not None and deadline < today
    return over_budget or overdue


def filter_projects(projects, search=None, status=None, today=None):
    result = list(projects)
    if search:
        needle = search.lower()
        result = [
            p for p in result
            if needle in (p.get('name') or '').lower() or needle in (p.get('client') or '').lower()
        ]
    if status and status != ALL:
        if status == CRITICAL:
            result = [p for p in result if is_critical(p, today)]
        else:
            result = [p for p in result if p['status'] == status]
    return result


def dashboard_stats(user, projects, today=None):
    scoped = visible_projects(user, projects)
    return {
        'active': len([p for p in scoped if p['status'] == IN_PROGRESS]),
        'finished': len([p for p in scoped if p['status'] == FINISHED]),
        'critical': len([p for p in scoped if is_critical(p, today)]),
        'total': len(scoped),
        'hours_used': sum(p.get('hours_used') or 0 for p in scoped),
    }


def workload_chart(projects, limit=8):
    rows = []
    for p in projects:
        if p['status'] != IN_PROGRESS:
            continue
        used = p.get('hours_used') or 0
        budget = p.get('hours_budgeted') or 0
        rows.append({
            'id': p['id'],
            'name': p['name'],
            'used': used,
            'remaining': max(budget - used, 0),
            'overrun': max(used - budget, 0),
        })
    rows.sort(key=lambda row: row['used'] + row['remaining'], reverse=True)
    return rows[:limit]


def projects_by_status(projects):
    """Board columns for the dashboard."""
    return {
        status: [p for p in projects if p['status'] == status]
        for status in (IN_PROGRESS, PAUSED, FINISHED)
    }


def find_user(users, user_id):
    for user in users:
        if user['id'] == user_id:
            return user
    return None


def project_team(project, users):
    """Resolve ``editor_ids``; ids whose profile was deleted become placeholders."""
    team = []
    for user_id in project.get('editor_ids') or []:
        user = find_user(users, user_id)
        if user is None:
            team.append({'id': user_id, 'name': REMOVED_USER, 'role': None, 'removed': True})
        else:
            team.append(dict(user, removed=False))
    return team


def report_entries(projects, users):
    """Every time log of every project, tagged with its project and the user's current role."""
    roles = {u['id']: u['role'] for u in users}
    entries = []
    for project in projects:
        for log in project.get('time_logs') or []:
            entry = dict(log)
            entry['project_id'] = project['id']
            entry['project_name'] = project['name']
            entry['user_role'] = roles.get(log.get('user_id'), UNKNOWN_ROLE)
            entries.append(entry)
    return entries


def build_report(projects, users, project_id=None, user_id=None, start_date=None, end_date=None):
    """Filtered hour report.

    Dates are compared as strings, which is correct because they are stored
    zero-padded (YYYY-MM-DD). Both range ends are inclusive.
    """
    entries = report_entries(projects, users)
    if project_id:
        entries = [e for e in entries if e['project_id'] == project_id]
    if user_id:
        entries = [e for e in entries if e.get('user_id') == user_id]
    if start_date:
        entries = [e for e in entries if e['date'] >= start_date]
    if end_date:
        entries = [e for e in entries if e['date'] <= end_date]
    entries.sort(key=lambda e: e['date'], reverse=True)
    return {
        'entries': entries,
        'total_hours': sum(e['hours'] for e in entries),
    }
