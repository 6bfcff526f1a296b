"""Mutation commands on the project aggregate.

Each command takes a project dict and returns a new one; the input is never
modified. Persisting the result is the caller's job (see
``studiotrack.services.projects``).
"""
import copy
import math

from studiotrack.domain.constants import FINISHED, PRIORITIES, SIMPLE, STATUSES, STRUCTURES
from studiotrack.domain.errors import NotFoundError, ValidationError
from studiotrack.domain.records import (
    check_iso_date, is_final, new_deliverable, new_id, normalize_deliverables,
)

REQUIRED_FIELDS = ['name', 'client', 'structure', 'status', 'priority', 'start_date', 'deadline']


def _choice(value, choices, field):
    if value not in choices:
        raise ValidationError('Invalid %(field)s: %(value)s.', field=field, value=value)
    return value


def _version_deadlines(data):
    deadlines = data.get('version_deadlines') or {}
    result = {}
    for key in ('v1', 'v2', 'final'):
        value = deadlines.get(key)
        if value:
            result[key] = check_iso_date(value, f'version_deadlines.{key}')
        elif key != 'v2':
            raise ValidationError('version_deadlines.%(key)s is required.', key=key)
    return result


def _hours_budgeted(value):
    try:
        hours = float(value)
    except (TypeError, ValueError):
        raise ValidationError('hours_budgeted must be a number.')
    if not math.isfinite(hours):
        raise ValidationError('hours_budgeted must be a finite number.')
    if hours < 0:
        raise ValidationError('hours_budgeted cannot be negative.')
    return hours


def build_project(data, project_id=None):
    """Validate submitted form data and return a new project record.

    Nothing here is persisted; ``project_id`` is generated when not given.
    """
    for field in REQUIRED_FIELDS:
        if data.get(field) in (None, ''):
            raise ValidationError('%(field)s is required.', field=field)

    structure = _choice(data['structure'], STRUCTURES, 'structure')
    deliverables = data.get('deliverables') or []
    if structure == SIMPLE and not deliverables:
        deliverables = [new_deliverable(data['name'])]

    editor_ids = data.get('editor_ids') or []
    if not isinstance(editor_ids, list):
        raise ValidationError('editor_ids must be a list.')

    return {
        'id': project_id or new_id(),
        'name': data['name'].strip(),
        'client': data['client'].strip(),
        'type': (data.get('type') or '').strip(),
        'structure': structure,
        'status': _choice(data['status'], STATUSES, 'status'),
        'priority': _choice(data['priority'], PRIORITIES, 'priority'),
        'description': data.get('description') or '',
        'start_date': check_iso_date(data['start_date'], 'start_date'),
        'deadline': check_iso_date(data['deadline'], 'deadline'),
        'version_deadlines': _version_deadlines(data),
        'hours_budgeted': _hours_budgeted(data.get('hours_budgeted')),
        'hours_used': 0,
        'editor_ids': [str(i) for i in editor_ids],
        'deliverables': normalize_deliverables(structure, deliverables),
        'comments': [],
        'time_logs': [],
    }


def update_project(current, data):
    """Replace the editable fields of ``current`` with ``data``.

    Logged hours, comments, time logs and the version history of deliverables
    that keep their id are carried over; they cannot be rewritten by an edit.
    An edit that leaves out the content keeps the current deliverables.
    """
    data = dict(data)
    existing = current.get('deliverables') or []
    submitted = data.get('deliverables') or []
    if not submitted:
        data['deliverables'] = copy.deepcopy(existing)
    elif data.get('structure') == SIMPLE and len(submitted) == 1 and len(existing) == 1:
        # A simple project's one deliverable is the same item across edits
        only = dict(submitted[0])
        if not only.get('id'):
            only['id'] = existing[0]['id']
            only['status'] = only.get('status') or existing[0].get('status')
        data['deliverables'] = [only]
    updated = build_project(data, project_id=current['id'])
    history = {d['id']: d.get('versions') or [] for d in current.get('deliverables') or []}
    for deliverable in updated['deliverables']:
        deliverable['versions'] = copy.deepcopy(history.get(deliverable['id'], []))
    updated['hours_used'] = current.get('hours_used') or 0
    updated['comments'] = copy.deepcopy(current.get('comments') or [])
    updated['time_logs'] = copy.deepcopy(current.get('time_logs') or [])
    return updated


def change_status(project, status):
    # Any transition is allowed, including reopening a finished project
    updated = copy.deepcopy(project)
    updated['status'] = _choice(status, STATUSES, 'status')
    return updated


def add_time_log(project, log):
    """Append ``log`` and add its hours to ``hours_used`` in the same record."""
    updated = copy.deepcopy(project)
    updated['time_logs'] = updated.get('time_logs') or []
    updated['time_logs'].append(dict(log))
    updated['hours_used'] = (updated.get('hours_used') or 0) + log['hours']
    return updated


def add_version(project, deliverable_id, version):
    """Append a version to one deliverable; a Final version finishes that deliverable only."""
    updated = copy.deepcopy(project)
    for deliverable in updated.get('deliverables') or []:
        if deliverable['id'] == deliverable_id:
            deliverable.setdefault('versions', []).append(dict(version))
            if is_final(version):
                deliverable['status'] = FINISHED
            return updated
    raise NotFoundError('Deliverable %(id)s not found.', id=deliverable_id)


def add_comment(project, comment):
    updated = copy.deepcopy(project)
    updated['comments'] = updated.get('comments') or []
    updated['comments'].append(dict(comment))
    return updated
