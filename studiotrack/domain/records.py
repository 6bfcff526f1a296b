"""Record builders for the entries stored inside a project's JSON columns."""
import math
import re
import uuid
from datetime import datetime
from urllib.parse import urlencode

from studiotrack.domain.constants import (
    AVATAR_URL, COURSE, FINAL, IN_PROGRESS, SIMPLE, STATUSES, UNTITLED, VERSION_TYPES,
)
from studiotrack.domain.errors import ValidationError

ISO_DATE = re.compile(r'^\d{4}-\d{2}-\d{2}$')


def new_id():
    return str(uuid.uuid4())


def now_iso():
    return datetime.utcnow().replace(microsecond=0).isoformat()


def avatar_url(name):
    """Deterministic avatar image URL for a display name."""
    query = urlencode({'name': name or '', 'background': 'random', 'color': 'fff'})
    return f"{AVATAR_URL}?{query}"


def check_iso_date(value, field='date'):
    """Return ``value`` if it is a zero-padded YYYY-MM-DD string."""
    if not isinstance(value, str) or not ISO_DATE.match(value):
        raise ValidationError('%(field)s must be a YYYY-MM-DD date.', field=field)
    try:
        datetime.strptime(value, '%Y-%m-%d')
    except ValueError:
        raise ValidationError('%(field)s must be a valid date.', field=field)
    return value


def parse_hours(value):
    """Positive number of hours in 0.5 increments."""
    try:
        hours = float(value)
    except (TypeError, ValueError):
        raise ValidationError('Hours must be a number.')
    if not math.isfinite(hours):
        raise ValidationError('Hours must be a finite number.')
    if hours <= 0:
        raise ValidationError('Hours must be positive.')
    if not (hours * 2).is_integer():
        raise ValidationError('Hours must be logged in 0.5 increments.')
    return hours


def new_deliverable(title, group=None, status=IN_PROGRESS, description=None, deliverable_id=None):
    return {
        'id': deliverable_id or new_id(),
        'title': (title or '').strip() or UNTITLED,
        'group': (group or '').strip() or None,
        'status': status or IN_PROGRESS,
        'description': description or None,
        'versions': [],
    }


def new_version(version_type, link, notes=''):
    """An immutable submission of a deliverable."""
    if version_type not in VERSION_TYPES:
        raise ValidationError('Invalid version type: %(value)s.', value=version_type)
    if not link:
        raise ValidationError('A link to the submitted file is required.')
    return {
        'id': new_id(),
        'version_type': version_type,
        'link': link,
        'submitted_at': now_iso(),
        'notes': notes or '',
    }


def new_time_log(user, hours, date, description):
    """Hours worked on a project.

    The user's name is copied into the entry so the log still reads correctly
    after the profile is removed.
    """
    if not description:
        raise ValidationError('A description of the work is required.')
    return {
        'id': new_id(),
        'user_id': user['id'],
        'user_name': user['name'],
        'hours': parse_hours(hours),
        'date': check_iso_date(date),
        'description': description,
    }


def new_comment(user, text):
    text = (text or '').strip()
    if not text:
        raise ValidationError('Comment text is required.')
    return {
        'id': new_id(),
        'user_id': user['id'],
        'user_name': user['name'],
        'text': text,
        'created_at': now_iso(),
    }


def is_final(version):
    return version.get('version_type') == FINAL


def normalize_deliverables(structure, deliverables):
    """Fill defaults on submitted deliverables and enforce the structure rules.

    Simple projects keep their single deliverable without a group; Course
    projects require a module name on every deliverable.
    """
    normalized = []
    for item in deliverables or []:
        status = item.get('status') or IN_PROGRESS
        if status not in STATUSES:
            raise ValidationError('Invalid deliverable status: %(value)s.', value=status)
        deliverable = new_deliverable(
            item.get('title'),
            group=item.get('group'),
            status=status,
            description=item.get('description'),
            deliverable_id=item.get('id'),
        )
        deliverable['versions'] = list(item.get('versions') or [])
        normalized.append(deliverable)

    if structure == SIMPLE:
        for deliverable in normalized:
            deliverable['group'] = None
        if len(normalized) > 1:
            raise ValidationError('A simple project has exactly one deliverable.')
    elif not normalized:
        raise ValidationError('Add at least one item to the project content.')

    if structure == COURSE:
        for deliverable in normalized:
            if not deliverable['group']:
                raise ValidationError('"%(title)s" must belong to a module.', title=deliverable['title'])
    return normalized


def module_names(deliverables):
    """Distinct group names in order of first appearance."""
    names = []
    for deliverable in deliverables:
        group = deliverable.get('group')
        if group and group not in names:
            names.append(group)
    return names


def group_deliverables(project):
    """Two-level view of a project's content: ``[(group, [deliverable, ...])]``.

    Ungrouped deliverables are collected under ``None``, listed first.
    """
    deliverables = project.get('deliverables') or []
    groups = []
    ungrouped = [d for d in deliverables if not d.get('group')]
    if ungrouped:
        groups.append((None, ungrouped))
    for name in module_names(deliverables):
        groups.append((name, [d for d in deliverables if d.get('group') == name]))
    return groups
