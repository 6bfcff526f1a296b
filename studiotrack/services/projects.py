"""Project service - loads, changes and writes back whole project aggregates."""
import logging

from sqlalchemy.exc import SQLAlchemyError

from studiotrack.domain import commands
from studiotrack.domain.constants import IN_PROGRESS
from studiotrack.domain.errors import NotFoundError, ValidationError
from studiotrack.domain.records import new_comment, new_time_log, new_version
from studiotrack.domain.state import initial_state
from studiotrack.domain.views import visible_projects
from studiotrack.models import db, Project, User

logger = logging.getLogger(__name__)


def commit(action):
    """Commit the session; on failure roll back so the next read sees stored state."""
    try:
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        logger.exception('Failed to %s', action)
        raise


def load_state(current_user=None):
    """All users and projects, newest project first."""
    users = [u.to_dict() for u in User.query.order_by(User.name).all()]
    projects = [p.to_dict() for p in Project.query.order_by(Project.created_at.desc()).all()]
    return initial_state(users, projects, current_user)


def can_view(user, project):
    return bool(visible_projects(user, [project]))


def _get_row(project_id, user, lock=False):
    query = Project.query.filter_by(id=project_id)
    if lock:
        query = query.with_for_update()
    row = query.first()
    if row is None or not can_view(user, row.to_dict()):
        raise NotFoundError('Project %(id)s not found.', id=project_id)
    return row


def get_project(project_id, user):
    return _get_row(project_id, user).to_dict()


def create_project(data):
    record = commands.build_project(data)
    row = Project.from_record(record)
    db.session.add(row)
    commit('create project')
    logger.info('Created project %s (%s)', row.id, row.name)
    return row.to_dict()


def update_project(project_id, data, user):
    row = _get_row(project_id, user)
    row.apply(commands.update_project(row.to_dict(), data))
    commit('update project')
    return row.to_dict()


def change_status(project_id, status, user):
    row = _get_row(project_id, user)
    row.apply(commands.change_status(row.to_dict(), status))
    commit('change project status')
    return row.to_dict()


def delete_project(project_id, user):
    """Remove the project and everything it owns. Irreversible."""
    row = _get_row(project_id, user)
    db.session.delete(row)
    commit('delete project')
    logger.info('Deleted project %s by %s', project_id, user['id'])


def log_time(project_id, user, hours, date, description, active_only=False):
    """Append a time log and bump ``hours_used`` in one transaction.

    The row is read ``FOR UPDATE`` so two sessions logging hours on the same
    project cannot overwrite each other's increment. With ``active_only`` the
    project must be In Progress.
    """
    entry = new_time_log(user, hours, date, description)
    row = _get_row(project_id, user, lock=True)
    if active_only and row.status != IN_PROGRESS:
        raise ValidationError('Hours can only be logged here on projects in progress.')
    row.apply(commands.add_time_log(row.to_dict(), entry))
    commit('log time')
    return row.to_dict()


def submit_version(project_id, deliverable_id, user, version_type, link, notes=''):
    version = new_version(version_type, link, notes)
    row = _get_row(project_id, user, lock=True)
    row.apply(commands.add_version(row.to_dict(), deliverable_id, version))
    commit('add version')
    return row.to_dict()


def post_comment(project_id, user, text):
    comment = new_comment(user, text)
    row = _get_row(project_id, user, lock=True)
    row.apply(commands.add_comment(row.to_dict(), comment))
    commit('add comment')
    return row.to_dict()
