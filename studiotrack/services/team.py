"""Team service - registration, credentials and profile management."""
import logging
import re

from werkzeug.security import check_password_hash, generate_password_hash

from studiotrack.domain.constants import ADMIN, ASSISTANT, EDITOR, ROLES
from studiotrack.domain.errors import DomainError, NotFoundError, ValidationError
from studiotrack.domain.records import avatar_url
from studiotrack.models import db, User
from studiotrack.services.projects import commit

logger = logging.getLogger(__name__)

EMAIL_RE = re.compile(r'^[^@\s]+@[^@\s]+\.[^@\s]+$')


class AuthenticationError(DomainError):
    status_code = 401


class DuplicateEmailError(DomainError):
    status_code = 409


def is_valid_email(email):
    return bool(email and EMAIL_RE.match(email))


def _check_new_user(name, email, password, role):
    if not name or not name.strip():
        raise ValidationError('Name is required.')
    if not is_valid_email(email):
        raise ValidationError('Invalid email.')
    if not password:
        raise ValidationError('Password is required.')
    if role not in ROLES:
        raise ValidationError('Invalid role: %(role)s.', role=role)
    if User.query.filter_by(email=email).first() is not None:
        raise DuplicateEmailError('The email %(email)s is already registered.', email=email)


def _create_user(name, email, password, role):
    user = User(
        email=email,
        name=name.strip(),
        role=role,
        avatar=avatar_url(name.strip()),
        password_hash=generate_password_hash(password),
    )
    db.session.add(user)
    commit('create user')
    return user


def register(name, email, password, role=EDITOR):
    """Self sign-up. The very first profile becomes the admin."""
    if User.query.count() == 0:
        role = ADMIN
    elif role not in (EDITOR, ASSISTANT):
        role = EDITOR
    _check_new_user(name, email, password, role)
    user = _create_user(name, email, password, role)
    logger.info('Registered %s as %s', user.email, user.role)
    return user.to_dict()


def add_member(name, email, role, password):
    """Admin invite; ``password`` is the configured default unless one was chosen."""
    _check_new_user(name, email, password, role)
    user = _create_user(name, email, password, role)
    logger.info('Added team member %s as %s', user.email, user.role)
    return user.to_dict()


def authenticate(email, password):
    user = User.query.filter_by(email=email).first()
    if user is None or not user.password_hash or not check_password_hash(user.password_hash, password or ''):
        raise AuthenticationError('Invalid email or password.')
    return user.to_dict()


def get_user(user_id):
    user = db.session.get(User, user_id)
    if user is None:
        raise NotFoundError('User %(id)s not found.', id=user_id)
    return user


def list_users():
    return [u.to_dict() for u in User.query.order_by(User.name).all()]


def update_profile(user_id, name, new_password=None):
    """Rename (avatar follows the name) and optionally change password."""
    user = get_user(user_id)
    if not name or not name.strip():
        raise ValidationError('Name is required.')
    user.name = name.strip()
    user.avatar = avatar_url(user.name)
    if new_password:
        user.password_hash = generate_password_hash(new_password)
    commit('update profile')
    return user.to_dict()


def set_role(user_id, role, acting_user_id):
    if user_id == acting_user_id:
        raise ValidationError('You cannot change your own role.')
    if role not in ROLES:
        raise ValidationError('Invalid role: %(role)s.', role=role)
    user = get_user(user_id)
    user.role = role
    commit('change role')
    return user.to_dict()


def delete_user(user_id, acting_user_id):
    """Remove the profile row only.

    Projects keep the id in ``editor_ids`` and logs keep the name snapshot;
    readers resolve the dangling id to a removed-user placeholder.
    """
    if user_id == acting_user_id:
        raise ValidationError('You cannot remove yourself.')
    user = get_user(user_id)
    email = user.email
    db.session.delete(user)
    commit('delete user')
    logger.info('Removed user %s', email)
