"""Error handlers - every failure leaves the API as JSON ``{"error": ...}``."""
from flask import jsonify
from flask_babel import gettext as _
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import HTTPException

from studiotrack.domain.errors import DomainError
from studiotrack.extensions import db

# Substrings of driver errors meaning the database itself is unreachable or
# not set up, as opposed to a failed statement.
CONFIGURATION_MARKERS = [
    'could not connect',
    'connection refused',
    'could not translate host name',
    'password authentication failed',
    'does not exist',
    'no such table',
    'unable to open database file',
    'invalid api key',
]


def is_configuration_error(exc):
    message = str(exc).lower()
    return any(marker in message for marker in CONFIGURATION_MARKERS)


def register_error_handlers(app):
    """Register JSON error handlers on the app."""

    @app.errorhandler(DomainError)
    def handle_domain_error(exc):
        return jsonify(error=_(exc.message, **exc.params)), exc.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(exc):
        return jsonify(error=exc.description), exc.code

    @app.errorhandler(SQLAlchemyError)
    def handle_database_error(exc):
        db.session.rollback()
        if is_configuration_error(exc):
            app.logger.error('Database not configured: %s', exc)
            return jsonify(
                error=_('The database is not reachable or not configured.'),
                needs_configuration=True,
            ), 503
        app.logger.error('Database operation failed: %s', exc)
        return jsonify(error=_('The operation could not be saved. Reload and try again.')), 500
