"""Main routes - service banner, health check, language switching."""
from flask import Blueprint, current_app, jsonify, make_response
from sqlalchemy import text

from studiotrack.errors import is_configuration_error
from studiotrack.models import db

main_bp = Blueprint('main', __name__)


@main_bp.route('/')
def index():
    return jsonify(message='StudioTrack production tracking API')


@main_bp.route('/health')
def health():
    response = {'backend': 'running', 'database': 'not available', 'needs_configuration': False}
    try:
        db.session.execute(text('SELECT 1'))
        response['database'] = 'connected'
    except Exception as e:
        db.session.rollback()
        current_app.logger.warning('Health check failed: %s', e)
        response['database'] = f'error: {str(e)[:80]}'
        response['needs_configuration'] = is_configuration_error(e)
        return jsonify(response), 503
    return jsonify(response)


@main_bp.route('/set_language/<lang>')
def set_language(lang):
    if lang not in current_app.config['LANGUAGES']:
        lang = current_app.config['BABEL_DEFAULT_LOCALE']
    resp = make_response(jsonify(language=lang))
    resp.set_cookie('babel_translation', lang)
    return resp
