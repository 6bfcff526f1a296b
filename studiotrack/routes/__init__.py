"""Routes package - Blueprint registration."""
from studiotrack.routes.main import main_bp
from studiotrack.routes.auth import auth_bp
from studiotrack.routes.team import team_bp
from studiotrack.routes.projects import projects_bp
from studiotrack.routes.dashboard import dashboard_bp
from studiotrack.routes.reports import reports_bp


def register_blueprints(app):
    """Register all blueprints with the Flask app."""
    app.register_blueprint(main_bp)
    app.register_blueprint(auth_bp)
    app.register_blueprint(team_bp)
    app.register_blueprint(projects_bp)
    app.register_blueprint(dashboard_bp)
    app.register_blueprint(reports_bp)
