"""
StudioTrack - Application Factory
"""
import os
import click
from flask import Flask, request
from dotenv import load_dotenv

from studiotrack.extensions import db, babel
from studiotrack.errors import register_error_handlers
from studiotrack.routes import register_blueprints
from config.settings import config


def get_locale():
    """Determine the best locale for the user."""
    lang = request.cookies.get('babel_translation')
    if lang:
        return lang
    return request.accept_languages.best_match(['en', 'pt'])


def create_app(config_name=None):
    """Application Factory."""
    load_dotenv()

    if config_name is None:
        config_name = os.environ.get('FLASK_ENV', 'development')

    app = Flask(__name__)
    app.config.from_object(config.get(config_name, config['default']))
    # Module loggers (studiotrack.*) propagate to the app logger
    app.logger.setLevel(app.config['LOG_LEVEL'])

    # Initialize extensions
    db.init_app(app)
    babel.init_app(app, locale_selector=get_locale)

    register_error_handlers(app)

    # Register blueprints
    register_blueprints(app)

    # CLI Commands
    register_cli_commands(app)

    return app


def register_cli_commands(app):
    """Register CLI commands."""

    @app.cli.command("init-db")
    def init_db_command():
        """Creates database tables."""
        db.create_all()
        print("Initialized the database.")

    @app.cli.command("seed-demo")
    def seed_demo_command():
        """Adds the demo team and one project of each structure."""
        from studiotrack.services.snapshot import seed_demo
        added = seed_demo(app.config['DEFAULT_MEMBER_PASSWORD'])
        print(f"Added {added['users']} users and {added['projects']} projects.")

    @app.cli.command("export-snapshot")
    @click.argument("path")
    def export_snapshot_command(path):
        """Writes all users and projects to a JSON file."""
        from studiotrack.services.snapshot import export_snapshot
        stats = export_snapshot(path)
        print(f"Exported {stats['users']} users and {stats['projects']} projects to {path}.")

    @app.cli.command("import-snapshot")
    @click.argument("path")
    def import_snapshot_command(path):
        """Loads users and projects from a JSON file written by export-snapshot."""
        from studiotrack.services.snapshot import import_snapshot
        if not os.path.exists(path):
            print(f"File not found: {path}")
            return
        stats = import_snapshot(path)
        print(f"Imported {stats['users']} users and {stats['projects']} projects.")
