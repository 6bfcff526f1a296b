"""Configuration classes, selected by FLASK_ENV."""
import os


class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY', 'dev_key_please_change')

    # Local SQLite file when no hosted database is configured
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL', 'sqlite:///studiotrack.db')
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Password given to members added by an admin
    DEFAULT_MEMBER_PASSWORD = os.environ.get('DEFAULT_MEMBER_PASSWORD', '123')

    BABEL_DEFAULT_LOCALE = 'en'
    LANGUAGES = ['en', 'pt']

    WORKLOAD_CHART_LIMIT = 8
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')


class DevelopmentConfig(Config):
    DEBUG = True
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'DEBUG')


class TestingConfig(Config):
    TESTING = True
    SECRET_KEY = 'testing'
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'


class ProductionConfig(Config):
    DEBUG = False


config = {
    'development': DevelopmentConfig,
    'testing': TestingConfig,
    'production': ProductionConfig,
    'default': DevelopmentConfig,
}
