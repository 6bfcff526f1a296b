"""Flask extensions, initialized in the application factory."""
from flask_babel import Babel
from flask_sqlalchemy import SQLAlchemy
from sqlalchemy.dialects.postgresql import JSONB

db = SQLAlchemy()
babel = Babel()

# JSONB on PostgreSQL, plain JSON elsewhere (local SQLite, tests)
JSONType = db.JSON().with_variant(JSONB(), 'postgresql')
