"""Models package - Re-exports all models for convenient importing."""
from studiotrack.extensions import db
from studiotrack.models.user import User
from studiotrack.models.project import Project

__all__ = ['db', 'User', 'Project']
