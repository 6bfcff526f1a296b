"""Domain layer - plain records, derived views and mutation commands.

Nothing in this package touches Flask or the database; projects and users are
handled as dicts shaped like ``Project.to_dict()`` and ``User.to_dict()``.
"""
