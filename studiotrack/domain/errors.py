"""Domain errors, translated to HTTP responses in ``studiotrack.errors``.

``message`` is the untranslated text with ``%(name)s`` placeholders; the
values go in ``params`` so the handler can look the text up in the catalog
before filling them in.
"""


class DomainError(Exception):
    status_code = 400

    def __init__(self, message, **params):
        super().__init__(message % params if params else message)
        self.message = message
        self.params = params


class ValidationError(DomainError):
    """Missing or malformed input, raised before anything is written."""
    status_code = 400


class NotFoundError(DomainError):
    status_code = 404
