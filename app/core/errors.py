"""
Domain exceptions

Raised by services and repositories, translated to HTTP responses by the
handlers registered in app.main.
"""


class ProntoSocorroError(Exception):
    """Base class for all application errors"""
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(ProntoSocorroError):
    """Malformed input (unknown stage, blank re-evaluation reason, bad id format)"""
    status_code = 422


class ReevaluationPendingError(ValidationError):
    """A re-evaluation request is still waiting to be seen by staff"""
    status_code = 409


class NotFoundError(ProntoSocorroError):
    status_code = 404


class DuplicateError(ProntoSocorroError):
    status_code = 409


class PersistenceError(ProntoSocorroError):
    """Storage read/write failed"""
    status_code = 503


class AuthenticationError(ProntoSocorroError):
    status_code = 401


class PermissionDeniedError(ProntoSocorroError):
    status_code = 403
