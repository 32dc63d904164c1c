"""Service-layer errors.

Services raise these; the API layer turns them into HTTP responses.
"""


class TallyError(Exception):
    """Base class for all service errors."""

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(TallyError):
    """Malformed or missing input. Raised before any mutation."""

    status_code = 422


class NotFoundError(TallyError):
    """Referenced ticket, project or staff member does not exist."""

    status_code = 404


class ConflictError(TallyError):
    """Uniqueness violation, e.g. a duplicate staff email."""

    status_code = 409


class AuthorizationError(TallyError):
    """Principal's role does not permit the operation."""

    status_code = 403
