"""Service error taxonomy.

Every error carries the HTTP status it is answered with; the handlers
registered in :func:`montarota.main.create_app` turn them into
``{"error": message}`` responses.
"""

from __future__ import annotations


class MontaRotaError(Exception):
    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(MontaRotaError):
    """Missing or malformed input."""

    status_code = 400


class InvalidStatus(ValidationError):
    pass


class InvalidCode(ValidationError):
    pass


class MissingCoordinates(ValidationError):
    pass


class AuthError(MontaRotaError):
    """Missing, invalid or expired credential."""

    status_code = 401


class NotFoundError(MontaRotaError):
    status_code = 404


class ConflictError(MontaRotaError):
    """The request is well formed but clashes with the record's current state."""

    status_code = 400


class AlreadyConfirmed(ConflictError):
    pass


class UpstreamError(MontaRotaError):
    """The datastore rejected or failed a call."""

    status_code = 400
