"""Domain errors raised by services and translated to HTTP responses by the routes."""


class ServiceError(Exception):
    """Base class; status_code is the HTTP status the route layer responds with."""

    status_code: int = 500

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class InvalidInputError(ServiceError):
    """Request is well-formed but rejected (duplicate email/username, bad image data)."""

    status_code = 400


class WrongCredentialError(ServiceError):
    """Password does not match the stored hash."""

    status_code = 400


class PermissionDeniedError(ServiceError):
    """Caller may not perform this change (e.g. self-registering as admin)."""

    status_code = 403


class NotFoundError(ServiceError):
    """No record with the given id or email."""

    status_code = 404
