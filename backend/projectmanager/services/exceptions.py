# backend/projectmanager/services/exceptions.py
"""Domain errors raised by stores, guards and helpers.

Each error carries the HTTP status it maps to and a generic client message;
``str(error)`` holds the specific reason shown in the ``error`` field.
"""


class ServiceError(Exception):
    status_code = 500
    message = "Unexpected error."


class ValidationError(ServiceError):
    """A required field is missing or a value is not acceptable."""
    status_code = 400
    message = "Invalid request."


class UploadRejectedError(ValidationError):
    """The uploaded file is too large or of a type outside the allow-list."""


class AuthenticationError(ServiceError):
    """Bad credentials, or no valid token on a route that needs one."""
    status_code = 401
    message = "Authorization failed."


class OldPasswordMissingError(AuthenticationError):
    pass


class OldPasswordMismatchError(AuthenticationError):
    pass


class AuthorizationError(ServiceError):
    """Valid identity, but it lacks the required role or ownership."""
    status_code = 403
    message = "Unauthorized."


class NotFoundError(ServiceError):
    status_code = 404
    message = "Request failed."


class ConflictError(ServiceError):
    """A uniqueness constraint would be violated."""
    status_code = 409
    message = "Request failed."


class RelationshipError(ServiceError):
    """Linking or unlinking a child record on its parent project failed."""
    status_code = 500
    message = "Request failed."
