# backend/projectmanager/services/__init__.py
from .exceptions import (
    ServiceError, ValidationError, UploadRejectedError, AuthenticationError,
    OldPasswordMissingError, OldPasswordMismatchError, AuthorizationError,
    NotFoundError, ConflictError, RelationshipError
)

__all__ = [
    "ServiceError", "ValidationError", "UploadRejectedError", "AuthenticationError",
    "OldPasswordMissingError", "OldPasswordMismatchError", "AuthorizationError",
    "NotFoundError", "ConflictError", "RelationshipError"
]
