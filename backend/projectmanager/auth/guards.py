# backend/projectmanager/auth/guards.py
"""
Per-route role requirements.

Roles form a flat set: holding "admin" does not satisfy a route that requires
"user". Each route declares its requirement in its own signature through one
of the dependencies below.
"""
import enum

from fastapi import Depends, Request

from ..services.exceptions import AuthenticationError, AuthorizationError
from ..utils.logging import api_logger
from .tokens import Identity


class Role(str, enum.Enum):
    USER = "user"
    ADMIN = "admin"


def check_roles(identity: Identity, *roles: Role) -> bool:
    """True when the identity is authenticated and holds every listed role"""
    return identity.authenticated and all(identity.has_role(role.value) for role in roles)


def current_identity(request: Request) -> Identity:
    """Dependency for public routes: the caller's identity, possibly anonymous"""
    return getattr(request.state, "identity", None) or Identity.anonymous()


def _deny(identity: Identity, request: Request, required) -> None:
    if not identity.authenticated:
        api_logger.warning("Unauthenticated request to protected route", extra={
            "path": request.url.path,
            "required_roles": required
        })
        raise AuthenticationError("Not authenticated.")

    api_logger.warning("Request denied for missing role", extra={
        "path": request.url.path,
        "user_id": identity.user_id,
        "required_roles": required
    })
    raise AuthorizationError("Insufficient role.")


def require_role(*roles: Role):
    """Dependency factory: require all of the given roles"""
    async def _require_role(request: Request, identity: Identity = Depends(current_identity)) -> Identity:
        if not check_roles(identity, *roles):
            _deny(identity, request, [role.value for role in roles])
        return identity

    return _require_role


def require_any_role(*roles: Role):
    """Dependency factory: require at least one of the given roles"""
    async def _require_any_role(request: Request, identity: Identity = Depends(current_identity)) -> Identity:
        if not any(check_roles(identity, role) for role in roles):
            _deny(identity, request, [role.value for role in roles])
        return identity

    return _require_any_role
