# backend/projectmanager/auth/__init__.py
from .guards import Role, check_roles, current_identity, require_role, require_any_role
from .passwords import hash_password, verify_password
from .tokens import Identity, TokenService

__all__ = [
    "Role", "check_roles", "current_identity", "require_role", "require_any_role",
    "hash_password", "verify_password",
    "Identity", "TokenService"
]
