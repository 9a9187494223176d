# backend/projectmanager/services/users.py
from typing import Any, Dict, Optional

from sqlalchemy.orm import Session

from ..auth.guards import Role, check_roles
from ..auth.passwords import hash_password, verify_password
from ..auth.tokens import Identity
from ..models import Company, User
from ..schemas.user import UserCreate, UserUpdate
from ..utils.logging import service_logger
from .exceptions import (
    AuthenticationError, AuthorizationError, OldPasswordMismatchError, OldPasswordMissingError
)
from .store import ResourceStore

DEFAULT_ROLES = [Role.USER.value]


class UserStore(ResourceStore[User]):
    model = User
    resource_name = "User"
    plural_name = "users"
    unique_fields = ("username", "email")
    filter_fields = ("username", "email")
    sort_fields = ("id", "username", "email", "created_at", "updated_at")
    required_fields = ("username", "email", "password")
    preload = ("projects",)

    def __init__(self, db: Session, bcrypt_rounds: int = 10):
        super().__init__(db)
        self.bcrypt_rounds = bcrypt_rounds

    def register(self, data: UserCreate, actor: Optional[Identity] = None) -> User:
        """Create an account. Only admins choose roles; everyone else gets ``user``."""
        fields = data.model_dump()
        if not (actor and check_roles(actor, Role.ADMIN)) or not fields.get("roles"):
            fields["roles"] = list(DEFAULT_ROLES)
        user = self.create(fields)

        service_logger.info("User registered", extra={"user_id": user.id, "roles": user.roles})
        return user

    def authenticate(self, username: str, password: str) -> User:
        user = self.query().filter(User.username == username).first()
        if user is None or not verify_password(password, user.password):
            service_logger.warning("Failed login attempt", extra={"username": username})
            raise AuthenticationError("Username or password is incorrect.")
        return user

    def update_user(self, user_id: int, data: UserUpdate, actor: Identity) -> User:
        """Partial update on behalf of ``actor``.

        Non-admins may only edit themselves, may not touch roles, and must
        confirm a password change with the current password.
        """
        fields = data.model_dump(exclude_unset=True)
        is_admin = check_roles(actor, Role.ADMIN)

        if not is_admin and actor.user_id != user_id:
            raise AuthorizationError("Users may only update their own account.")
        if "roles" in fields and not is_admin:
            raise AuthorizationError("Only admins may change roles.")

        user = self.get_by_id(user_id)
        old_password = fields.pop("old_password", None)

        if fields.get("password"):
            if not is_admin:
                if not old_password:
                    raise OldPasswordMissingError("Old password not provided.")
                if not verify_password(old_password, user.password):
                    raise OldPasswordMismatchError("Old password does not match.")
        else:
            fields.pop("password", None)

        return self.update(user_id, fields)

    def _apply(self, record: User, fields: Dict[str, Any]) -> None:
        fields = dict(fields)
        fields.pop("old_password", None)

        password = fields.pop("password", None)
        if password:
            record.password = hash_password(password, rounds=self.bcrypt_rounds)

        if "roles" in fields:
            record.roles = list(dict.fromkeys(fields.pop("roles") or []))

        if "company_id" in fields:
            self.resolve_one(Company, fields["company_id"], "Company")

        super()._apply(record, fields)

    def ensure_admin(self, username: str, email: str, password: str) -> Optional[User]:
        """Create the bootstrap admin account unless the username is taken"""
        if self.query().filter(User.username == username).first() is not None:
            return None

        user = self.create({
            "username": username,
            "email": email,
            "password": password,
            "roles": [Role.USER.value, Role.ADMIN.value],
        })
        service_logger.info("Bootstrap admin created", extra={"user_id": user.id, "username": username})
        return user
