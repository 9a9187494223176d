# backend/projectmanager/auth/tokens.py
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import FrozenSet, Iterable, Optional

import jwt

from ..utils.logging import service_logger


@dataclass(frozen=True)
class Identity:
    """Who is making the request, as attached by the auth middleware."""
    user_id: Optional[int] = None
    username: Optional[str] = None
    roles: FrozenSet[str] = field(default_factory=frozenset)
    authenticated: bool = False

    @classmethod
    def anonymous(cls) -> "Identity":
        return cls()

    def has_role(self, role: str) -> bool:
        return self.authenticated and role in self.roles


class TokenService:
    """Issues and verifies signed session tokens.

    Tokens are stateless: there is no revocation list, a token stays valid
    until its ``exp`` claim passes.
    """

    def __init__(self, secret: str, algorithm: str = "HS256", ttl: timedelta = timedelta(hours=24)):
        if not secret:
            raise ValueError("A token secret is required")
        self.secret = secret
        self.algorithm = algorithm
        self.ttl = ttl

    def issue(self, user_id: int, username: str, roles: Iterable[str], ttl: Optional[timedelta] = None) -> str:
        now = datetime.now(timezone.utc)
        payload = {
            "sub": str(user_id),
            "username": username,
            "roles": list(roles or []),
            "iat": now,
            "exp": now + (ttl if ttl is not None else self.ttl),
        }
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def verify(self, token: str) -> Optional[Identity]:
        """Return the identity embedded in the token, or None when it is not valid"""
        try:
            payload = jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                options={"require": ["exp", "sub"]}
            )
        except jwt.ExpiredSignatureError:
            service_logger.info("Rejected expired token")
            return None
        except jwt.InvalidTokenError as e:
            service_logger.info("Rejected invalid token", extra={"error": str(e)})
            return None

        try:
            user_id = int(payload["sub"])
        except (TypeError, ValueError):
            return None

        roles = payload.get("roles") or []
        if not isinstance(roles, list):
            return None

        return Identity(
            user_id=user_id,
            username=payload.get("username"),
            roles=frozenset(str(role) for role in roles),
            authenticated=True
        )
