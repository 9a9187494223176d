# backend/projectmanager/auth/middleware.py
from fastapi import Request

from .tokens import Identity


def bearer_token(authorization: str | None) -> str | None:
    """Extract the token from an 'Authorization: Bearer <token>' header value"""
    if not authorization:
        return None
    parts = authorization.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        return None
    return parts[1]


async def attach_identity(request: Request, call_next):
    """Populate request.state.identity from the bearer token.

    Never rejects: a missing or invalid token just leaves the request
    anonymous and the route's guard decides.
    """
    identity = None
    token = bearer_token(request.headers.get("Authorization"))
    if token:
        identity = request.app.state.token_service.verify(token)

    request.state.identity = identity or Identity.anonymous()
    return await call_next(request)
