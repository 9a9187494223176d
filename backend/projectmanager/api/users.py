# backend/projectmanager/api/users.py
from typing import Optional

from fastapi import APIRouter, Depends

from ..auth.guards import Role, current_identity, require_any_role, require_role
from ..auth.tokens import Identity, TokenService
from ..schemas.user import LoginRequest, LoginResponse, User as UserSchema, UserCreate, UserUpdate
from ..services.pagination import PageParams, page_params
from ..services.users import UserStore
from ..utils.logging import api_logger
from .deps import get_token_service, get_user_store, serializer

router = APIRouter(prefix="/users", tags=["users"])

serialize_user = serializer(UserSchema)


@router.get("")
async def list_users(
        username: Optional[str] = None,
        email: Optional[str] = None,
        params: PageParams = Depends(page_params),
        identity: Identity = Depends(require_role(Role.USER)),
        store: UserStore = Depends(get_user_store)
):
    """List users, paginated and filtered by username/email"""
    api_logger.info("Listing users", extra={"endpoint": "/users", "method": "GET"})

    page = store.list({"username": username, "email": email}, params)

    api_logger.info("Sending response", extra={"user_count": len(page.items)})
    return {"message": "Paginated results", "users": page.to_dict(serialize_user)}


# Handlers that hash or check passwords are sync so they run in the threadpool
@router.post("/login")
def login(
        credentials: LoginRequest,
        store: UserStore = Depends(get_user_store),
        tokens: TokenService = Depends(get_token_service)
):
    api_logger.info("Login attempt", extra={"username": credentials.username})

    user = store.authenticate(credentials.username, credentials.password)
    token = tokens.issue(user.id, user.username, user.roles)

    api_logger.info("Login succeeded", extra={"user_id": user.id})
    response = LoginResponse(user_id=user.id, username=user.username, roles=user.roles, token=token)
    return {"message": "Login successful.", **response.dump()}


@router.post("")
def register_user(
        user: UserCreate,
        identity: Identity = Depends(current_identity),
        store: UserStore = Depends(get_user_store)
):
    api_logger.info("Registering new user", extra={"username": user.username})

    db_user = store.register(user, actor=identity)

    api_logger.info("User registered successfully", extra={"user_id": db_user.id})
    return {"message": "New user created.", "result": serialize_user(db_user)}


@router.get("/{user_id}")
async def get_user(
        user_id: int,
        identity: Identity = Depends(require_role(Role.USER)),
        store: UserStore = Depends(get_user_store)
):
    api_logger.info("Fetching user", extra={"user_id": user_id})
    user = store.get_by_id(user_id)
    return {"message": "User found.", "user": serialize_user(user)}


@router.put("/{user_id}")
def update_user(
        user_id: int,
        user: UserUpdate,
        identity: Identity = Depends(require_any_role(Role.USER, Role.ADMIN)),
        store: UserStore = Depends(get_user_store)
):
    api_logger.info("Updating user", extra={
        "user_id": user_id,
        "actor_id": identity.user_id,
        "update_fields": [f for f in user.model_dump(exclude_unset=True) if f not in ("password", "old_password")]
    })

    db_user = store.update_user(user_id, user, actor=identity)

    api_logger.info("User updated successfully", extra={"user_id": user_id})
    return {"message": "User updated.", "user": serialize_user(db_user)}


@router.delete("/{user_id}")
async def delete_user(
        user_id: int,
        identity: Identity = Depends(require_role(Role.ADMIN)),
        store: UserStore = Depends(get_user_store)
):
    api_logger.info("Deleting user", extra={"user_id": user_id})

    user = store.delete(user_id)

    api_logger.info(f"Successfully deleted user {user_id}")
    return {"message": "User deleted.", "user": serialize_user(user)}
