# backend/projectmanager/schemas/user.py
from typing import List, Optional
from pydantic import Field
from .base import BaseSchema, TimestampMixin

class UserBase(BaseSchema):
    username: str = Field(min_length=1)
    email: str = Field(min_length=3)
    phone: Optional[str] = None
    company_id: Optional[int] = None

class UserCreate(UserBase):
    password: str = Field(min_length=1)
    roles: Optional[List[str]] = None

class UserUpdate(BaseSchema):
    username: Optional[str] = Field(default=None, min_length=1)
    email: Optional[str] = Field(default=None, min_length=3)
    phone: Optional[str] = None
    company_id: Optional[int] = None
    roles: Optional[List[str]] = None
    password: Optional[str] = Field(default=None, min_length=1)
    old_password: Optional[str] = None

class User(UserBase, TimestampMixin):
    id: int
    roles: List[str] = []
    project_ids: List[int] = []

class LoginRequest(BaseSchema):
    username: str
    password: str

class LoginResponse(BaseSchema):
    user_id: int
    username: str
    roles: List[str]
    token: str
