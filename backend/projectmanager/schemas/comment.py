# backend/projectmanager/schemas/comment.py
from typing import Optional
from pydantic import Field
from .base import BaseSchema, TimestampMixin

class CommentBase(BaseSchema):
    title: Optional[str] = None
    body: str = Field(min_length=1)
    document_id: Optional[int] = None
    is_global: bool = True

class CommentCreate(CommentBase):
    project_id: int

class CommentUpdate(BaseSchema):
    title: Optional[str] = None
    body: Optional[str] = Field(default=None, min_length=1)
    is_global: Optional[bool] = None

class Comment(CommentBase, TimestampMixin):
    id: int
    author_id: int
    project_id: int
