# backend/projectmanager/schemas/document.py
from typing import Optional
from .base import BaseSchema, TimestampMixin

class DocumentFile(BaseSchema):
    name: str
    path: Optional[str] = None
    type: str
    size: int = 0

class DocumentUpdate(BaseSchema):
    description: Optional[str] = None
    accepted: Optional[bool] = None

class Document(BaseSchema, TimestampMixin):
    id: int
    project_id: int
    description: Optional[str] = None
    accepted: bool = False
    file: DocumentFile
