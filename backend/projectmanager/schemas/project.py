# backend/projectmanager/schemas/project.py
from datetime import datetime
from typing import List, Optional
from pydantic import Field
from .base import BaseSchema, TimestampMixin

class ProjectBase(BaseSchema):
    title: str = Field(min_length=1)
    description: Optional[str] = None
    deadline: Optional[datetime] = None
    manager_id: Optional[int] = None
    project_type: Optional[str] = None
    project_code: Optional[str] = Field(default=None, alias="projectId")
    published: bool = False
    finished: bool = False

class ProjectCreate(ProjectBase):
    company_id: int
    user_ids: List[int] = []

class ProjectUpdate(BaseSchema):
    title: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    deadline: Optional[datetime] = None
    manager_id: Optional[int] = None
    project_type: Optional[str] = None
    project_code: Optional[str] = Field(default=None, alias="projectId")
    published: Optional[bool] = None
    finished: Optional[bool] = None
    company_id: Optional[int] = None
    user_ids: Optional[List[int]] = None

class Project(ProjectBase, TimestampMixin):
    id: int
    company_id: Optional[int] = None
    user_ids: List[int] = []
    document_ids: List[int] = []
    comment_ids: List[int] = []

class ProjectTitle(BaseSchema):
    id: int
    title: str
