# backend/projectmanager/models/__init__.py
from ..database import Base
from .associations import project_members, company_contacts
from .user import User
from .company import Company
from .project import Project
from .document import Document
from .comment import Comment

__all__ = [
    "Base",
    "project_members",
    "company_contacts",
    "User",
    "Company",
    "Project",
    "Document",
    "Comment"
]
