# backend/projectmanager/schemas/__init__.py
from .user import User, UserCreate, UserUpdate, LoginRequest, LoginResponse
from .company import Company, CompanyCreate, CompanyUpdate, Address
from .project import Project, ProjectCreate, ProjectUpdate, ProjectTitle
from .document import Document, DocumentUpdate, DocumentFile
from .comment import Comment, CommentCreate, CommentUpdate

__all__ = [
    "User", "UserCreate", "UserUpdate", "LoginRequest", "LoginResponse",
    "Company", "CompanyCreate", "CompanyUpdate", "Address",
    "Project", "ProjectCreate", "ProjectUpdate", "ProjectTitle",
    "Document", "DocumentUpdate", "DocumentFile",
    "Comment", "CommentCreate", "CommentUpdate"
]
