# backend/projectmanager/api/__init__.py
from .users import router as users_router
from .companies import router as companies_router
from .projects import router as projects_router
from .documents import router as documents_router
from .comments import router as comments_router

__all__ = ["users_router", "companies_router", "projects_router", "documents_router", "comments_router"]
