# backend/projectmanager/api/deps.py
from typing import Callable, Type

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from ..auth.tokens import TokenService
from ..config import Settings
from ..database import get_db
from ..schemas.base import BaseSchema
from ..services.comments import CommentStore
from ..services.companies import CompanyStore
from ..services.documents import DocumentStore
from ..services.projects import ProjectStore
from ..services.users import UserStore


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


def get_user_store(db: Session = Depends(get_db), settings: Settings = Depends(get_settings)) -> UserStore:
    return UserStore(db, bcrypt_rounds=settings.BCRYPT_ROUNDS)


def get_company_store(db: Session = Depends(get_db)) -> CompanyStore:
    return CompanyStore(db)


def get_project_store(db: Session = Depends(get_db)) -> ProjectStore:
    return ProjectStore(db)


def get_document_store(db: Session = Depends(get_db), settings: Settings = Depends(get_settings)) -> DocumentStore:
    return DocumentStore(db, settings)


def get_comment_store(db: Session = Depends(get_db)) -> CommentStore:
    return CommentStore(db)


def serializer(schema: Type[BaseSchema]) -> Callable[[object], dict]:
    """ORM record -> camelCase JSON dict through the given schema"""
    def _serialize(record) -> dict:
        return schema.model_validate(record).dump()

    return _serialize
