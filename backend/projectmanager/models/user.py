# backend/projectmanager/models/user.py
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from sqlalchemy.types import JSON

from ..database import Base
from .associations import project_members


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(150), nullable=False, unique=True, index=True)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password = Column(String(255), nullable=False)  # bcrypt hash, never serialized
    phone = Column(String(50), nullable=True)
    company_id = Column(Integer, ForeignKey("companies.id"), nullable=True)
    roles = Column(JSON, nullable=False, default=list)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    company = relationship("Company", back_populates="users", foreign_keys=[company_id])
    projects = relationship("Project", secondary=project_members, back_populates="users")
    managed_projects = relationship("Project", back_populates="manager", foreign_keys="Project.manager_id")
    comments = relationship("Comment", back_populates="author", cascade="all, delete-orphan")

    @property
    def project_ids(self):
        return [project.id for project in self.projects]
