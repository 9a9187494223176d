# backend/projectmanager/models/project.py
from sqlalchemy import Column, Integer, String, Text, DateTime, Boolean, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from ..database import Base
from .associations import project_members


class Project(Base):
    __tablename__ = "projects"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False, unique=True, index=True)
    description = Column(Text, nullable=True)
    deadline = Column(DateTime(timezone=True), nullable=True)
    manager_id = Column(Integer, ForeignKey("users.id"), nullable=True)
    project_type = Column(String(100), nullable=True)
    project_code = Column(String(100), nullable=True)  # external project id
    company_id = Column(Integer, ForeignKey("companies.id"), nullable=True)
    published = Column(Boolean, nullable=False, default=False)
    finished = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    manager = relationship("User", back_populates="managed_projects", foreign_keys=[manager_id])
    company = relationship("Company", back_populates="projects")
    users = relationship("User", secondary=project_members, back_populates="projects")
    documents = relationship("Document", back_populates="project", cascade="all, delete-orphan",
                             order_by="Document.id")
    comments = relationship("Comment", back_populates="project", cascade="all, delete-orphan",
                            order_by="Comment.id")

    @property
    def user_ids(self):
        return [user.id for user in self.users]

    @property
    def document_ids(self):
        return [document.id for document in self.documents]

    @property
    def comment_ids(self):
        return [comment.id for comment in self.comments]
