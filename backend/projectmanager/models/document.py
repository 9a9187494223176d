# backend/projectmanager/models/document.py
from sqlalchemy import Column, Integer, String, Text, DateTime, Boolean, ForeignKey, LargeBinary
from sqlalchemy.orm import relationship, deferred
from sqlalchemy.sql import func

from ..database import Base


class Document(Base):
    __tablename__ = "documents"

    id = Column(Integer, primary_key=True, index=True)
    project_id = Column(Integer, ForeignKey("projects.id"), nullable=False)
    description = Column(Text, nullable=True)
    file_name = Column(String(255), nullable=False)
    file_path = Column(String(255), nullable=True)  # relative to STORAGE_PATH, disk storage only
    file_type = Column(String(255), nullable=False)
    file_size = Column(Integer, nullable=False, default=0)
    file_data = deferred(Column(LargeBinary, nullable=True))  # inline storage only
    accepted = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    project = relationship("Project", back_populates="documents")
    comments = relationship("Comment", back_populates="document")

    @property
    def file(self):
        return {
            "name": self.file_name,
            "path": self.file_path,
            "type": self.file_type,
            "size": self.file_size,
        }
