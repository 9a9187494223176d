# backend/projectmanager/models/company.py
from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from sqlalchemy.types import JSON

from ..database import Base
from .associations import company_contacts


class Company(Base):
    __tablename__ = "companies"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False, unique=True, index=True)
    business_id = Column(String(100), nullable=True, unique=True)
    industry = Column(String(255), nullable=True)
    address = Column(JSON, nullable=False, default=list)  # [{address_name, street, zip, city}]
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    contacts = relationship("User", secondary=company_contacts)
    users = relationship("User", back_populates="company", foreign_keys="User.company_id")
    projects = relationship("Project", back_populates="company", order_by="Project.id")

    @property
    def contact_ids(self):
        return [user.id for user in self.contacts]

    @property
    def project_ids(self):
        return [project.id for project in self.projects]
