# backend/projectmanager/schemas/company.py
from typing import List, Optional
from pydantic import Field
from .base import BaseSchema, TimestampMixin

class Address(BaseSchema):
    address_name: Optional[str] = None
    street: Optional[str] = None
    zip: Optional[str] = None
    city: Optional[str] = None

class CompanyBase(BaseSchema):
    name: str = Field(min_length=1)
    business_id: Optional[str] = None
    industry: Optional[str] = None
    address: List[Address] = []

class CompanyCreate(CompanyBase):
    contact_ids: List[int] = []

class CompanyUpdate(BaseSchema):
    name: Optional[str] = Field(default=None, min_length=1)
    business_id: Optional[str] = None
    industry: Optional[str] = None
    address: Optional[List[Address]] = None
    contact_ids: Optional[List[int]] = None

class Company(CompanyBase, TimestampMixin):
    id: int
    contact_ids: List[int] = []
    project_ids: List[int] = []
