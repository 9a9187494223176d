# backend/projectmanager/services/companies.py
from typing import Any, Dict

from ..models import Company, User
from .store import ResourceStore


class CompanyStore(ResourceStore[Company]):
    model = Company
    resource_name = "Company"
    plural_name = "companies"
    unique_fields = ("name", "business_id")
    filter_fields = ("name", "industry")
    sort_fields = ("id", "name", "industry", "created_at", "updated_at")
    required_fields = ("name", "address", "contact_ids")
    preload = ("contacts", "projects")

    def _apply(self, record: Company, fields: Dict[str, Any]) -> None:
        fields = dict(fields)
        if "contact_ids" in fields:
            record.contacts = self.resolve_many(User, fields.pop("contact_ids"), "User")
        super()._apply(record, fields)
