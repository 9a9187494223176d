# backend/projectmanager/services/projects.py
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import load_only

from ..models import Company, Project, User
from .pagination import Page, PageParams
from .store import ResourceStore


class ProjectStore(ResourceStore[Project]):
    model = Project
    resource_name = "Project"
    plural_name = "projects"
    unique_fields = ("title",)
    filter_fields = ("title", "project_type")
    sort_fields = ("id", "title", "deadline", "project_type", "created_at", "updated_at")
    required_fields = ("title", "company_id", "published", "finished", "user_ids")
    preload = ("users", "documents", "comments")

    def titles(self) -> List[Project]:
        """Every project with only id and title loaded, ordered by title"""
        return self.query().options(load_only(Project.id, Project.title)).order_by(Project.title).all()

    def list_for_user(self, user_id: int, filters: Optional[Dict[str, Optional[str]]] = None,
                      params: Optional[PageParams] = None) -> Page:
        """Projects the user is a member of"""
        self.resolve_one(User, user_id, "User")
        query = self.query().filter(Project.users.any(User.id == user_id))
        return self.list(filters, params, query=query)

    def list_for_company(self, company_id: int, filters: Optional[Dict[str, Optional[str]]] = None,
                         params: Optional[PageParams] = None) -> Page:
        self.resolve_one(Company, company_id, "Company")
        query = self.query().filter(Project.company_id == company_id)
        return self.list(filters, params, query=query)

    def _apply(self, record: Project, fields: Dict[str, Any]) -> None:
        fields = dict(fields)
        if "company_id" in fields:
            self.resolve_one(Company, fields["company_id"], "Company")
        if "manager_id" in fields:
            self.resolve_one(User, fields["manager_id"], "User")
        if "user_ids" in fields:
            record.users = self.resolve_many(User, fields.pop("user_ids"), "User")
        super()._apply(record, fields)
