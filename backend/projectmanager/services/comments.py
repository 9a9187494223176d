# backend/projectmanager/services/comments.py
from typing import Dict, Optional

from ..auth.guards import Role, check_roles
from ..auth.tokens import Identity
from ..models import Comment, Document, Project, User
from ..schemas.comment import CommentCreate, CommentUpdate
from .exceptions import AuthorizationError, ValidationError
from .pagination import Page, PageParams
from .relationships import RelationshipMaintainer
from .store import ResourceStore


class CommentStore(ResourceStore[Comment]):
    model = Comment
    resource_name = "Comment"
    plural_name = "comments"
    filter_fields = ("title", "body")
    sort_fields = ("id", "title", "created_at", "updated_at")
    required_fields = ("body", "is_global")

    def __init__(self, db):
        super().__init__(db)
        self.relationships = RelationshipMaintainer(db)

    def create_comment(self, data: CommentCreate, author_id: int) -> Comment:
        self.relationships.parent_of(data.project_id)
        self.resolve_one(User, author_id, "User")

        if data.document_id is not None:
            document = self.resolve_one(Document, data.document_id, "Document")
            if document.project_id != data.project_id:
                raise ValidationError("Document does not belong to the given project.")

        comment = Comment(author_id=author_id, **data.model_dump())
        return self.relationships.attach(comment, "comments")

    def update_comment(self, comment_id: int, data: CommentUpdate, actor: Identity) -> Comment:
        comment = self.get_by_id(comment_id)
        self._ensure_can_modify(comment, actor)
        return self.update(comment_id, data.model_dump(exclude_unset=True))

    def delete_comment(self, comment_id: int, actor: Identity) -> Comment:
        comment = self.get_by_id(comment_id)
        self._ensure_can_modify(comment, actor)
        self.remove(comment)
        return comment

    def remove(self, record: Comment) -> None:
        self.relationships.detach(record, "comments")

    def list_for_project(self, project_id: int, filters: Optional[Dict[str, Optional[str]]] = None,
                         params: Optional[PageParams] = None) -> Page:
        self.resolve_one(Project, project_id, "Project")
        query = self.query().filter(Comment.project_id == project_id)
        return self.list(filters, params, query=query)

    def list_for_document(self, document_id: int, filters: Optional[Dict[str, Optional[str]]] = None,
                          params: Optional[PageParams] = None) -> Page:
        self.resolve_one(Document, document_id, "Document")
        query = self.query().filter(Comment.document_id == document_id)
        return self.list(filters, params, query=query)

    @staticmethod
    def _ensure_can_modify(comment: Comment, actor: Identity) -> None:
        if comment.author_id != actor.user_id and not check_roles(actor, Role.ADMIN):
            raise AuthorizationError("Only the author or an admin may modify this comment.")
