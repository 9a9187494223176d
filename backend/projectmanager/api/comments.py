# backend/projectmanager/api/comments.py
from typing import Optional

from fastapi import APIRouter, Depends

from ..auth.guards import Role, require_role
from ..auth.tokens import Identity
from ..schemas.comment import Comment as CommentSchema, CommentCreate, CommentUpdate
from ..services.comments import CommentStore
from ..services.pagination import PageParams, page_params
from ..utils.logging import api_logger
from .deps import get_comment_store, serializer

router = APIRouter(prefix="/comments", tags=["comments"])

serialize_comment = serializer(CommentSchema)


def comment_filters(title: Optional[str] = None, body: Optional[str] = None) -> dict:
    return {"title": title, "body": body}


@router.get("")
async def list_comments(
        filters: dict = Depends(comment_filters),
        params: PageParams = Depends(page_params),
        identity: Identity = Depends(require_role(Role.USER)),
        store: CommentStore = Depends(get_comment_store)
):
    page = store.list(filters, params)
    return {"message": "Paginated results", "comments": page.to_dict(serialize_comment)}


@router.get("/project/{project_id}")
async def list_project_comments(
        project_id: int,
        filters: dict = Depends(comment_filters),
        params: PageParams = Depends(page_params),
        identity: Identity = Depends(require_role(Role.USER)),
        store: CommentStore = Depends(get_comment_store)
):
    api_logger.info("Listing comments for project", extra={"project_id": project_id})
    page = store.list_for_project(project_id, filters, params)
    return {"message": "Paginated results", "comments": page.to_dict(serialize_comment)}


@router.get("/document/{document_id}")
async def list_document_comments(
        document_id: int,
        filters: dict = Depends(comment_filters),
        params: PageParams = Depends(page_params),
        identity: Identity = Depends(require_role(Role.USER)),
        store: CommentStore = Depends(get_comment_store)
):
    api_logger.info("Listing comments for document", extra={"document_id": document_id})
    page = store.list_for_document(document_id, filters, params)
    return {"message": "Paginated results", "comments": page.to_dict(serialize_comment)}


@router.get("/{comment_id}")
async def get_comment(
        comment_id: int,
        identity: Identity = Depends(require_role(Role.USER)),
        store: CommentStore = Depends(get_comment_store)
):
    comment = store.get_by_id(comment_id)
    return {"message": "Comment found.", "comment": serialize_comment(comment)}


@router.post("")
async def create_comment(
        comment: CommentCreate,
        identity: Identity = Depends(require_role(Role.USER)),
        store: CommentStore = Depends(get_comment_store)
):
    api_logger.info("Creating new comment", extra={
        "project_id": comment.project_id,
        "author_id": identity.user_id
    })

    db_comment = store.create_comment(comment, author_id=identity.user_id)

    api_logger.info("Comment created successfully", extra={"comment_id": db_comment.id})
    return {"message": "New comment created.", "result": serialize_comment(db_comment)}


@router.put("/{comment_id}")
async def update_comment(
        comment_id: int,
        comment: CommentUpdate,
        identity: Identity = Depends(require_role(Role.USER)),
        store: CommentStore = Depends(get_comment_store)
):
    api_logger.info("Updating comment", extra={"comment_id": comment_id})
    db_comment = store.update_comment(comment_id, comment, actor=identity)
    return {"message": "Comment updated.", "comment": serialize_comment(db_comment)}


@router.delete("/{comment_id}")
async def delete_comment(
        comment_id: int,
        identity: Identity = Depends(require_role(Role.USER)),
        store: CommentStore = Depends(get_comment_store)
):
    api_logger.info("Deleting comment", extra={"comment_id": comment_id})

    comment = store.delete_comment(comment_id, actor=identity)

    api_logger.info(f"Successfully deleted comment {comment_id}")
    return {"message": "Comment deleted.", "comment": serialize_comment(comment)}
