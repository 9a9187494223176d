# backend/projectmanager/services/relationships.py
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..models import Project
from ..utils.logging import service_logger
from .exceptions import NotFoundError, RelationshipError


class RelationshipMaintainer:
    """Keeps a project's ``documents``/``comments`` lists in step with the
    ``project_id`` of the child records.

    Creation is persist-child-then-link, deletion is delete-child-then-unlink.
    Both steps run in the same session transaction and are committed once; if
    the second step fails the whole unit is rolled back and a
    RelationshipError is raised. Against a store without multi-record
    transactions the same ordering would leave at worst an unlinked child or a
    dangling id until the failing step is retried.
    """

    collections = ("documents", "comments")

    def __init__(self, db: Session):
        self.db = db

    def parent_of(self, project_id) -> Project:
        project = self.db.get(Project, project_id) if project_id is not None else None
        if project is None:
            raise NotFoundError("Project not found.")
        return project

    def attach(self, child, collection: str):
        """Persist ``child`` and append it to its project's ``collection``"""
        self._check_collection(collection)
        project = self.parent_of(child.project_id)

        try:
            self.db.add(child)
            self.db.flush()
        except SQLAlchemyError:
            self.db.rollback()
            raise

        try:
            children = getattr(project, collection)
            if child not in children:
                children.append(child)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            service_logger.error("Failed to link child to project", extra={
                "project_id": project.id,
                "collection": collection,
                "error": str(e)
            })
            raise RelationshipError(f"Could not add to project {project.id} {collection}.") from e

        self.db.refresh(child)
        service_logger.info("Linked child to project", extra={
            "project_id": project.id,
            "collection": collection,
            "child_id": child.id
        })
        return child

    def detach(self, child, collection: str):
        """Delete ``child`` and pull it from its project's ``collection``.

        A child whose project no longer exists is simply deleted.
        """
        self._check_collection(collection)
        child_id = child.id
        project = self.db.get(Project, child.project_id) if child.project_id is not None else None

        try:
            self.db.delete(child)
            self.db.flush()
        except SQLAlchemyError:
            self.db.rollback()
            raise

        try:
            if project is not None:
                children = getattr(project, collection)
                if child in children:
                    children.remove(child)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            service_logger.error("Failed to unlink child from project", extra={
                "project_id": project.id if project is not None else None,
                "collection": collection,
                "child_id": child_id,
                "error": str(e)
            })
            raise RelationshipError(f"Could not remove from project {collection}.") from e

        service_logger.info("Unlinked child from project", extra={
            "project_id": project.id if project is not None else None,
            "collection": collection,
            "child_id": child_id
        })
        return child

    def _check_collection(self, collection: str) -> None:
        if collection not in self.collections:
            raise ValueError(f"Unknown project collection: {collection}")
