# backend/projectmanager/services/documents.py
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

from sqlalchemy.orm import Session, undefer

from ..config import Settings
from ..models import Document, Project
from ..utils.files import delete_file, get_relative_path, save_file
from ..utils.logging import service_logger
from .exceptions import NotFoundError
from .pagination import Page, PageParams
from .relationships import RelationshipMaintainer
from .store import ResourceStore


class DocumentStore(ResourceStore[Document]):
    model = Document
    resource_name = "Document"
    plural_name = "documents"
    filter_fields = ("description",)
    sort_fields = ("id", "accepted", "file_name", "created_at", "updated_at")
    required_fields = ("accepted",)

    def __init__(self, db: Session, settings: Settings):
        super().__init__(db)
        self.settings = settings
        self.relationships = RelationshipMaintainer(db)

    def create_document(self, project_id: int, file_name: str, content_type: str, content: bytes,
                        description: Optional[str] = None, accepted: bool = False) -> Document:
        """Store the file, then create the record and link it on its project"""
        self.relationships.parent_of(project_id)

        document = Document(
            project_id=project_id,
            description=description,
            accepted=accepted,
            file_name=file_name,
            file_type=content_type,
            file_size=len(content),
        )

        stored_path = None
        if self.settings.DOCUMENT_STORAGE == "inline":
            document.file_data = content
        else:
            stored_path = save_file(content, self.settings.UPLOADS_PATH, file_name)
            document.file_path = get_relative_path(stored_path, self.settings.STORAGE_PATH)

        try:
            self.relationships.attach(document, "documents")
        except Exception:
            if stored_path is not None:
                delete_file(stored_path)
            raise

        service_logger.info("Document stored", extra={
            "document_id": document.id,
            "project_id": project_id,
            "storage": self.settings.DOCUMENT_STORAGE,
            "size": document.file_size
        })
        return document

    def list_for_project(self, project_id: int, filters: Optional[Dict[str, Optional[str]]] = None,
                         params: Optional[PageParams] = None) -> Page:
        self.resolve_one(Project, project_id, "Project")
        query = self.query().filter(Document.project_id == project_id)
        return self.list(filters, params, query=query)

    def read_file(self, document_id: int) -> Tuple[Document, Union[bytes, Path]]:
        """Return the document with either its inline bytes or the path of its stored file"""
        document = self.db.query(Document) \
            .options(undefer(Document.file_data)) \
            .filter(Document.id == document_id) \
            .first()
        if document is None:
            raise NotFoundError("Document not found.")

        if document.file_data is not None:
            return document, document.file_data

        if document.file_path:
            path = self.settings.STORAGE_PATH / document.file_path
            if path.exists():
                return document, path

        service_logger.warning("Stored file missing for document", extra={
            "document_id": document_id,
            "file_path": document.file_path
        })
        raise NotFoundError("File not found.")

    def remove(self, record: Document) -> None:
        """Delete the record and unlink it from its project"""
        self.relationships.detach(record, "documents")

    def _apply(self, record: Document, fields: Dict[str, Any]) -> None:
        # only metadata is editable; the file and the owning project are fixed
        super()._apply(record, {
            name: value for name, value in fields.items() if name in ("description", "accepted")
        })
