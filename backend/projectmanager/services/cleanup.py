# backend/projectmanager/services/cleanup.py
from pathlib import Path

from ..models import Project, Document
from ..utils.logging import service_logger


class CleanupService:
    """Service to handle deletion of stored document files"""

    @staticmethod
    async def delete_document_artifacts(document: Document, storage_path: Path) -> None:
        """Delete the file stored on disk for a document, if any"""
        if not document.file_path:
            return

        try:
            file_path = Path(storage_path) / document.file_path
            if file_path.exists():
                file_path.unlink()
                service_logger.info(f"Deleted document file: {file_path}")
        except OSError as e:
            service_logger.error(f"Error deleting document file: {str(e)}", extra={
                "document_id": document.id,
                "file_path": document.file_path
            })
            raise

    @staticmethod
    async def delete_project_artifacts(project: Project, storage_path: Path) -> None:
        """Delete the stored files of every document of a project"""
        for document in project.documents:
            await CleanupService.delete_document_artifacts(document, storage_path)

        service_logger.info(f"Deleted all artifacts for project {project.id}")


cleanup_service = CleanupService()
