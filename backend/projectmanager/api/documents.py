# backend/projectmanager/api/documents.py
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Response, UploadFile
from fastapi.responses import FileResponse

from ..auth.guards import Role, require_role
from ..auth.tokens import Identity
from ..config import Settings
from ..schemas.document import Document as DocumentSchema, DocumentUpdate
from ..services.cleanup import cleanup_service
from ..services.documents import DocumentStore
from ..services.pagination import PageParams, page_params
from ..utils.files import check_content_type, content_disposition, read_upload_file
from ..utils.logging import api_logger
from .deps import get_document_store, get_settings, serializer

router = APIRouter(prefix="/documents", tags=["documents"])

serialize_document = serializer(DocumentSchema)


@router.get("")
async def list_documents(
        description: Optional[str] = None,
        params: PageParams = Depends(page_params),
        identity: Identity = Depends(require_role(Role.USER)),
        store: DocumentStore = Depends(get_document_store)
):
    api_logger.info("Listing documents", extra={"endpoint": "/documents", "method": "GET"})
    page = store.list({"description": description}, params)
    return {"message": "Paginated results", "documents": page.to_dict(serialize_document)}


@router.get("/project/{project_id}")
async def list_project_documents(
        project_id: int,
        description: Optional[str] = None,
        params: PageParams = Depends(page_params),
        identity: Identity = Depends(require_role(Role.USER)),
        store: DocumentStore = Depends(get_document_store)
):
    api_logger.info("Listing documents for project", extra={
        "project_id": project_id,
        "operation": "list_project_documents"
    })

    page = store.list_for_project(project_id, {"description": description}, params)

    api_logger.info("Successfully listed project documents", extra={
        "project_id": project_id,
        "document_count": len(page.items)
    })
    return {"message": "Paginated results", "documents": page.to_dict(serialize_document)}


@router.get("/file/{document_id}")
async def get_document_file(
        document_id: int,
        identity: Identity = Depends(require_role(Role.USER)),
        store: DocumentStore = Depends(get_document_store)
):
    """Return the stored file with its original MIME type"""
    api_logger.info("Retrieving document file", extra={"document_id": document_id})

    document, payload = store.read_file(document_id)

    if isinstance(payload, bytes):
        return Response(
            content=payload,
            media_type=document.file_type,
            headers={"Content-Disposition": content_disposition(document.file_name)}
        )
    return FileResponse(
        payload,
        media_type=document.file_type,
        filename=document.file_name,
        content_disposition_type="inline"
    )


@router.get("/{document_id}")
async def get_document(
        document_id: int,
        identity: Identity = Depends(require_role(Role.USER)),
        store: DocumentStore = Depends(get_document_store)
):
    api_logger.info("Retrieving document details", extra={"document_id": document_id})
    document = store.get_by_id(document_id)
    return {"message": "Document found.", "document": serialize_document(document)}


@router.post("")
async def create_document(
        project: int = Form(...),
        file: UploadFile = File(...),
        description: Optional[str] = Form(None),
        accepted: bool = Form(False),
        identity: Identity = Depends(require_role(Role.USER)),
        settings: Settings = Depends(get_settings),
        store: DocumentStore = Depends(get_document_store)
):
    api_logger.info("Creating new document", extra={
        "project_id": project,
        "file_name": file.filename,
        "content_type": file.content_type
    })

    content_type = check_content_type(file, settings.ALLOWED_UPLOAD_TYPES)
    content = await read_upload_file(file, settings.MAX_UPLOAD_BYTES)

    document = store.create_document(
        project_id=project,
        file_name=file.filename or "upload",
        content_type=content_type,
        content=content,
        description=description,
        accepted=accepted
    )

    api_logger.info("Successfully created document", extra={
        "document_id": document.id,
        "project_id": document.project_id
    })
    return {"message": "New document created.", "result": serialize_document(document)}


@router.put("/{document_id}")
async def update_document(
        document_id: int,
        document: DocumentUpdate,
        identity: Identity = Depends(require_role(Role.ADMIN)),
        store: DocumentStore = Depends(get_document_store)
):
    fields = document.model_dump(exclude_unset=True)
    api_logger.info("Updating document", extra={"document_id": document_id, "update_fields": list(fields)})

    db_document = store.update(document_id, fields)
    return {"message": "Document updated.", "document": serialize_document(db_document)}


@router.delete("/{document_id}")
async def delete_document(
        document_id: int,
        identity: Identity = Depends(require_role(Role.ADMIN)),
        settings: Settings = Depends(get_settings),
        store: DocumentStore = Depends(get_document_store)
):
    api_logger.info("Deleting document", extra={"document_id": document_id})

    document = store.delete(document_id)
    await cleanup_service.delete_document_artifacts(document, settings.STORAGE_PATH)

    api_logger.info(f"Successfully deleted document {document_id}")
    return {"message": "Document deleted.", "document": serialize_document(document)}
