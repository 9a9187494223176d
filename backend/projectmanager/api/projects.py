# backend/projectmanager/api/projects.py
from typing import Optional

from fastapi import APIRouter, Depends, Query

from ..auth.guards import Role, current_identity, require_role
from ..auth.tokens import Identity
from ..config import Settings
from ..schemas.project import Project as ProjectSchema, ProjectCreate, ProjectTitle, ProjectUpdate
from ..services.cleanup import cleanup_service
from ..services.pagination import PageParams, page_params
from ..services.projects import ProjectStore
from ..utils.logging import api_logger
from .deps import get_project_store, get_settings, serializer

router = APIRouter(prefix="/projects", tags=["projects"])

serialize_project = serializer(ProjectSchema)
serialize_title = serializer(ProjectTitle)


def project_filters(
        title: Optional[str] = None,
        project_type: Optional[str] = Query(None, alias="projectType")
) -> dict:
    return {"title": title, "project_type": project_type}


@router.get("")
async def list_projects(
        filters: dict = Depends(project_filters),
        params: PageParams = Depends(page_params),
        identity: Identity = Depends(current_identity),
        store: ProjectStore = Depends(get_project_store)
):
    """List projects; open to anonymous callers"""
    api_logger.info("Starting projects list operation", extra={
        "endpoint": "/projects",
        "method": "GET",
        "authenticated": identity.authenticated
    })

    page = store.list(filters, params)

    api_logger.info("Sending response", extra={"project_count": len(page.items)})
    return {"message": "Paginated results", "projects": page.to_dict(serialize_project)}


@router.get("/titles")
async def list_project_titles(
        identity: Identity = Depends(current_identity),
        store: ProjectStore = Depends(get_project_store)
):
    projects = store.titles()
    api_logger.info(f"Found {len(projects)} project titles")
    return {"message": "Project titles", "titles": [serialize_title(project) for project in projects]}


@router.get("/user/{user_id}")
async def list_user_projects(
        user_id: int,
        filters: dict = Depends(project_filters),
        params: PageParams = Depends(page_params),
        identity: Identity = Depends(require_role(Role.USER)),
        store: ProjectStore = Depends(get_project_store)
):
    api_logger.info("Listing projects for user", extra={"user_id": user_id})
    page = store.list_for_user(user_id, filters, params)
    return {"message": "Paginated results", "projects": page.to_dict(serialize_project)}


@router.get("/company/{company_id}")
async def list_company_projects(
        company_id: int,
        filters: dict = Depends(project_filters),
        params: PageParams = Depends(page_params),
        identity: Identity = Depends(require_role(Role.USER)),
        store: ProjectStore = Depends(get_project_store)
):
    api_logger.info("Listing projects for company", extra={"company_id": company_id})
    page = store.list_for_company(company_id, filters, params)
    return {"message": "Paginated results", "projects": page.to_dict(serialize_project)}


@router.get("/{project_id}")
async def get_project(
        project_id: int,
        identity: Identity = Depends(require_role(Role.USER)),
        store: ProjectStore = Depends(get_project_store)
):
    api_logger.info("Fetching project", extra={"project_id": project_id})

    project = store.get_by_id(project_id)

    api_logger.info("Project retrieved successfully", extra={
        "project_id": project_id,
        "document_count": len(project.documents)
    })
    return {"message": "Project found.", "project": serialize_project(project)}


@router.post("")
async def create_project(
        project: ProjectCreate,
        identity: Identity = Depends(require_role(Role.ADMIN)),
        store: ProjectStore = Depends(get_project_store)
):
    api_logger.info("Creating new project", extra={"project_title": project.title})

    db_project = store.create(project.model_dump())

    api_logger.info("Project created successfully", extra={
        "project_id": db_project.id,
        "project_title": db_project.title
    })
    return {"message": "New project created.", "result": serialize_project(db_project)}


@router.put("/{project_id}")
async def update_project(
        project_id: int,
        project: ProjectUpdate,
        identity: Identity = Depends(require_role(Role.ADMIN)),
        store: ProjectStore = Depends(get_project_store)
):
    fields = project.model_dump(exclude_unset=True)
    api_logger.info("Updating project", extra={"project_id": project_id, "update_fields": list(fields)})

    db_project = store.update(project_id, fields)

    api_logger.info("Project updated successfully", extra={"project_id": project_id})
    return {"message": "Project updated.", "project": serialize_project(db_project)}


@router.delete("/{project_id}")
async def delete_project(
        project_id: int,
        identity: Identity = Depends(require_role(Role.ADMIN)),
        settings: Settings = Depends(get_settings),
        store: ProjectStore = Depends(get_project_store)
):
    api_logger.info("Deleting project", extra={"project_id": project_id})

    # Cascades to the project's documents and comments
    project = store.delete(project_id)

    # Remove the stored files of the deleted documents
    await cleanup_service.delete_project_artifacts(project, settings.STORAGE_PATH)

    api_logger.info(f"Successfully deleted project {project_id}")
    return {"message": "Project deleted.", "project": serialize_project(project)}
