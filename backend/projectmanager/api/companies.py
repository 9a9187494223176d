# backend/projectmanager/api/companies.py
from typing import Optional

from fastapi import APIRouter, Depends

from ..auth.guards import Role, require_role
from ..auth.tokens import Identity
from ..schemas.company import Company as CompanySchema, CompanyCreate, CompanyUpdate
from ..services.companies import CompanyStore
from ..services.pagination import PageParams, page_params
from ..utils.logging import api_logger
from .deps import get_company_store, serializer

router = APIRouter(prefix="/companies", tags=["companies"])

serialize_company = serializer(CompanySchema)


@router.get("")
async def list_companies(
        name: Optional[str] = None,
        industry: Optional[str] = None,
        params: PageParams = Depends(page_params),
        identity: Identity = Depends(require_role(Role.ADMIN)),
        store: CompanyStore = Depends(get_company_store)
):
    api_logger.info("Listing companies", extra={"endpoint": "/companies", "method": "GET"})

    page = store.list({"name": name, "industry": industry}, params)
    return {
        "message": "Paginated results",
        "query": {"page": "page", "limit": "perPage", "disable": "paginate=false"},
        "companies": page.to_dict(serialize_company)
    }


@router.get("/{company_id}")
async def get_company(
        company_id: int,
        identity: Identity = Depends(require_role(Role.USER)),
        store: CompanyStore = Depends(get_company_store)
):
    api_logger.info("Fetching company", extra={"company_id": company_id})
    company = store.get_by_id(company_id)
    return {"message": "Company found.", "company": serialize_company(company)}


@router.post("")
async def create_company(
        company: CompanyCreate,
        identity: Identity = Depends(require_role(Role.ADMIN)),
        store: CompanyStore = Depends(get_company_store)
):
    api_logger.info("Creating new company", extra={"company_name": company.name})

    db_company = store.create(company.model_dump())

    api_logger.info("Company created successfully", extra={
        "company_id": db_company.id,
        "company_name": db_company.name
    })
    return {"message": "New company created.", "result": serialize_company(db_company)}


@router.put("/{company_id}")
async def update_company(
        company_id: int,
        company: CompanyUpdate,
        identity: Identity = Depends(require_role(Role.ADMIN)),
        store: CompanyStore = Depends(get_company_store)
):
    fields = company.model_dump(exclude_unset=True)
    api_logger.info("Updating company", extra={"company_id": company_id, "update_fields": list(fields)})

    db_company = store.update(company_id, fields)
    return {"message": "Company updated.", "company": serialize_company(db_company)}


@router.delete("/{company_id}")
async def delete_company(
        company_id: int,
        identity: Identity = Depends(require_role(Role.ADMIN)),
        store: CompanyStore = Depends(get_company_store)
):
    api_logger.info("Deleting company", extra={"company_id": company_id})

    company = store.delete(company_id)

    api_logger.info(f"Successfully deleted company {company_id}")
    return {"message": "Company deleted.", "company": serialize_company(company)}
