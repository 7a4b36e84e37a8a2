"""Read-only list and detail routes for every projected resource."""

from typing import Any

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from agent_lab.api.deps import get_db, page_request
from agent_lab.queries.agents import AgentFilters
from agent_lab.queries.documents import DocumentFilters
from agent_lab.queries.images import ImageFilters
from agent_lab.queries.profiles import ProfileFilters
from agent_lab.queries.providers import ProviderFilters
from agent_lab.queries.workflows import RunFilters
from agent_lab.services import resources as resources_service
from agent_lab.services.pagination import PageRequest, PageResult

router = APIRouter()

Page = PageResult[dict[str, Any]]


def _query(request: Request) -> dict[str, str]:
    return dict(request.query_params)


@router.get("/agents", response_model=Page, tags=["agents"])
def list_agents(
    request: Request,
    page: PageRequest = Depends(page_request),
    db: Session = Depends(get_db),
):
    filters = AgentFilters.from_query(_query(request))
    return resources_service.agents.list(db, page, filters)


@router.get("/agents/{agent_id}", tags=["agents"])
def get_agent(agent_id: str, db: Session = Depends(get_db)):
    return resources_service.agents.get(db, agent_id)


@router.get("/providers", response_model=Page, tags=["providers"])
def list_providers(
    request: Request,
    page: PageRequest = Depends(page_request),
    db: Session = Depends(get_db),
):
    filters = ProviderFilters.from_query(_query(request))
    return resources_service.providers.list(db, page, filters)


@router.get("/providers/{provider_id}", tags=["providers"])
def get_provider(provider_id: str, db: Session = Depends(get_db)):
    return resources_service.providers.get(db, provider_id)


@router.get("/documents", response_model=Page, tags=["documents"])
def list_documents(
    request: Request,
    page: PageRequest = Depends(page_request),
    db: Session = Depends(get_db),
):
    filters = DocumentFilters.from_query(_query(request))
    return resources_service.documents.list(db, page, filters)


@router.get("/documents/{document_id}", tags=["documents"])
def get_document(document_id: str, db: Session = Depends(get_db)):
    return resources_service.documents.get(db, document_id)


@router.get("/images", response_model=Page, tags=["images"])
def list_images(
    request: Request,
    page: PageRequest = Depends(page_request),
    db: Session = Depends(get_db),
):
    filters = ImageFilters.from_query(_query(request))
    return resources_service.images.list(db, page, filters)


@router.get("/images/{image_id}", tags=["images"])
def get_image(image_id: str, db: Session = Depends(get_db)):
    return resources_service.images.get(db, image_id)


@router.get("/profiles", response_model=Page, tags=["profiles"])
def list_profiles(
    request: Request,
    page: PageRequest = Depends(page_request),
    db: Session = Depends(get_db),
):
    filters = ProfileFilters.from_query(_query(request))
    return resources_service.profiles.list(db, page, filters)


@router.get("/profiles/{profile_id}", tags=["profiles"])
def get_profile(profile_id: str, db: Session = Depends(get_db)):
    return resources_service.profiles.get(db, profile_id)


@router.get("/workflows/runs", response_model=Page, tags=["workflows"])
def list_runs(
    request: Request,
    page: PageRequest = Depends(page_request),
    db: Session = Depends(get_db),
):
    filters = RunFilters.from_query(_query(request))
    return resources_service.runs.list(db, page, filters)


@router.get("/workflows/runs/{run_id}", tags=["workflows"])
def get_run(run_id: str, db: Session = Depends(get_db)):
    return resources_service.runs.get(db, run_id)


@router.get("/workflows/runs/{run_id}/stages", tags=["workflows"])
def list_run_stages(run_id: str, db: Session = Depends(get_db)):
    return resources_service.runs.stages(db, run_id)


@router.get("/workflows/runs/{run_id}/decisions", tags=["workflows"])
def list_run_decisions(run_id: str, db: Session = Depends(get_db)):
    return resources_service.runs.decisions(db, run_id)
