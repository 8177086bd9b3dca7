"""GitHub Organizations: registration, lookup, token-expiry update, and removal.

Invariants:
    - Names are looked up and returned in canonical (uppercase) form
    - access_token goes in on POST and never comes back out
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status

from metrics_api.api.dependencies import get_organization_service
from metrics_api.schemas.github_organization import (
    OrganizationCreate, OrganizationResponse, OrganizationUpdate,
)
from metrics_api.services.github_organization_service import GitHubOrganizationService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/github-organizations", tags=["github-organizations"])


@router.get("", response_model=list[OrganizationResponse])
async def list_organizations(
    limit: int | None = Query(None, ge=1, le=1000),
    offset: int = Query(0, ge=0),
    service: GitHubOrganizationService = Depends(get_organization_service),
):
    result = await service.list_organizations(limit=limit, offset=offset)
    return [OrganizationResponse.from_domain(o) for o in result.unwrap()]


@router.post(
    "", response_model=OrganizationResponse, status_code=status.HTTP_201_CREATED,
)
async def create_organization(
    body: OrganizationCreate,
    service: GitHubOrganizationService = Depends(get_organization_service),
):
    """Register an organization. The name is stored uppercase."""
    result = await service.create_organization(
        body.name, body.access_token, body.token_expires_at,
    )
    return OrganizationResponse.from_domain(result.unwrap())


@router.get("/by-name/{name}", response_model=OrganizationResponse)
async def get_organization_by_name(
    name: str,
    service: GitHubOrganizationService = Depends(get_organization_service),
):
    result = await service.get_organization_by_name(name)
    return OrganizationResponse.from_domain(result.unwrap())


@router.get("/{organization_id}", response_model=OrganizationResponse)
async def get_organization(
    organization_id: UUID,
    service: GitHubOrganizationService = Depends(get_organization_service),
):
    result = await service.get_organization_by_id(organization_id)
    return OrganizationResponse.from_domain(result.unwrap())


@router.put("/{organization_id}", response_model=OrganizationResponse)
async def update_organization(
    organization_id: UUID,
    body: OrganizationUpdate,
    service: GitHubOrganizationService = Depends(get_organization_service),
):
    result = await service.update_organization(
        organization_id, name=body.name, token_expires_at=body.token_expires_at,
    )
    return OrganizationResponse.from_domain(result.unwrap())


@router.delete("/{organization_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_organization(
    organization_id: UUID,
    service: GitHubOrganizationService = Depends(get_organization_service),
):
    result = await service.delete_organization(organization_id)
    result.unwrap()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
