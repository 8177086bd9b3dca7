"""GitHub Contributors: registration, identity reconciliation, and user linking.

Invariants:
    - username/email list filters match current values AND known aliases
    - Identity changes (PUT /{id}) keep superseded values in the alias history
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status

from metrics_api.api.dependencies import get_contributor_service
from metrics_api.schemas.github_contributor import (
    ContributorAliases,
    ContributorCreate,
    ContributorIdentityUpdate,
    ContributorLastActiveUpdate,
    ContributorListResponse,
    ContributorResponse,
    ContributorStatusUpdate,
    ContributorUserLink,
)
from metrics_api.services.github_contributor_service import GitHubContributorService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/github-contributors", tags=["github-contributors"])


@router.get("", response_model=ContributorListResponse)
async def list_contributors(
    user_id: UUID | None = None,
    username: str | None = None,
    email: str | None = None,
    limit: int = Query(10, ge=1, le=100),
    offset: int = Query(0, ge=0),
    service: GitHubContributorService = Depends(get_contributor_service),
):
    result = await service.list_contributors(
        limit=limit, offset=offset, user_id=user_id, username=username, email=email,
    )
    contributors = result.unwrap()
    return ContributorListResponse(
        data=[ContributorResponse.from_domain(c) for c in contributors],
        total=len(contributors),
        limit=limit,
        offset=offset,
    )


@router.post(
    "", response_model=ContributorResponse, status_code=status.HTTP_201_CREATED,
)
async def create_contributor(
    body: ContributorCreate,
    service: GitHubContributorService = Depends(get_contributor_service),
):
    result = await service.create_contributor(
        body.current_username,
        body.current_email,
        body.current_name,
        user_id=body.user_id,
        all_known_usernames=body.all_known_usernames,
        all_known_emails=body.all_known_emails,
        all_known_names=body.all_known_names,
        last_active_date=body.last_active_date,
        status=body.status,
    )
    return ContributorResponse.from_domain(result.unwrap())


@router.get("/by-username/{username}", response_model=ContributorResponse)
async def get_contributor_by_username(
    username: str,
    service: GitHubContributorService = Depends(get_contributor_service),
):
    result = await service.get_contributor_by_username(username)
    return ContributorResponse.from_domain(result.unwrap())


@router.get("/{contributor_id}", response_model=ContributorResponse)
async def get_contributor(
    contributor_id: UUID,
    service: GitHubContributorService = Depends(get_contributor_service),
):
    result = await service.get_contributor_by_id(contributor_id)
    return ContributorResponse.from_domain(result.unwrap())


@router.put("/{contributor_id}", response_model=ContributorResponse)
async def update_current_info(
    contributor_id: UUID,
    body: ContributorIdentityUpdate,
    service: GitHubContributorService = Depends(get_contributor_service),
):
    """Change the current identity; prior values move into the alias history."""
    result = await service.update_current_info(
        contributor_id,
        username=body.current_username,
        email=body.current_email,
        name=body.current_name,
    )
    return ContributorResponse.from_domain(result.unwrap())


@router.post("/{contributor_id}/aliases", response_model=ContributorResponse)
async def add_known_aliases(
    contributor_id: UUID,
    body: ContributorAliases,
    service: GitHubContributorService = Depends(get_contributor_service),
):
    result = await service.add_known_aliases(
        contributor_id, usernames=body.usernames, emails=body.emails, names=body.names,
    )
    return ContributorResponse.from_domain(result.unwrap())


@router.put("/{contributor_id}/user", response_model=ContributorResponse)
async def link_to_user(
    contributor_id: UUID,
    body: ContributorUserLink,
    service: GitHubContributorService = Depends(get_contributor_service),
):
    result = await service.link_to_user(contributor_id, body.user_id)
    return ContributorResponse.from_domain(result.unwrap())


@router.delete("/{contributor_id}/user", response_model=ContributorResponse)
async def unlink_from_user(
    contributor_id: UUID,
    service: GitHubContributorService = Depends(get_contributor_service),
):
    result = await service.unlink_from_user(contributor_id)
    return ContributorResponse.from_domain(result.unwrap())


@router.put("/{contributor_id}/status", response_model=ContributorResponse)
async def update_status(
    contributor_id: UUID,
    body: ContributorStatusUpdate,
    service: GitHubContributorService = Depends(get_contributor_service),
):
    result = await service.update_status(contributor_id, body.status)
    return ContributorResponse.from_domain(result.unwrap())


@router.put("/{contributor_id}/last-active", response_model=ContributorResponse)
async def update_last_active_date(
    contributor_id: UUID,
    body: ContributorLastActiveUpdate,
    service: GitHubContributorService = Depends(get_contributor_service),
):
    result = await service.update_last_active_date(contributor_id, body.last_active_date)
    return ContributorResponse.from_domain(result.unwrap())


@router.delete("/{contributor_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_contributor(
    contributor_id: UUID,
    service: GitHubContributorService = Depends(get_contributor_service),
):
    result = await service.delete_contributor(contributor_id)
    result.unwrap()
    logger.info("Contributor deleted", extra={"entity_id": str(contributor_id)})
    return Response(status_code=status.HTTP_204_NO_CONTENT)
