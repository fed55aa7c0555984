"""
gigplatform/gig/routes.py

Gig Routes
- Post a gig (Authenticated Client)
- Browse gigs and view one gig (Public)
- List own gigs (Authenticated Client or Service Provider)
- Move a gig to in_progress, completed or cancelled (owning party)
- Completed gigs of a service provider (Public)
"""

import logging
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from gigplatform.core.dependencies import PaginationParams, get_current_user
from gigplatform.core.limiter import limiter
from gigplatform.core.schemas import PaginatedResponse
from gigplatform.database.models import Account
from gigplatform.database.session import get_db
from gigplatform.gig import schemas
from gigplatform.gig.models import GigStatus
from gigplatform.gig.services import GigService

router = APIRouter(tags=["Gigs"])
logger = logging.getLogger(__name__)

DBDep = Annotated[AsyncSession, Depends(get_db)]
CurrentUserDep = Annotated[Account, Depends(get_current_user)]


def _page(gigs: list, total_count: int, pagination: PaginationParams) -> PaginatedResponse[schemas.GigRead]:
    return PaginatedResponse[schemas.GigRead].from_page(
        [schemas.GigRead.model_validate(g) for g in gigs],
        total_count,
        pagination.skip,
        pagination.limit,
    )


# ---------------------------------------------------
# Gig Endpoints
# ---------------------------------------------------
@router.post(
    "/gigs",
    response_model=schemas.GigRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create Gig",
    description="Post a new gig. The client must be verified.",
)
@limiter.limit("10/minute")
async def create_gig(
    request: Request,
    payload: schemas.GigCreate,
    db: DBDep,
    current_user: CurrentUserDep,
) -> schemas.GigRead:
    gig = await GigService(db).create_gig(current_user, payload)
    return schemas.GigRead.model_validate(gig)


@router.get(
    "/gigs",
    response_model=PaginatedResponse[schemas.GigRead],
    summary="List Gigs",
)
@limiter.limit("30/minute")
async def list_gigs(
    request: Request,
    db: DBDep,
    pagination: PaginationParams = Depends(),
    gig_status: GigStatus | None = Query(None, alias="status", description="Filter by status"),
) -> PaginatedResponse[schemas.GigRead]:
    gigs, total_count = await GigService(db).list_gigs(
        skip=pagination.skip, limit=pagination.limit, status=gig_status
    )
    return _page(gigs, total_count, pagination)


@router.get(
    "/gigs/mine",
    response_model=PaginatedResponse[schemas.GigRead],
    summary="List My Gigs",
    description="Gigs posted by the current client, or allocated to the current service provider.",
)
@limiter.limit("20/minute")
async def list_my_gigs(
    request: Request,
    db: DBDep,
    current_user: CurrentUserDep,
    pagination: PaginationParams = Depends(),
    gig_status: GigStatus | None = Query(None, alias="status", description="Filter by status"),
) -> PaginatedResponse[schemas.GigRead]:
    gigs, total_count = await GigService(db).list_my_gigs(
        current_user, skip=pagination.skip, limit=pagination.limit, status=gig_status
    )
    return _page(gigs, total_count, pagination)


@router.get(
    "/gigs/{gig_id}",
    response_model=schemas.GigRead,
    summary="Get Gig",
)
@limiter.limit("30/minute")
async def get_gig(
    request: Request,
    gig_id: UUID,
    db: DBDep,
) -> schemas.GigRead:
    gig = await GigService(db).get_gig(gig_id)
    return schemas.GigRead.model_validate(gig)


@router.put(
    "/gigs/{gig_id}/status",
    response_model=schemas.GigRead,
    summary="Update Gig Status",
    description=(
        "Providers move an allocated gig to in_progress and then completed. "
        "Clients cancel an open or allocated gig."
    ),
)
@limiter.limit("10/minute")
async def update_gig_status(
    request: Request,
    gig_id: UUID,
    payload: schemas.GigStatusUpdate,
    db: DBDep,
    current_user: CurrentUserDep,
) -> schemas.GigRead:
    logger.info(f"[GIG] {current_user.id} requests gig {gig_id} -> {payload.status.value}")
    gig = await GigService(db).advance_status(current_user, gig_id, payload.status)
    return schemas.GigRead.model_validate(gig)


# ---------------------------------------------------
# Provider Endpoints
# ---------------------------------------------------
@router.get(
    "/providers/{provider_id}/gigs/completed",
    response_model=PaginatedResponse[schemas.GigRead],
    summary="Completed Gigs of a Provider",
)
@limiter.limit("20/minute")
async def list_provider_completed_gigs(
    request: Request,
    provider_id: UUID,
    db: DBDep,
    pagination: PaginationParams = Depends(),
) -> PaginatedResponse[schemas.GigRead]:
    gigs, total_count = await GigService(db).list_completed_gigs_for_provider(
        provider_id, skip=pagination.skip, limit=pagination.limit
    )
    return _page(gigs, total_count, pagination)
