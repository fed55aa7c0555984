"""
gigplatform/rating/routes.py

Rating Routes
- Rate the provider of a completed gig (Authenticated Client)
- Fetch all ratings received by a service provider (Public)
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from gigplatform.core.dependencies import PaginationParams, get_current_user
from gigplatform.core.limiter import limiter
from gigplatform.core.schemas import PaginatedResponse
from gigplatform.database.models import Account
from gigplatform.database.session import get_db
from gigplatform.rating import schemas
from gigplatform.rating.services import RatingService

router = APIRouter(tags=["Ratings"])

DBDep = Annotated[AsyncSession, Depends(get_db)]
CurrentUserDep = Annotated[Account, Depends(get_current_user)]


@router.post(
    "/gigs/{gig_id}/rate",
    response_model=schemas.RatingRead,
    status_code=status.HTTP_201_CREATED,
    summary="Rate Gig",
    description="Rate the service provider of a completed gig. One rating per gig.",
)
@limiter.limit("5/minute")
async def rate_gig(
    request: Request,
    gig_id: UUID,
    payload: schemas.RatingCreate,
    db: DBDep,
    current_user: CurrentUserDep,
) -> schemas.RatingRead:
    rating = await RatingService(db).rate(current_user, gig_id, payload.score, payload.review)
    return schemas.RatingRead.model_validate(rating)


@router.get(
    "/providers/{provider_id}/ratings",
    response_model=PaginatedResponse[schemas.RatingRead],
    summary="Provider Ratings",
    description="Fetch all ratings received by a service provider (publicly accessible).",
)
@limiter.limit("20/minute")
async def list_provider_ratings(
    request: Request,
    provider_id: UUID,
    db: DBDep,
    pagination: PaginationParams = Depends(),
) -> PaginatedResponse[schemas.RatingRead]:
    ratings, total_count = await RatingService(db).list_provider_ratings(
        provider_id, skip=pagination.skip, limit=pagination.limit
    )
    return PaginatedResponse.from_page(
        [schemas.RatingRead.model_validate(r) for r in ratings],
        total_count,
        pagination.skip,
        pagination.limit,
    )
