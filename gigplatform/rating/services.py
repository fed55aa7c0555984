"""
gigplatform/rating/services.py

Rating Service
- Client rates the provider of their completed gig, once per gig
- Provider's average rating is recomputed from all their ratings on every new rating
- Public listing of a provider's ratings
"""

import logging
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from gigplatform.core.exceptions import (
    ConflictError,
    ForbiddenError,
    NotFoundError,
    PreconditionFailedError,
    ValidationError,
)
from gigplatform.database.enums import UserRole
from gigplatform.database.models import Account
from gigplatform.database.session import commit_or_raise
from gigplatform.gig.models import Gig, GigStatus
from gigplatform.rating.models import MAX_SCORE, MIN_SCORE, Rating
from gigplatform.verification.models import ProviderProfile

logger = logging.getLogger(__name__)


def rounded_mean(total: int, count: int) -> int | None:
    """Integer mean rounded half up (4.5 -> 5)."""
    if count == 0:
        return None
    return (2 * total + count) // (2 * count)


class RatingService:
    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def rate(
        self, acting_client: Account, gig_id: UUID, score: int, review: str | None = None
    ) -> Rating:
        """
        Record the client's rating of a completed gig and refresh the provider's average.

        Raises:
            NotFoundError: gig does not exist.
            ForbiddenError: actor is not the gig's client.
            PreconditionFailedError: gig is not completed or has no provider.
            ConflictError: gig already rated.
        """
        logger.info(f"[RATING] Client {acting_client.id} rating gig {gig_id} with score {score}")
        if not MIN_SCORE <= score <= MAX_SCORE:
            raise ValidationError(f"Score must be between {MIN_SCORE} and {MAX_SCORE}.")

        gig = await self.db.get(Gig, gig_id)
        if not gig:
            raise NotFoundError("Gig not found.")
        if acting_client.role != UserRole.CLIENT or gig.client_id != acting_client.id:
            logger.warning(f"[RATING] Account {acting_client.id} is not the client of gig {gig_id}")
            raise ForbiddenError("Only the client who posted this gig can rate it.")
        if gig.status != GigStatus.COMPLETED or gig.provider_id is None:
            raise PreconditionFailedError("Only completed gigs can be rated.")

        existing = await self.db.scalar(select(Rating.id).where(Rating.gig_id == gig_id))
        if existing:
            raise ConflictError("This gig has already been rated.")

        provider_id = gig.provider_id
        rating = Rating(
            gig_id=gig_id,
            client_id=acting_client.id,
            provider_id=provider_id,
            score=score,
            review=review,
        )
        self.db.add(rating)

        total, count = (
            await self.db.execute(
                select(func.coalesce(func.sum(Rating.score), 0), func.count(Rating.id)).where(
                    Rating.provider_id == provider_id, Rating.gig_id != gig_id
                )
            )
        ).one()
        avg_rating = rounded_mean(int(total) + score, int(count) + 1)

        profile = await self.db.scalar(
            select(ProviderProfile).where(ProviderProfile.account_id == provider_id)
        )
        if profile is not None:
            profile.avg_rating = avg_rating

        await commit_or_raise(
            self.db,
            "submit rating",
            integrity_error=ConflictError("This gig has already been rated."),
        )
        await self.db.refresh(rating)
        logger.info(f"[RATING] Gig {gig_id} rated {score}; provider {provider_id} average now {avg_rating}")
        return rating

    async def list_provider_ratings(
        self, provider_id: UUID, skip: int = 0, limit: int = 100
    ) -> tuple[list[Rating], int]:
        provider = await self.db.get(Account, provider_id)
        if not provider or provider.role != UserRole.SERVICE_PROVIDER:
            raise NotFoundError("Service provider not found.")

        total = (
            await self.db.execute(
                select(func.count(Rating.id)).where(Rating.provider_id == provider_id)
            )
        ).scalar_one()
        rows = await self.db.execute(
            select(Rating)
            .where(Rating.provider_id == provider_id)
            .order_by(Rating.created_at.desc(), Rating.id)
            .offset(skip)
            .limit(limit)
        )
        return list(rows.scalars().all()), total
