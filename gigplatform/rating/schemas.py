"""
gigplatform/rating/schemas.py

Rating Schemas
- RatingCreate: client feedback on a completed gig
- RatingRead: stored rating
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from gigplatform.rating.models import MAX_SCORE, MIN_SCORE


class RatingCreate(BaseModel):
    score: int = Field(..., ge=MIN_SCORE, le=MAX_SCORE, description="Score from 1 to 5")
    review: str | None = Field(None, max_length=2000, description="Optional written review")


class RatingRead(BaseModel):
    id: UUID
    gig_id: UUID
    client_id: UUID
    provider_id: UUID
    score: int
    review: str | None = None
    created_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)
