"""
gigplatform/gig/schemas.py

Gig Schemas
- GigCreate: payload for a client posting a gig
- GigAllocate: admin allocation payload
- GigStatusUpdate: target status for the status endpoint
- GigRead: gig with its category, location and parties
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from gigplatform.catalog.schemas import CategoryRead, LocationRead
from gigplatform.gig.models import GigStatus


# ---------------------------------------------------
# Input Schemas
# ---------------------------------------------------
class GigCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=200, description="Short gig title")
    description: str = Field(..., min_length=1, description="Work description")
    category_id: UUID = Field(..., description="Category of the work")
    location_id: UUID = Field(..., description="Where the work takes place")
    start_date: datetime = Field(..., description="Requested start of work")
    end_date: datetime = Field(..., description="Requested end of work")

    @field_validator("start_date", "end_date")
    @classmethod
    def ensure_timezone(cls, value: datetime) -> datetime:
        """Gig dates must carry an explicit UTC offset."""
        if value.tzinfo is None:
            raise ValueError("Datetime values must include timezone information")
        return value

    @model_validator(mode="after")
    def check_dates(self) -> "GigCreate":
        if self.end_date < self.start_date:
            raise ValueError("end_date must not be earlier than start_date")
        return self


class GigAllocate(BaseModel):
    provider_id: UUID = Field(..., description="Approved service provider to allocate")


class GigStatusUpdate(BaseModel):
    """Target status; only in_progress, completed and cancelled are accepted."""

    status: GigStatus


# ---------------------------------------------------
# Output Schemas
# ---------------------------------------------------
class GigParty(BaseModel):
    id: UUID
    username: str

    model_config = ConfigDict(from_attributes=True)


class GigRead(BaseModel):
    id: UUID
    title: str
    description: str
    status: GigStatus
    start_date: datetime
    end_date: datetime
    category_id: UUID
    location_id: UUID
    client_id: UUID
    provider_id: UUID | None = None
    category: CategoryRead | None = None
    location: LocationRead | None = None
    client: GigParty | None = None
    provider: GigParty | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)
