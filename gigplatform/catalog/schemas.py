"""
gigplatform/catalog/schemas.py

Schemas for the reference data used to classify gigs (categories and locations).
"""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


# ---------------------------------------------------
# Category Schemas
# ---------------------------------------------------
class CategoryCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100, description="Category name")
    description: str | None = Field(None, description="What kind of work the category covers")


class CategoryUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=100)
    description: str | None = None


class CategoryRead(BaseModel):
    id: UUID
    name: str
    description: str | None = None

    model_config = ConfigDict(from_attributes=True)


# ---------------------------------------------------
# Location Schemas
# ---------------------------------------------------
class LocationCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100, description="Location name")


class LocationUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=100)


class LocationRead(BaseModel):
    id: UUID
    name: str

    model_config = ConfigDict(from_attributes=True)
