"""
gigplatform/verification/schemas.py

Verification & Profile Schemas
Pydantic schemas for account profiles and their verification status:
- Client and service provider profile creation/update (Authenticated owner)
- Profile read models (owner and admin views)
- Verification status update payload and result (Admin)
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from gigplatform.database.enums import UserRole, VerificationStatus


# ---------------------------------------------------
# Account Schema
# ---------------------------------------------------
class AccountRead(BaseModel):
    """Public account fields shared by every role."""

    id: UUID = Field(..., description="Account unique identifier")
    username: str = Field(..., description="Public username")
    email: str = Field(..., description="Account email address")
    role: UserRole = Field(..., description="Account role")
    is_active: bool = Field(..., description="Whether the account may authenticate")
    created_at: datetime | None = Field(None, description="Account creation timestamp")

    model_config = ConfigDict(from_attributes=True)


# ---------------------------------------------------
# Client Profile Schemas
# ---------------------------------------------------
class ClientProfileBase(BaseModel):
    contact_name: str = Field(..., min_length=1, max_length=150, description="Contact person")
    company_name: str | None = Field(None, max_length=150, description="Company name")
    location: str = Field(..., min_length=1, max_length=150, description="Client location")
    phone: str | None = Field(None, max_length=30, description="Contact phone number")


class ClientProfileCreate(ClientProfileBase):
    """Payload used by a client to complete their profile. Status always starts pending."""

    pass


class ClientProfileUpdate(BaseModel):
    """Partial update of descriptive client fields."""

    contact_name: str | None = Field(None, min_length=1, max_length=150)
    company_name: str | None = Field(None, max_length=150)
    location: str | None = Field(None, min_length=1, max_length=150)
    phone: str | None = Field(None, max_length=30)


class ClientProfileRead(ClientProfileBase):
    id: UUID
    account_id: UUID
    verification_status: VerificationStatus
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


# ---------------------------------------------------
# Service Provider Profile Schemas
# ---------------------------------------------------
class ProviderProfileBase(BaseModel):
    full_name: str = Field(..., min_length=1, max_length=150, description="Provider full name")
    location: str = Field(..., min_length=1, max_length=150, description="Provider location")
    skills: list[str] = Field(default_factory=list, description="Declared skills")
    experience: str | None = Field(None, description="Work experience summary")
    availability: str | None = Field(None, max_length=255, description="Availability note")
    bio: str | None = Field(None, description="Short biography")
    phone: str | None = Field(None, max_length=30, description="Contact phone number")


class ProviderProfileCreate(ProviderProfileBase):
    """Payload used by a provider to complete their profile. Status always starts pending."""

    pass


class ProviderProfileUpdate(BaseModel):
    """Partial update of descriptive provider fields."""

    full_name: str | None = Field(None, min_length=1, max_length=150)
    location: str | None = Field(None, min_length=1, max_length=150)
    skills: list[str] | None = None
    experience: str | None = None
    availability: str | None = Field(None, max_length=255)
    bio: str | None = None
    phone: str | None = Field(None, max_length=30)


class ProviderProfileRead(ProviderProfileBase):
    id: UUID
    account_id: UUID
    verification_status: VerificationStatus
    avg_rating: int | None = Field(None, description="Rounded mean of all ratings received")
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


# ---------------------------------------------------
# Composite Views
# ---------------------------------------------------
class MyProfileRead(BaseModel):
    """Current account plus its role-specific profile (None for admins or incomplete profiles)."""

    account: AccountRead
    profile: ClientProfileRead | ProviderProfileRead | None = None


class ClientWithProfileRead(AccountRead):
    """Admin view of a client account."""

    client_profile: ClientProfileRead | None = None


class ProviderWithProfileRead(AccountRead):
    """Admin view of a service provider account."""

    provider_profile: ProviderProfileRead | None = None


# ---------------------------------------------------
# Verification Schemas (Admin)
# ---------------------------------------------------
class VerificationUpdate(BaseModel):
    """Payload used by an admin to set a verification status."""

    status: VerificationStatus = Field(..., description="New verification status")


class VerificationResult(BaseModel):
    account: AccountRead
    profile: ClientProfileRead | ProviderProfileRead
    message: str = "Verification status updated"
