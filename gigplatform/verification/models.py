"""
verification/models.py

Role-specific profile records that carry the verification status:
- ClientProfile: contact details of a client account
- ProviderProfile: skills and availability of a service provider account,
  plus the provider's rolling average rating

Each account has at most one profile of the type matching its role.
"""

import uuid
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import JSON, DateTime, Enum, ForeignKey, Integer, String, Text, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from gigplatform.database.base import Base
from gigplatform.database.enums import VerificationStatus, enum_values

if TYPE_CHECKING:
    from gigplatform.database.models import Account


def _verification_status_column() -> Mapped[VerificationStatus]:
    return mapped_column(
        Enum(VerificationStatus, name="verification_status", values_callable=enum_values),
        default=VerificationStatus.PENDING,
        nullable=False,
        comment="Verification status (pending, approved, rejected)",
    )


# ---------------------------------------------------
# Client Profile
# ---------------------------------------------------
class ClientProfile(Base):
    __tablename__ = "client_profiles"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    account_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("accounts.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
        comment="Owning client account",
    )
    contact_name: Mapped[str] = mapped_column(String(150), nullable=False)
    company_name: Mapped[str | None] = mapped_column(String(150), nullable=True)
    location: Mapped[str] = mapped_column(String(150), nullable=False)
    phone: Mapped[str | None] = mapped_column(String(30), nullable=True)
    verification_status: Mapped[VerificationStatus] = _verification_status_column()

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    account: Mapped["Account"] = relationship("Account", back_populates="client_profile")


# ---------------------------------------------------
# Service Provider Profile
# ---------------------------------------------------
class ProviderProfile(Base):
    __tablename__ = "provider_profiles"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    account_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("accounts.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
        comment="Owning service provider account",
    )
    full_name: Mapped[str] = mapped_column(String(150), nullable=False)
    location: Mapped[str] = mapped_column(String(150), nullable=False)
    skills: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    experience: Mapped[str | None] = mapped_column(Text, nullable=True)
    availability: Mapped[str | None] = mapped_column(String(255), nullable=True)
    bio: Mapped[str | None] = mapped_column(Text, nullable=True)
    phone: Mapped[str | None] = mapped_column(String(30), nullable=True)
    verification_status: Mapped[VerificationStatus] = _verification_status_column()
    avg_rating: Mapped[int | None] = mapped_column(
        Integer, nullable=True, comment="Rounded mean of all ratings received"
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    account: Mapped["Account"] = relationship("Account", back_populates="provider_profile")
