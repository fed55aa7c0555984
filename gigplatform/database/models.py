"""
gigplatform/database/models.py

Core SQLAlchemy ORM Models

Defines:
- Account: Registered platform user with a single, immutable role

Includes relationships with:
- ClientProfile / ProviderProfile (role-specific verification records)
- Gig (created_gigs and assigned_gigs)
- Rating (given_ratings and received_ratings)
"""

import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import Boolean, DateTime, Enum, String, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from gigplatform.catalog.models import Category, Location  # noqa: F401  (mapper registration)
from gigplatform.database.base import Base
from gigplatform.database.enums import UserRole, enum_values
from gigplatform.gig.models import Gig
from gigplatform.rating.models import Rating
from gigplatform.verification.models import ClientProfile, ProviderProfile


# ---------------------------------------------------
# Account Model: Authenticated Platform User
# ---------------------------------------------------
class Account(Base):
    __tablename__ = "accounts"

    # -------------------------------------
    # Fields
    # -------------------------------------
    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
        comment="Unique identifier for the account",
    )
    username: Mapped[str] = mapped_column(
        String(100), unique=True, nullable=False, comment="Public username"
    )
    email: Mapped[str] = mapped_column(
        String(255), unique=True, nullable=False, comment="Account email address"
    )
    role: Mapped[UserRole] = mapped_column(
        Enum(UserRole, name="user_role", values_callable=enum_values),
        nullable=False,
        comment="Account role (client, service_provider, admin, super_admin)",
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean, default=True, comment="Whether the account may authenticate"
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        comment="Timestamp when the account was created",
    )

    # -------------------------------------
    # Relationships
    # -------------------------------------

    # One-to-One: present only when role is CLIENT
    client_profile: Mapped[Optional["ClientProfile"]] = relationship(
        "ClientProfile", back_populates="account", uselist=False
    )

    # One-to-One: present only when role is SERVICE_PROVIDER
    provider_profile: Mapped[Optional["ProviderProfile"]] = relationship(
        "ProviderProfile", back_populates="account", uselist=False
    )

    # One-to-Many: gigs posted by a client
    created_gigs: Mapped[list["Gig"]] = relationship(
        "Gig", back_populates="client", foreign_keys=[Gig.client_id]
    )

    # One-to-Many: gigs allocated to a provider
    assigned_gigs: Mapped[list["Gig"]] = relationship(
        "Gig", back_populates="provider", foreign_keys=[Gig.provider_id]
    )

    given_ratings: Mapped[list["Rating"]] = relationship(
        "Rating", back_populates="client", foreign_keys=[Rating.client_id]
    )
    received_ratings: Mapped[list["Rating"]] = relationship(
        "Rating", back_populates="provider", foreign_keys=[Rating.provider_id]
    )
