"""
gigplatform/gig/models.py

Defines the Gig model and associated GigStatus enum.
- Represents work requested by clients and performed by allocated providers
- Status is the only mutable shared field; every transition is a
  conditional update keyed on its current value
"""

import enum
import uuid
from datetime import datetime
from typing import TYPE_CHECKING, Optional

from sqlalchemy import DateTime, Enum, ForeignKey, Index, String, Text, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from gigplatform.database.base import Base
from gigplatform.database.enums import enum_values

if TYPE_CHECKING:
    from gigplatform.catalog.models import Category, Location
    from gigplatform.database.models import Account
    from gigplatform.rating.models import Rating


# ENUM: Gig Status
class GigStatus(str, enum.Enum):
    OPEN = "open"
    ALLOCATED = "allocated"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        return self in (GigStatus.COMPLETED, GigStatus.CANCELLED)


# MODEL: Gig
class Gig(Base):
    __tablename__ = "gigs"
    __table_args__ = (Index("ix_gigs_status", "status"),)

    # Basic Identifiers & Foreign Keys
    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
        comment="Unique identifier for the gig",
    )
    title: Mapped[str] = mapped_column(String(200), nullable=False, comment="Short gig title")
    description: Mapped[str] = mapped_column(Text, nullable=False, comment="Work description")
    category_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("gig_categories.id"),
        nullable=False,
        comment="Category the gig belongs to",
    )
    location_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("locations.id"),
        nullable=False,
        comment="Location where the work takes place",
    )
    client_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("accounts.id"),
        nullable=False,
        index=True,
        comment="Client who posted the gig",
    )
    provider_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid,
        ForeignKey("accounts.id"),
        nullable=True,
        index=True,
        comment="Provider allocated to the gig (null until allocation)",
    )

    # Schedule
    start_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, comment="Requested start of work"
    )
    end_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, comment="Requested end of work"
    )

    # Lifecycle
    status: Mapped[GigStatus] = mapped_column(
        Enum(GigStatus, name="gig_status", values_callable=enum_values),
        default=GigStatus.OPEN,
        nullable=False,
        comment="Current lifecycle status of the gig",
    )

    # Audit Fields
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        comment="Timestamp when the gig was created",
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
        comment="Timestamp when the gig was last updated",
    )

    # Relationships
    client: Mapped["Account"] = relationship(
        "Account", back_populates="created_gigs", foreign_keys=[client_id]
    )
    provider: Mapped[Optional["Account"]] = relationship(
        "Account", back_populates="assigned_gigs", foreign_keys=[provider_id]
    )
    category: Mapped["Category"] = relationship("Category", back_populates="gigs")
    location: Mapped["Location"] = relationship("Location", back_populates="gigs")
    rating: Mapped[Optional["Rating"]] = relationship(
        "Rating", back_populates="gig", uselist=False
    )
