"""
rating/models.py

Defines the Rating model for client feedback on completed gigs.
- At most one rating per gig, enforced by a unique constraint on gig_id
- provider_id is copied from the gig when the rating is created
"""

import uuid
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, Integer, Text, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.schema import CheckConstraint

from gigplatform.database.base import Base

if TYPE_CHECKING:
    from gigplatform.database.models import Account
    from gigplatform.gig.models import Gig

MIN_SCORE = 1
MAX_SCORE = 5


class Rating(Base):
    """
    Rating submitted by a client about the provider who completed their gig.
    Includes a score (1-5) and optional review text. Never updated or deleted.
    """

    __tablename__ = "ratings"
    __table_args__ = (
        CheckConstraint(f"score >= {MIN_SCORE} AND score <= {MAX_SCORE}", name="score_range"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
        comment="Unique identifier for the rating",
    )

    # Rating content
    score: Mapped[int] = mapped_column(Integer, nullable=False, comment="Score from 1 to 5")
    review: Mapped[str | None] = mapped_column(
        Text, nullable=True, comment="Optional free-text review"
    )

    # Foreign Keys
    gig_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("gigs.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
        comment="Rated gig (one rating per gig)",
    )
    client_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("accounts.id"),
        nullable=False,
        comment="Client who submitted the rating",
    )
    provider_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("accounts.id"),
        nullable=False,
        index=True,
        comment="Provider being rated",
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        comment="Timestamp when the rating was created",
    )

    # -------------------------------------
    # Relationships
    # -------------------------------------
    client: Mapped["Account"] = relationship(
        "Account", back_populates="given_ratings", foreign_keys=[client_id]
    )
    provider: Mapped["Account"] = relationship(
        "Account", back_populates="received_ratings", foreign_keys=[provider_id]
    )
    gig: Mapped["Gig"] = relationship("Gig", back_populates="rating")
