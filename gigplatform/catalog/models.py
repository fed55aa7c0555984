"""
catalog/models.py

Reference data used to classify gigs:
- Category: kind of work (e.g. CCTV Repair)
- Location: where the work takes place
"""

import uuid
from typing import TYPE_CHECKING

from sqlalchemy import String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from gigplatform.database.base import Base

if TYPE_CHECKING:
    from gigplatform.gig.models import Gig


class Category(Base):
    __tablename__ = "gig_categories"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(
        String(100), unique=True, nullable=False, comment="Category display name"
    )
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    gigs: Mapped[list["Gig"]] = relationship("Gig", back_populates="category")


class Location(Base):
    __tablename__ = "locations"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(
        String(100), unique=True, nullable=False, comment="Location display name"
    )

    gigs: Mapped[list["Gig"]] = relationship("Gig", back_populates="location")
