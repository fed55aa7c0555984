"""
gigplatform/admin/schemas.py

Admin dashboard schemas.
"""

from pydantic import BaseModel, Field


class AccountStats(BaseModel):
    total: int = 0
    pending: int = Field(0, description="Pending, including accounts without a profile")
    approved: int = 0
    rejected: int = 0


class GigStats(BaseModel):
    total: int = 0
    open: int = 0
    allocated: int = 0
    in_progress: int = 0
    completed: int = 0
    cancelled: int = 0


class PlatformStats(BaseModel):
    service_providers: AccountStats
    clients: AccountStats
    gigs: GigStats
