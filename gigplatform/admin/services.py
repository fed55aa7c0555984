"""
gigplatform/admin/services.py

Admin Service Layer
Dashboard statistics: verification breakdown of providers and clients,
and gig counts per lifecycle status.
"""

import logging

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from gigplatform.admin import schemas
from gigplatform.database.enums import UserRole, VerificationStatus
from gigplatform.database.models import Account
from gigplatform.gig.models import Gig, GigStatus
from gigplatform.verification.models import ClientProfile, ProviderProfile

logger = logging.getLogger(__name__)


class AdminService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def _account_stats(
        self, role: UserRole, profile_model: type[ClientProfile] | type[ProviderProfile]
    ) -> schemas.AccountStats:
        total = (
            await self.db.execute(
                select(func.count(Account.id)).where(Account.role == role)
            )
        ).scalar_one()
        rows = await self.db.execute(
            select(profile_model.verification_status, func.count(profile_model.id))
            .join(Account, Account.id == profile_model.account_id)
            .where(Account.role == role)
            .group_by(profile_model.verification_status)
        )
        by_status = {status: count for status, count in rows.all()}
        approved = by_status.get(VerificationStatus.APPROVED, 0)
        rejected = by_status.get(VerificationStatus.REJECTED, 0)
        # accounts without a profile are pending
        return schemas.AccountStats(
            total=total,
            pending=total - approved - rejected,
            approved=approved,
            rejected=rejected,
        )

    async def _gig_stats(self) -> schemas.GigStats:
        rows = await self.db.execute(select(Gig.status, func.count(Gig.id)).group_by(Gig.status))
        by_status = {status.value: count for status, count in rows.all()}
        counts = {s.value: by_status.get(s.value, 0) for s in GigStatus}
        return schemas.GigStats(total=sum(counts.values()), **counts)

    async def get_stats(self) -> schemas.PlatformStats:
        stats = schemas.PlatformStats(
            service_providers=await self._account_stats(UserRole.SERVICE_PROVIDER, ProviderProfile),
            clients=await self._account_stats(UserRole.CLIENT, ClientProfile),
            gigs=await self._gig_stats(),
        )
        logger.info(
            f"[ADMIN] Stats computed: providers={stats.service_providers.total}, "
            f"clients={stats.clients.total}, gigs={stats.gigs.total}"
        )
        return stats
