"""
gigplatform/verification/services.py

Verification Gate
Owns the per-account verification record and answers "is this account
approved?" for the gig lifecycle:
- Read and set verification status (set is admin only, any value to any value)
- Client and service provider profile creation/update by their owners
- Admin account listings with their profiles

Eligibility is always read from the database at the moment of the check.
"""

import logging
from typing import Any
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from gigplatform.core.exceptions import (
    ConflictError,
    ForbiddenError,
    NotFoundError,
    ValidationError,
)
from gigplatform.database.enums import VERIFIABLE_ROLES, UserRole, VerificationStatus
from gigplatform.database.models import Account
from gigplatform.database.session import commit_or_raise
from gigplatform.verification import schemas
from gigplatform.verification.models import ClientProfile, ProviderProfile

logger = logging.getLogger(__name__)

ProfileRecord = ClientProfile | ProviderProfile

PLACEHOLDER_LOCATION = "Not specified"


def _profile_model(role: UserRole) -> type[ClientProfile] | type[ProviderProfile]:
    if role == UserRole.CLIENT:
        return ClientProfile
    if role == UserRole.SERVICE_PROVIDER:
        return ProviderProfile
    raise ValidationError(f"Role '{role.value}' has no verification record.")


def _placeholder_profile(account_id: UUID, role: UserRole) -> ProfileRecord:
    """Minimal record used when an admin verifies an account that never filled its profile."""
    if role == UserRole.CLIENT:
        return ClientProfile(
            account_id=account_id,
            contact_name="Client",
            location=PLACEHOLDER_LOCATION,
        )
    return ProviderProfile(
        account_id=account_id,
        full_name="Service Provider",
        location=PLACEHOLDER_LOCATION,
        skills=[],
    )


# ---------------------------------------------------
# VerificationService
# ---------------------------------------------------
class VerificationService:
    """Reads and writes verification records and the profiles that carry them."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    # ---------------------------------------------------
    # Internal DB Helpers
    # ---------------------------------------------------
    async def _get_account_with_role_or_404(self, account_id: UUID, role: UserRole) -> Account:
        account = await self.db.get(Account, account_id)
        if not account or account.role != role:
            logger.warning(f"[VERIFY] No {role.value} account with id={account_id}")
            label = "Service provider" if role == UserRole.SERVICE_PROVIDER else "Client"
            raise NotFoundError(f"{label} not found.")
        return account

    async def _get_record(self, account_id: UUID, role: UserRole) -> ProfileRecord | None:
        model = _profile_model(role)
        result = await self.db.execute(select(model).where(model.account_id == account_id))
        return result.scalar_one_or_none()

    @staticmethod
    def _require_role(actor: Account, role: UserRole) -> None:
        if actor.role != role:
            logger.warning(
                f"[VERIFY] Account {actor.id} with role={actor.role.value} attempted {role.value} profile action"
            )
            raise ForbiddenError(f"Only {role.value} accounts can manage this profile.")

    # ---------------------------------------------------
    # Verification Status
    # ---------------------------------------------------
    async def get_status(self, account_id: UUID, role: UserRole) -> VerificationStatus:
        """Current status of the account's record; pending when none exists."""
        if role not in VERIFIABLE_ROLES:
            raise ValidationError(f"Role '{role.value}' has no verification record.")
        record = await self._get_record(account_id, role)
        if record is None:
            return VerificationStatus.PENDING
        return record.verification_status

    async def is_approved(self, account_id: UUID, role: UserRole) -> bool:
        return await self.get_status(account_id, role) == VerificationStatus.APPROVED

    async def set_status(
        self,
        acting_admin: Account,
        account_id: UUID,
        role: UserRole,
        new_status: VerificationStatus,
    ) -> tuple[Account, ProfileRecord]:
        """
        Overwrite the verification status of a client or provider account.

        A placeholder record is created when the account has none. Any status
        may replace any other.
        """
        if not acting_admin.role.is_admin:
            logger.warning(f"[VERIFY] Non-admin {acting_admin.id} attempted to set verification status")
            raise ForbiddenError("Only admins can change verification status.")
        if role not in VERIFIABLE_ROLES:
            raise ValidationError(f"Role '{role.value}' has no verification record.")

        account = await self._get_account_with_role_or_404(account_id, role)
        record = await self._get_record(account_id, role)
        if record is None:
            logger.info(f"[VERIFY] Creating placeholder {role.value} profile for account {account_id}")
            record = _placeholder_profile(account_id, role)
            self.db.add(record)

        previous = record.verification_status
        record.verification_status = new_status
        await commit_or_raise(
            self.db,
            "update verification status",
            integrity_error=ConflictError(
                "Verification record was created concurrently. Retry the request."
            ),
        )
        await self.db.refresh(record)
        logger.info(
            f"[VERIFY] Admin {acting_admin.id} set {role.value} {account_id} status "
            f"{previous.value if previous else None} -> {new_status.value}"
        )
        return account, record

    # ---------------------------------------------------
    # Profiles (Owner)
    # ---------------------------------------------------
    async def get_my_profile(self, actor: Account) -> tuple[Account, ProfileRecord | None]:
        """Return the actor's account and its role-specific profile, if any."""
        if actor.role not in VERIFIABLE_ROLES:
            return actor, None
        return actor, await self._get_record(actor.id, actor.role)

    async def _create_profile(self, actor: Account, role: UserRole, data: dict[str, Any]) -> ProfileRecord:
        self._require_role(actor, role)
        if await self._get_record(actor.id, role) is not None:
            raise ConflictError("Profile already exists. Use the update endpoint instead.")

        model = _profile_model(role)
        data.pop("verification_status", None)
        record = model(account_id=actor.id, verification_status=VerificationStatus.PENDING, **data)
        self.db.add(record)
        await commit_or_raise(
            self.db, "create profile", integrity_error=ConflictError("Profile already exists.")
        )
        await self.db.refresh(record)
        logger.info(f"[VERIFY] {role.value} profile created for account {actor.id}")
        return record

    async def _update_profile(self, actor: Account, role: UserRole, data: dict[str, Any]) -> ProfileRecord:
        self._require_role(actor, role)
        record = await self._get_record(actor.id, role)
        if record is None:
            raise NotFoundError("Profile not found. Create it first.")

        for field in ("verification_status", "avg_rating", "account_id", "id"):
            data.pop(field, None)
        for field, value in data.items():
            setattr(record, field, value)

        await commit_or_raise(self.db, "update profile")
        await self.db.refresh(record)
        logger.info(f"[VERIFY] {role.value} profile updated for account {actor.id}: {list(data)}")
        return record

    async def create_client_profile(
        self, actor: Account, payload: schemas.ClientProfileCreate
    ) -> ClientProfile:
        return await self._create_profile(actor, UserRole.CLIENT, payload.model_dump())

    async def update_client_profile(
        self, actor: Account, payload: schemas.ClientProfileUpdate
    ) -> ClientProfile:
        return await self._update_profile(
            actor, UserRole.CLIENT, payload.model_dump(exclude_unset=True)
        )

    async def create_provider_profile(
        self, actor: Account, payload: schemas.ProviderProfileCreate
    ) -> ProviderProfile:
        return await self._create_profile(actor, UserRole.SERVICE_PROVIDER, payload.model_dump())

    async def update_provider_profile(
        self, actor: Account, payload: schemas.ProviderProfileUpdate
    ) -> ProviderProfile:
        return await self._update_profile(
            actor, UserRole.SERVICE_PROVIDER, payload.model_dump(exclude_unset=True)
        )

    # ---------------------------------------------------
    # Admin Listings
    # ---------------------------------------------------
    async def list_accounts(
        self, role: UserRole, skip: int = 0, limit: int = 100
    ) -> tuple[list[Account], int]:
        """Accounts of a verifiable role with their profile eagerly loaded, newest first."""
        if role not in VERIFIABLE_ROLES:
            raise ValidationError(f"Role '{role.value}' has no verification record.")
        profile_attr = Account.client_profile if role == UserRole.CLIENT else Account.provider_profile

        total_count = (
            await self.db.execute(select(func.count()).select_from(Account).where(Account.role == role))
        ).scalar_one()

        stmt = (
            select(Account)
            .where(Account.role == role)
            .options(selectinload(profile_attr))
            .order_by(Account.created_at.desc(), Account.id)
            .offset(skip)
            .limit(limit)
        )
        accounts = list((await self.db.execute(stmt)).scalars().all())
        logger.info(f"[VERIFY] Listed {len(accounts)} of {total_count} {role.value} accounts")
        return accounts, total_count

    async def get_account_with_profile(self, role: UserRole, account_id: UUID) -> Account:
        if role not in VERIFIABLE_ROLES:
            raise ValidationError(f"Role '{role.value}' has no verification record.")
        profile_attr = Account.client_profile if role == UserRole.CLIENT else Account.provider_profile
        stmt = select(Account).where(Account.id == account_id).options(selectinload(profile_attr))
        account = (await self.db.execute(stmt)).scalar_one_or_none()
        if not account or account.role != role:
            label = "Service provider" if role == UserRole.SERVICE_PROVIDER else "Client"
            raise NotFoundError(f"{label} not found.")
        return account
