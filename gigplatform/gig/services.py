"""
gigplatform/gig/services.py

Gig Lifecycle Manager
Business logic for gigs:
- Creation by verified clients
- Allocation of verified providers by admins
- Start, completion and cancellation by the owning party
- Public and role-scoped listings

Every status change is a single conditional UPDATE keyed on the expected
current status; a request that loses a race sees zero affected rows and
fails with InvalidTransitionError.
"""

import logging
from typing import Any
from uuid import UUID

from sqlalchemy import func, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from gigplatform.catalog.services import CatalogService
from gigplatform.core.exceptions import (
    ForbiddenError,
    InvalidTransitionError,
    NotFoundError,
    PreconditionFailedError,
    StorageError,
    ValidationError,
)
from gigplatform.database.enums import UserRole
from gigplatform.database.models import Account
from gigplatform.database.session import commit_or_raise
from gigplatform.gig import schemas
from gigplatform.gig.lifecycle import (
    ALLOCATE,
    CANCEL,
    COMPLETE_WORK,
    START_WORK,
    TARGET_TRANSITIONS,
    Transition,
)
from gigplatform.gig.models import Gig, GigStatus
from gigplatform.notifications.events import EventDispatcher, GigAllocated, dispatcher
from gigplatform.verification.services import VerificationService

logger = logging.getLogger(__name__)


def _gig_relations() -> list[Any]:
    return [
        selectinload(Gig.category),
        selectinload(Gig.location),
        selectinload(Gig.client),
        selectinload(Gig.provider),
    ]


class GigService:
    def __init__(self, db: AsyncSession, events: EventDispatcher | None = None) -> None:
        self.db = db
        self.events = events or dispatcher
        self.verification = VerificationService(db)
        self.catalog = CatalogService(db)

    # ---------------------------------------------------
    # Internal DB Helpers
    # ---------------------------------------------------
    async def _get_gig_or_404(self, gig_id: UUID) -> Gig:
        gig = await self.db.get(Gig, gig_id)
        if not gig:
            logger.warning(f"[GIG] Gig not found: gig_id={gig_id}")
            raise NotFoundError("Gig not found.")
        return gig

    async def _load_gig_or_404(self, gig_id: UUID) -> Gig:
        """Fresh read of a gig with category, location and parties loaded."""
        stmt = (
            select(Gig)
            .where(Gig.id == gig_id)
            .options(*_gig_relations())
            .execution_options(populate_existing=True)
        )
        gig = (await self.db.execute(stmt)).scalar_one_or_none()
        if not gig:
            logger.warning(f"[GIG] Gig not found: gig_id={gig_id}")
            raise NotFoundError("Gig not found.")
        return gig

    async def _compare_and_set(
        self, gig_id: UUID, transition: Transition, actor: Account, **values: Any
    ) -> Gig:
        """Apply `transition` only if the gig is still in one of its source statuses."""
        stmt = (
            update(Gig)
            .where(Gig.id == gig_id, Gig.status.in_(transition.sources))
            .values(status=transition.target, **values)
            .execution_options(synchronize_session=False)
        )
        if transition.owner_field:
            stmt = stmt.where(getattr(Gig, transition.owner_field) == actor.id)

        try:
            result = await self.db.execute(stmt)
            if result.rowcount == 0:
                current = await self.db.scalar(select(Gig.status).where(Gig.id == gig_id))
                await self.db.rollback()
                logger.warning(
                    f"[GIG] {transition.action} lost race on gig {gig_id}: status is now {current}"
                )
                raise InvalidTransitionError(
                    f"Cannot {transition.action.replace('_', ' ')}: gig is no longer "
                    f"{' or '.join(sorted(s.value for s in transition.sources))}."
                )
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"[GIG] Error applying {transition.action} to gig {gig_id}: {e}", exc_info=True)
            raise StorageError(f"Failed to {transition.action.replace('_', ' ')}.") from e

        await commit_or_raise(self.db, transition.action.replace("_", " "))
        logger.info(f"[GIG] {transition.action}: gig {gig_id} -> {transition.target.value} by {actor.id}")
        return await self._load_gig_or_404(gig_id)

    async def _apply_owned_transition(
        self, transition: Transition, actor: Account, gig_id: UUID
    ) -> Gig:
        if not transition.allows_role(actor.role):
            logger.warning(f"[GIG] {actor.role.value} {actor.id} attempted {transition.action}")
            raise ForbiddenError(f"Your role cannot {transition.action.replace('_', ' ')}.")

        gig = await self._get_gig_or_404(gig_id)
        # status first: an open gig has no provider to match against
        if not transition.allows_from(gig.status):
            suffix = " (final state)" if gig.status.is_terminal else ""
            raise InvalidTransitionError(
                f"Cannot {transition.action.replace('_', ' ')} a gig that is {gig.status.value}{suffix}."
            )
        if getattr(gig, transition.owner_field) != actor.id:
            logger.warning(f"[GIG] Account {actor.id} is not a party to gig {gig_id} for {transition.action}")
            raise ForbiddenError("You are not authorized to modify this gig.")
        return await self._compare_and_set(gig_id, transition, actor)

    # ---------------------------------------------------
    # Lifecycle Operations
    # ---------------------------------------------------
    async def create_gig(self, acting_client: Account, payload: schemas.GigCreate) -> Gig:
        """Post a new open gig on behalf of an approved client."""
        logger.info(f"[GIG] Client {acting_client.id} creating gig '{payload.title}'")
        if payload.start_date.tzinfo is None or payload.end_date.tzinfo is None:
            raise ValidationError("start_date and end_date must include timezone information.")
        if payload.end_date < payload.start_date:
            raise ValidationError("end_date must not be earlier than start_date.")
        if acting_client.role != UserRole.CLIENT:
            raise ForbiddenError("Only clients can create gigs.")
        if not await self.verification.is_approved(acting_client.id, UserRole.CLIENT):
            raise PreconditionFailedError("Client must be verified before posting gigs.")

        await self.catalog.require_category(payload.category_id)
        await self.catalog.require_location(payload.location_id)

        gig = Gig(
            **payload.model_dump(),
            client_id=acting_client.id,
            provider_id=None,
            status=GigStatus.OPEN,
        )
        self.db.add(gig)
        await commit_or_raise(self.db, "create gig")
        logger.info(f"[GIG] Gig created: gig_id={gig.id}")
        return await self._load_gig_or_404(gig.id)

    async def allocate_provider(self, acting_admin: Account, gig_id: UUID, provider_id: UUID) -> Gig:
        """
        Assign an approved provider to an open gig and publish GigAllocated.

        Raises:
            ForbiddenError: actor is not an admin.
            NotFoundError: gig or service provider does not exist.
            PreconditionFailedError: provider is not approved.
            InvalidTransitionError: gig is not open (including a lost race).
        """
        logger.info(f"[GIG] Admin {acting_admin.id} allocating provider {provider_id} to gig {gig_id}")
        if not ALLOCATE.allows_role(acting_admin.role):
            raise ForbiddenError("Only admins can allocate providers.")

        gig = await self._get_gig_or_404(gig_id)
        provider = await self.db.get(Account, provider_id)
        if not provider or provider.role != UserRole.SERVICE_PROVIDER:
            raise NotFoundError("Service provider not found.")
        if not await self.verification.is_approved(provider_id, UserRole.SERVICE_PROVIDER):
            raise PreconditionFailedError("Service provider must be verified before allocation.")
        if not ALLOCATE.allows_from(gig.status):
            raise InvalidTransitionError(f"Cannot allocate a gig that is {gig.status.value}.")

        client_id = gig.client_id
        allocated = await self._compare_and_set(gig_id, ALLOCATE, acting_admin, provider_id=provider_id)
        self.events.publish(
            GigAllocated(gig_id=gig_id, client_id=client_id, provider_id=provider_id)
        )
        return allocated

    async def start_work(self, acting_provider: Account, gig_id: UUID) -> Gig:
        return await self._apply_owned_transition(START_WORK, acting_provider, gig_id)

    async def complete_work(self, acting_provider: Account, gig_id: UUID) -> Gig:
        return await self._apply_owned_transition(COMPLETE_WORK, acting_provider, gig_id)

    async def cancel(self, acting_client: Account, gig_id: UUID) -> Gig:
        return await self._apply_owned_transition(CANCEL, acting_client, gig_id)

    async def advance_status(self, acting_user: Account, gig_id: UUID, target_status: GigStatus) -> Gig:
        """Route a requested target status to the matching lifecycle action."""
        transition = TARGET_TRANSITIONS.get(target_status)
        if transition is None:
            raise ValidationError(
                f"Status '{target_status.value}' cannot be requested. "
                f"Allowed: {', '.join(s.value for s in TARGET_TRANSITIONS)}."
            )
        return await self._apply_owned_transition(transition, acting_user, gig_id)

    # ---------------------------------------------------
    # Read Operations
    # ---------------------------------------------------
    async def get_gig(self, gig_id: UUID) -> Gig:
        return await self._load_gig_or_404(gig_id)

    async def _list(self, *criteria: Any, skip: int, limit: int) -> tuple[list[Gig], int]:
        total = (
            await self.db.execute(select(func.count(Gig.id)).where(*criteria))
        ).scalar_one()
        stmt = (
            select(Gig)
            .where(*criteria)
            .options(*_gig_relations())
            .order_by(Gig.created_at.desc(), Gig.id)
            .offset(skip)
            .limit(limit)
            .execution_options(populate_existing=True)
        )
        gigs = list((await self.db.execute(stmt)).scalars().all())
        return gigs, total

    async def list_gigs(
        self, skip: int = 0, limit: int = 100, status: GigStatus | None = None
    ) -> tuple[list[Gig], int]:
        criteria = [Gig.status == status] if status else []
        return await self._list(*criteria, skip=skip, limit=limit)

    async def list_client_gigs(
        self, client_id: UUID, skip: int = 0, limit: int = 100, status: GigStatus | None = None
    ) -> tuple[list[Gig], int]:
        criteria = [Gig.client_id == client_id]
        if status:
            criteria.append(Gig.status == status)
        return await self._list(*criteria, skip=skip, limit=limit)

    async def list_provider_gigs(
        self, provider_id: UUID, skip: int = 0, limit: int = 100, status: GigStatus | None = None
    ) -> tuple[list[Gig], int]:
        criteria = [Gig.provider_id == provider_id]
        if status:
            criteria.append(Gig.status == status)
        return await self._list(*criteria, skip=skip, limit=limit)

    async def list_completed_gigs_for_provider(
        self, provider_id: UUID, skip: int = 0, limit: int = 100
    ) -> tuple[list[Gig], int]:
        provider = await self.db.get(Account, provider_id)
        if not provider or provider.role != UserRole.SERVICE_PROVIDER:
            raise NotFoundError("Service provider not found.")
        return await self.list_provider_gigs(
            provider_id, skip=skip, limit=limit, status=GigStatus.COMPLETED
        )

    async def list_my_gigs(
        self, actor: Account, skip: int = 0, limit: int = 100, status: GigStatus | None = None
    ) -> tuple[list[Gig], int]:
        """Gigs posted by a client or allocated to a provider."""
        if actor.role == UserRole.CLIENT:
            return await self.list_client_gigs(actor.id, skip=skip, limit=limit, status=status)
        if actor.role == UserRole.SERVICE_PROVIDER:
            return await self.list_provider_gigs(actor.id, skip=skip, limit=limit, status=status)
        raise ForbiddenError("Only clients and service providers have their own gigs.")
