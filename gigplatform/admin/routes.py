"""
gigplatform/admin/routes.py

Admin API Routes

Defines routes for administrative operations including:
- Listing and viewing service providers and clients with their profiles
- Setting verification status of providers and clients
- Dashboard statistics
- Listing gigs by lifecycle status and allocating providers to open gigs

All endpoints require Admin (or Super Admin) authentication.
"""

import logging
from typing import Annotated, Literal
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from gigplatform.admin.schemas import PlatformStats
from gigplatform.admin.services import AdminService
from gigplatform.core.dependencies import PaginationParams, require_admin
from gigplatform.core.limiter import limiter
from gigplatform.core.schemas import PaginatedResponse
from gigplatform.database.enums import UserRole
from gigplatform.database.models import Account
from gigplatform.database.session import get_db
from gigplatform.gig.lifecycle import ADMIN_STATUS_ALIASES
from gigplatform.gig.models import GigStatus
from gigplatform.gig.schemas import GigAllocate, GigRead
from gigplatform.gig.services import GigService
from gigplatform.verification.routes import profile_read
from gigplatform.verification.schemas import (
    AccountRead,
    ClientWithProfileRead,
    ProviderWithProfileRead,
    VerificationResult,
    VerificationUpdate,
)
from gigplatform.verification.services import VerificationService

# ---------------------------------------------------
# Router Configuration
# ---------------------------------------------------
router = APIRouter(prefix="/admin", tags=["Admin"])
logger = logging.getLogger(__name__)

# ---------------------------------------------------
# Dependencies
# ---------------------------------------------------
DBDep = Annotated[AsyncSession, Depends(get_db)]
AuthenticatedAdminDep = Annotated[Account, Depends(require_admin)]


# ---------------------------------------------------
# Helper Functions (Route level response building)
# ---------------------------------------------------
async def _set_verification(
    db: AsyncSession, admin: Account, account_id: UUID, role: UserRole, payload: VerificationUpdate
) -> VerificationResult:
    account, record = await VerificationService(db).set_status(admin, account_id, role, payload.status)
    return VerificationResult(
        account=AccountRead.model_validate(account),
        profile=profile_read(record),
        message=f"Verification status set to {payload.status.value}",
    )


def _gig_page(gigs: list, total_count: int, pagination: PaginationParams) -> PaginatedResponse[GigRead]:
    return PaginatedResponse[GigRead].from_page(
        [GigRead.model_validate(g) for g in gigs], total_count, pagination.skip, pagination.limit
    )


# ---------------------------------------------------
# Service Provider Endpoints
# ---------------------------------------------------
@router.get(
    "/service-providers",
    response_model=PaginatedResponse[ProviderWithProfileRead],
    summary="List Service Providers",
)
@limiter.limit("10/minute")
async def list_service_providers(
    request: Request,
    db: DBDep,
    current_user: AuthenticatedAdminDep,
    pagination: PaginationParams = Depends(),
) -> PaginatedResponse[ProviderWithProfileRead]:
    logger.info(f"[ADMIN] Admin {current_user.id} listing service providers")
    accounts, total_count = await VerificationService(db).list_accounts(
        UserRole.SERVICE_PROVIDER, skip=pagination.skip, limit=pagination.limit
    )
    return PaginatedResponse[ProviderWithProfileRead].from_page(
        [ProviderWithProfileRead.model_validate(a) for a in accounts],
        total_count,
        pagination.skip,
        pagination.limit,
    )


@router.get(
    "/service-providers/{provider_id}",
    response_model=ProviderWithProfileRead,
    summary="Get Service Provider",
)
@limiter.limit("15/minute")
async def get_service_provider(
    request: Request,
    provider_id: UUID,
    db: DBDep,
    current_user: AuthenticatedAdminDep,
) -> ProviderWithProfileRead:
    account = await VerificationService(db).get_account_with_profile(
        UserRole.SERVICE_PROVIDER, provider_id
    )
    return ProviderWithProfileRead.model_validate(account)


@router.put(
    "/service-providers/{provider_id}/verify",
    response_model=VerificationResult,
    summary="Set Service Provider Verification",
    description="Set the verification status of a service provider to pending, approved or rejected.",
)
@limiter.limit("10/minute")
async def verify_service_provider(
    request: Request,
    provider_id: UUID,
    payload: VerificationUpdate,
    db: DBDep,
    current_user: AuthenticatedAdminDep,
) -> VerificationResult:
    logger.info(
        f"[ADMIN] Admin {current_user.id} setting provider {provider_id} verification to {payload.status.value}"
    )
    return await _set_verification(db, current_user, provider_id, UserRole.SERVICE_PROVIDER, payload)


# ---------------------------------------------------
# Client Endpoints
# ---------------------------------------------------
@router.get(
    "/clients",
    response_model=PaginatedResponse[ClientWithProfileRead],
    summary="List Clients",
)
@limiter.limit("10/minute")
async def list_clients(
    request: Request,
    db: DBDep,
    current_user: AuthenticatedAdminDep,
    pagination: PaginationParams = Depends(),
) -> PaginatedResponse[ClientWithProfileRead]:
    logger.info(f"[ADMIN] Admin {current_user.id} listing clients")
    accounts, total_count = await VerificationService(db).list_accounts(
        UserRole.CLIENT, skip=pagination.skip, limit=pagination.limit
    )
    return PaginatedResponse[ClientWithProfileRead].from_page(
        [ClientWithProfileRead.model_validate(a) for a in accounts],
        total_count,
        pagination.skip,
        pagination.limit,
    )


@router.get(
    "/clients/{client_id}",
    response_model=ClientWithProfileRead,
    summary="Get Client",
)
@limiter.limit("15/minute")
async def get_client(
    request: Request,
    client_id: UUID,
    db: DBDep,
    current_user: AuthenticatedAdminDep,
) -> ClientWithProfileRead:
    account = await VerificationService(db).get_account_with_profile(UserRole.CLIENT, client_id)
    return ClientWithProfileRead.model_validate(account)


@router.get(
    "/clients/{client_id}/gigs",
    response_model=PaginatedResponse[GigRead],
    summary="List Client Gigs",
)
@limiter.limit("15/minute")
async def list_client_gigs(
    request: Request,
    client_id: UUID,
    db: DBDep,
    current_user: AuthenticatedAdminDep,
    pagination: PaginationParams = Depends(),
) -> PaginatedResponse[GigRead]:
    await VerificationService(db).get_account_with_profile(UserRole.CLIENT, client_id)
    gigs, total_count = await GigService(db).list_client_gigs(
        client_id, skip=pagination.skip, limit=pagination.limit
    )
    return _gig_page(gigs, total_count, pagination)


@router.put(
    "/clients/{client_id}/verify",
    response_model=VerificationResult,
    summary="Set Client Verification",
    description="Set the verification status of a client to pending, approved or rejected.",
)
@limiter.limit("10/minute")
async def verify_client(
    request: Request,
    client_id: UUID,
    payload: VerificationUpdate,
    db: DBDep,
    current_user: AuthenticatedAdminDep,
) -> VerificationResult:
    logger.info(
        f"[ADMIN] Admin {current_user.id} setting client {client_id} verification to {payload.status.value}"
    )
    return await _set_verification(db, current_user, client_id, UserRole.CLIENT, payload)


# ---------------------------------------------------
# Dashboard
# ---------------------------------------------------
@router.get(
    "/stats",
    response_model=PlatformStats,
    summary="Dashboard Statistics",
)
@limiter.limit("10/minute")
async def get_stats(
    request: Request,
    db: DBDep,
    current_user: AuthenticatedAdminDep,
) -> PlatformStats:
    return await AdminService(db).get_stats()


# ---------------------------------------------------
# Gig Endpoints
# ---------------------------------------------------
@router.get(
    "/gigs",
    response_model=PaginatedResponse[GigRead],
    summary="List All Gigs",
)
@limiter.limit("15/minute")
async def list_all_gigs(
    request: Request,
    db: DBDep,
    current_user: AuthenticatedAdminDep,
    pagination: PaginationParams = Depends(),
    gig_status: GigStatus | None = Query(None, alias="status", description="Filter by status"),
) -> PaginatedResponse[GigRead]:
    gigs, total_count = await GigService(db).list_gigs(
        skip=pagination.skip, limit=pagination.limit, status=gig_status
    )
    return _gig_page(gigs, total_count, pagination)


@router.get(
    "/gigs/{bucket}",
    response_model=PaginatedResponse[GigRead],
    summary="List Gigs by Stage",
    description="posted = open, allocated, ongoing = in progress, completed.",
)
@limiter.limit("15/minute")
async def list_gigs_by_stage(
    request: Request,
    bucket: Literal["posted", "allocated", "ongoing", "completed"],
    db: DBDep,
    current_user: AuthenticatedAdminDep,
    pagination: PaginationParams = Depends(),
) -> PaginatedResponse[GigRead]:
    gigs, total_count = await GigService(db).list_gigs(
        skip=pagination.skip, limit=pagination.limit, status=ADMIN_STATUS_ALIASES[bucket]
    )
    return _gig_page(gigs, total_count, pagination)


@router.post(
    "/gigs/{gig_id}/allocate",
    response_model=GigRead,
    summary="Allocate Provider",
    description="Allocate an approved service provider to an open gig.",
)
@limiter.limit("10/minute")
async def allocate_provider(
    request: Request,
    gig_id: UUID,
    payload: GigAllocate,
    db: DBDep,
    current_user: AuthenticatedAdminDep,
) -> GigRead:
    logger.info(f"[ADMIN] Admin {current_user.id} allocating provider {payload.provider_id} to gig {gig_id}")
    gig = await GigService(db).allocate_provider(current_user, gig_id, payload.provider_id)
    return GigRead.model_validate(gig)
