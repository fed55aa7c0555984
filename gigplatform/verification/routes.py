"""
gigplatform/verification/routes.py

Profile Routes
Endpoints through which an account manages its own role-specific profile:
- View own account and profile (Authenticated)
- Create/update client profile (Authenticated Client)
- Create/update service provider profile (Authenticated Service Provider)

Newly created profiles always start with verification status "pending".
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from gigplatform.core.dependencies import get_current_user
from gigplatform.core.limiter import limiter
from gigplatform.database.models import Account
from gigplatform.database.session import get_db
from gigplatform.verification import schemas
from gigplatform.verification.models import ClientProfile
from gigplatform.verification.services import VerificationService

router = APIRouter(prefix="/profile", tags=["Profile"])
logger = logging.getLogger(__name__)

DBDep = Annotated[AsyncSession, Depends(get_db)]
CurrentUserDep = Annotated[Account, Depends(get_current_user)]


def profile_read(
    record: object | None,
) -> schemas.ClientProfileRead | schemas.ProviderProfileRead | None:
    """Serialize a profile record with the schema matching its type."""
    if record is None:
        return None
    if isinstance(record, ClientProfile):
        return schemas.ClientProfileRead.model_validate(record)
    return schemas.ProviderProfileRead.model_validate(record)


# ---------------------------------------------------
# Own Profile
# ---------------------------------------------------
@router.get(
    "",
    response_model=schemas.MyProfileRead,
    status_code=status.HTTP_200_OK,
    summary="Get My Profile",
    description="Return the authenticated account and its role-specific profile.",
)
@limiter.limit("20/minute")
async def get_my_profile(
    request: Request,
    db: DBDep,
    current_user: CurrentUserDep,
) -> schemas.MyProfileRead:
    account, record = await VerificationService(db).get_my_profile(current_user)
    return schemas.MyProfileRead(
        account=schemas.AccountRead.model_validate(account),
        profile=profile_read(record),
    )


# ---------------------------------------------------
# Client Profile
# ---------------------------------------------------
@router.post(
    "/client",
    response_model=schemas.ClientProfileRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create Client Profile",
    description="Complete the client profile. Verification status starts as pending.",
)
@limiter.limit("5/minute")
async def create_client_profile(
    request: Request,
    payload: schemas.ClientProfileCreate,
    db: DBDep,
    current_user: CurrentUserDep,
) -> schemas.ClientProfileRead:
    logger.info(f"[PROFILE] Client {current_user.id} creating profile")
    record = await VerificationService(db).create_client_profile(current_user, payload)
    return schemas.ClientProfileRead.model_validate(record)


@router.put(
    "/client",
    response_model=schemas.ClientProfileRead,
    status_code=status.HTTP_200_OK,
    summary="Update Client Profile",
)
@limiter.limit("10/minute")
async def update_client_profile(
    request: Request,
    payload: schemas.ClientProfileUpdate,
    db: DBDep,
    current_user: CurrentUserDep,
) -> schemas.ClientProfileRead:
    record = await VerificationService(db).update_client_profile(current_user, payload)
    return schemas.ClientProfileRead.model_validate(record)


# ---------------------------------------------------
# Service Provider Profile
# ---------------------------------------------------
@router.post(
    "/service-provider",
    response_model=schemas.ProviderProfileRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create Service Provider Profile",
    description="Complete the service provider profile. Verification status starts as pending.",
)
@limiter.limit("5/minute")
async def create_provider_profile(
    request: Request,
    payload: schemas.ProviderProfileCreate,
    db: DBDep,
    current_user: CurrentUserDep,
) -> schemas.ProviderProfileRead:
    logger.info(f"[PROFILE] Service provider {current_user.id} creating profile")
    record = await VerificationService(db).create_provider_profile(current_user, payload)
    return schemas.ProviderProfileRead.model_validate(record)


@router.put(
    "/service-provider",
    response_model=schemas.ProviderProfileRead,
    status_code=status.HTTP_200_OK,
    summary="Update Service Provider Profile",
)
@limiter.limit("10/minute")
async def update_provider_profile(
    request: Request,
    payload: schemas.ProviderProfileUpdate,
    db: DBDep,
    current_user: CurrentUserDep,
) -> schemas.ProviderProfileRead:
    record = await VerificationService(db).update_provider_profile(current_user, payload)
    return schemas.ProviderProfileRead.model_validate(record)
