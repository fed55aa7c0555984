"""
tests/verification/test_verification_routes.py

Route tests for /profile endpoints with the verification service patched.
"""

from datetime import datetime, timezone
from unittest.mock import AsyncMock, patch
from uuid import uuid4

import pytest
from fastapi import status
from httpx import AsyncClient

from gigplatform.core.exceptions import ConflictError, ForbiddenError
from gigplatform.database.enums import VerificationStatus
from gigplatform.database.models import Account
from gigplatform.verification import services as verification_services
from gigplatform.verification.models import ClientProfile, ProviderProfile


def create_fake_client_profile(account_id, status: VerificationStatus = VerificationStatus.PENDING) -> ClientProfile:
    now = datetime.now(timezone.utc)
    return ClientProfile(
        id=uuid4(),
        account_id=account_id,
        contact_name="Dana Reyes",
        company_name=None,
        location="Austin",
        phone=None,
        verification_status=status,
        created_at=now,
        updated_at=now,
    )


def create_fake_provider_profile(account_id) -> ProviderProfile:
    now = datetime.now(timezone.utc)
    return ProviderProfile(
        id=uuid4(),
        account_id=account_id,
        full_name="Sam Ortiz",
        location="Denver",
        skills=["wiring", "cctv"],
        verification_status=VerificationStatus.PENDING,
        avg_rating=None,
        created_at=now,
        updated_at=now,
    )


@pytest.mark.asyncio
@patch.object(verification_services.VerificationService, "get_my_profile", new_callable=AsyncMock)
async def test_get_my_profile(
    mock_get_my_profile: AsyncMock,
    mock_current_client_user: Account,
    async_client: AsyncClient,
    override_get_db: None,
) -> None:
    profile = create_fake_client_profile(mock_current_client_user.id, VerificationStatus.APPROVED)
    mock_get_my_profile.return_value = (mock_current_client_user, profile)

    response = await async_client.get("/profile")

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["account"]["role"] == "client"
    assert data["profile"]["contact_name"] == "Dana Reyes"
    assert data["profile"]["verification_status"] == "approved"


@pytest.mark.asyncio
@patch.object(verification_services.VerificationService, "get_my_profile", new_callable=AsyncMock)
async def test_get_my_profile_admin_has_none(
    mock_get_my_profile: AsyncMock,
    mock_current_admin_user: Account,
    async_client: AsyncClient,
    override_get_db: None,
) -> None:
    mock_get_my_profile.return_value = (mock_current_admin_user, None)

    response = await async_client.get("/profile")

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["profile"] is None


@pytest.mark.asyncio
@patch.object(verification_services.VerificationService, "create_client_profile", new_callable=AsyncMock)
async def test_create_client_profile(
    mock_create: AsyncMock,
    mock_current_client_user: Account,
    async_client: AsyncClient,
    override_get_db: None,
) -> None:
    mock_create.return_value = create_fake_client_profile(mock_current_client_user.id)

    response = await async_client.post(
        "/profile/client", json={"contact_name": "Dana Reyes", "location": "Austin"}
    )

    assert response.status_code == status.HTTP_201_CREATED
    assert response.json()["verification_status"] == "pending"
    mock_create.assert_awaited_once()


@pytest.mark.asyncio
@patch.object(verification_services.VerificationService, "create_client_profile", new_callable=AsyncMock)
async def test_create_client_profile_conflict(
    mock_create: AsyncMock,
    mock_current_client_user: Account,
    async_client: AsyncClient,
    override_get_db: None,
) -> None:
    mock_create.side_effect = ConflictError("Profile already exists. Use the update endpoint instead.")

    response = await async_client.post(
        "/profile/client", json={"contact_name": "Dana Reyes", "location": "Austin"}
    )

    assert response.status_code == status.HTTP_409_CONFLICT
    assert response.json()["error"] == "conflict"


@pytest.mark.asyncio
async def test_create_client_profile_missing_fields_is_422(
    mock_current_client_user: Account,
    async_client: AsyncClient,
    override_get_db: None,
) -> None:
    response = await async_client.post("/profile/client", json={"company_name": "Reyes LLC"})

    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


@pytest.mark.asyncio
@patch.object(verification_services.VerificationService, "update_provider_profile", new_callable=AsyncMock)
async def test_update_provider_profile(
    mock_update: AsyncMock,
    mock_current_provider_user: Account,
    async_client: AsyncClient,
    override_get_db: None,
) -> None:
    profile = create_fake_provider_profile(mock_current_provider_user.id)
    profile.availability = "Weekdays"
    mock_update.return_value = profile

    response = await async_client.put("/profile/service-provider", json={"availability": "Weekdays"})

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["availability"] == "Weekdays"
    assert data["skills"] == ["wiring", "cctv"]
    payload = mock_update.await_args.args[1]
    assert payload.model_dump(exclude_unset=True) == {"availability": "Weekdays"}


@pytest.mark.asyncio
@patch.object(verification_services.VerificationService, "create_provider_profile", new_callable=AsyncMock)
async def test_create_provider_profile_wrong_role(
    mock_create: AsyncMock,
    mock_current_client_user: Account,
    async_client: AsyncClient,
    override_get_db: None,
) -> None:
    mock_create.side_effect = ForbiddenError("Only service_provider accounts can manage this profile.")

    response = await async_client.post(
        "/profile/service-provider", json={"full_name": "Sam Ortiz", "location": "Denver"}
    )

    assert response.status_code == status.HTTP_403_FORBIDDEN
