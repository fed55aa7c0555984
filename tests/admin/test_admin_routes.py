"""
tests/admin/test_admin_routes.py

Unit tests for admin/routes.py covering:
- Verification of service providers and clients
- Account listings with profiles
- Dashboard statistics
- Gig listings by stage and provider allocation
- Admin-only restricted access
"""

from datetime import datetime, timezone
from unittest.mock import AsyncMock, patch
from uuid import uuid4

import pytest
from fastapi import status
from httpx import AsyncClient

from gigplatform.admin import schemas as admin_schemas
from gigplatform.admin import services as admin_services
from gigplatform.core.exceptions import (
    InvalidTransitionError,
    NotFoundError,
    PreconditionFailedError,
)
from gigplatform.database.enums import UserRole, VerificationStatus
from gigplatform.database.models import Account
from gigplatform.gig import services as gig_services
from gigplatform.gig.models import Gig, GigStatus
from gigplatform.verification import services as verification_services
from gigplatform.verification.models import ProviderProfile


def create_fake_provider(status: VerificationStatus = VerificationStatus.PENDING) -> tuple[Account, ProviderProfile]:
    now = datetime.now(timezone.utc)
    account = Account(
        id=uuid4(),
        username="sparky",
        email="sparky@example.com",
        role=UserRole.SERVICE_PROVIDER,
        is_active=True,
        created_at=now,
    )
    profile = ProviderProfile(
        id=uuid4(),
        account_id=account.id,
        full_name="Service Provider",
        location="Not specified",
        skills=[],
        verification_status=status,
        created_at=now,
        updated_at=now,
    )
    return account, profile


# --- Verification Endpoints ---
@pytest.mark.asyncio
@patch.object(verification_services.VerificationService, "set_status", new_callable=AsyncMock)
async def test_verify_service_provider(
    mock_set_status: AsyncMock,
    mock_current_admin_user: Account,
    async_client: AsyncClient,
    override_get_db: None,
) -> None:
    account, profile = create_fake_provider(VerificationStatus.APPROVED)
    mock_set_status.return_value = (account, profile)

    response = await async_client.put(
        f"/admin/service-providers/{account.id}/verify", json={"status": "approved"}
    )

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["account"]["id"] == str(account.id)
    assert data["profile"]["verification_status"] == "approved"
    assert data["message"] == "Verification status set to approved"
    mock_set_status.assert_awaited_once_with(
        mock_current_admin_user, account.id, UserRole.SERVICE_PROVIDER, VerificationStatus.APPROVED
    )


@pytest.mark.asyncio
@patch.object(verification_services.VerificationService, "set_status", new_callable=AsyncMock)
async def test_verify_client_not_found(
    mock_set_status: AsyncMock,
    mock_current_admin_user: Account,
    async_client: AsyncClient,
    override_get_db: None,
) -> None:
    mock_set_status.side_effect = NotFoundError("Client not found.")

    response = await async_client.put(f"/admin/clients/{uuid4()}/verify", json={"status": "rejected"})

    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json()["detail"] == "Client not found."


@pytest.mark.asyncio
async def test_verify_invalid_status_is_422(
    mock_current_admin_user: Account,
    async_client: AsyncClient,
    override_get_db: None,
) -> None:
    response = await async_client.put(f"/admin/clients/{uuid4()}/verify", json={"status": "verified"})

    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


# --- Account Listings ---
@pytest.mark.asyncio
@patch.object(verification_services.VerificationService, "list_accounts", new_callable=AsyncMock)
async def test_list_service_providers(
    mock_list_accounts: AsyncMock,
    mock_current_admin_user: Account,
    async_client: AsyncClient,
    override_get_db: None,
) -> None:
    account, profile = create_fake_provider()
    account.provider_profile = profile
    mock_list_accounts.return_value = ([account], 7)

    response = await async_client.get("/admin/service-providers?skip=0&limit=1")

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["total_count"] == 7
    assert data["has_next_page"] is True
    assert data["items"][0]["provider_profile"]["verification_status"] == "pending"
    mock_list_accounts.assert_awaited_once_with(UserRole.SERVICE_PROVIDER, skip=0, limit=1)


@pytest.mark.asyncio
@patch.object(gig_services.GigService, "list_client_gigs", new_callable=AsyncMock)
@patch.object(verification_services.VerificationService, "get_account_with_profile", new_callable=AsyncMock)
async def test_list_client_gigs(
    mock_get_account: AsyncMock,
    mock_list_client_gigs: AsyncMock,
    fake_client_user: Account,
    fake_gig: Gig,
    mock_current_admin_user: Account,
    async_client: AsyncClient,
    override_get_db: None,
) -> None:
    mock_get_account.return_value = fake_client_user
    mock_list_client_gigs.return_value = ([fake_gig], 1)

    response = await async_client.get(f"/admin/clients/{fake_client_user.id}/gigs")

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["items"][0]["client_id"] == str(fake_client_user.id)
    mock_get_account.assert_awaited_once_with(UserRole.CLIENT, fake_client_user.id)


# --- Dashboard ---
@pytest.mark.asyncio
@patch.object(admin_services.AdminService, "get_stats", new_callable=AsyncMock)
async def test_get_stats(
    mock_get_stats: AsyncMock,
    mock_current_admin_user: Account,
    async_client: AsyncClient,
    override_get_db: None,
) -> None:
    mock_get_stats.return_value = admin_schemas.PlatformStats(
        service_providers=admin_schemas.AccountStats(total=3, pending=1, approved=2),
        clients=admin_schemas.AccountStats(total=5, pending=5),
        gigs=admin_schemas.GigStats(total=4, open=3, completed=1),
    )

    response = await async_client.get("/admin/stats")

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["service_providers"]["approved"] == 2
    assert data["clients"]["pending"] == 5
    assert data["gigs"]["open"] == 3


@pytest.mark.asyncio
async def test_stats_forbidden_for_provider(
    mock_current_provider_user: Account,
    async_client: AsyncClient,
    override_get_db: None,
) -> None:
    response = await async_client.get("/admin/stats")

    assert response.status_code == status.HTTP_403_FORBIDDEN


# --- Gig Endpoints ---
@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("bucket", "expected_status"),
    [
        ("posted", GigStatus.OPEN),
        ("allocated", GigStatus.ALLOCATED),
        ("ongoing", GigStatus.IN_PROGRESS),
        ("completed", GigStatus.COMPLETED),
    ],
)
async def test_list_gigs_by_stage(
    bucket: str,
    expected_status: GigStatus,
    mock_current_admin_user: Account,
    async_client: AsyncClient,
    override_get_db: None,
) -> None:
    with patch.object(gig_services.GigService, "list_gigs", new_callable=AsyncMock) as mock_list_gigs:
        mock_list_gigs.return_value = ([], 0)
        response = await async_client.get(f"/admin/gigs/{bucket}")

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["items"] == []
    mock_list_gigs.assert_awaited_once_with(skip=0, limit=100, status=expected_status)


@pytest.mark.asyncio
async def test_list_gigs_unknown_stage_is_422(
    mock_current_admin_user: Account,
    async_client: AsyncClient,
    override_get_db: None,
) -> None:
    response = await async_client.get("/admin/gigs/archived")

    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


@pytest.mark.asyncio
@patch.object(gig_services.GigService, "allocate_provider", new_callable=AsyncMock)
async def test_allocate_provider(
    mock_allocate: AsyncMock,
    fake_gig: Gig,
    mock_current_admin_user: Account,
    async_client: AsyncClient,
    override_get_db: None,
) -> None:
    provider_id = uuid4()
    fake_gig.status = GigStatus.ALLOCATED
    fake_gig.provider_id = provider_id
    mock_allocate.return_value = fake_gig

    response = await async_client.post(
        f"/admin/gigs/{fake_gig.id}/allocate", json={"provider_id": str(provider_id)}
    )

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["status"] == "allocated"
    assert data["provider_id"] == str(provider_id)
    mock_allocate.assert_awaited_once_with(mock_current_admin_user, fake_gig.id, provider_id)


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("error", "expected_status"),
    [
        (PreconditionFailedError("Service provider must be verified before allocation."), 400),
        (InvalidTransitionError("Cannot allocate a gig that is allocated."), 409),
        (NotFoundError("Gig not found."), 404),
    ],
)
async def test_allocate_provider_errors(
    error: Exception,
    expected_status: int,
    mock_current_admin_user: Account,
    async_client: AsyncClient,
    override_get_db: None,
) -> None:
    with patch.object(gig_services.GigService, "allocate_provider", new_callable=AsyncMock) as mock_allocate:
        mock_allocate.side_effect = error
        response = await async_client.post(
            f"/admin/gigs/{uuid4()}/allocate", json={"provider_id": str(uuid4())}
        )

    assert response.status_code == expected_status


@pytest.mark.asyncio
async def test_allocate_requires_admin(
    mock_current_client_user: Account,
    async_client: AsyncClient,
    override_get_db: None,
) -> None:
    response = await async_client.post(
        f"/admin/gigs/{uuid4()}/allocate", json={"provider_id": str(uuid4())}
    )

    assert response.status_code == status.HTTP_403_FORBIDDEN
