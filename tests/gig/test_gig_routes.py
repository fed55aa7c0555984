# tests/gig/test_gig_routes.py
from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, patch
from uuid import uuid4

import pytest
from fastapi import status
from httpx import AsyncClient

from gigplatform.core.exceptions import (
    ForbiddenError,
    InvalidTransitionError,
    PreconditionFailedError,
)
from gigplatform.database.models import Account
from gigplatform.gig import services as gig_services
from gigplatform.gig.models import Gig, GigStatus


def _create_payload() -> dict:
    start = datetime.now(timezone.utc) + timedelta(days=1)
    return {
        "title": "Repair CCTV camera",
        "description": "Front door camera shows no image",
        "category_id": str(uuid4()),
        "location_id": str(uuid4()),
        "start_date": start.isoformat(),
        "end_date": (start + timedelta(days=1)).isoformat(),
    }


@pytest.mark.asyncio
@patch.object(gig_services.GigService, "create_gig", new_callable=AsyncMock)
async def test_create_gig_success(
    mock_create_gig: AsyncMock,
    fake_gig: Gig,
    mock_current_client_user: Account,
    async_client: AsyncClient,
    override_get_db: None,
) -> None:
    mock_create_gig.return_value = fake_gig

    response = await async_client.post("/gigs", json=_create_payload())

    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()
    assert data["id"] == str(fake_gig.id)
    assert data["status"] == "open"
    assert data["provider_id"] is None
    assert data["client_id"] == str(mock_current_client_user.id)
    mock_create_gig.assert_awaited_once()
    assert mock_create_gig.await_args.args[0] is mock_current_client_user


@pytest.mark.asyncio
@patch.object(gig_services.GigService, "create_gig", new_callable=AsyncMock)
async def test_create_gig_unverified_client_returns_400(
    mock_create_gig: AsyncMock,
    mock_current_client_user: Account,
    async_client: AsyncClient,
    override_get_db: None,
) -> None:
    mock_create_gig.side_effect = PreconditionFailedError("Client must be verified before posting gigs.")

    response = await async_client.post("/gigs", json=_create_payload())

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json() == {
        "detail": "Client must be verified before posting gigs.",
        "error": "precondition_failed",
    }


@pytest.mark.asyncio
async def test_create_gig_end_before_start_is_422(
    mock_current_client_user: Account,
    async_client: AsyncClient,
    override_get_db: None,
) -> None:
    payload = _create_payload()
    payload["end_date"] = (datetime.now(timezone.utc) - timedelta(days=3)).isoformat()

    response = await async_client.post("/gigs", json=payload)

    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


@pytest.mark.asyncio
@patch.object(gig_services.GigService, "create_gig", new_callable=AsyncMock)
async def test_create_gig_naive_start_date_is_422(
    mock_create_gig: AsyncMock,
    mock_current_client_user: Account,
    async_client: AsyncClient,
    override_get_db: None,
) -> None:
    payload = _create_payload()
    payload["start_date"] = "2030-01-01T10:00:00"
    payload["end_date"] = "2030-01-02T10:00:00Z"

    response = await async_client.post("/gigs", json=payload)

    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
    assert "timezone" in response.text
    mock_create_gig.assert_not_awaited()


@pytest.mark.asyncio
async def test_create_gig_requires_authentication(async_client: AsyncClient, override_get_db: None) -> None:
    response = await async_client.post("/gigs", json=_create_payload())

    assert response.status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.asyncio
@patch.object(gig_services.GigService, "list_gigs", new_callable=AsyncMock)
async def test_list_gigs_public(
    mock_list_gigs: AsyncMock,
    fake_gig: Gig,
    async_client: AsyncClient,
    override_get_db: None,
) -> None:
    mock_list_gigs.return_value = ([fake_gig], 3)

    response = await async_client.get("/gigs", params={"skip": 0, "limit": 1, "status": "open"})

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["total_count"] == 3
    assert data["has_next_page"] is True
    assert data["items"][0]["title"] == fake_gig.title
    mock_list_gigs.assert_awaited_once_with(skip=0, limit=1, status=GigStatus.OPEN)


@pytest.mark.asyncio
@patch.object(gig_services.GigService, "list_my_gigs", new_callable=AsyncMock)
async def test_list_my_gigs(
    mock_list_my_gigs: AsyncMock,
    fake_gig: Gig,
    mock_current_provider_user: Account,
    async_client: AsyncClient,
    override_get_db: None,
) -> None:
    mock_list_my_gigs.return_value = ([fake_gig], 1)

    response = await async_client.get("/gigs/mine")

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["total_count"] == 1
    assert mock_list_my_gigs.await_args.args[0] is mock_current_provider_user


@pytest.mark.asyncio
@patch.object(gig_services.GigService, "get_gig", new_callable=AsyncMock)
async def test_get_gig(
    mock_get_gig: AsyncMock,
    fake_gig: Gig,
    async_client: AsyncClient,
    override_get_db: None,
) -> None:
    mock_get_gig.return_value = fake_gig

    response = await async_client.get(f"/gigs/{fake_gig.id}")

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["description"] == fake_gig.description
    mock_get_gig.assert_awaited_once_with(fake_gig.id)


@pytest.mark.asyncio
@patch.object(gig_services.GigService, "advance_status", new_callable=AsyncMock)
async def test_update_status_to_in_progress(
    mock_advance: AsyncMock,
    fake_gig: Gig,
    mock_current_provider_user: Account,
    async_client: AsyncClient,
    override_get_db: None,
) -> None:
    fake_gig.status = GigStatus.IN_PROGRESS
    fake_gig.provider_id = mock_current_provider_user.id
    mock_advance.return_value = fake_gig

    response = await async_client.put(f"/gigs/{fake_gig.id}/status", json={"status": "in_progress"})

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["status"] == "in_progress"
    mock_advance.assert_awaited_once_with(
        mock_current_provider_user, fake_gig.id, GigStatus.IN_PROGRESS
    )


@pytest.mark.asyncio
@patch.object(gig_services.GigService, "advance_status", new_callable=AsyncMock)
async def test_update_status_invalid_transition_is_409(
    mock_advance: AsyncMock,
    fake_gig: Gig,
    mock_current_client_user: Account,
    async_client: AsyncClient,
    override_get_db: None,
) -> None:
    mock_advance.side_effect = InvalidTransitionError("Cannot cancel a gig that is in_progress.")

    response = await async_client.put(f"/gigs/{fake_gig.id}/status", json={"status": "cancelled"})

    assert response.status_code == status.HTTP_409_CONFLICT
    assert response.json()["error"] == "invalid_transition"


@pytest.mark.asyncio
@patch.object(gig_services.GigService, "advance_status", new_callable=AsyncMock)
async def test_update_status_forbidden_is_403(
    mock_advance: AsyncMock,
    fake_gig: Gig,
    mock_current_provider_user: Account,
    async_client: AsyncClient,
    override_get_db: None,
) -> None:
    mock_advance.side_effect = ForbiddenError("You are not authorized to modify this gig.")

    response = await async_client.put(f"/gigs/{fake_gig.id}/status", json={"status": "completed"})

    assert response.status_code == status.HTTP_403_FORBIDDEN


@pytest.mark.asyncio
async def test_update_status_unknown_value_is_422(
    mock_current_provider_user: Account,
    async_client: AsyncClient,
    override_get_db: None,
) -> None:
    response = await async_client.put(f"/gigs/{uuid4()}/status", json={"status": "finished"})

    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


@pytest.mark.asyncio
@patch.object(gig_services.GigService, "list_completed_gigs_for_provider", new_callable=AsyncMock)
async def test_provider_completed_gigs(
    mock_list_completed: AsyncMock,
    fake_gig: Gig,
    async_client: AsyncClient,
    override_get_db: None,
) -> None:
    provider_id = uuid4()
    fake_gig.status = GigStatus.COMPLETED
    fake_gig.provider_id = provider_id
    mock_list_completed.return_value = ([fake_gig], 1)

    response = await async_client.get(f"/providers/{provider_id}/gigs/completed")

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["items"][0]["status"] == "completed"
    mock_list_completed.assert_awaited_once_with(provider_id, skip=0, limit=100)
