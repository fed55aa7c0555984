"""
tests/rating/test_rating_routes.py

Route tests for rating submission and the public provider ratings listing.
"""

from datetime import datetime, timezone
from unittest.mock import AsyncMock, patch
from uuid import uuid4

import pytest
from fastapi import status
from httpx import AsyncClient

from gigplatform.core.exceptions import ConflictError, NotFoundError, PreconditionFailedError
from gigplatform.database.models import Account
from gigplatform.rating import services as rating_services
from gigplatform.rating.models import Rating


def create_fake_rating(client_id=None, provider_id=None, score: int = 4) -> Rating:
    return Rating(
        id=uuid4(),
        gig_id=uuid4(),
        client_id=client_id or uuid4(),
        provider_id=provider_id or uuid4(),
        score=score,
        review="Arrived on time",
        created_at=datetime.now(timezone.utc),
    )


@pytest.mark.asyncio
@patch.object(rating_services.RatingService, "rate", new_callable=AsyncMock)
async def test_rate_gig_success(
    mock_rate: AsyncMock,
    mock_current_client_user: Account,
    async_client: AsyncClient,
    override_get_db: None,
) -> None:
    rating = create_fake_rating(client_id=mock_current_client_user.id, score=5)
    mock_rate.return_value = rating

    response = await async_client.post(
        f"/gigs/{rating.gig_id}/rate", json={"score": 5, "review": "Arrived on time"}
    )

    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()
    assert data["score"] == 5
    assert data["client_id"] == str(mock_current_client_user.id)
    mock_rate.assert_awaited_once_with(mock_current_client_user, rating.gig_id, 5, "Arrived on time")


@pytest.mark.asyncio
@pytest.mark.parametrize("score", [0, 6])
async def test_rate_gig_score_out_of_range_is_422(
    score: int,
    mock_current_client_user: Account,
    async_client: AsyncClient,
    override_get_db: None,
) -> None:
    response = await async_client.post(f"/gigs/{uuid4()}/rate", json={"score": score})

    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("error", "expected_status"),
    [
        (ConflictError("This gig has already been rated."), status.HTTP_409_CONFLICT),
        (PreconditionFailedError("Only completed gigs can be rated."), status.HTTP_400_BAD_REQUEST),
        (NotFoundError("Gig not found."), status.HTTP_404_NOT_FOUND),
    ],
)
async def test_rate_gig_domain_errors(
    error: Exception,
    expected_status: int,
    mock_current_client_user: Account,
    async_client: AsyncClient,
    override_get_db: None,
) -> None:
    with patch.object(rating_services.RatingService, "rate", new_callable=AsyncMock) as mock_rate:
        mock_rate.side_effect = error
        response = await async_client.post(f"/gigs/{uuid4()}/rate", json={"score": 3})

    assert response.status_code == expected_status


@pytest.mark.asyncio
@patch.object(rating_services.RatingService, "list_provider_ratings", new_callable=AsyncMock)
async def test_list_provider_ratings_public(
    mock_list: AsyncMock,
    async_client: AsyncClient,
    override_get_db: None,
) -> None:
    provider_id = uuid4()
    mock_list.return_value = ([create_fake_rating(provider_id=provider_id) for _ in range(2)], 2)

    response = await async_client.get(f"/providers/{provider_id}/ratings")

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["total_count"] == 2
    assert data["has_next_page"] is False
    assert all(item["provider_id"] == str(provider_id) for item in data["items"])
    mock_list.assert_awaited_once_with(provider_id, skip=0, limit=100)
