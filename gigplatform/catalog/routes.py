"""
gigplatform/catalog/routes.py

Catalog Routes
- List categories and locations (Public)
- Create, update and delete them (Admin)
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from gigplatform.catalog import schemas
from gigplatform.catalog.services import CatalogService
from gigplatform.core.dependencies import PaginationParams, require_admin
from gigplatform.core.limiter import limiter
from gigplatform.core.schemas import PaginatedResponse
from gigplatform.database.models import Account
from gigplatform.database.session import get_db

router = APIRouter(tags=["Catalog"])

DBDep = Annotated[AsyncSession, Depends(get_db)]
AdminDep = Annotated[Account, Depends(require_admin)]


# ----------------------------------------------------
# Categories
# ----------------------------------------------------
@router.get(
    "/categories",
    response_model=PaginatedResponse[schemas.CategoryRead],
    summary="List Categories",
)
@limiter.limit("30/minute")
async def list_categories(
    request: Request,
    db: DBDep,
    pagination: PaginationParams = Depends(),
) -> PaginatedResponse[schemas.CategoryRead]:
    items, total_count = await CatalogService(db).list_categories(
        skip=pagination.skip, limit=pagination.limit
    )
    return PaginatedResponse.from_page(items, total_count, pagination.skip, pagination.limit)


@router.post(
    "/categories",
    response_model=schemas.CategoryRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create Category",
)
@limiter.limit("10/minute")
async def create_category(
    request: Request,
    payload: schemas.CategoryCreate,
    db: DBDep,
    current_user: AdminDep,
) -> schemas.CategoryRead:
    category = await CatalogService(db).create_category(payload)
    return schemas.CategoryRead.model_validate(category)


@router.put(
    "/categories/{category_id}",
    response_model=schemas.CategoryRead,
    summary="Update Category",
)
@limiter.limit("10/minute")
async def update_category(
    request: Request,
    category_id: UUID,
    payload: schemas.CategoryUpdate,
    db: DBDep,
    current_user: AdminDep,
) -> schemas.CategoryRead:
    category = await CatalogService(db).update_category(category_id, payload)
    return schemas.CategoryRead.model_validate(category)


@router.delete(
    "/categories/{category_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Category",
)
@limiter.limit("10/minute")
async def delete_category(
    request: Request,
    category_id: UUID,
    db: DBDep,
    current_user: AdminDep,
) -> Response:
    await CatalogService(db).delete_category(category_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# ----------------------------------------------------
# Locations
# ----------------------------------------------------
@router.get(
    "/locations",
    response_model=PaginatedResponse[schemas.LocationRead],
    summary="List Locations",
)
@limiter.limit("30/minute")
async def list_locations(
    request: Request,
    db: DBDep,
    pagination: PaginationParams = Depends(),
) -> PaginatedResponse[schemas.LocationRead]:
    items, total_count = await CatalogService(db).list_locations(
        skip=pagination.skip, limit=pagination.limit
    )
    return PaginatedResponse.from_page(items, total_count, pagination.skip, pagination.limit)


@router.post(
    "/locations",
    response_model=schemas.LocationRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create Location",
)
@limiter.limit("10/minute")
async def create_location(
    request: Request,
    payload: schemas.LocationCreate,
    db: DBDep,
    current_user: AdminDep,
) -> schemas.LocationRead:
    location = await CatalogService(db).create_location(payload)
    return schemas.LocationRead.model_validate(location)


@router.put(
    "/locations/{location_id}",
    response_model=schemas.LocationRead,
    summary="Update Location",
)
@limiter.limit("10/minute")
async def update_location(
    request: Request,
    location_id: UUID,
    payload: schemas.LocationUpdate,
    db: DBDep,
    current_user: AdminDep,
) -> schemas.LocationRead:
    location = await CatalogService(db).update_location(location_id, payload)
    return schemas.LocationRead.model_validate(location)


@router.delete(
    "/locations/{location_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Location",
)
@limiter.limit("10/minute")
async def delete_location(
    request: Request,
    location_id: UUID,
    db: DBDep,
    current_user: AdminDep,
) -> Response:
    await CatalogService(db).delete_location(location_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
