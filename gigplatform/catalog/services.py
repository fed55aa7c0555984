"""
gigplatform/catalog/services.py

Catalog Service
Manages gig categories and locations:
- Public, Redis-cached listings
- Admin create/update/delete with cache invalidation
- Existence checks used when a gig is created
"""

import json
import logging
from typing import Any
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from gigplatform.catalog import schemas
from gigplatform.catalog.models import Category, Location
from gigplatform.core.blacklist import redis_client
from gigplatform.core.cache import (
    CACHE_PREFIX,
    DEFAULT_CACHE_TTL,
    _invalidate_pattern,
    _paginated_cache_key,
)
from gigplatform.core.exceptions import ConflictError, NotFoundError, ValidationError
from gigplatform.database.session import commit_or_raise
from gigplatform.gig.models import Gig

logger = logging.getLogger(__name__)

CATEGORY_LIST_NS = "catalog:categories"
LOCATION_LIST_NS = "catalog:locations"


class CatalogService:
    def __init__(self, db: AsyncSession) -> None:
        self.db = db
        self.cache = redis_client

    # ---------------------------------------------
    # Cache Helpers
    # ---------------------------------------------
    async def _read_cached_page(self, cache_key: str, schema: type[Any]) -> tuple[list[Any], int] | None:
        if not self.cache:
            return None
        try:
            data = await self.cache.get(cache_key)
            if data:
                logger.info(f"[CACHE ASYNC HIT] {cache_key}")
                payload = json.loads(data)
                return [schema.model_validate(i) for i in payload["items"]], payload["total_count"]
        except Exception:
            logger.exception("[CACHE ASYNC CATALOG] Read error")
        return None

    async def _write_cached_page(self, cache_key: str, items: list[Any], total: int) -> None:
        if not self.cache:
            return
        try:
            payload = json.dumps(
                {"items": [i.model_dump(mode="json") for i in items], "total_count": total}
            )
            await self.cache.set(cache_key, payload, ex=DEFAULT_CACHE_TTL)
        except Exception:
            logger.exception("[CACHE ASYNC CATALOG] Write error")

    async def _invalidate(self, namespace: str) -> None:
        await _invalidate_pattern(self.cache, f"{CACHE_PREFIX}{namespace}:*")

    async def _ensure_unreferenced(self, column: Any, item_id: UUID, label: str) -> None:
        in_use = (
            await self.db.execute(select(func.count(Gig.id)).where(column == item_id))
        ).scalar_one()
        if in_use:
            logger.warning(f"[CATALOG] Refusing to delete {label} {item_id}: used by {in_use} gigs")
            raise ConflictError(f"{label} is used by {in_use} gig(s) and cannot be deleted.")

    # ---------------------------------------------
    # Lookups used by the gig lifecycle
    # ---------------------------------------------
    async def require_category(self, category_id: UUID) -> Category:
        category = await self.db.get(Category, category_id)
        if not category:
            raise ValidationError(f"Category {category_id} does not exist.")
        return category

    async def require_location(self, location_id: UUID) -> Location:
        location = await self.db.get(Location, location_id)
        if not location:
            raise ValidationError(f"Location {location_id} does not exist.")
        return location

    # ---------------------------------------------
    # Categories
    # ---------------------------------------------
    async def list_categories(
        self, skip: int = 0, limit: int = 100
    ) -> tuple[list[schemas.CategoryRead], int]:
        cache_key = _paginated_cache_key(CATEGORY_LIST_NS, "all", skip, limit)
        cached = await self._read_cached_page(cache_key, schemas.CategoryRead)
        if cached is not None:
            return cached

        total = (await self.db.execute(select(func.count(Category.id)))).scalar_one()
        rows = await self.db.execute(
            select(Category).order_by(Category.name).offset(skip).limit(limit)
        )
        items = [schemas.CategoryRead.model_validate(c) for c in rows.scalars().all()]
        await self._write_cached_page(cache_key, items, total)
        return items, total

    async def _get_category_or_404(self, category_id: UUID) -> Category:
        category = await self.db.get(Category, category_id)
        if not category:
            raise NotFoundError("Category not found.")
        return category

    async def create_category(self, payload: schemas.CategoryCreate) -> Category:
        category = Category(**payload.model_dump())
        self.db.add(category)
        await commit_or_raise(
            self.db,
            "create category",
            integrity_error=ConflictError(f"Category '{payload.name}' already exists."),
        )
        await self.db.refresh(category)
        await self._invalidate(CATEGORY_LIST_NS)
        logger.info(f"[CATALOG] Category created: {category.id} ({category.name})")
        return category

    async def update_category(self, category_id: UUID, payload: schemas.CategoryUpdate) -> Category:
        category = await self._get_category_or_404(category_id)
        for field, value in payload.model_dump(exclude_unset=True).items():
            setattr(category, field, value)
        await commit_or_raise(
            self.db,
            "update category",
            integrity_error=ConflictError(f"Category '{payload.name}' already exists."),
        )
        await self.db.refresh(category)
        await self._invalidate(CATEGORY_LIST_NS)
        return category

    async def delete_category(self, category_id: UUID) -> None:
        category = await self._get_category_or_404(category_id)
        await self._ensure_unreferenced(Gig.category_id, category_id, "Category")
        await self.db.delete(category)
        await commit_or_raise(
            self.db,
            "delete category",
            integrity_error=ConflictError("Category is referenced by existing gigs."),
        )
        await self._invalidate(CATEGORY_LIST_NS)
        logger.info(f"[CATALOG] Category deleted: {category_id}")

    # ---------------------------------------------
    # Locations
    # ---------------------------------------------
    async def list_locations(
        self, skip: int = 0, limit: int = 100
    ) -> tuple[list[schemas.LocationRead], int]:
        cache_key = _paginated_cache_key(LOCATION_LIST_NS, "all", skip, limit)
        cached = await self._read_cached_page(cache_key, schemas.LocationRead)
        if cached is not None:
            return cached

        total = (await self.db.execute(select(func.count(Location.id)))).scalar_one()
        rows = await self.db.execute(
            select(Location).order_by(Location.name).offset(skip).limit(limit)
        )
        items = [schemas.LocationRead.model_validate(loc) for loc in rows.scalars().all()]
        await self._write_cached_page(cache_key, items, total)
        return items, total

    async def _get_location_or_404(self, location_id: UUID) -> Location:
        location = await self.db.get(Location, location_id)
        if not location:
            raise NotFoundError("Location not found.")
        return location

    async def create_location(self, payload: schemas.LocationCreate) -> Location:
        location = Location(**payload.model_dump())
        self.db.add(location)
        await commit_or_raise(
            self.db,
            "create location",
            integrity_error=ConflictError(f"Location '{payload.name}' already exists."),
        )
        await self.db.refresh(location)
        await self._invalidate(LOCATION_LIST_NS)
        logger.info(f"[CATALOG] Location created: {location.id} ({location.name})")
        return location

    async def update_location(self, location_id: UUID, payload: schemas.LocationUpdate) -> Location:
        location = await self._get_location_or_404(location_id)
        for field, value in payload.model_dump(exclude_unset=True).items():
            setattr(location, field, value)
        await commit_or_raise(
            self.db,
            "update location",
            integrity_error=ConflictError(f"Location '{payload.name}' already exists."),
        )
        await self.db.refresh(location)
        await self._invalidate(LOCATION_LIST_NS)
        return location

    async def delete_location(self, location_id: UUID) -> None:
        location = await self._get_location_or_404(location_id)
        await self._ensure_unreferenced(Gig.location_id, location_id, "Location")
        await self.db.delete(location)
        await commit_or_raise(
            self.db,
            "delete location",
            integrity_error=ConflictError("Location is referenced by existing gigs."),
        )
        await self._invalidate(LOCATION_LIST_NS)
        logger.info(f"[CATALOG] Location deleted: {location_id}")
