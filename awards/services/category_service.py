"""Service for managing award categories."""
import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from awards.models.category import Category
from awards.utils.exceptions import CategoryNameTakenError, CategoryNotFoundError

logger = logging.getLogger(__name__)


class CategoryService:
    """Category CRUD. Categories are never deleted, only deactivated."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_category(self, category_id: int) -> Optional[Category]:
        return await self.db.get(Category, category_id)

    async def get_active_category(self, category_id: int) -> Category:
        """Return the category if it exists and is active.

        Raises:
            CategoryNotFoundError: If missing or inactive
        """
        category = await self.get_category(category_id)
        if category is None or not category.active:
            raise CategoryNotFoundError()
        return category

    async def list_categories(self, include_inactive: bool = False) -> list[Category]:
        """List categories, newest first."""
        stmt = select(Category).order_by(Category.created_at.desc(), Category.category_id.desc())
        if not include_inactive:
            stmt = stmt.where(Category.active.is_(True))
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def create_category(self, name: str, description: Optional[str] = None) -> Category:
        category = Category(name=name.strip(), description=description, active=True)
        self.db.add(category)
        try:
            await self.db.commit()
        except IntegrityError as exc:
            await self.db.rollback()
            raise CategoryNameTakenError() from exc
        await self.db.refresh(category)
        logger.info(f"Category created: {category.category_id} ({category.name})")
        return category

    async def update_category(
        self,
        category_id: int,
        *,
        name: Optional[str] = None,
        description: Optional[str] = None,
        active: Optional[bool] = None,
    ) -> Category:
        """Apply a partial update; None leaves a field unchanged."""
        category = await self.get_category(category_id)
        if category is None:
            raise CategoryNotFoundError()

        if name is not None:
            category.name = name.strip()
        if description is not None:
            category.description = description
        if active is not None:
            category.active = active

        try:
            await self.db.commit()
        except IntegrityError as exc:
            await self.db.rollback()
            raise CategoryNameTakenError() from exc
        await self.db.refresh(category)
        logger.info(f"Category updated: {category.category_id} (active={category.active})")
        return category
