# dealership/services/category_service.py
import logging
from typing import List
from ..errors import NotFoundError
from ..models.category import Category, CategoryCreate, CategoryUpdate


class CategoryService:
    """Car category management"""

    def __init__(self, db):
        self.db = db
        self.logger = logging.getLogger(__name__)

    async def create(self, data: CategoryCreate) -> Category:
        category = await self.db.categories.create(data.model_dump())
        self.logger.info(f"Category {category.category_id} ({category.name}) created")
        return category

    async def find_all(self) -> List[Category]:
        """Active categories ordered by name"""
        return await self.db.categories.list(active_only=True)

    async def find_by_id(self, category_id: int) -> Category:
        category = await self.db.categories.get(category_id, active_only=True)
        if not category:
            raise NotFoundError('Category not found')
        return category

    async def update(self, category_id: int, data: CategoryUpdate) -> Category:
        changes = data.model_dump(exclude_unset=True)
        if changes:
            category = await self.db.categories.update(category_id, changes)
        else:
            category = await self.db.categories.get(category_id)
        if not category:
            raise NotFoundError('Category not found')
        return category

    async def delete(self, category_id: int) -> Category:
        """Soft delete: the category stays referenced by its cars"""
        category = await self.db.categories.update(category_id, {'is_active': False})
        if not category:
            raise NotFoundError('Category not found')
        self.logger.info(f"Category {category_id} deactivated")
        return category
