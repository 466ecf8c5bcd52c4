# budget_ledger/services/category_service.py
import logging
import uuid
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from budget_ledger import crud, schemas
from budget_ledger.core.config import settings
from budget_ledger.core.exceptions import NotFoundError
from budget_ledger.core.validators import AmountLike, clean_color, clean_name, non_negative_amount

logger = logging.getLogger(__name__)


class CategoryService:
    """
    Категории одного владельца: создание, изменение, мягкое удаление.
    Каждая запись заканчивается полным перечитыванием списка, чтобы вызывающий
    сразу видел согласованный снимок.
    """

    def __init__(self, db: AsyncSession, owner_id: str):
        self._db = db
        self._owner_id = owner_id

    async def list(self) -> List[schemas.Category]:
        categories = await crud.crud_category.get_categories(self._db, owner_id=self._owner_id)
        return [schemas.Category.model_validate(c) for c in categories]

    async def list_all(self) -> List[schemas.Category]:
        """Включая мягко удалённые - для разрешения имён в истории."""
        categories = await crud.crud_category.get_categories(
            self._db, owner_id=self._owner_id, include_inactive=True
        )
        return [schemas.Category.model_validate(c) for c in categories]

    async def get(self, category_id: uuid.UUID) -> schemas.Category:
        category = await crud.crud_category.get_category(
            self._db, owner_id=self._owner_id, category_id=category_id
        )
        if category is None:
            raise NotFoundError("Category", category_id)
        return schemas.Category.model_validate(category)

    async def create(
        self,
        name: str,
        default_budget: AmountLike,
        color: Optional[str] = None,
    ) -> List[schemas.Category]:
        # Проверяем всё до первой записи
        name = clean_name(name)
        default_budget = non_negative_amount(default_budget, "default_budget")
        color = clean_color(color, settings.DEFAULT_CATEGORY_COLOR)

        category = await crud.crud_category.create_category(
            self._db,
            owner_id=self._owner_id,
            name=name,
            default_budget=default_budget,
            color=color,
        )
        logger.info("Category %s (%s) created for owner %s", category.id, name, self._owner_id)
        return await self.list()

    async def update(
        self,
        category_id: uuid.UUID,
        name: str,
        default_budget: AmountLike,
        color: Optional[str] = None,
    ) -> List[schemas.Category]:
        name = clean_name(name)
        default_budget = non_negative_amount(default_budget, "default_budget")
        color = clean_color(color, settings.DEFAULT_CATEGORY_COLOR)

        category = await crud.crud_category.get_category(
            self._db, owner_id=self._owner_id, category_id=category_id
        )
        if category is None:
            raise NotFoundError("Category", category_id)

        # is_active не трогаем: переименование не восстанавливает удалённую категорию
        await crud.crud_category.update_category(
            self._db,
            db_obj=category,
            obj_in={"name": name, "default_budget": default_budget, "color": color},
        )
        logger.info("Category %s updated for owner %s", category_id, self._owner_id)
        return await self.list()

    async def soft_delete(self, category_id: uuid.UUID) -> List[schemas.Category]:
        """Скрывает категорию. Планы и расходы, ссылающиеся на неё, остаются."""
        deactivated = await crud.crud_category.deactivate_category(
            self._db, owner_id=self._owner_id, category_id=category_id
        )
        if not deactivated:
            raise NotFoundError("Category", category_id)
        logger.info("Category %s deactivated for owner %s", category_id, self._owner_id)
        return await self.list()
