# budget_ledger/api/v1/endpoints/categories.py
from fastapi import APIRouter, Depends, status
from typing import List
import uuid

from budget_ledger import schemas
from budget_ledger.api.v1 import deps
from budget_ledger.services import CategoryService

router = APIRouter()

# Все изменяющие запросы возвращают обновлённый список активных категорий

@router.get("/", response_model=List[schemas.Category])
async def read_categories(service: CategoryService = Depends(deps.get_category_service)):
    """Активные категории, старые первыми."""
    return await service.list()


@router.post("/", response_model=List[schemas.Category], status_code=status.HTTP_201_CREATED)
async def create_category(
    *,
    category_in: schemas.CategoryCreate,
    service: CategoryService = Depends(deps.get_category_service)
):
    return await service.create(category_in.name, category_in.default_budget, category_in.color)


@router.get("/{category_id}", response_model=schemas.Category)
async def read_category(
    category_id: uuid.UUID,
    service: CategoryService = Depends(deps.get_category_service)
):
    """Категория по ID, в том числе мягко удалённая."""
    return await service.get(category_id)


@router.put("/{category_id}", response_model=List[schemas.Category])
async def update_category(
    *,
    category_id: uuid.UUID,
    category_in: schemas.CategoryUpdate,
    service: CategoryService = Depends(deps.get_category_service)
):
    return await service.update(category_id, category_in.name, category_in.default_budget, category_in.color)


@router.delete("/{category_id}", response_model=List[schemas.Category])
async def delete_category(
    category_id: uuid.UUID,
    service: CategoryService = Depends(deps.get_category_service)
):
    """
    Мягкое удаление: категория пропадает из списков,
    но расходы и планы, ссылающиеся на неё, остаются.
    """
    return await service.soft_delete(category_id)
