# budget_ledger/core/exceptions.py
from typing import Optional


class LedgerError(Exception):
    """Базовая ошибка ядра бюджета."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(LedgerError):
    """Ввод пользователя нарушает инвариант (пустое имя, сумма <= 0 и т.п.)."""


class NotFoundError(LedgerError):
    """Запись с указанным ID не найдена (или принадлежит другому владельцу)."""

    def __init__(self, entity: str, entity_id: Optional[object] = None):
        if entity_id is None:
            message = f"{entity} not found"
        else:
            message = f"{entity} {entity_id} not found"
        super().__init__(message)
        self.entity = entity
        self.entity_id = entity_id


class ConflictError(LedgerError):
    """Запись с таким естественным ключом уже существует."""


class StoreError(LedgerError):
    """Хранилище не смогло выполнить операцию (соединение, отклонённая запись)."""
