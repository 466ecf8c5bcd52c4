# budget_ledger/crud/__init__.py
# Шлюз к хранилищу: все запросы ограничены владельцем (owner_id), ошибки БД -> StoreError
from . import crud_category
from . import crud_expense
from . import crud_monthly_budget
