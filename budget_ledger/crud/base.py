# budget_ledger/crud/base.py
import logging
from contextlib import contextmanager

from sqlalchemy.exc import SQLAlchemyError

from budget_ledger.core.exceptions import StoreError

logger = logging.getLogger(__name__)


@contextmanager
def store_errors(action: str):
    """
    Переводит ошибки SQLAlchemy в StoreError.
    Ошибка не глушится: логируется и пробрасывается вызывающему с исходной причиной.
    """
    try:
        yield
    except SQLAlchemyError as e:
        logger.exception("Store failure while %s", action)
        raise StoreError(f"Store failure while {action}") from e
