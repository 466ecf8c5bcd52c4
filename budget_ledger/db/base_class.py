# budget_ledger/db/base_class.py
from datetime import datetime, timezone
from sqlalchemy.orm import declarative_base

Base = declarative_base()


def utcnow() -> datetime:
    # Значение известно уже после flush, поэтому не нужен refresh в async-сессии
    return datetime.now(timezone.utc)
