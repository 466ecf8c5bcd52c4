# budget_ledger/db/database.py
import logging
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from budget_ledger.core.config import settings

logger = logging.getLogger(__name__)

engine = create_async_engine(settings.ASYNC_DATABASE_URL, echo=settings.SQL_ECHO, pool_pre_ping=True)

# expire_on_commit=False: после коммита объекты остаются читаемыми без нового запроса
AsyncSessionLocal = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def get_async_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Зависимость FastAPI: одна сессия на запрос.
    Сервисы делают только flush, коммит выполняется здесь после успешного ответа,
    при любой ошибке изменения запроса откатываются целиком.
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            logger.debug("Rolling back request transaction")
            await session.rollback()
            raise
