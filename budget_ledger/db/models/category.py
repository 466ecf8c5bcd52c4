# budget_ledger/db/models/category.py
import uuid
from sqlalchemy import Column, String, Numeric, Boolean, DateTime, Uuid, func, true
from sqlalchemy.orm import relationship
from budget_ledger.db.base_class import Base, utcnow

class Category(Base):
    __tablename__ = "categories"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    owner_id = Column(String, nullable=False, index=True)
    name = Column(String, nullable=False)
    default_budget = Column(Numeric(12, 2), nullable=False, default=0) # Стандартный план на месяц
    color = Column(String(7), nullable=True)
    # Мягкое удаление: категория скрывается из списков, но старые расходы/планы на неё ссылаются
    is_active = Column(Boolean, nullable=False, default=True, server_default=true())

    created_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now(), onupdate=utcnow)

    # Связи
    budget_items = relationship("BudgetItem", back_populates="category")
    expenses = relationship("Expense", back_populates="category")
