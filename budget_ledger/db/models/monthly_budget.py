# budget_ledger/db/models/monthly_budget.py
import uuid
from sqlalchemy import Column, String, Numeric, DateTime, ForeignKey, Uuid, UniqueConstraint, func
from sqlalchemy.orm import relationship
from budget_ledger.db.base_class import Base, utcnow

class MonthlyBudget(Base):
    __tablename__ = "monthly_budgets"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    owner_id = Column(String, nullable=False, index=True)
    month = Column(String(7), nullable=False) # Формат: "2025-06"
    income = Column(Numeric(12, 2), nullable=False, default=0)

    created_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now(), onupdate=utcnow)

    items = relationship("BudgetItem", back_populates="monthly_budget", cascade="all, delete-orphan")

    __table_args__ = (
        UniqueConstraint("owner_id", "month", name="uq_monthly_budget_owner_month"),
    )


class BudgetItem(Base):
    __tablename__ = "budget_items"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    monthly_budget_id = Column(Uuid, ForeignKey("monthly_budgets.id"), nullable=False, index=True)
    category_id = Column(Uuid, ForeignKey("categories.id"), nullable=False)
    planned_amount = Column(Numeric(12, 2), nullable=False, default=0)

    created_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now(), onupdate=utcnow)

    monthly_budget = relationship("MonthlyBudget", back_populates="items")
    category = relationship("Category", back_populates="budget_items")

    @property
    def category_name(self) -> str:
        return self.category.name

    @property
    def category_color(self):
        return self.category.color

    __table_args__ = (
        # Ровно одна строка плана на пару (бюджет, категория) - на этом ключе держится upsert
        UniqueConstraint("monthly_budget_id", "category_id", name="uq_budget_item_budget_category"),
    )
