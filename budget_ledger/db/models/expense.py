# budget_ledger/db/models/expense.py
import uuid
from sqlalchemy import Column, String, Numeric, Date, DateTime, ForeignKey, Uuid, CheckConstraint, func
from sqlalchemy.orm import relationship
from budget_ledger.db.base_class import Base, utcnow

class Expense(Base):
    __tablename__ = "expenses"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    owner_id = Column(String, nullable=False, index=True)
    # Ссылка, а не владение: категория может быть деактивирована, расход остаётся
    category_id = Column(Uuid, ForeignKey("categories.id"), nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    description = Column(String, nullable=True)
    expense_date = Column(Date, nullable=False, index=True) # Фактическая дата расхода

    created_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now(), onupdate=utcnow)

    category = relationship("Category", back_populates="expenses")

    # Для схемы ExpenseWithCategory; category должна быть загружена заранее (joinedload)
    @property
    def category_name(self) -> str:
        return self.category.name

    @property
    def category_color(self):
        return self.category.color

    __table_args__ = (
        CheckConstraint("amount > 0", name="ck_expense_amount_positive"),
    )
