"""
Invoice model for supplier and customer invoices.
"""
from sqlalchemy import Column, String, Numeric, Date, Text
from sqlalchemy.orm import relationship
from jet_finances.db.base import BaseModel


class Invoice(BaseModel):
    """Invoice received or issued; expenses and discrepancies hang off it."""
    __tablename__ = "invoices"

    inv_date = Column(Date, nullable=False, index=True)
    inv_number = Column(String(100), nullable=False, index=True)
    inv_amount = Column(Numeric(15, 2), nullable=False)
    inv_currency = Column(String(3), nullable=False)
    inv_tags = Column(Text, nullable=False, default="")

    # Relationships
    expenses = relationship("Expense", back_populates="invoice")
    discrepancies = relationship("Discrepancy", back_populates="invoice", cascade="all, delete-orphan")
