"""
Dictionary tables: expense types, their subtypes, and invoice types.
"""
from sqlalchemy import Column, String, Text, ForeignKey, Integer, UniqueConstraint
from sqlalchemy.orm import relationship
from jet_finances.db.base import BaseModel


class ExpenseType(BaseModel):
    """Main expense category offered in the expense form."""
    __tablename__ = "expense_types"

    name = Column(String(100), unique=True, nullable=False, index=True)
    description = Column(Text, nullable=True)

    # Relationships
    subtypes = relationship("ExpenseSubtype", back_populates="expense_type", cascade="all, delete-orphan")


class ExpenseSubtype(BaseModel):
    """Subtype belonging to one expense type."""
    __tablename__ = "expense_subtypes"

    expense_type_id = Column(Integer, ForeignKey("expense_types.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(100), nullable=False)
    description = Column(Text, nullable=True)

    # Relationships
    expense_type = relationship("ExpenseType", back_populates="subtypes")

    # Unique constraint: subtype names are unique within a type
    __table_args__ = (
        UniqueConstraint('expense_type_id', 'name', name='uq_expense_type_subtype'),
    )


class InvoiceType(BaseModel):
    """Invoice classification; "Credit note" and "Charter profit" types mark income."""
    __tablename__ = "invoice_types"

    name = Column(String(100), unique=True, nullable=False, index=True)
    description = Column(Text, nullable=True)
