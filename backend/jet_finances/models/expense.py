"""
Expense model for operating costs.
"""
from sqlalchemy import Column, String, Numeric, Date, ForeignKey, Integer, Text
from sqlalchemy.orm import relationship
from jet_finances.db.base import BaseModel


class Expense(BaseModel):
    """Expense model representing one cost line, optionally tied to a flight or invoice."""
    __tablename__ = "expenses"

    exp_type = Column(String(100), nullable=True, index=True)  # Category name or raw label
    exp_subtype = Column(String(100), nullable=True)
    exp_place = Column(String(10), nullable=True)  # ICAO code of the station
    exp_amount = Column(Numeric(15, 2), nullable=True)
    exp_currency = Column(String(3), nullable=True)
    exp_period_start = Column(Date, nullable=True)
    exp_period_end = Column(Date, nullable=True)  # Exclusive: first day of the month after the period
    exp_fuel_quan = Column(Numeric(15, 2), nullable=True)
    exp_fuel_provider = Column(String(100), nullable=True)
    exp_invoice_type = Column(Integer, ForeignKey("invoice_types.id", ondelete="SET NULL"), nullable=True)
    exp_invoice = Column(Integer, ForeignKey("invoices.id", ondelete="SET NULL"), nullable=True, index=True)
    exp_flight = Column(Integer, ForeignKey("flights.id", ondelete="SET NULL"), nullable=True, index=True)
    exp_comments = Column(Text, nullable=True)

    # Relationships
    invoice = relationship("Invoice", back_populates="expenses")
    flight = relationship("Flight", back_populates="expenses")
    invoice_type = relationship("InvoiceType")

    @property
    def inv_number(self):
        return self.invoice.inv_number if self.invoice else None

    @property
    def flt_number(self):
        return self.flight.flt_number if self.flight else None
