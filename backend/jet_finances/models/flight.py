"""
Flight model for aircraft trips.
"""
from sqlalchemy import Column, String, Date
from sqlalchemy.orm import relationship
from jet_finances.db.base import BaseModel


class Flight(BaseModel):
    """A single flown leg."""
    __tablename__ = "flights"

    flt_date = Column(Date, nullable=False, index=True)
    flt_number = Column(String(20), nullable=False)
    flt_dep = Column(String(4), nullable=False, index=True)  # ICAO code
    flt_arr = Column(String(4), nullable=False, index=True)  # ICAO code
    flt_time = Column(String(10), nullable=False)  # Flight time, HH:MM
    flt_block = Column(String(10), nullable=False)  # Block time, HH:MM

    # Relationships
    expenses = relationship("Expense", back_populates="flight")
