"""
Discrepancy model for objections raised against invoices.
"""
from sqlalchemy import Column, String, Numeric, Text, ForeignKey, Integer, Enum as SQLEnum
from sqlalchemy.orm import relationship
from jet_finances.db.base import BaseModel
import enum


class DiscrepancyStatus(str, enum.Enum):
    """Discrepancy lifecycle status."""
    CREATED = "Created"
    RAISED = "Raised"
    RESOLVED = "Resolved"
    DECLINED = "Declined"
    CLOSED = "Closed"


# Statuses after which a discrepancy no longer needs attention
FINAL_STATUSES = (DiscrepancyStatus.RESOLVED, DiscrepancyStatus.DECLINED, DiscrepancyStatus.CLOSED)


class Discrepancy(BaseModel):
    """Claimed discrepancy or objection in an issued invoice."""
    __tablename__ = "discrepancies"

    invoice_id = Column(Integer, ForeignKey("invoices.id", ondelete="CASCADE"), nullable=False, index=True)
    description = Column(Text, nullable=False)
    status = Column(
        SQLEnum(DiscrepancyStatus, values_callable=lambda items: [s.value for s in items], name="discrepancy_status"),
        default=DiscrepancyStatus.CREATED,
        nullable=False,
        index=True
    )
    solution = Column(Text, nullable=True)
    claimed_amount = Column(Numeric(15, 2), nullable=True)
    claimed_currency = Column(String(3), nullable=True)

    # Relationships
    invoice = relationship("Invoice", back_populates="discrepancies")
