"""
Pydantic schemas for dictionary entities (expense types, subtypes, invoice types).
"""
from pydantic import BaseModel
from typing import List, Optional


class DictionaryItemBase(BaseModel):
    """Name and description shared by every dictionary entry."""
    name: str
    description: Optional[str] = None


class DictionaryItemUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None


class ExpenseSubtypeCreate(DictionaryItemBase):
    pass


class ExpenseSubtypeResponse(DictionaryItemBase):
    id: int
    expense_type_id: int

    class Config:
        from_attributes = True


class ExpenseTypeCreate(DictionaryItemBase):
    pass


class ExpenseTypeResponse(DictionaryItemBase):
    id: int
    subtypes: List[ExpenseSubtypeResponse] = []

    class Config:
        from_attributes = True


class InvoiceTypeCreate(DictionaryItemBase):
    pass


class InvoiceTypeResponse(DictionaryItemBase):
    id: int

    class Config:
        from_attributes = True
