"""
Pydantic models for expense data.

``amount`` is an integer in the unit appropriate to the currency.
Clients may send it as a JSON number or as a string of digits; either
way it is stored as an integer.
"""

from datetime import datetime
from typing import Annotated, ClassVar, Optional
from uuid import UUID

from pydantic import AfterValidator, Field

from .common import ApiModel, PatchModel

# Three-letter ISO 4217 code, stored upper-cased.
# Largest value an SQLite INTEGER column holds.
MAX_AMOUNT = 2**63 - 1

CurrencyCode = Annotated[str, Field(pattern=r"^[A-Za-z]{3}$"), AfterValidator(str.upper)]


class ExpenseCreate(ApiModel):
    activity_id: UUID
    title: str = Field(..., min_length=1, examples=["Lunch"])
    description: Optional[str] = None
    amount: int = Field(..., ge=0, le=MAX_AMOUNT, examples=[100])
    currency: CurrencyCode = Field(..., examples=["USD"])


class ExpenseUpdate(PatchModel):
    nullable_fields: ClassVar[frozenset] = frozenset({"description"})
    reference_fields: ClassVar[frozenset] = frozenset({"activity_id"})

    activity_id: Optional[UUID] = None
    title: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    amount: Optional[int] = Field(None, ge=0, le=MAX_AMOUNT)
    currency: Optional[CurrencyCode] = None


class ExpenseRead(ApiModel):
    id: str
    activity_id: str
    title: str
    description: Optional[str] = None
    amount: int
    currency: str
    created_at: datetime
    updated_at: datetime
