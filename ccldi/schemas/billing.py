# ccldi/schemas/billing.py
from pydantic import BaseModel, Field
from typing import Literal, Optional, List
from datetime import date, datetime
from decimal import Decimal

from ccldi.schemas.receivables import Money

class PaymentCreate(BaseModel):
    student_id: int
    type: Literal["tuition", "miscellaneous"]
    amount: Decimal = Field(..., ge=Decimal("0.01"), max_digits=10, decimal_places=2)
    payment_date: date
    notes: Optional[str] = None

class PaymentRead(BaseModel):
    id: int
    student_id: int
    type: str
    amount: Money
    payment_date: date
    month_for: str
    notes: Optional[str] = None

    class Config:
        from_attributes = True

class PaymentListItem(PaymentRead):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    center_id: Optional[str] = None
    center_name: Optional[str] = None
    created_at: Optional[datetime] = None

class PaymentList(BaseModel):
    count: int
    payments: List[PaymentListItem]

class PaymentStats(BaseModel):
    paying_students: int
    total_payments: int
    total_collected: Money
    avg_payment: Money
