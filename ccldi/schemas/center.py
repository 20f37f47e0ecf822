# -*- coding: utf-8 -*-
"""
Pydantic schemas for the Center entity.
"""

from pydantic import BaseModel
from typing import Optional
from datetime import date, datetime

from ccldi.receivables import to_money
from ccldi.schemas.receivables import Money

class CenterRead(BaseModel):
    id: str
    name: str
    address: Optional[str] = None
    capacity: int
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True

class CenterStatsRead(CenterRead):
    as_of: date
    enrollment: int
    capacity_percent: Money
    expected_revenue: Money
    ar_outstanding: Money
    ar_percent: Money

    @classmethod
    def from_stats(cls, center, stats, as_of):
        return cls(
            id=center.id,
            name=center.name,
            address=center.address,
            capacity=center.capacity,
            created_at=center.created_at,
            as_of=as_of,
            enrollment=stats.enrollment,
            capacity_percent=to_money(stats.capacity_percent),
            expected_revenue=to_money(stats.expected_revenue),
            ar_outstanding=to_money(stats.ar_outstanding),
            ar_percent=to_money(stats.ar_percent),
        )
