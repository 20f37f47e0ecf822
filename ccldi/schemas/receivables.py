# -*- coding: utf-8 -*-
"""
Pydantic schemas for the accounts-receivable projections.

Amounts arrive here unrounded; the ``from_*`` builders round them to cents.
"""
from datetime import date
from decimal import Decimal
from typing import Annotated, List, Optional

from pydantic import BaseModel, PlainSerializer

from ccldi.receivables import AgingBucket, to_money

# Decimal internally, JSON number on the wire
Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


class StudentARRead(BaseModel):
    student_id: int
    student_name: str
    as_of: date
    tuition: Money
    months_since_enrollment: int
    expected_payments: int
    expected_total: Money
    total_paid: Money
    outstanding: Money
    months_unpaid: int
    bucket: Optional[AgingBucket] = None

    @classmethod
    def from_position(cls, position, as_of):
        return cls(
            student_id=position.student_id,
            student_name=position.student_name,
            as_of=as_of,
            tuition=to_money(position.tuition),
            months_since_enrollment=position.accrual.elapsed_periods,
            expected_payments=position.accrual.expected_payments,
            expected_total=to_money(position.accrual.expected_total),
            total_paid=to_money(position.total_paid),
            outstanding=to_money(position.outstanding),
            months_unpaid=position.months_unpaid,
            bucket=position.bucket,
        )


class AgingRowRead(BaseModel):
    student_id: int
    student_name: str
    center_id: Optional[str] = None
    center_name: Optional[str] = None
    total_outstanding: Money
    current: Money
    days30: Money
    days60: Money
    days90_plus: Money

    @classmethod
    def from_position(cls, position):
        return cls(
            student_id=position.student_id,
            student_name=position.student_name,
            center_id=position.center_id,
            center_name=position.center_name,
            total_outstanding=to_money(position.outstanding),
            current=to_money(position.amount_in(AgingBucket.CURRENT)),
            days30=to_money(position.amount_in(AgingBucket.DAYS_30)),
            days60=to_money(position.amount_in(AgingBucket.DAYS_60)),
            days90_plus=to_money(position.amount_in(AgingBucket.DAYS_90_PLUS)),
        )


class AgingTotalsRead(BaseModel):
    total_outstanding: Money
    current: Money
    days30: Money
    days60: Money
    days90_plus: Money


class AgingReportRead(BaseModel):
    as_of: date
    count: int
    rows: List[AgingRowRead]
    totals: AgingTotalsRead

    @classmethod
    def from_report(cls, report):
        totals = report.totals
        return cls(
            as_of=report.as_of,
            count=len(report.rows),
            rows=[AgingRowRead.from_position(p) for p in report.rows],
            totals=AgingTotalsRead(
                total_outstanding=to_money(totals.total_outstanding),
                current=to_money(totals.current),
                days30=to_money(totals.days30),
                days60=to_money(totals.days60),
                days90_plus=to_money(totals.days90_plus),
            ),
        )
