# -*- coding: utf-8 -*-
"""
Accounts-receivable calculations: tuition accrual, per-student AR position,
aging report and center statistics.

Every function here is a pure function of its inputs plus an ``as_of`` date.
Amounts are handled as unrounded ``Decimal`` values; rounding to cents
(half-up) happens only through ``to_money`` when a result is presented.
"""
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from enum import Enum
from typing import Iterable, List, Mapping, Optional, Sequence

from ccldi.errors import ComputationError, InvalidTemporalRange, StudentNotFound

# Billing periods are a fixed 30 days, not calendar months
PERIOD_DAYS = 30
ZERO = Decimal("0")
CENTS = Decimal("0.01")


class AgingBucket(str, Enum):
    CURRENT = "current"
    DAYS_30 = "days30"
    DAYS_60 = "days60"
    DAYS_90_PLUS = "days90Plus"


@dataclass(frozen=True)
class AccrualResult:
    elapsed_periods: int
    expected_payments: int
    expected_total: Decimal


@dataclass(frozen=True)
class ARPosition:
    """AR position of one student on a given date."""
    student_id: int
    student_name: str
    center_id: Optional[str]
    center_name: Optional[str]
    tuition: Decimal
    accrual: AccrualResult
    total_paid: Decimal
    outstanding: Decimal
    months_unpaid: int
    bucket: Optional[AgingBucket]

    def amount_in(self, bucket):
        """Outstanding amount held in ``bucket`` (the whole balance or nothing)."""
        return self.outstanding if self.bucket == bucket else ZERO


@dataclass
class AgingTotals:
    total_outstanding: Decimal = ZERO
    current: Decimal = ZERO
    days30: Decimal = ZERO
    days60: Decimal = ZERO
    days90_plus: Decimal = ZERO

    def add(self, position):
        self.total_outstanding += position.outstanding
        self.current += position.amount_in(AgingBucket.CURRENT)
        self.days30 += position.amount_in(AgingBucket.DAYS_30)
        self.days60 += position.amount_in(AgingBucket.DAYS_60)
        self.days90_plus += position.amount_in(AgingBucket.DAYS_90_PLUS)


@dataclass(frozen=True)
class AgingReport:
    as_of: date
    rows: List[ARPosition]
    totals: AgingTotals = field(default_factory=AgingTotals)


@dataclass(frozen=True)
class CenterStats:
    enrollment: int
    capacity: int
    capacity_percent: Decimal
    expected_revenue: Decimal
    ar_outstanding: Decimal
    ar_percent: Decimal


def to_money(value):
    """Round an amount to cents, half-up."""
    return Decimal(value).quantize(CENTS, rounding=ROUND_HALF_UP)


def _amount(value, what):
    if isinstance(value, float):
        value = str(value)
    try:
        amount = Decimal(value)
    except (InvalidOperation, TypeError, ValueError) as exc:
        raise ComputationError(f"Invalid {what}: {value!r}") from exc
    if not amount.is_finite():
        raise ComputationError(f"Non-finite {what}: {value!r}")
    return amount


def compute_accrual(enrollment_date, tuition, as_of):
    """
    Periods elapsed since enrollment and the tuition expected by ``as_of``.

    The enrollment period is billable from day one, so a student enrolled
    today already owes one period.
    """
    if enrollment_date > as_of:
        raise InvalidTemporalRange(enrollment_date, as_of)
    tuition = _amount(tuition, "tuition")
    if tuition < 0:
        raise ComputationError(f"Negative tuition: {tuition}")

    elapsed_periods = (as_of - enrollment_date).days // PERIOD_DAYS
    expected_payments = elapsed_periods + 1
    return AccrualResult(
        elapsed_periods=elapsed_periods,
        expected_payments=expected_payments,
        expected_total=tuition * expected_payments,
    )


def bucket_for(months_unpaid):
    if months_unpaid < 0:
        raise ComputationError(f"Negative months unpaid: {months_unpaid}")
    if months_unpaid == 0:
        return AgingBucket.CURRENT
    if months_unpaid == 1:
        return AgingBucket.DAYS_30
    if months_unpaid == 2:
        return AgingBucket.DAYS_60
    return AgingBucket.DAYS_90_PLUS


def compute_ar(student, payments: Iterable, as_of: date) -> ARPosition:
    """
    AR position of ``student`` given the payments recorded against it.

    All of the student's payments count, whatever their date. A student that
    owes nothing gets no aging bucket.
    """
    if student is None:
        raise StudentNotFound(None)

    accrual = compute_accrual(student.enrollment_date, student.tuition, as_of)
    tuition = _amount(student.tuition, "tuition")
    total_paid = sum(
        (_amount(p.amount, "payment amount") for p in payments if p.student_id == student.id),
        ZERO,
    )

    outstanding = max(ZERO, accrual.expected_total - total_paid)
    months_unpaid = int(outstanding // tuition) if tuition > 0 else 0
    bucket = bucket_for(months_unpaid) if outstanding > 0 else None

    return ARPosition(
        student_id=student.id,
        student_name=student.name,
        center_id=student.center_id,
        center_name=student.center_name,
        tuition=tuition,
        accrual=accrual,
        total_paid=total_paid,
        outstanding=outstanding,
        months_unpaid=months_unpaid,
        bucket=bucket,
    )


def _positions(students, payments_by_student, as_of, center_id):
    for student in students:
        if student.status != "active":
            continue
        if center_id is not None and student.center_id != center_id:
            continue
        try:
            payments = payments_by_student[student.id]
        except KeyError:
            raise StudentNotFound(student.id) from None
        yield compute_ar(student, payments, as_of)


def build_aging_report(
    students: Sequence,
    payments_by_student: Mapping[int, Sequence],
    as_of: date,
    center_id: Optional[str] = None,
) -> AgingReport:
    """
    Aging report over the active students (optionally of one center).

    Students that owe nothing are left out; the rest are ordered by
    outstanding balance, largest first, keeping input order on ties. Any
    failure on a single student aborts the whole report.
    """
    rows = [p for p in _positions(students, payments_by_student, as_of, center_id) if p.outstanding > 0]
    rows.sort(key=lambda p: p.outstanding, reverse=True)

    totals = AgingTotals()
    for position in rows:
        totals.add(position)
    return AgingReport(as_of=as_of, rows=rows, totals=totals)


def compute_center_stats(center, students, payments_by_student, as_of) -> CenterStats:
    positions = list(_positions(students, payments_by_student, as_of, center.id))

    enrollment = len(positions)
    capacity = center.capacity or 0
    capacity_percent = Decimal(enrollment) / Decimal(capacity) * 100 if capacity > 0 else ZERO

    expected_revenue = sum((p.accrual.expected_total for p in positions), ZERO)
    ar_outstanding = sum((p.outstanding for p in positions), ZERO)
    ar_percent = ar_outstanding / expected_revenue * 100 if expected_revenue > 0 else ZERO

    return CenterStats(
        enrollment=enrollment,
        capacity=capacity,
        capacity_percent=capacity_percent,
        expected_revenue=expected_revenue,
        ar_outstanding=ar_outstanding,
        ar_percent=ar_percent,
    )
