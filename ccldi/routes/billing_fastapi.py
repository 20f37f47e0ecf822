# -*- coding: utf-8 -*-
"""
FastAPI routes for the payment ledger (billing) and the AR aging report.
"""
from typing import Optional
from datetime import date
from fastapi import APIRouter, Depends, status
from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload

from ccldi.database import get_db
from ccldi.ledger import Ledger, get_ledger
from ccldi.models.billing import Billing
from ccldi.models.student import Student
from ccldi.receivables import build_aging_report, to_money
from ccldi.schemas.billing import PaymentCreate, PaymentList, PaymentRead, PaymentStats
from ccldi.schemas.receivables import AgingReportRead

router = APIRouter(
    tags=["Billing"],
    responses={404: {"description": "Not found"}},
)


@router.get("", response_model=PaymentList)
def read_payments(
    student_id: Optional[int] = None,
    center_id: Optional[str] = None,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    db: Session = Depends(get_db)
):
    """
    Lists recorded payments, newest first.
    """
    query = db.query(Billing).join(Student, Billing.student_id == Student.id)\
                             .options(joinedload(Billing.student).joinedload(Student.center))

    if student_id:
        query = query.filter(Billing.student_id == student_id)
    if center_id and center_id != "all":
        query = query.filter(Student.center_id == center_id)
    if start_date:
        query = query.filter(Billing.payment_date >= start_date)
    if end_date:
        query = query.filter(Billing.payment_date <= end_date)

    rows = query.order_by(Billing.payment_date.desc(), Billing.id.desc()).all()

    payments = []
    for row in rows:
        item = PaymentRead.model_validate(row).model_dump()
        item.update(
            first_name=row.student.first_name,
            last_name=row.student.last_name,
            center_id=row.student.center_id,
            center_name=row.student.center_name,
            created_at=row.created_at,
        )
        payments.append(item)
    return {"count": len(payments), "payments": payments}


@router.get("/aging-report", response_model=AgingReportRead)
def read_aging_report(
    center_id: Optional[str] = None,
    as_of: Optional[date] = None,
    ledger: Ledger = Depends(get_ledger)
):
    """
    AR aging of the active students (of one center, or "all"), highest
    balances first, with per-bucket totals.
    """
    as_of = as_of or date.today()
    if center_id == "all":
        center_id = None

    students = ledger.list_active_students(center_id, as_of)
    payments = ledger.payments_by_student(s.id for s in students)
    report = build_aging_report(students, payments, as_of, center_id)
    return AgingReportRead.from_report(report)


@router.post("", response_model=PaymentRead, status_code=status.HTTP_201_CREATED)
def record_payment(payment: PaymentCreate, ledger: Ledger = Depends(get_ledger)):
    return ledger.record_payment(
        student_id=payment.student_id,
        type=payment.type,
        amount=payment.amount,
        payment_date=payment.payment_date,
        notes=payment.notes.strip() if payment.notes else None,
    )


@router.get("/stats", response_model=PaymentStats)
def read_payment_stats(
    center_id: Optional[str] = None,
    month: Optional[str] = None,
    db: Session = Depends(get_db)
):
    """
    Collection statistics, optionally restricted to a center and a billing
    month (YYYY-MM).
    """
    query = db.query(
        func.count(func.distinct(Billing.student_id)),
        func.count(Billing.id),
        func.coalesce(func.sum(Billing.amount), 0),
    ).join(Student, Billing.student_id == Student.id)

    if center_id and center_id != "all":
        query = query.filter(Student.center_id == center_id)
    if month:
        query = query.filter(Billing.month_for == month)

    paying_students, total_payments, total_collected = query.one()
    total_collected = to_money(str(total_collected or 0))
    avg_payment = to_money(total_collected / total_payments) if total_payments else to_money(0)

    return {
        "paying_students": paying_students,
        "total_payments": total_payments,
        "total_collected": total_collected,
        "avg_payment": avg_payment,
    }
