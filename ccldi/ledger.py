# -*- coding: utf-8 -*-
"""
Payment ledger access: reads students and their payments as immutable
snapshots for the AR calculations, and appends new payments.
"""
import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Dict, Iterable, List, Optional

from fastapi import Depends
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from ccldi.database import get_db
from ccldi.errors import CenterNotFound, InvalidReferenceError, StudentNotFound
from ccldi.models.billing import Billing
from ccldi.models.center import Center
from ccldi.models.student import Student

PAYMENT_TYPES = ("tuition", "miscellaneous")


@dataclass(frozen=True)
class StudentRecord:
    id: int
    name: str
    center_id: Optional[str]
    center_name: Optional[str]
    tuition: Decimal
    enrollment_date: date
    status: str

    @classmethod
    def from_model(cls, student):
        return cls(
            id=student.id,
            name=student.full_name,
            center_id=student.center_id,
            center_name=student.center_name,
            tuition=Decimal(str(student.tuition or 0)),
            enrollment_date=student.enrollment_date,
            status=student.status,
        )


@dataclass(frozen=True)
class PaymentEvent:
    id: int
    student_id: int
    type: str
    amount: Decimal
    payment_date: date
    month_for: str
    notes: Optional[str] = None

    @classmethod
    def from_model(cls, billing):
        return cls(
            id=billing.id,
            student_id=billing.student_id,
            type=billing.type,
            amount=Decimal(str(billing.amount)),
            payment_date=billing.payment_date,
            month_for=billing.month_for,
            notes=billing.notes,
        )


def billing_month(payment_date):
    """Billing-period label of a payment (``YYYY-MM``)."""
    return payment_date.strftime("%Y-%m")


class Ledger:
    """Student and payment ledger backed by a SQLAlchemy session."""

    def __init__(self, db: Session):
        self.db = db

    def _student_query(self):
        return self.db.query(Student).options(joinedload(Student.center))

    def get_student(self, student_id) -> StudentRecord:
        student = self._student_query().filter(Student.id == student_id).first()
        if student is None:
            raise StudentNotFound(student_id)
        return StudentRecord.from_model(student)

    def get_center(self, center_id):
        center = self.db.query(Center).filter(Center.id == center_id).first()
        if center is None:
            raise CenterNotFound(center_id)
        return center

    def list_active_students(self, center_id=None, as_of: Optional[date] = None) -> List[StudentRecord]:
        """
        Active students, optionally of one center. With ``as_of`` only the
        students already enrolled on that date are returned.
        """
        query = self._student_query().filter(Student.status == "active")
        if center_id:
            query = query.filter(Student.center_id == center_id)
        if as_of is not None:
            query = query.filter(Student.enrollment_date <= as_of)
        students = query.order_by(Student.last_name, Student.first_name, Student.id).all()
        return [StudentRecord.from_model(s) for s in students]

    def get_payments_for_student(self, student_id) -> List[PaymentEvent]:
        rows = self.db.query(Billing).filter(Billing.student_id == student_id)\
                                     .order_by(Billing.payment_date, Billing.id).all()
        return [PaymentEvent.from_model(b) for b in rows]

    def payments_by_student(self, student_ids: Iterable[int]) -> Dict[int, List[PaymentEvent]]:
        """Payments of several students in one query; every id gets a (possibly empty) list."""
        ids = list(student_ids)
        grouped = {student_id: [] for student_id in ids}
        if not ids:
            return grouped
        rows = self.db.query(Billing).filter(Billing.student_id.in_(ids))\
                                     .order_by(Billing.payment_date, Billing.id).all()
        for row in rows:
            grouped[row.student_id].append(PaymentEvent.from_model(row))
        return grouped

    def record_payment(self, student_id, type, amount, payment_date, notes=None) -> PaymentEvent:
        if type not in PAYMENT_TYPES:
            raise InvalidReferenceError("Type must be tuition or miscellaneous")
        if self.db.query(Student.id).filter(Student.id == student_id).first() is None:
            raise InvalidReferenceError("Invalid student ID")

        db_payment = Billing(
            student_id=student_id,
            type=type,
            amount=amount,
            payment_date=payment_date,
            month_for=billing_month(payment_date),
            notes=notes or None,
        )
        self.db.add(db_payment)
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            logging.warning(f"Integrity error while recording payment for student {student_id}: {e}")
            raise InvalidReferenceError("Invalid student ID") from e
        self.db.refresh(db_payment)

        logging.info(f"Payment recorded: student {student_id} | {type} | {amount} | {payment_date}")
        return PaymentEvent.from_model(db_payment)


def get_ledger(db: Session = Depends(get_db)):
    return Ledger(db)
