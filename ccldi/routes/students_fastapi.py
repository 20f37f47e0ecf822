# -*- coding: utf-8 -*-
"""
FastAPI routes for the Students CRUD and the per-student AR position.
"""
from typing import Optional
from datetime import date
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import or_
from sqlalchemy.orm import Session, joinedload
from sqlalchemy.exc import IntegrityError
import logging

from ccldi.database import get_db
from ccldi.errors import InvalidReferenceError
from ccldi.ledger import Ledger, get_ledger
from ccldi.models.center import Center
from ccldi.models.student import Student
from ccldi.receivables import compute_ar
from ccldi.schemas.receivables import StudentARRead
from ccldi.schemas.student import StudentCreate, StudentList, StudentRead, StudentUpdate


router = APIRouter(
    tags=["Students"],
    responses={404: {"description": "Student not found"}},
)


def _check_center(db: Session, center_id: str):
    if db.query(Center.id).filter(Center.id == center_id).first() is None:
        raise InvalidReferenceError("Invalid center ID")


def _get_student_or_404(db: Session, student_id: int):
    db_student = db.query(Student).options(joinedload(Student.center)).filter(Student.id == student_id).first()
    if db_student is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Student not found")
    return db_student


def _commit(db: Session):
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logging.warning(f"Integrity error while saving student: {e}")
        raise InvalidReferenceError("Invalid center ID") from e


@router.get("", response_model=StudentList)
def read_students(
    center_id: Optional[str] = None,
    status: Optional[str] = "active",
    search: Optional[str] = None,
    db: Session = Depends(get_db)
):
    """
    Lists students, optionally filtered by center ("all" = every center),
    status ("all" = any status) and a search term matched against the
    student's name, the parent's name and the contact number.
    """
    query = db.query(Student).options(joinedload(Student.center))

    if center_id and center_id != "all":
        query = query.filter(Student.center_id == center_id)
    if status and status != "all":
        query = query.filter(Student.status == status)
    if search:
        pattern = f"%{search}%"
        full_name = Student.first_name + " " + Student.last_name
        query = query.filter(or_(
            full_name.ilike(pattern),
            Student.parent.ilike(pattern),
            Student.contact.like(pattern),
        ))

    students = query.order_by(Student.last_name, Student.first_name).all()
    return {"count": len(students), "students": students}


@router.get("/{student_id}", response_model=StudentRead)
def read_student(student_id: int, db: Session = Depends(get_db)):
    return _get_student_or_404(db, student_id)


@router.get("/{student_id}/ar", response_model=StudentARRead)
def read_student_ar(
    student_id: int,
    as_of: Optional[date] = None,
    ledger: Ledger = Depends(get_ledger)
):
    """
    Accounts-receivable position of a student on ``as_of`` (today by default).
    """
    as_of = as_of or date.today()
    student = ledger.get_student(student_id)
    payments = ledger.get_payments_for_student(student_id)
    position = compute_ar(student, payments, as_of)
    return StudentARRead.from_position(position, as_of)


@router.post("", response_model=StudentRead, status_code=status.HTTP_201_CREATED)
def create_student(student: StudentCreate, db: Session = Depends(get_db)):
    _check_center(db, student.center_id)

    data = student.model_dump()
    data["enrollment_date"] = data["enrollment_date"] or date.today()
    db_student = Student(**data, status="active")
    db.add(db_student)
    _commit(db)
    db.refresh(db_student)

    logging.info(f"Student created: {db_student.id} ({db_student.full_name}) at center {db_student.center_id}")
    return db_student


@router.put("/{student_id}", response_model=StudentRead)
def update_student(student_id: int, student: StudentUpdate, db: Session = Depends(get_db)):
    db_student = _get_student_or_404(db, student_id)
    _check_center(db, student.center_id)

    for key, value in student.model_dump(exclude_unset=True).items():
        if key == "enrollment_date" and value is None:
            continue
        setattr(db_student, key, value)

    _commit(db)
    db.refresh(db_student)
    return db_student


@router.delete("/{student_id}", response_model=StudentRead)
def delete_student(student_id: int, db: Session = Depends(get_db)):
    """
    Soft delete: the student is marked inactive and keeps its payment history.
    """
    db_student = _get_student_or_404(db, student_id)
    db_student.status = "inactive"
    db.commit()
    db.refresh(db_student)
    return db_student
