# -*- coding: utf-8 -*-
"""
FastAPI routes for Centers: lookups and enrollment/AR statistics.
"""
from typing import List, Optional
from datetime import date
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from ccldi.database import get_db
from ccldi.ledger import Ledger, get_ledger
from ccldi.models.center import Center
from ccldi.receivables import compute_center_stats
from ccldi.schemas.center import CenterRead, CenterStatsRead

router = APIRouter(
    tags=["Centers"],
    responses={404: {"description": "Center not found"}},
)

@router.get("", response_model=List[CenterRead])
def read_centers(db: Session = Depends(get_db)):
    return db.query(Center).order_by(Center.name).all()

@router.get("/{center_id}", response_model=CenterRead)
def read_center(center_id: str, db: Session = Depends(get_db)):
    db_center = db.query(Center).filter(Center.id == center_id).first()
    if db_center is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Center not found")
    return db_center

@router.get("/{center_id}/stats", response_model=CenterStatsRead)
def read_center_stats(
    center_id: str,
    as_of: Optional[date] = None,
    ledger: Ledger = Depends(get_ledger)
):
    """
    Active enrollment against capacity, plus expected revenue and outstanding
    AR of the center's active students on ``as_of`` (today by default).
    """
    as_of = as_of or date.today()
    db_center = ledger.get_center(center_id)
    students = ledger.list_active_students(center_id, as_of)
    payments = ledger.payments_by_student(s.id for s in students)
    stats = compute_center_stats(db_center, students, payments, as_of)
    return CenterStatsRead.from_stats(db_center, stats, as_of)
