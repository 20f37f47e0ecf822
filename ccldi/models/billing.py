# -*- coding: utf-8 -*-
"""
SQLAlchemy model for the payment ledger (billing).

Rows are append-only: a recorded payment is never updated or deleted.
"""
from sqlalchemy import Column, Integer, String, Date, DateTime, Numeric, ForeignKey, Text
from sqlalchemy.orm import relationship
from ccldi.database import Base
from datetime import datetime

class Billing(Base):
    __tablename__ = 'billing'

    id = Column(Integer, primary_key=True, index=True)
    student_id = Column(Integer, ForeignKey("students.id"), nullable=False, index=True)
    type = Column(String(20), nullable=False)  # 'tuition' or 'miscellaneous'
    amount = Column(Numeric(10, 2), nullable=False)
    payment_date = Column(Date, nullable=False, index=True)
    month_for = Column(String(7), nullable=False, index=True)  # YYYY-MM
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    student = relationship("Student", back_populates="payments")
