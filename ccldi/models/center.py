# -*- coding: utf-8 -*-
"""
SQLAlchemy model for the Center entity.
"""
from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import relationship
from ccldi.database import Base
from datetime import datetime

class Center(Base):
    __tablename__ = 'centers'

    # Centers are keyed by a short code (e.g. "CTR01") rather than a serial id
    id = Column(String(20), primary_key=True, index=True)
    name = Column(String(100), nullable=False, index=True)
    address = Column(String(255), nullable=True)
    capacity = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, default=datetime.utcnow)

    students = relationship("Student", back_populates="center")
