# -*- coding: utf-8 -*-
"""
SQLAlchemy model for the key/value settings store.
"""
from sqlalchemy import Column, String, Text, DateTime
from ccldi.database import Base
from datetime import datetime

class Setting(Base):
    __tablename__ = 'settings'

    key = Column(String(100), primary_key=True, index=True)
    value = Column(Text, nullable=False)
    description = Column(String(255), nullable=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
