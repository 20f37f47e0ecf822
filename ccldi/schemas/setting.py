# -*- coding: utf-8 -*-
"""
Pydantic schemas for the key/value settings store.
"""

from pydantic import BaseModel, field_validator
from typing import Any, Optional
from datetime import datetime

class SettingRead(BaseModel):
    key: str
    value: str
    description: Optional[str] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True

class SettingValue(BaseModel):
    value: str
    description: Optional[str] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True

class SettingUpdate(BaseModel):
    # Any JSON scalar is accepted and stored as text
    value: Any

    @field_validator('value')
    @classmethod
    def value_required(cls, v):
        if v is None:
            raise ValueError("Value is required")
        if isinstance(v, (dict, list)):
            raise ValueError("Value must be text, a number or a boolean")
        if isinstance(v, bool):
            return str(v).lower()
        return str(v)
