# ccldi/schemas/student.py
from pydantic import BaseModel, Field, EmailStr, field_validator
from typing import Literal, Optional, List
from datetime import date, datetime
from decimal import Decimal

from ccldi.schemas.receivables import Money

class StudentBase(BaseModel):
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    age: int = Field(..., ge=1, le=18)
    gender: Literal["Male", "Female"]
    parent: str = Field(..., min_length=1, max_length=100)
    contact: str = Field(..., min_length=1, max_length=20)
    email: Optional[EmailStr] = None
    center_id: str = Field(..., min_length=1, max_length=20)
    tuition: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)

    @field_validator('first_name', 'last_name', 'parent', 'contact', 'center_id', mode='before')
    @classmethod
    def strip_text(cls, v):
        if isinstance(v, str):
            return v.strip()
        return v

    @field_validator('email', mode='before')
    @classmethod
    def empty_str_to_none(cls, v):
        """Turns empty strings into None before e-mail validation."""
        if isinstance(v, str) and v.strip() == '':
            return None
        return v

class StudentCreate(StudentBase):
    enrollment_date: Optional[date] = None  # defaults to today

    @field_validator('enrollment_date')
    @classmethod
    def not_in_future(cls, v):
        if v is not None and v > date.today():
            raise ValueError("Enrollment date cannot be in the future")
        return v

# PUT replaces the whole record, same rules as creation
class StudentUpdate(StudentCreate):
    pass

class StudentRead(BaseModel):
    id: int
    first_name: str
    last_name: str
    age: int
    gender: str
    parent: str
    contact: str
    email: Optional[str] = None
    center_id: str
    center_name: Optional[str] = None
    tuition: Money
    enrollment_date: date
    status: str
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True

class StudentList(BaseModel):
    count: int
    students: List[StudentRead]
