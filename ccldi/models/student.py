from sqlalchemy import Column, Integer, String, Date, DateTime, Numeric, ForeignKey
from sqlalchemy.orm import relationship
from ccldi.database import Base
from datetime import date, datetime

class Student(Base):
    __tablename__ = "students"

    id = Column(Integer, primary_key=True, index=True)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False, index=True)
    age = Column(Integer, nullable=False)
    gender = Column(String(10), nullable=False)
    parent = Column(String(100), nullable=False)
    contact = Column(String(20), nullable=False)
    email = Column(String(100), nullable=True)
    center_id = Column(String(20), ForeignKey("centers.id"), nullable=False, index=True)
    tuition = Column(Numeric(10, 2), nullable=False, default=0)
    enrollment_date = Column(Date, nullable=False, default=date.today)
    status = Column(String(20), nullable=False, default='active', index=True)  # 'active' or 'inactive'
    created_at = Column(DateTime, default=datetime.utcnow)

    center = relationship("Center", back_populates="students")
    payments = relationship("Billing", back_populates="student", order_by="Billing.payment_date")

    @property
    def full_name(self):
        return f"{self.first_name} {self.last_name}"

    @property
    def center_name(self):
        return self.center.name if self.center else None
