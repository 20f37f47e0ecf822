"""
Test configuration: an in-memory SQLite database per test, injected into the
FastAPI app by overriding ``get_db``.
"""

import os

# Must be set before ccldi.config is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ENVIRONMENT"] = "test"

from datetime import date, timedelta  # noqa: E402
from decimal import Decimal  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from ccldi.database import Base, get_db  # noqa: E402
from ccldi.models.billing import Billing  # noqa: E402
from ccldi.models.center import Center  # noqa: E402
from ccldi.models.setting import Setting  # noqa: E402
from ccldi.models.student import Student  # noqa: E402
from main import app  # noqa: E402

AS_OF = date(2024, 6, 30)


@pytest.fixture
def db_session():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    db = TestingSession()
    yield db
    db.close()
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def client(db_session):
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def make_center(db_session):
    def _make(center_id="CTR01", name="Main Street Center", capacity=10, address=None):
        center = Center(id=center_id, name=name, capacity=capacity, address=address)
        db_session.add(center)
        db_session.commit()
        return center

    return _make


@pytest.fixture
def make_student(db_session):
    def _make(
        center_id="CTR01",
        tuition="200.00",
        enrolled_days_ago=95,
        status="active",
        first_name="Ava",
        last_name="Johnson",
    ):
        student = Student(
            first_name=first_name,
            last_name=last_name,
            age=4,
            gender="Female",
            parent="Maria Johnson",
            contact="555-0101",
            center_id=center_id,
            tuition=Decimal(tuition),
            enrollment_date=AS_OF - timedelta(days=enrolled_days_ago),
            status=status,
        )
        db_session.add(student)
        db_session.commit()
        return student

    return _make


@pytest.fixture
def make_payment(db_session):
    def _make(student, amount, payment_date=AS_OF, type="tuition", notes=None):
        payment = Billing(
            student_id=student.id,
            type=type,
            amount=Decimal(amount),
            payment_date=payment_date,
            month_for=payment_date.strftime("%Y-%m"),
            notes=notes,
        )
        db_session.add(payment)
        db_session.commit()
        return payment

    return _make


@pytest.fixture
def make_setting(db_session):
    def _make(key, value, description=None):
        setting = Setting(key=key, value=value, description=description)
        db_session.add(setting)
        db_session.commit()
        return setting

    return _make
