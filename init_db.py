import logging
import argparse
from datetime import date, timedelta
from decimal import Decimal

from ccldi.database import Base, SessionLocal, engine
from ccldi.models.billing import Billing  # noqa: F401
from ccldi.models.center import Center
from ccldi.models.setting import Setting
from ccldi.models.student import Student

logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')

DEFAULT_SETTINGS = [
    ("organization_name", "CCLDI", "Name shown on reports and receipts"),
    ("currency", "USD", "Currency of tuition and payments"),
    ("default_tuition", "200.00", "Monthly tuition suggested for new enrollments"),
    ("billing_day", "1", "Day of the month tuition is expected"),
]

SAMPLE_CENTERS = [
    ("CTR01", "Main Street Center", "100 Main Street", 60),
    ("CTR02", "Riverside Center", "12 River Road", 40),
]

# (first, last, age, gender, parent, contact, center, tuition, days enrolled)
SAMPLE_STUDENTS = [
    ("Ava", "Johnson", 4, "Female", "Maria Johnson", "555-0101", "CTR01", "200.00", 95),
    ("Liam", "Smith", 3, "Male", "James Smith", "555-0102", "CTR01", "250.00", 40),
    ("Noah", "Brown", 5, "Male", "Emma Brown", "555-0103", "CTR02", "180.00", 10),
]


def init_db(sample=False):
    """
    Creates the tables and inserts the default settings. With ``sample`` it also
    inserts a couple of centers and students for local testing. Existing rows
    are left untouched, so the script can run more than once.
    """
    Base.metadata.create_all(bind=engine)
    logging.info("Tables created: centers, students, billing, settings")

    db = SessionLocal()
    try:
        for key, value, description in DEFAULT_SETTINGS:
            if db.query(Setting).filter(Setting.key == key).first() is None:
                db.add(Setting(key=key, value=value, description=description))
                logging.info(f"-> setting {key} = {value}")

        if sample:
            for center_id, name, address, capacity in SAMPLE_CENTERS:
                if db.query(Center).filter(Center.id == center_id).first() is None:
                    db.add(Center(id=center_id, name=name, address=address, capacity=capacity))
                    logging.info(f"-> center {center_id} ({name})")
            db.flush()

            if db.query(Student).count() == 0:
                today = date.today()
                for first, last, age, gender, parent, contact, center_id, tuition, days in SAMPLE_STUDENTS:
                    db.add(Student(
                        first_name=first, last_name=last, age=age, gender=gender,
                        parent=parent, contact=contact, center_id=center_id,
                        tuition=Decimal(tuition), enrollment_date=today - timedelta(days=days),
                    ))
                logging.info(f"-> {len(SAMPLE_STUDENTS)} sample students")
    except Exception as e:
        logging.error(f"Error initializing the database: {e}")
        db.rollback()
        raise
    else:
        db.commit()
        logging.info("Database initialized successfully")
    finally:
        db.close()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description='Creates the CCLDI tables and default settings')
    parser.add_argument('--sample', action='store_true', help='Also insert sample centers and students')
    args = parser.parse_args()
    init_db(sample=args.sample)
