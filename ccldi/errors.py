# -*- coding: utf-8 -*-
"""
Error taxonomy for the accounts-receivable core.

Each error is raised on the synchronous call path and never retried; ``main.py``
maps them to HTTP responses.
"""


class ReceivablesError(Exception):
    """Base class for every error raised by the ledger and the AR calculations."""

    status_code = 500

    def __init__(self, message):
        super().__init__(message)
        self.message = message


class InvalidTemporalRange(ReceivablesError):
    """Enrollment date falls after the evaluation ("as of") date."""

    status_code = 400

    def __init__(self, enrollment_date, as_of):
        super().__init__(
            f"Enrollment date {enrollment_date.isoformat()} is after the evaluation date {as_of.isoformat()}"
        )
        self.enrollment_date = enrollment_date
        self.as_of = as_of


class StudentNotFound(ReceivablesError):
    status_code = 404

    def __init__(self, student_id):
        super().__init__("Student not found")
        self.student_id = student_id


class CenterNotFound(ReceivablesError):
    status_code = 404

    def __init__(self, center_id):
        super().__init__("Center not found")
        self.center_id = center_id


class InvalidReferenceError(ReceivablesError):
    """A payment or a student points at a student/center that does not exist."""

    status_code = 400


class ComputationError(ReceivablesError):
    """Arithmetic failure on corrupt inputs (non-finite or negative amounts)."""

    status_code = 500
