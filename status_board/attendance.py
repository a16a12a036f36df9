"""Per-session attendance codes.

A day has a morning and an afternoon session. The admin publishes one
4-digit code per session and a student verifies once per session.
"""

from datetime import datetime

from sqlalchemy.orm import Session

from status_board.config import settings
from status_board.db_models import AttendanceCodeDB, AttendanceRecordDB, StudentDB
from status_board.exceptions import DomainError, NotFoundError
from status_board.logger_config import logger


MORNING = "morning"
AFTERNOON = "afternoon"


def current_session(now: datetime, afternoon_start_hour=None):
    if afternoon_start_hour is None:
        afternoon_start_hour = settings.ATTENDANCE_AFTERNOON_START_HOUR
    return AFTERNOON if now.hour >= afternoon_start_hour else MORNING


def set_code(db: Session, code: str, now: datetime):
    session = current_session(now)
    row = (
        db.query(AttendanceCodeDB)
        .filter(AttendanceCodeDB.day == now.date())
        .filter(AttendanceCodeDB.session == session)
        .first()
    )
    if row:
        row.code = code
    else:
        row = AttendanceCodeDB(day=now.date(), session=session, code=code)
        db.add(row)
    db.commit()
    logger.info(f"Attendance code set for {now.date()} {session}")
    return {"day": now.date().isoformat(), "session": session}


def is_verified(db: Session, student: StudentDB, now: datetime):
    return (
        db.query(AttendanceRecordDB)
        .filter(AttendanceRecordDB.student_id == student.id)
        .filter(AttendanceRecordDB.day == now.date())
        .filter(AttendanceRecordDB.session == current_session(now))
        .first()
    ) is not None


def attendance_status(db: Session, student: StudentDB, now: datetime):
    session = current_session(now)
    code_row = (
        db.query(AttendanceCodeDB)
        .filter(AttendanceCodeDB.day == now.date())
        .filter(AttendanceCodeDB.session == session)
        .first()
    )
    return {
        "is_verified_today": is_verified(db, student, now),
        "current_session": session,
        "is_session_valid": code_row is not None,
    }


def verify(db: Session, student: StudentDB, code: str, now: datetime):
    session = current_session(now)
    code_row = (
        db.query(AttendanceCodeDB)
        .filter(AttendanceCodeDB.day == now.date())
        .filter(AttendanceCodeDB.session == session)
        .first()
    )
    if not code_row:
        raise NotFoundError(f"No attendance code published for the {session} session")
    if code_row.code != code:
        raise DomainError("Attendance code does not match")

    if not is_verified(db, student, now):
        db.add(AttendanceRecordDB(student_id=student.id, day=now.date(), session=session))
        db.commit()
        logger.info(f"Seat {student.seat_number} verified attendance ({session})")

    return attendance_status(db, student, now)
