from datetime import datetime, timezone

from sqlalchemy import Boolean, Column, Date, DateTime, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import relationship

from status_board.database import Base


DEFAULT_ID = "default"


def utcnow():
    return datetime.now(timezone.utc)


class RoomConfigDB(Base):
    __tablename__ = "room_config"

    id = Column(String, primary_key = True, default = DEFAULT_ID)
    seats_per_row = Column(Integer, nullable = False, default = 10)
    total_rows = Column(Integer, nullable = False, default = 5)
    seat_direction = Column(String, nullable = False, default = "bottom-right-horizontal")
    display_title = Column(String, nullable = False, default = "Bootcamp Status")
    use_custom_layout = Column(Boolean, nullable = False, default = False)

    # JSON integer arrays, e.g. "[1, 4]"
    corridor_after_rows = Column(Text, nullable = False, default = "[]")
    corridor_after_cols = Column(Text, nullable = False, default = "[]")


class SeatPositionDB(Base):
    __tablename__ = "seat_positions"

    id = Column(Integer, primary_key = True, index = True)
    seat_number = Column(Integer, unique = True, nullable = False)
    grid_row = Column(Integer, nullable = False)
    grid_col = Column(Integer, nullable = False)
    label = Column(String, nullable = True)

    __table_args__ = (UniqueConstraint("grid_row", "grid_col", name = "uq_seat_position_cell"),)


class StudentDB(Base):
    __tablename__ = "students"

    id = Column(Integer, primary_key = True, index = True)
    email = Column(String, unique = True, nullable = False)
    name = Column(String, nullable = True)
    seat_number = Column(Integer, unique = True, nullable = False)
    status = Column(String, nullable = False, default = "offline")
    last_active = Column(DateTime(timezone = True), nullable = True)
    is_locked = Column(Boolean, nullable = False, default = True)
    created_at = Column(DateTime(timezone = True), nullable = False, default = utcnow)

    attendance = relationship("AttendanceRecordDB", back_populates = "student", cascade = "all, delete")


class BrandingDB(Base):
    __tablename__ = "branding"

    id = Column(String, primary_key = True, default = DEFAULT_ID)
    login_image_path = Column(String, nullable = True)
    login_text = Column(String, nullable = True)
    display_image_path = Column(String, nullable = True)
    display_text = Column(String, nullable = True)
    organization_name = Column(String, nullable = True)


class AnnouncementDB(Base):
    __tablename__ = "announcements"

    id = Column(String, primary_key = True, default = DEFAULT_ID)
    content = Column(Text, nullable = True)
    is_active = Column(Boolean, nullable = False, default = False)


class AttendanceCodeDB(Base):
    __tablename__ = "attendance_codes"

    id = Column(Integer, primary_key = True, index = True)
    day = Column(Date, nullable = False)
    session = Column(String, nullable = False)
    code = Column(String(4), nullable = False)

    __table_args__ = (UniqueConstraint("day", "session", name = "uq_attendance_code_session"),)


class AttendanceRecordDB(Base):
    __tablename__ = "attendance_records"

    id = Column(Integer, primary_key = True, index = True)
    student_id = Column(Integer, ForeignKey("students.id"), nullable = False)
    day = Column(Date, nullable = False)
    session = Column(String, nullable = False)
    verified_at = Column(DateTime(timezone = True), nullable = False, default = utcnow)

    student = relationship("StudentDB", back_populates = "attendance")

    __table_args__ = (UniqueConstraint("student_id", "day", "session", name = "uq_attendance_record"),)
