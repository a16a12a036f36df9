from datetime import datetime, timezone

from fastapi import Depends, FastAPI, File, Header, Query, Response, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse
from sqlalchemy.orm import Session

from status_board import attendance, exporter, layouts, repository
from status_board.config import settings
from status_board.database import Base, engine, get_db
from status_board.db_models import DEFAULT_ID, AnnouncementDB, StudentDB
from status_board.exception_handlers import register_exception_handlers
from status_board.exceptions import ConflictError, DomainError, NotFoundError, UnauthorizedError
from status_board.grid_view import build_grid, status_counts
from status_board.logger_config import logger
from status_board.models import OccupantStatus, RoomConfig, SeatAssignment
from status_board.schemas import (
    AdminStudentStatusUpdate,
    AnnouncementIn,
    AttendanceCodeIn,
    AttendanceVerify,
    BrandingIn,
    BrandingOut,
    CorridorToggle,
    RoomConfigIn,
    SeatAssign,
    SeatCell,
    SeatPositionOut,
    SeatsReplace,
    StudentOut,
    StudentSignup,
    StudentStatusOut,
    StudentStatusUpdate,
)
from status_board.student_import import import_students, read_roster


app = FastAPI(title = settings.PROJECT_NAME, version = settings.VERSION)

if settings.BACKEND_CORS_ORIGINS:
    app.add_middleware(
        CORSMiddleware,
        allow_origins = settings.BACKEND_CORS_ORIGINS,
        allow_methods = ["*"],
        allow_headers = ["*"],
    )

register_exception_handlers(app)

Base.metadata.create_all(bind = engine)


def require_admin(x_admin_token: str | None = Header(None)):
    if x_admin_token != settings.ADMIN_TOKEN:
        raise UnauthorizedError()


def now():
    return datetime.now(timezone.utc).astimezone()


def config_payload(config: RoomConfig, assignments):
    return {
        "seats_per_row": config.seats_per_row,
        "total_rows": config.total_rows,
        "seat_direction": config.seat_direction,
        "display_title": config.display_title,
        "use_custom_layout": config.use_custom_layout,
        "corridor_after_rows": sorted(config.corridor_after_rows),
        "corridor_after_cols": sorted(config.corridor_after_cols),
        "total_seats": layouts.total_occupiable_seats(config, assignments),
    }


def seats_payload(assignments):
    return [
        SeatPositionOut(seat_number = a.seat_number, grid_row = a.grid_row, grid_col = a.grid_col, label = a.label)
        for a in sorted(assignments, key = lambda a: a.seat_number)
    ]


def get_student(db: Session, student_id: int):
    student = db.query(StudentDB).filter(StudentDB.id == student_id).first()
    if not student:
        raise NotFoundError("Student not found")
    return student


def check_status(value, allowed):
    if value not in allowed:
        raise DomainError("Invalid status")
    return value


@app.get("/")
def root():
    return {"message": "Status board API is running !"}


# ---- room config ----

@app.get("/admin/config")
def get_config(db: Session = Depends(get_db)):
    config = repository.load_config(db)
    return config_payload(config, repository.load_assignments(db))


@app.put("/admin/config", dependencies = [Depends(require_admin)])
def update_config(data: RoomConfigIn, db: Session = Depends(get_db)):
    config = RoomConfig(
        seats_per_row = data.seats_per_row,
        total_rows = data.total_rows,
        seat_direction = data.seat_direction,
        use_custom_layout = data.use_custom_layout,
        corridor_after_rows = data.corridor_after_rows,
        corridor_after_cols = data.corridor_after_cols,
        display_title = data.display_title,
    )
    layouts.validate_config(config)

    config = repository.save_config(db, config)
    logger.info(f"Room config updated: {config.total_rows}x{config.seats_per_row}, custom={config.use_custom_layout}")

    assignments = repository.load_assignments(db)
    kept = layouts.drop_outside_grid(config, assignments)
    if len(kept) != len(assignments):
        logger.info(f"Dropped {len(assignments) - len(kept)} seat positions outside the resized grid")
        assignments = repository.replace_assignments(db, kept)

    return config_payload(config, assignments)


@app.post("/admin/config/corridors/toggle", dependencies = [Depends(require_admin)])
def toggle_corridor(req: CorridorToggle, db: Session = Depends(get_db)):
    config = layouts.toggle_corridor(req.kind, req.index, repository.load_config(db))
    config = repository.save_config(db, config)
    return config_payload(config, repository.load_assignments(db))


@app.delete("/admin/config/corridors", dependencies = [Depends(require_admin)])
def clear_corridors(db: Session = Depends(get_db)):
    config = repository.save_config(db, layouts.clear_corridors(repository.load_config(db)))
    return config_payload(config, repository.load_assignments(db))


# ---- seat positions ----

@app.get("/admin/seats")
def get_seats(db: Session = Depends(get_db)):
    return seats_payload(repository.load_assignments(db))


@app.post("/admin/seats", dependencies = [Depends(require_admin)])
def replace_seats(req: SeatsReplace, db: Session = Depends(get_db)):
    assignments = tuple(
        SeatAssignment(seat_number = s.seat_number, grid_row = s.grid_row, grid_col = s.grid_col, label = s.label)
        for s in req.seats
    )
    layouts.validate_assignments(repository.load_config(db), assignments)
    return seats_payload(repository.replace_assignments(db, assignments))


@app.post("/admin/seats/assign", dependencies = [Depends(require_admin)])
def assign_seat(req: SeatAssign, db: Session = Depends(get_db)):
    config = repository.load_config(db)
    assignments = repository.load_assignments(db)

    layouts.validate_cell(req.grid_row, req.grid_col, config)

    numbering = layouts.SequentialNumbering(assignments)
    if req.seat_number is None:
        seat_number = numbering.take()
    else:
        seat_number = numbering.manual(req.seat_number)

    assignments = layouts.assign_seat(req.grid_row, req.grid_col, seat_number, assignments, label = req.label)
    saved = repository.replace_assignments(db, assignments)
    return {"seats": seats_payload(saved), "next_seat_number": numbering.suggested}


@app.post("/admin/seats/unassign", dependencies = [Depends(require_admin)])
def unassign_seat(req: SeatCell, db: Session = Depends(get_db)):
    assignments = layouts.unassign_seat(req.grid_row, req.grid_col, repository.load_assignments(db))
    saved = repository.replace_assignments(db, assignments)
    return {"seats": seats_payload(saved), "next_seat_number": layouts.next_seat_number(saved)}


@app.post("/admin/seats/auto-fill", dependencies = [Depends(require_admin)])
def auto_fill_seats(db: Session = Depends(get_db)):
    assignments = layouts.auto_fill_sequential(repository.load_config(db))
    return seats_payload(repository.replace_assignments(db, assignments))


@app.delete("/admin/seats", dependencies = [Depends(require_admin)])
def clear_seats(db: Session = Depends(get_db)):
    repository.replace_assignments(db, layouts.clear_seats())
    return {"message": "All seat positions cleared"}


# ---- students ----

@app.get("/admin/students", response_model = list[StudentOut])
def get_students(db: Session = Depends(get_db)):
    return db.query(StudentDB).order_by(StudentDB.seat_number).all()


@app.put("/admin/students", response_model = StudentOut, dependencies = [Depends(require_admin)])
def set_student_status(req: AdminStudentStatusUpdate, db: Session = Depends(get_db)):
    student = get_student(db, req.student_id)
    student.status = check_status(req.status or OccupantStatus.ONLINE.value, {s.value for s in OccupantStatus})
    student.last_active = now()
    db.commit()
    db.refresh(student)
    return student


@app.delete("/admin/students", dependencies = [Depends(require_admin)])
def delete_students(
    student_id: int | None = Query(None, alias = "id"),
    delete_all: bool = Query(False, alias = "all"),
    db: Session = Depends(get_db)
):
    if delete_all:
        for student in db.query(StudentDB).all():
            db.delete(student)
        db.commit()
        logger.info("All students deleted")
        return {"message": "All students deleted"}

    if student_id is not None:
        db.delete(get_student(db, student_id))
        db.commit()
        return {"message": "Student deleted"}

    raise DomainError("Student ID or all flag required")


@app.post("/admin/students/import", dependencies = [Depends(require_admin)])
def import_student_roster(file: UploadFile = File(...), db: Session = Depends(get_db)):
    result = import_students(db, read_roster(file.file))
    return {"message": "Student import completed", **result}


@app.post("/student/signup")
def signup(req: StudentSignup, db: Session = Depends(get_db)):
    if db.query(StudentDB).filter(StudentDB.email == req.email).first():
        raise ConflictError("Email already exists", "EMAIL_EXISTS")
    if db.query(StudentDB).filter(StudentDB.seat_number == req.seat_number).first():
        raise ConflictError("Seat number already taken", "SEAT_TAKEN")

    student = StudentDB(email = req.email, name = req.name, seat_number = req.seat_number, is_locked = True)
    db.add(student)
    db.commit()
    db.refresh(student)
    logger.info(f"Student registered at seat {student.seat_number}")

    return {
        "message": "Student registered successfully",
        "student": {"id": student.id, "email": student.email, "seat_number": student.seat_number},
    }


@app.get("/student/{student_id}/status", response_model = StudentStatusOut)
def get_student_status(student_id: int, db: Session = Depends(get_db)):
    return get_student(db, student_id)


@app.put("/student/{student_id}/status", response_model = StudentStatusOut)
def update_student_status(student_id: int, req: StudentStatusUpdate, db: Session = Depends(get_db)):
    student = get_student(db, student_id)
    student.status = check_status(req.status, {OccupantStatus.ONLINE.value, OccupantStatus.NEED_HELP.value})
    student.last_active = now()
    db.commit()
    db.refresh(student)
    return student


@app.get("/student/{student_id}/attendance")
def get_attendance(student_id: int, db: Session = Depends(get_db)):
    return attendance.attendance_status(db, get_student(db, student_id), now())


@app.post("/student/{student_id}/attendance")
def verify_attendance(student_id: int, req: AttendanceVerify, db: Session = Depends(get_db)):
    return attendance.verify(db, get_student(db, student_id), req.code, now())


@app.put("/admin/attendance/code", dependencies = [Depends(require_admin)])
def set_attendance_code(req: AttendanceCodeIn, db: Session = Depends(get_db)):
    return attendance.set_code(db, req.code, now())


# ---- branding / announcement ----

@app.get("/admin/branding", response_model = BrandingOut)
def get_branding(db: Session = Depends(get_db)):
    return repository.get_or_create_branding(db)


@app.put("/admin/branding", response_model = BrandingOut, dependencies = [Depends(require_admin)])
def update_branding(data: BrandingIn, db: Session = Depends(get_db)):
    branding = repository.get_or_create_branding(db)
    for field, value in data.model_dump().items():
        setattr(branding, field, value)
    db.commit()
    db.refresh(branding)
    return branding


@app.get("/admin/announcement")
def get_announcement(response: Response, db: Session = Depends(get_db)):
    response.headers["Cache-Control"] = "no-cache, no-store, must-revalidate"
    announcement = repository.get_announcement(db)
    if not announcement:
        return {"content": None, "is_active": False}
    return {"content": announcement.content, "is_active": announcement.is_active}


@app.put("/admin/announcement", dependencies = [Depends(require_admin)])
def update_announcement(data: AnnouncementIn, db: Session = Depends(get_db)):
    announcement = repository.get_announcement(db)
    if not announcement:
        announcement = AnnouncementDB(id = DEFAULT_ID)
        db.add(announcement)
    announcement.content = data.content or None
    announcement.is_active = data.is_active
    db.commit()
    return {"content": announcement.content, "is_active": announcement.is_active}


# ---- public display ----

@app.get("/status")
def get_status(db: Session = Depends(get_db)):
    config = repository.load_config(db)
    assignments = repository.load_assignments(db)
    students = db.query(StudentDB).order_by(StudentDB.seat_number).all()
    branding = repository.get_or_create_branding(db)
    status_by_seat = {s.seat_number: s.status for s in students}

    return {
        "students": [StudentStatusOut.model_validate(s) for s in students],
        "config": config_payload(config, assignments),
        "branding": BrandingOut.model_validate(branding),
        "seat_positions": seats_payload(assignments),
        "counts": status_counts(config, assignments, status_by_seat.values()),
        "grid": build_grid(config, assignments, status_by_seat),
        "poll_interval_seconds": settings.POLL_INTERVAL_SECONDS,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@app.get("/public/seat-lookup")
def seat_lookup(seat_number: int, db: Session = Depends(get_db)):
    position = exporter.locate(seat_number, repository.load_config(db), repository.load_assignments(db))
    if not position:
        raise NotFoundError("Seat not found in the current layout")
    return position


@app.get("/export/seats/excel")
def export_seats_excel(db: Session = Depends(get_db)):
    config = repository.load_config(db)
    students = db.query(StudentDB).all()
    file_path = exporter.export_excel(config, repository.load_assignments(db), students, settings.EXPORT_DIR)

    return FileResponse(
        path = str(file_path),
        filename = file_path.name,
        media_type = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
    )


@app.get("/export/seats/pdf")
def export_seats_pdf(db: Session = Depends(get_db)):
    config = repository.load_config(db)
    students = db.query(StudentDB).all()
    file_path = exporter.export_pdf(config, repository.load_assignments(db), students, settings.EXPORT_DIR)

    return FileResponse(
        path = str(file_path),
        filename = file_path.name,
        media_type = "application/pdf"
    )
