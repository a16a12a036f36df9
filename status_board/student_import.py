import pandas as pd
from sqlalchemy.orm import Session

from status_board.db_models import StudentDB
from status_board.exceptions import DomainError
from status_board.logger_config import logger


REQUIRED_COLUMNS = {"email", "seat_number"}


def read_roster(source):
    """Read a student roster spreadsheet (path or file object) into a DataFrame."""
    try:
        df = pd.read_excel(source)
    except Exception as e:
        raise DomainError(f"Excel read failed: {str(e)}")

    if not REQUIRED_COLUMNS.issubset(df.columns):
        missing = REQUIRED_COLUMNS - set(df.columns)
        raise DomainError(f"Missing columns: {sorted(missing)}")

    return df


def import_students(db: Session, df):
    """Insert roster rows, skipping emails or seat numbers already registered.

    Rows with a seat number below 1 are skipped as well.
    """
    inserted = 0
    skipped = 0
    has_name = "name" in df.columns

    for _, row in df.iterrows():
        email = str(row["email"]).strip()
        seat_number = int(row["seat_number"])
        if seat_number < 1:
            skipped += 1
            continue

        existing = (
            db.query(StudentDB)
            .filter((StudentDB.email == email) | (StudentDB.seat_number == seat_number))
            .first()
        )
        if existing:
            skipped += 1
            continue

        name = row["name"] if has_name and pd.notna(row["name"]) else None
        db.add(
            StudentDB(
                email=email,
                name=str(name) if name is not None else None,
                seat_number=seat_number,
                status="offline",
                is_locked=True,
            )
        )
        db.flush()
        inserted += 1

    db.commit()
    logger.info(f"Student import: {inserted} inserted, {skipped} skipped")

    return {"inserted": inserted, "skipped_duplicates": skipped}
