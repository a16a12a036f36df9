"""Load and store the room snapshot: config row plus seat positions."""

import json

from sqlalchemy.orm import Session

from status_board.config import settings
from status_board.db_models import (
    DEFAULT_ID,
    AnnouncementDB,
    BrandingDB,
    RoomConfigDB,
    SeatPositionDB,
)
from status_board.logger_config import logger
from status_board.models import RoomConfig, SeatAssignment


def parse_corridors(raw):
    """Stored corridor text to a set of ints; empty, missing or bad text is the empty set."""
    if not raw:
        return frozenset()
    try:
        values = json.loads(raw)
        if not isinstance(values, list):
            raise ValueError("corridor value is not a list")
        return frozenset(int(v) for v in values)
    except (TypeError, ValueError):
        logger.warning(f"Ignoring malformed corridor value: {raw!r}")
        return frozenset()


def dump_corridors(values):
    return json.dumps(sorted(values))


def get_or_create_config_row(db: Session):
    row = db.query(RoomConfigDB).filter(RoomConfigDB.id == DEFAULT_ID).first()
    if row:
        return row

    row = RoomConfigDB(
        id=DEFAULT_ID,
        seats_per_row=settings.DEFAULT_SEATS_PER_ROW,
        total_rows=settings.DEFAULT_TOTAL_ROWS,
        seat_direction=settings.DEFAULT_SEAT_DIRECTION,
        display_title=settings.DEFAULT_DISPLAY_TITLE,
        use_custom_layout=False,
        corridor_after_rows="[]",
        corridor_after_cols="[]",
    )
    db.add(row)
    db.commit()
    db.refresh(row)
    logger.info("Created default room config")
    return row


def config_from_row(row: RoomConfigDB):
    return RoomConfig(
        seats_per_row=row.seats_per_row,
        total_rows=row.total_rows,
        seat_direction=row.seat_direction,
        use_custom_layout=row.use_custom_layout,
        corridor_after_rows=parse_corridors(row.corridor_after_rows),
        corridor_after_cols=parse_corridors(row.corridor_after_cols),
        display_title=row.display_title,
    )


def load_config(db: Session):
    return config_from_row(get_or_create_config_row(db))


def save_config(db: Session, config: RoomConfig):
    row = get_or_create_config_row(db)
    row.seats_per_row = config.seats_per_row
    row.total_rows = config.total_rows
    row.seat_direction = config.seat_direction
    row.display_title = config.display_title
    row.use_custom_layout = config.use_custom_layout
    row.corridor_after_rows = dump_corridors(config.corridor_after_rows)
    row.corridor_after_cols = dump_corridors(config.corridor_after_cols)
    db.commit()
    db.refresh(row)
    return config_from_row(row)


def load_seat_rows(db: Session):
    return db.query(SeatPositionDB).order_by(SeatPositionDB.seat_number).all()


def load_assignments(db: Session):
    return tuple(
        SeatAssignment(seat_number=s.seat_number, grid_row=s.grid_row, grid_col=s.grid_col, label=s.label)
        for s in load_seat_rows(db)
    )


def replace_assignments(db: Session, assignments):
    """Delete every seat position and insert ``assignments`` in one commit."""
    db.query(SeatPositionDB).delete()
    for a in assignments:
        db.add(
            SeatPositionDB(
                seat_number=a.seat_number,
                grid_row=a.grid_row,
                grid_col=a.grid_col,
                label=a.label or None,
            )
        )
    db.commit()
    logger.info(f"Saved {len(assignments)} seat positions")
    return load_assignments(db)


def get_or_create_branding(db: Session):
    branding = db.query(BrandingDB).filter(BrandingDB.id == DEFAULT_ID).first()
    if not branding:
        branding = BrandingDB(id=DEFAULT_ID)
        db.add(branding)
        db.commit()
        db.refresh(branding)
    return branding


def get_announcement(db: Session):
    return db.query(AnnouncementDB).filter(AnnouncementDB.id == DEFAULT_ID).first()
