from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from status_board.models import CorridorKind, SeatDirection


class RoomConfigIn(BaseModel):
    seats_per_row: int = Field(10, ge=1)
    total_rows: int = Field(5, ge=1)
    seat_direction: str = SeatDirection.BOTTOM_RIGHT.value
    display_title: str = "Bootcamp Status"
    use_custom_layout: bool = False
    corridor_after_rows: List[int] = []
    corridor_after_cols: List[int] = []


class RoomConfigOut(RoomConfigIn):
    total_seats: int


class CorridorToggle(BaseModel):
    kind: CorridorKind
    index: int


class SeatPositionIn(BaseModel):
    seat_number: int
    grid_row: int
    grid_col: int
    label: Optional[str] = None


class SeatPositionOut(SeatPositionIn):
    model_config = ConfigDict(from_attributes=True)


class SeatsReplace(BaseModel):
    seats: List[SeatPositionIn] = []


class SeatAssign(BaseModel):
    grid_row: int
    grid_col: int
    # omitted means "next sequential number"
    seat_number: Optional[int] = None
    label: Optional[str] = None


class SeatCell(BaseModel):
    grid_row: int
    grid_col: int


class StudentOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    name: Optional[str] = None
    seat_number: int
    status: str
    last_active: Optional[datetime] = None
    is_locked: bool
    created_at: datetime


class StudentStatusOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    seat_number: int
    status: str
    last_active: Optional[datetime] = None


class StudentSignup(BaseModel):
    email: str
    seat_number: int = Field(..., ge=1)
    name: Optional[str] = None


class StudentStatusUpdate(BaseModel):
    status: str


class AdminStudentStatusUpdate(BaseModel):
    student_id: int
    status: Optional[str] = None


class BrandingIn(BaseModel):
    login_image_path: Optional[str] = None
    login_text: Optional[str] = None
    display_image_path: Optional[str] = None
    display_text: Optional[str] = None
    organization_name: Optional[str] = None


class BrandingOut(BrandingIn):
    model_config = ConfigDict(from_attributes=True)


class AnnouncementIn(BaseModel):
    content: Optional[str] = None
    is_active: bool = False


class AttendanceCodeIn(BaseModel):
    code: str = Field(..., pattern=r"^\d{4}$")


class AttendanceVerify(BaseModel):
    code: str
