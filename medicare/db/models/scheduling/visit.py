# medicare/db/models/scheduling/visit.py
from typing import Optional
from sqlalchemy import DateTime, Index, text
from sqlmodel import SQLModel, Field, Relationship
from datetime import date, datetime, time

from ..enums import VisitStatus
from ..timestamps import utc_now

# At most one non-cancelled visit per doctor slot and per room slot
_ACTIVE_ONLY = text("status != 'Cancelled'")
DOCTOR_SLOT_INDEX = "uq_visits_doctor_slot"
ROOM_SLOT_INDEX = "uq_visits_room_slot"

class Visit(SQLModel, table=True):
    __tablename__ = "visits"
    __table_args__ = (
        Index(
            DOCTOR_SLOT_INDEX, "doctor_id", "visit_date", "visit_time",
            unique=True, sqlite_where=_ACTIVE_ONLY, postgresql_where=_ACTIVE_ONLY,
        ),
        Index(
            ROOM_SLOT_INDEX, "room_id", "visit_date", "visit_time",
            unique=True, sqlite_where=_ACTIVE_ONLY, postgresql_where=_ACTIVE_ONLY,
        ),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    visit_date: date = Field(index=True)
    visit_time: time
    doctor_id: int = Field(foreign_key="doctors.id", index=True)
    patient_id: int = Field(foreign_key="patients.id", index=True)
    room_id: int = Field(foreign_key="rooms.id")
    specialization_id: int = Field(foreign_key="specializations.id")
    status: str = Field(default=VisitStatus.SCHEDULED.value, max_length=20)
    reason: int
    additional_notes: Optional[str] = None
    visit_notes: Optional[str] = None
    prescription_text: Optional[str] = None
    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))

    # Relationships
    doctor: Optional["Doctor"] = Relationship()
    patient: Optional["Patient"] = Relationship()
    room: Optional["Room"] = Relationship()
    specialization: Optional["Specialization"] = Relationship()
