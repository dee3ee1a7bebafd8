from dataclasses import dataclass, field
from typing import FrozenSet, List, Optional, Protocol
from datetime import date, time

from ...db.models.enums import VisitReason, VisitStatus


@dataclass
class DoctorDto:
    id: int
    name: str
    surname: str
    start_hour: time
    end_hour: time
    # specialization id -> specialization name
    specializations: dict = field(default_factory=dict)

    @property
    def specialization_ids(self) -> FrozenSet[int]:
        return frozenset(self.specializations)


@dataclass
class PatientDto:
    id: int
    name: str
    surname: str
    status: str


@dataclass
class RoomDto:
    id: int
    room_number: int
    room_type: str


@dataclass
class VisitFilter:
    doctor_id: Optional[int] = None
    patient_id: Optional[int] = None
    room_ids: Optional[List[int]] = None
    visit_date: Optional[date] = None
    visit_time: Optional[time] = None
    exclude_cancelled: bool = False


@dataclass
class NewVisit:
    visit_date: date
    visit_time: time
    doctor_id: int
    patient_id: int
    room_id: int
    specialization_id: int
    reason: VisitReason
    additional_notes: Optional[str] = None
    status: VisitStatus = VisitStatus.SCHEDULED


@dataclass
class VisitRecord:
    """A stored visit joined with the display names of its references."""
    id: int
    visit_date: date
    visit_time: time
    doctor_id: int
    patient_id: int
    room_id: int
    specialization_id: int
    status: VisitStatus
    reason: VisitReason
    additional_notes: Optional[str] = None
    visit_notes: Optional[str] = None
    prescription_text: Optional[str] = None
    doctor_name: str = ""
    patient_name: str = ""
    room_type: str = ""
    room_number: int = 0
    specialization_name: str = ""


class SchedulingGateway(Protocol):
    def find_doctor(self, doctor_id: int) -> Optional[DoctorDto]:
        ...

    def find_patient(self, patient_id: int) -> Optional[PatientDto]:
        ...

    def find_rooms_for_specialization(self, specialization_id: int) -> List[RoomDto]:
        ...

    def is_room_eligible_for_specialization(self, room_id: int, specialization_id: int) -> bool:
        ...

    def find_visits(self, visit_filter: VisitFilter) -> List[VisitRecord]:
        ...

    def insert_visit(self, visit: NewVisit) -> VisitRecord:
        ...

    def update_visit(self, visit: VisitRecord) -> None:
        ...

    def find_visit_by_id(self, visit_id: int) -> Optional[VisitRecord]:
        ...

    def update_doctor_hours(self, doctor_id: int, start_hour: time, end_hour: time) -> None:
        ...
