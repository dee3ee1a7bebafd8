"""Visit booking rules: slot availability, conflict checks and status transitions.

All state is read from and written to the injected :class:`SchedulingGateway`.
Every check runs before the single write an operation performs, so a rejected
request never leaves partial state behind.
"""
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Union
from datetime import date, time
import logging

from ..ports.scheduling_gateway import (
    DoctorDto,
    NewVisit,
    RoomDto,
    SchedulingGateway,
    VisitFilter,
    VisitRecord,
)
from ...db.models.enums import VisitReason, VisitStatus
from ...exceptions import ConflictError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)

DEFAULT_SLOT_MINUTES = 30


@dataclass
class VisitTime:
    visit_time: time
    room: str


@dataclass
class VisitEdit:
    id: int
    visit_date: date
    visit_time: time
    status: str
    reason: Union[int, str]
    additional_notes: Optional[str] = None
    visit_notes: Optional[str] = None
    prescription_text: Optional[str] = None


def to_minutes(t: time) -> int:
    return t.hour * 60 + t.minute


def from_minutes(minutes: int) -> time:
    return time(minutes // 60, minutes % 60)


def generate_slots(start: time, end: time, slot_minutes: int = DEFAULT_SLOT_MINUTES) -> List[time]:
    """Slot start times for a working window [start, end).

    A slot is only produced when it fits wholly inside the window, so a window
    ending off the grid drops its trailing partial slot.
    """
    slots = []
    current = to_minutes(start)
    end_minutes = to_minutes(end)
    while current + slot_minutes <= end_minutes:
        slots.append(from_minutes(current))
        current += slot_minutes
    return slots


def overlaps(a_start: int, b_start: int, width: int) -> bool:
    """True when [a_start, a_start+width) and [b_start, b_start+width) intersect."""
    return a_start < b_start + width and a_start + width > b_start


@dataclass
class SchedulingService:
    gateway: SchedulingGateway
    slot_minutes: int = DEFAULT_SLOT_MINUTES
    today: Callable[[], date] = date.today

    # ---- lookups -------------------------------------------------------

    def _require_doctor(self, doctor_id: int) -> DoctorDto:
        doctor = self.gateway.find_doctor(doctor_id)
        if not doctor:
            raise NotFoundError(f"Doctor with ID {doctor_id} not found.")
        return doctor

    def _require_specialization(self, doctor: DoctorDto, specialization_id: int) -> None:
        if specialization_id not in doctor.specialization_ids:
            raise ValidationError("This doctor does not have the selected specialization.")

    def _require_visit(self, visit_id: int) -> VisitRecord:
        visit = self.gateway.find_visit_by_id(visit_id)
        if not visit:
            raise NotFoundError(f"Visit with ID {visit_id} not found.")
        return visit

    def _eligible_rooms(self, specialization_id: int) -> List[RoomDto]:
        rooms = self.gateway.find_rooms_for_specialization(specialization_id)
        if not rooms:
            raise NotFoundError("No rooms assigned to this specialization.")
        unique = {room.id: room for room in rooms}
        return sorted(unique.values(), key=lambda r: r.room_number)

    # ---- availability --------------------------------------------------

    def compute_available_slots(self, doctor_id: int, specialization_id: int, visit_date: date) -> Dict[str, List[RoomDto]]:
        doctor = self._require_doctor(doctor_id)
        self._require_specialization(doctor, specialization_id)
        rooms = self._eligible_rooms(specialization_id)

        visits = self.gateway.find_visits(VisitFilter(
            room_ids=[room.id for room in rooms],
            visit_date=visit_date,
            exclude_cancelled=True,
        ))
        booked = [(v.room_id, to_minutes(v.visit_time)) for v in visits]

        result: Dict[str, List[RoomDto]] = {}
        for slot in generate_slots(doctor.start_hour, doctor.end_hour, self.slot_minutes):
            slot_start = to_minutes(slot)
            occupied = {
                room_id for room_id, start in booked
                if overlaps(start, slot_start, self.slot_minutes)
            }
            result[slot.strftime("%H:%M")] = [r for r in rooms if r.id not in occupied]
        return result

    def find_free_rooms_for_slot(self, doctor_id: int, specialization_id: int, visit_date: date, visit_time: time) -> List[RoomDto]:
        doctor = self._require_doctor(doctor_id)
        self._require_specialization(doctor, specialization_id)
        rooms = self._eligible_rooms(specialization_id)

        if self.gateway.find_visits(VisitFilter(
            doctor_id=doctor_id, visit_date=visit_date, visit_time=visit_time, exclude_cancelled=True,
        )):
            raise ConflictError("This doctor already has a visit scheduled at the given time.")

        taken = self.gateway.find_visits(VisitFilter(
            room_ids=[room.id for room in rooms],
            visit_date=visit_date,
            visit_time=visit_time,
            exclude_cancelled=True,
        ))
        occupied = {v.room_id for v in taken}
        return [r for r in rooms if r.id not in occupied]

    def list_visit_times(self, doctor_id: int, visit_date: date) -> List[VisitTime]:
        visits = self.gateway.find_visits(VisitFilter(
            doctor_id=doctor_id, visit_date=visit_date, exclude_cancelled=True,
        ))
        return [
            VisitTime(visit_time=v.visit_time, room=v.room_type)
            for v in sorted(visits, key=lambda v: v.visit_time)
        ]

    # ---- booking -------------------------------------------------------

    def create_visit(
        self,
        doctor_id: int,
        patient_id: int,
        specialization_id: int,
        room_id: int,
        visit_date: date,
        visit_time: time,
        reason: Union[int, str],
        additional_notes: Optional[str] = None,
    ) -> VisitRecord:
        if visit_date <= self.today():
            raise ValidationError("Visit date must be at least tomorrow.")

        doctor = self._require_doctor(doctor_id)
        self._require_specialization(doctor, specialization_id)

        if not self.gateway.find_patient(patient_id):
            raise NotFoundError(f"Patient with ID {patient_id} not found.")

        if self.gateway.find_visits(VisitFilter(
            doctor_id=doctor_id, visit_date=visit_date, visit_time=visit_time, exclude_cancelled=True,
        )):
            logger.warning(f"Doctor {doctor_id} already booked on {visit_date} at {visit_time}")
            raise ConflictError("This doctor already has a visit scheduled at the given time.")

        if not self.gateway.is_room_eligible_for_specialization(room_id, specialization_id):
            raise ValidationError("Selected room is not valid for this specialization.")

        if self.gateway.find_visits(VisitFilter(
            room_ids=[room_id], visit_date=visit_date, visit_time=visit_time, exclude_cancelled=True,
        )):
            logger.warning(f"Room {room_id} already booked on {visit_date} at {visit_time}")
            raise ConflictError("This room is already occupied at the given time.")

        try:
            visit_reason = VisitReason.parse(reason)
        except ValueError:
            raise ValidationError("Invalid visit reason.")

        visit = self.gateway.insert_visit(NewVisit(
            visit_date=visit_date,
            visit_time=visit_time,
            doctor_id=doctor_id,
            patient_id=patient_id,
            room_id=room_id,
            specialization_id=specialization_id,
            reason=visit_reason,
            additional_notes=additional_notes,
        ))
        logger.info(f"Visit {visit.id} booked: doctor={doctor_id} room={room_id} {visit_date} {visit_time}")
        return visit

    # ---- lifecycle -----------------------------------------------------

    def cancel_visit(self, visit_id: int) -> VisitRecord:
        visit = self._require_visit(visit_id)
        if visit.status.is_terminal:
            raise ValidationError(f"Cannot cancel a visit with status {visit.status.value}.")
        visit.status = VisitStatus.CANCELLED
        self.gateway.update_visit(visit)
        logger.info(f"Visit {visit_id} cancelled")
        return visit

    def complete_visit(self, visit_id: int, visit_notes: Optional[str], prescription_text: Optional[str]) -> VisitRecord:
        visit = self._require_visit(visit_id)
        visit.visit_notes = visit_notes
        visit.prescription_text = prescription_text
        visit.status = VisitStatus.COMPLETED
        self.gateway.update_visit(visit)
        logger.info(f"Visit {visit_id} completed")
        return visit

    def edit_visit(self, visit_id: int, changes: VisitEdit) -> None:
        # Overwrites without re-running the booking conflict checks
        if visit_id != changes.id:
            raise ValidationError("Visit ID in path does not match the request body.")
        visit = self._require_visit(visit_id)
        try:
            status = VisitStatus.parse(changes.status)
        except ValueError:
            raise ValidationError("Invalid visit status.")
        try:
            reason = VisitReason.parse(changes.reason)
        except ValueError:
            raise ValidationError("Invalid visit reason.")

        visit.visit_date = changes.visit_date
        visit.visit_time = changes.visit_time
        visit.additional_notes = changes.additional_notes
        visit.visit_notes = changes.visit_notes
        visit.prescription_text = changes.prescription_text
        visit.status = status
        visit.reason = reason
        self.gateway.update_visit(visit)
        logger.info(f"Visit {visit_id} edited")

    # ---- queries -------------------------------------------------------

    def get_visit(self, visit_id: int) -> VisitRecord:
        return self._require_visit(visit_id)

    def list_visits(self) -> List[VisitRecord]:
        visits = self.gateway.find_visits(VisitFilter())
        return sorted(visits, key=lambda v: (v.visit_date, v.visit_time))

    def list_doctor_visits(self, doctor_id: int) -> List[VisitRecord]:
        visits = self.gateway.find_visits(VisitFilter(doctor_id=doctor_id))
        return sorted(visits, key=lambda v: (v.visit_date, v.visit_time), reverse=True)

    def list_patient_visits(self, patient_id: int) -> List[VisitRecord]:
        visits = self.gateway.find_visits(VisitFilter(patient_id=patient_id))
        return sorted(visits, key=lambda v: (v.visit_date, v.visit_time), reverse=True)

    def list_today_visits(self, doctor_id: int) -> List[VisitRecord]:
        visits = self.gateway.find_visits(VisitFilter(
            doctor_id=doctor_id, visit_date=self.today(), exclude_cancelled=True,
        ))
        return sorted(visits, key=lambda v: v.visit_time)

    # ---- working hours -------------------------------------------------

    def update_working_hours(self, doctor_id: int, start_hour: time, end_hour: time) -> DoctorDto:
        self._require_doctor(doctor_id)
        if start_hour >= end_hour:
            raise ValidationError("Working hours must start before they end.")
        self.gateway.update_doctor_hours(doctor_id, start_hour, end_hour)
        return self._require_doctor(doctor_id)
