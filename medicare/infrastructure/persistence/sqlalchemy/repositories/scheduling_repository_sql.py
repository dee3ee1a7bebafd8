from contextlib import contextmanager
from typing import List, Optional
from datetime import time
import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import selectinload
from sqlmodel import Session, select

from .....db.models import (
    Doctor,
    Patient,
    Room,
    SpecializationRoom,
    Visit,
    VisitReason,
    VisitStatus,
)
from .....db.models.scheduling.visit import DOCTOR_SLOT_INDEX
from .....application.ports.scheduling_gateway import (
    DoctorDto,
    NewVisit,
    PatientDto,
    RoomDto,
    SchedulingGateway,
    VisitFilter,
    VisitRecord,
)
from .....exceptions import ConflictError, StorageError

logger = logging.getLogger(__name__)


class SqlSchedulingRepository(SchedulingGateway):
    def __init__(self, session: Session):
        self.session = session

    @contextmanager
    def _guard(self, action: str):
        try:
            yield
        except IntegrityError as e:
            self.session.rollback()
            message = str(e.orig) if e.orig is not None else str(e)
            logger.warning(f"Constraint violation while {action}: {message}")
            # SQLite names the columns, PostgreSQL names the index
            if DOCTOR_SLOT_INDEX in message or "visits.doctor_id" in message:
                raise ConflictError("This doctor already has a visit scheduled at the given time.") from e
            raise ConflictError("This room is already occupied at the given time.") from e
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.error(f"Database error while {action}: {e}")
            raise StorageError(f"Database error while {action}") from e

    def _visit_to_record(self, v: Visit) -> VisitRecord:
        return VisitRecord(
            id=v.id,
            visit_date=v.visit_date,
            visit_time=v.visit_time,
            doctor_id=v.doctor_id,
            patient_id=v.patient_id,
            room_id=v.room_id,
            specialization_id=v.specialization_id,
            status=VisitStatus.parse(v.status),
            reason=VisitReason(v.reason),
            additional_notes=v.additional_notes,
            visit_notes=v.visit_notes,
            prescription_text=v.prescription_text,
            doctor_name=f"{v.doctor.name} {v.doctor.surname}" if v.doctor else "",
            patient_name=v.patient.name if v.patient else "",
            room_type=v.room.room_type if v.room else "",
            room_number=v.room.room_number if v.room else 0,
            specialization_name=v.specialization.name if v.specialization else "",
        )

    def _visit_query(self):
        return select(Visit).options(
            selectinload(Visit.doctor),
            selectinload(Visit.patient),
            selectinload(Visit.room),
            selectinload(Visit.specialization),
        )

    def find_doctor(self, doctor_id: int) -> Optional[DoctorDto]:
        with self._guard("loading doctor"):
            d = self.session.exec(
                select(Doctor)
                .where(Doctor.id == doctor_id)
                .options(selectinload(Doctor.specializations))
            ).first()
            if not d:
                return None
            return DoctorDto(
                id=d.id,
                name=d.name,
                surname=d.surname,
                start_hour=d.start_hour,
                end_hour=d.end_hour,
                specializations={s.id: s.name for s in d.specializations},
            )

    def find_patient(self, patient_id: int) -> Optional[PatientDto]:
        with self._guard("loading patient"):
            p = self.session.get(Patient, patient_id)
            if not p:
                return None
            return PatientDto(id=p.id, name=p.name, surname=p.surname, status=p.status)

    def find_rooms_for_specialization(self, specialization_id: int) -> List[RoomDto]:
        with self._guard("loading rooms"):
            rows = self.session.exec(
                select(Room)
                .join(SpecializationRoom, SpecializationRoom.room_id == Room.id)
                .where(SpecializationRoom.specialization_id == specialization_id)
                .order_by(Room.room_number)
            ).all()
            return [RoomDto(id=r.id, room_number=r.room_number, room_type=r.room_type) for r in rows]

    def is_room_eligible_for_specialization(self, room_id: int, specialization_id: int) -> bool:
        with self._guard("checking room eligibility"):
            link = self.session.exec(
                select(SpecializationRoom)
                .where(SpecializationRoom.room_id == room_id)
                .where(SpecializationRoom.specialization_id == specialization_id)
            ).first()
            return link is not None

    def find_visits(self, visit_filter: VisitFilter) -> List[VisitRecord]:
        query = self._visit_query()
        if visit_filter.doctor_id is not None:
            query = query.where(Visit.doctor_id == visit_filter.doctor_id)
        if visit_filter.patient_id is not None:
            query = query.where(Visit.patient_id == visit_filter.patient_id)
        if visit_filter.room_ids is not None:
            query = query.where(Visit.room_id.in_(visit_filter.room_ids))
        if visit_filter.visit_date is not None:
            query = query.where(Visit.visit_date == visit_filter.visit_date)
        if visit_filter.visit_time is not None:
            query = query.where(Visit.visit_time == visit_filter.visit_time)
        if visit_filter.exclude_cancelled:
            query = query.where(Visit.status != VisitStatus.CANCELLED.value)
        with self._guard("loading visits"):
            rows = self.session.exec(query.order_by(Visit.visit_date, Visit.visit_time)).all()
            return [self._visit_to_record(v) for v in rows]

    def insert_visit(self, visit: NewVisit) -> VisitRecord:
        row = Visit(
            visit_date=visit.visit_date,
            visit_time=visit.visit_time,
            doctor_id=visit.doctor_id,
            patient_id=visit.patient_id,
            room_id=visit.room_id,
            specialization_id=visit.specialization_id,
            status=visit.status.value,
            reason=int(visit.reason),
            additional_notes=visit.additional_notes,
        )
        with self._guard("inserting visit"):
            self.session.add(row)
            self.session.commit()
            self.session.refresh(row)
            return self._visit_to_record(row)

    def update_visit(self, visit: VisitRecord) -> None:
        with self._guard("updating visit"):
            row = self.session.get(Visit, visit.id)
            if not row:
                return
            row.visit_date = visit.visit_date
            row.visit_time = visit.visit_time
            row.status = visit.status.value
            row.reason = int(visit.reason)
            row.additional_notes = visit.additional_notes
            row.visit_notes = visit.visit_notes
            row.prescription_text = visit.prescription_text
            self.session.add(row)
            self.session.commit()

    def find_visit_by_id(self, visit_id: int) -> Optional[VisitRecord]:
        with self._guard("loading visit"):
            v = self.session.exec(self._visit_query().where(Visit.id == visit_id)).first()
            return self._visit_to_record(v) if v else None

    def update_doctor_hours(self, doctor_id: int, start_hour: time, end_hour: time) -> None:
        with self._guard("updating working hours"):
            d = self.session.get(Doctor, doctor_id)
            if not d:
                return
            d.start_hour = start_hour
            d.end_hour = end_hour
            self.session.add(d)
            self.session.commit()
