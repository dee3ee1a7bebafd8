from typing import Dict, List
from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlmodel import Session
import logging
from datetime import date

from ..config import settings
from ..database import get_session
from ..application.ports.scheduling_gateway import RoomDto, VisitRecord
from ..application.services.scheduling_service import SchedulingService, VisitEdit
from ..infrastructure.persistence.sqlalchemy.repositories.scheduling_repository_sql import SqlSchedulingRepository
from ..schemas.common.common import ErrorResponse
from ..schemas.visits.visit import (
    RoomResponse,
    VisitComplete,
    VisitCreate,
    VisitResponse,
    VisitSlotCheck,
    VisitTimeResponse,
    VisitUpdate,
)

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/visits",
    tags=["Visits"],
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    },
)


def get_scheduling_service(session: Session = Depends(get_session)) -> SchedulingService:
    return SchedulingService(gateway=SqlSchedulingRepository(session), slot_minutes=settings.SLOT_MINUTES)


def _visit_response(v: VisitRecord) -> VisitResponse:
    return VisitResponse(
        id=v.id,
        visit_date=v.visit_date,
        visit_time=v.visit_time,
        doctor_id=v.doctor_id,
        doctor_name=v.doctor_name,
        patient_id=v.patient_id,
        patient_name=v.patient_name,
        specialization_id=v.specialization_id,
        specialization=v.specialization_name,
        room_id=v.room_id,
        room=v.room_type,
        room_number=v.room_number,
        status=v.status.value,
        reason=v.reason.label,
        additional_notes=v.additional_notes,
        visit_notes=v.visit_notes,
        prescription_text=v.prescription_text,
    )


def _room_response(r: RoomDto) -> RoomResponse:
    return RoomResponse(id=r.id, room_type=r.room_type, room_number=r.room_number)


@router.get("/visitsTime", response_model=List[VisitTimeResponse])
def get_visits_time(
    id: int = Query(...),
    visit_date: date = Query(..., alias="date"),
    service: SchedulingService = Depends(get_scheduling_service),
):
    return [
        VisitTimeResponse(visit_time=t.visit_time, room=t.room)
        for t in service.list_visit_times(id, visit_date)
    ]


@router.get("/freeRoomsForDay/{spec_id}", response_model=Dict[str, List[RoomResponse]])
def get_free_rooms_for_day(
    spec_id: int,
    doctorId: int = Query(...),
    visit_date: date = Query(..., alias="date"),
    service: SchedulingService = Depends(get_scheduling_service),
):
    slots = service.compute_available_slots(doctorId, spec_id, visit_date)
    return {label: [_room_response(r) for r in rooms] for label, rooms in slots.items()}


@router.post("/checkFreeRooms", response_model=List[RoomResponse])
def check_free_rooms(
    payload: VisitSlotCheck,
    service: SchedulingService = Depends(get_scheduling_service),
):
    rooms = service.find_free_rooms_for_slot(
        payload.doctor_id, payload.specialization_id, payload.visit_date, payload.visit_time
    )
    return [_room_response(r) for r in rooms]


@router.get("/", response_model=List[VisitResponse])
def get_visits(service: SchedulingService = Depends(get_scheduling_service)):
    return [_visit_response(v) for v in service.list_visits()]


@router.post("/", response_model=VisitResponse, status_code=status.HTTP_201_CREATED)
def create_visit(
    payload: VisitCreate,
    service: SchedulingService = Depends(get_scheduling_service),
):
    try:
        visit = service.create_visit(
            doctor_id=payload.doctor_id,
            patient_id=payload.patient_id,
            specialization_id=payload.specialization_id,
            room_id=payload.room_id,
            visit_date=payload.visit_date,
            visit_time=payload.visit_time,
            reason=payload.reason,
            additional_notes=payload.additional_notes,
        )
        return _visit_response(visit)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error booking visit: {str(e)}")
        raise HTTPException(status_code=500, detail="Failed to book visit")


@router.get("/doctor/{doctor_id}", response_model=List[VisitResponse])
def get_doctor_visits(
    doctor_id: int,
    service: SchedulingService = Depends(get_scheduling_service),
):
    return [_visit_response(v) for v in service.list_doctor_visits(doctor_id)]


@router.get("/patient/{patient_id}", response_model=List[VisitResponse])
def get_patient_visits(
    patient_id: int,
    service: SchedulingService = Depends(get_scheduling_service),
):
    return [_visit_response(v) for v in service.list_patient_visits(patient_id)]


@router.get("/today/{doctor_id}", response_model=List[VisitResponse])
def get_today_visits(
    doctor_id: int,
    service: SchedulingService = Depends(get_scheduling_service),
):
    return [_visit_response(v) for v in service.list_today_visits(doctor_id)]


@router.get("/{visit_id}", response_model=VisitResponse)
def get_visit(
    visit_id: int,
    service: SchedulingService = Depends(get_scheduling_service),
):
    return _visit_response(service.get_visit(visit_id))


@router.post("/canceledVisit/{visit_id}", response_model=VisitResponse)
def cancel_visit(
    visit_id: int,
    service: SchedulingService = Depends(get_scheduling_service),
):
    try:
        return _visit_response(service.cancel_visit(visit_id))
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error cancelling visit {visit_id}: {str(e)}")
        raise HTTPException(status_code=500, detail="Failed to cancel visit")


@router.post("/startVisit/{visit_id}", response_model=VisitResponse)
def start_visit(
    visit_id: int,
    payload: VisitComplete,
    service: SchedulingService = Depends(get_scheduling_service),
):
    try:
        visit = service.complete_visit(visit_id, payload.visit_notes, payload.prescription_text)
        return _visit_response(visit)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error completing visit {visit_id}: {str(e)}")
        raise HTTPException(status_code=500, detail="Failed to complete visit")


@router.put("/update/{visit_id}", status_code=status.HTTP_204_NO_CONTENT)
def update_visit(
    visit_id: int,
    payload: VisitUpdate,
    service: SchedulingService = Depends(get_scheduling_service),
):
    try:
        service.edit_visit(visit_id, VisitEdit(**payload.model_dump()))
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error updating visit {visit_id}: {str(e)}")
        raise HTTPException(status_code=500, detail="Failed to update visit")
