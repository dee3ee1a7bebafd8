from fastapi import APIRouter, Depends, HTTPException
import logging

from ..application.services.scheduling_service import SchedulingService
from ..schemas.doctors.doctor import DoctorHoursResponse, WorkingHoursUpdate
from .visits_router import get_scheduling_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/doctors", tags=["Doctors"])


@router.put("/{doctor_id}/hours", response_model=DoctorHoursResponse)
def update_working_hours(
    doctor_id: int,
    payload: WorkingHoursUpdate,
    service: SchedulingService = Depends(get_scheduling_service),
):
    try:
        doctor = service.update_working_hours(doctor_id, payload.start_hour, payload.end_hour)
        logger.info(f"Working hours of doctor {doctor_id} set to {doctor.start_hour}-{doctor.end_hour}")
        return DoctorHoursResponse(
            id=doctor.id,
            name=doctor.name,
            surname=doctor.surname,
            start_hour=doctor.start_hour,
            end_hour=doctor.end_hour,
            specializations=sorted(doctor.specializations.values()),
        )
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error updating working hours of doctor {doctor_id}: {str(e)}")
        raise HTTPException(status_code=500, detail="Failed to update working hours")
