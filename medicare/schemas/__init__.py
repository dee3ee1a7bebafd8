# Schemas package (re-export feature schemas for stable imports)
from .visits.visit import (
    VisitCreate,
    VisitSlotCheck,
    VisitComplete,
    VisitUpdate,
    VisitResponse,
    VisitTimeResponse,
    RoomResponse,
)
from .doctors.doctor import WorkingHoursUpdate, DoctorHoursResponse
from .common.common import ErrorResponse, HealthResponse

__all__ = [
    "VisitCreate",
    "VisitSlotCheck",
    "VisitComplete",
    "VisitUpdate",
    "VisitResponse",
    "VisitTimeResponse",
    "RoomResponse",
    "WorkingHoursUpdate",
    "DoctorHoursResponse",
    "ErrorResponse",
    "HealthResponse",
]
