# Models package (re-export feature modules for stable imports)
from .enums import VisitStatus, VisitReason, PatientStatus
from .staff.doctor_specialization import DoctorSpecialization
from .staff.doctor import Doctor
from .patients.patient import Patient
from .facility.specialization_room import SpecializationRoom
from .facility.room import Room
from .facility.specialization import Specialization
from .scheduling.visit import Visit

__all__ = [
    "VisitStatus",
    "VisitReason",
    "PatientStatus",
    "DoctorSpecialization",
    "Doctor",
    "Patient",
    "SpecializationRoom",
    "Room",
    "Specialization",
    "Visit",
]
