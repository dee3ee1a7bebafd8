# medicare/schemas/doctors/doctor.py
from pydantic import BaseModel
from typing import List
from datetime import time

class WorkingHoursUpdate(BaseModel):
    start_hour: time
    end_hour: time

class DoctorHoursResponse(BaseModel):
    id: int
    name: str
    surname: str
    start_hour: time
    end_hour: time
    specializations: List[str] = []
