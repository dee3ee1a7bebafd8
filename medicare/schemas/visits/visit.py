# medicare/schemas/visits/visit.py
from pydantic import BaseModel
from typing import Optional, Union
from datetime import date, time

class VisitCreate(BaseModel):
    visit_date: date
    visit_time: time
    doctor_id: int
    patient_id: int
    specialization_id: int
    room_id: int
    reason: int  # Consultation=1, FollowUp=2, Prescription=3, Checkup=4
    additional_notes: Optional[str] = None

class VisitSlotCheck(BaseModel):
    visit_date: date
    visit_time: time
    doctor_id: int
    specialization_id: int

class VisitComplete(BaseModel):
    visit_notes: Optional[str] = None
    prescription_text: Optional[str] = None

class VisitUpdate(BaseModel):
    id: int
    visit_date: date
    visit_time: time
    status: str
    reason: Union[int, str]
    additional_notes: Optional[str] = None
    visit_notes: Optional[str] = None
    prescription_text: Optional[str] = None

class VisitResponse(BaseModel):
    id: int
    visit_date: date
    visit_time: time
    doctor_id: int
    doctor_name: str
    patient_id: int
    patient_name: str
    specialization_id: int
    specialization: str
    room_id: int
    room: str
    room_number: int
    status: str
    reason: str
    additional_notes: Optional[str] = None
    visit_notes: Optional[str] = None
    prescription_text: Optional[str] = None

class VisitTimeResponse(BaseModel):
    visit_time: time
    room: str

class RoomResponse(BaseModel):
    id: int
    room_type: str
    room_number: int
