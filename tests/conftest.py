from datetime import time

import pytest
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from medicare.db.models import (
    Doctor,
    DoctorSpecialization,
    Patient,
    Room,
    Specialization,
    SpecializationRoom,
)


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        _seed(session)
        yield session


def _seed(session: Session) -> None:
    session.add_all([
        Specialization(id=1, name="Cardiologist", description="Specialist in heart diseases"),
        Specialization(id=2, name="Orthopedic Surgeon", description="Musculoskeletal injuries"),
        Specialization(id=3, name="Dermatologist", description="Specialist in skin conditions"),
        Room(id=1, room_number=101, room_type="Cardiology Consultation Room"),
        Room(id=2, room_number=102, room_type="Cardiology Consultation Room"),
        Room(id=3, room_number=201, room_type="Orthopedic Room"),
        Doctor(id=1, name="John", surname="Smith", email="john.smith@medicare.com",
               start_hour=time(8, 0), end_hour=time(16, 0)),
        Doctor(id=2, name="Emily", surname="Johnson", email="emily.johnson@medicare.com",
               start_hour=time(8, 0), end_hour=time(16, 0)),
        Patient(id=1, name="Michael", surname="Brown", email="michael.brown@example.com"),
    ])
    session.flush()
    session.add_all([
        DoctorSpecialization(doctor_id=1, specialization_id=1),
        DoctorSpecialization(doctor_id=1, specialization_id=3),
        DoctorSpecialization(doctor_id=2, specialization_id=2),
        SpecializationRoom(specialization_id=1, room_id=2),
        SpecializationRoom(specialization_id=1, room_id=1),
        SpecializationRoom(specialization_id=2, room_id=3),
    ])
    session.commit()
