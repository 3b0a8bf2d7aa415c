"""Appointment model definitions."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, UniqueConstraint
from sqlalchemy.orm import relationship

from clinic.database import Base
from clinic.models.appointment_status import AppointmentStatus


class Appointment(Base):
    """Represents a booked appointment between one doctor and one patient."""
    __tablename__ = "appointments"
    __table_args__ = (
        UniqueConstraint("doctor_id", "appointment_time", name="uq_appointments_doctor_slot"),
    )

    id = Column(Integer, primary_key=True)
    doctor_id = Column(Integer, ForeignKey("doctors.id"), nullable=False, index=True)
    patient_id = Column(Integer, ForeignKey("patients.id"), nullable=False, index=True)
    appointment_time = Column(DateTime, nullable=False)
    status = Column(Integer, nullable=False, default=AppointmentStatus.FUTURE.value)

    doctor = relationship("Doctor", back_populates="appointments")
    patient = relationship("Patient", back_populates="appointments")

    def __repr__(self):
        return f"<Appointment {self.id} doctor={self.doctor_id} at {self.appointment_time}>"
