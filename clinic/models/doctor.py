"""Doctor model definitions."""

from sqlalchemy import Column, ForeignKey, Integer, String
from sqlalchemy.orm import relationship
from werkzeug.security import check_password_hash, generate_password_hash

from clinic.database import Base


class Doctor(Base):
    """Represents a doctor and the time-of-day slots they accept bookings for."""
    __tablename__ = "doctors"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False, index=True)
    email = Column(String(120), unique=True, index=True, nullable=False)
    hashed_password = Column(String(255), nullable=False)
    specialty = Column(String(50), nullable=False, index=True)
    phone = Column(String(20))

    slots = relationship(
        "DoctorSlot",
        back_populates="doctor",
        order_by="DoctorSlot.position",
        cascade="all, delete-orphan",
        lazy="selectin",
    )
    appointments = relationship("Appointment", back_populates="doctor")

    @property
    def available_times(self) -> list[str]:
        return [slot.label for slot in self.slots]

    @available_times.setter
    def available_times(self, labels: list[str]) -> None:
        self.slots = [DoctorSlot(position=position, label=label) for position, label in enumerate(labels or [])]

    def set_password(self, raw_password: str) -> None:
        self.hashed_password = generate_password_hash(raw_password)

    def check_password(self, raw_password: str) -> bool:
        return check_password_hash(self.hashed_password, raw_password)

    def __repr__(self):
        return f"<Doctor {self.id}, {self.name} ({self.specialty})>"


class DoctorSlot(Base):
    """One configured slot label, kept in the order the admin entered it."""
    __tablename__ = "doctor_slots"

    id = Column(Integer, primary_key=True)
    doctor_id = Column(Integer, ForeignKey("doctors.id", ondelete="CASCADE"), nullable=False, index=True)
    position = Column(Integer, nullable=False)
    label = Column(String(20), nullable=False)

    doctor = relationship("Doctor", back_populates="slots")
