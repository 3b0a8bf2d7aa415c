"""Patient store queries."""

from sqlalchemy.orm import Session

from clinic.models.patient import Patient


def find_by_id(db: Session, patient_id: int) -> Patient | None:
    return db.get(Patient, patient_id)


def find_by_email(db: Session, email: str) -> Patient | None:
    return db.query(Patient).filter(Patient.email == email).first()
