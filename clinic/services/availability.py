"""Free-slot computation for one doctor on one calendar day."""

import logging
from collections.abc import Iterable
from datetime import date, datetime, time

from sqlalchemy.orm import Session

from clinic.repositories import appointments as appointment_store
from clinic.repositories import doctors as doctor_store
from clinic.services.slots import format_slot, minutes_of_day, slot_minutes

logger = logging.getLogger(__name__)


def day_bounds(day: date) -> tuple[datetime, datetime]:
    return datetime.combine(day, time.min), datetime.combine(day, time.max)


def _matches(label: str, minutes: set[int], labels: set[str]) -> bool:
    # Labels that do not parse as a time can only match by exact text.
    label_minutes = slot_minutes(label)
    if label_minutes is None:
        return label in labels
    return label_minutes in minutes


def free_slots(configured: Iterable[str], booked_times: Iterable[datetime | time]) -> list[str]:
    """Configured labels not taken by any booked time, in configured order."""
    booked_times = list(booked_times)
    booked_minutes = {minutes_of_day(booked) for booked in booked_times}
    booked_labels = {format_slot(booked) for booked in booked_times}

    return [label for label in configured if not _matches(label, booked_minutes, booked_labels)]


def is_configured_slot(configured: Iterable[str], requested: datetime | time) -> bool:
    return any(
        _matches(label, {minutes_of_day(requested)}, {format_slot(requested)})
        for label in configured
    )


def compute_availability(db: Session, doctor_id: int, day: date) -> list[str]:
    doctor = doctor_store.find_by_id(db, doctor_id)
    if doctor is None:
        logger.warning('Doctor %s not found while computing availability for %s.', doctor_id, day)
        return []

    start_of_day, end_of_day = day_bounds(day)
    booked = appointment_store.find_by_doctor_id_and_time_range(db, doctor_id, start_of_day, end_of_day)

    return free_slots(doctor.available_times, (appointment.appointment_time for appointment in booked))
