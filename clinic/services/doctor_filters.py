"""Doctor directory filtering by name, specialty and AM/PM availability."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

from sqlalchemy.orm import Session

from clinic.models.doctor import Doctor
from clinic.repositories import doctors as doctor_store
from clinic.services.exceptions import InvalidTimePeriodError
from clinic.services.slots import slot_hour

logger = logging.getLogger(__name__)


class TimePeriod(str, Enum):
    AM = 'AM'
    PM = 'PM'

    def contains_hour(self, hour: int) -> bool:
        if self is TimePeriod.AM:
            return 0 <= hour < 12
        return 12 <= hour < 24


def _blank_to_none(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


def parse_time_period(value: str | None) -> TimePeriod | None:
    normalized = _blank_to_none(value)
    if normalized is None:
        return None

    try:
        return TimePeriod(normalized.upper())
    except ValueError as exc:
        raise InvalidTimePeriodError(value) from exc


@dataclass(frozen=True)
class FilterCriteria:
    name: str | None = None
    specialty: str | None = None
    time_period: TimePeriod | None = None

    @classmethod
    def from_params(
        cls,
        name: str | None = None,
        specialty: str | None = None,
        time_period: str | None = None,
    ) -> 'FilterCriteria':
        return cls(
            name=_blank_to_none(name),
            specialty=_blank_to_none(specialty),
            time_period=parse_time_period(time_period),
        )


def has_slot_in_period(labels: Iterable[str] | None, period: TimePeriod) -> bool:
    """True when at least one label's hour falls inside ``period``.

    Doctors without slots never match, and labels without a numeric hour are skipped.
    """
    for label in labels or ():
        hour = slot_hour(label)
        if hour is not None and period.contains_hour(hour):
            return True
    return False


def _candidates(db: Session, criteria: FilterCriteria) -> list[Doctor]:
    if criteria.name and criteria.specialty:
        return doctor_store.find_by_name_substring_and_specialty(db, criteria.name, criteria.specialty)
    if criteria.name:
        return doctor_store.find_by_name_substring(db, criteria.name)
    if criteria.specialty:
        return doctor_store.find_by_specialty(db, criteria.specialty)
    return doctor_store.find_all(db)


def filter_doctors(
    db: Session,
    name: str | None = None,
    specialty: str | None = None,
    time_period: str | None = None,
) -> list[Doctor]:
    criteria = FilterCriteria.from_params(name=name, specialty=specialty, time_period=time_period)
    doctors = _candidates(db, criteria)

    if criteria.time_period is not None:
        doctors = [doctor for doctor in doctors if has_slot_in_period(doctor.available_times, criteria.time_period)]

    logger.debug('Doctor filter %s matched %d doctors.', criteria, len(doctors))
    return doctors
