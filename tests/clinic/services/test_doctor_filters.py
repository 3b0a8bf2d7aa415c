import pytest

from clinic.services.doctor_filters import (
    FilterCriteria,
    TimePeriod,
    filter_doctors,
    has_slot_in_period,
    parse_time_period,
)
from clinic.services.exceptions import InvalidTimePeriodError


def _names(doctors) -> list[str]:
    return [doctor.name for doctor in doctors]


@pytest.fixture
def directory(make_doctor):
    return [
        make_doctor(name='Jane Smith', specialty='Cardiology', available_times=['09:00', '10:00']),
        make_doctor(name='Robert Smithson', specialty='Dermatology', available_times=['13:00', '15:30']),
        make_doctor(name='Maria Lopez', specialty='cardiology', available_times=['08:00', '16:00']),
        make_doctor(name='Ken Adams', specialty='Neurology', available_times=[]),
        make_doctor(name='Lee Park', specialty='Dermatology', available_times=['late', 'tbd']),
    ]


@pytest.mark.parametrize(
    ('value', 'expected'),
    [
        (None, None),
        ('', None),
        ('   ', None),
        ('am', TimePeriod.AM),
        (' PM ', TimePeriod.PM),
    ],
)
def test_parse_time_period(value, expected) -> None:
    assert parse_time_period(value) == expected


def test_parse_time_period_rejects_unknown_value() -> None:
    with pytest.raises(InvalidTimePeriodError):
        parse_time_period('evening')


def test_filter_criteria_treats_blank_as_absent() -> None:
    assert FilterCriteria.from_params(name='  ', specialty='', time_period=None) == FilterCriteria()


@pytest.mark.parametrize(
    ('labels', 'period', 'expected'),
    [
        (['09:00', '13:00'], TimePeriod.AM, True),
        (['12:00'], TimePeriod.AM, False),
        (['12:00'], TimePeriod.PM, True),
        (['00:30'], TimePeriod.AM, True),
        (['11:59'], TimePeriod.PM, False),
        ([], TimePeriod.AM, False),
        (None, TimePeriod.PM, False),
        (['noon', 'x:15'], TimePeriod.PM, False),
        (['noon', '18:00'], TimePeriod.PM, True),
    ],
)
def test_has_slot_in_period(labels, period, expected) -> None:
    assert has_slot_in_period(labels, period) is expected


def test_filter_without_criteria_returns_every_doctor(db, directory) -> None:
    assert _names(filter_doctors(db)) == [doctor.name for doctor in directory]


def test_filter_by_name_is_case_insensitive_substring(db, directory) -> None:
    assert _names(filter_doctors(db, name='smith', specialty='', time_period='')) == [
        'Jane Smith',
        'Robert Smithson',
    ]


def test_filter_by_specialty_is_case_insensitive_exact_match(db, directory) -> None:
    assert _names(filter_doctors(db, specialty='CARDIOLOGY')) == ['Jane Smith', 'Maria Lopez']
    assert filter_doctors(db, specialty='Cardio') == []


def test_filter_by_name_and_specialty(db, directory) -> None:
    assert _names(filter_doctors(db, name='Smith', specialty='dermatology')) == ['Robert Smithson']


def test_filter_by_am_excludes_afternoon_only_and_slotless_doctors(db, directory) -> None:
    assert _names(filter_doctors(db, time_period='AM')) == ['Jane Smith', 'Maria Lopez']


def test_filter_by_pm(db, directory) -> None:
    assert _names(filter_doctors(db, time_period='pm')) == ['Robert Smithson', 'Maria Lopez']


def test_filter_by_name_and_time(db, directory) -> None:
    assert _names(filter_doctors(db, name='smith', time_period='PM')) == ['Robert Smithson']


def test_filter_by_specialty_and_time(db, directory) -> None:
    assert _names(filter_doctors(db, specialty='Dermatology', time_period='AM')) == []


def test_filter_by_name_specialty_and_time(db, directory) -> None:
    assert _names(filter_doctors(db, name='lopez', specialty='Cardiology', time_period='PM')) == ['Maria Lopez']


def test_filter_without_period_keeps_doctors_without_slots(db, directory) -> None:
    assert 'Ken Adams' in _names(filter_doctors(db, specialty='neurology'))


def test_filter_rejects_unknown_period(db, directory) -> None:
    with pytest.raises(InvalidTimePeriodError):
        filter_doctors(db, time_period='night')


def test_name_filter_treats_wildcards_literally(db, directory) -> None:
    assert filter_doctors(db, name='%') == []
