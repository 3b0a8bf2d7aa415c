"""Slot label parsing shared by the availability and filter engines.

A slot label is a time-of-day string such as ``09:00``. Labels are stored as
entered, so parsing never raises: anything that does not look like a time is
reported as ``None`` and the caller decides how to treat it.
"""

import re
from datetime import datetime, time

SLOT_LABEL_FORMAT = '%H:%M'
MINUTES_PER_HOUR = 60

_SLOT_START = re.compile(r'^\s*(\d{1,2}):(\d{2})')
_SLOT_LABEL = re.compile(r'[0-9]{2}:[0-9]{2}')
_HOUR_TEXT = re.compile(r'[0-9]+')


def format_slot(value: time | datetime) -> str:
    return value.strftime(SLOT_LABEL_FORMAT)


def slot_hour(label: str) -> int | None:
    """Hour component of ``label``: the text before the first ``:`` as an integer.

    Only plain ASCII digits count, so ``' 9:00'`` or ``'1_0:00'`` have no hour.
    """
    if not isinstance(label, str):
        return None

    hour_text = label.split(':', 1)[0]
    if _HOUR_TEXT.fullmatch(hour_text) is None:
        return None
    return int(hour_text)


def slot_minutes(label: str) -> int | None:
    """Minutes since midnight of the label's start time, ``None`` if it is not a time."""
    if not isinstance(label, str):
        return None

    match = _SLOT_START.match(label)
    if match is None:
        return None

    hour, minute = int(match.group(1)), int(match.group(2))
    if hour >= 24 or minute >= MINUTES_PER_HOUR:
        return None

    return hour * MINUTES_PER_HOUR + minute


def minutes_of_day(value: time | datetime) -> int:
    return value.hour * MINUTES_PER_HOUR + value.minute


def is_valid_slot_label(label: str) -> bool:
    """Whether ``label`` is exactly a zero-padded 24-hour ``HH:MM`` time."""
    if not isinstance(label, str) or _SLOT_LABEL.fullmatch(label) is None:
        return False
    return slot_minutes(label) is not None
