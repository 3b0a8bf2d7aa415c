from enum import IntEnum


class AppointmentStatus(IntEnum):
    FUTURE = 0
    PAST = 1
