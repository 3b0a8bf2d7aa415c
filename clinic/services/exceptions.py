"""Domain errors raised by the scheduling services and mapped to HTTP at the routes."""


class ClinicError(Exception):
    """Base class for scheduling errors."""


class InvalidConditionError(ClinicError, ValueError):
    def __init__(self, condition: str):
        super().__init__("Status must be either 'past' or 'future'.")
        self.condition = condition


class InvalidTimePeriodError(ClinicError, ValueError):
    def __init__(self, period: str):
        super().__init__("Time period must be either 'AM' or 'PM'.")
        self.period = period


class DoctorNotFoundError(ClinicError, LookupError):
    def __init__(self, doctor_id: int):
        super().__init__('Doctor not found.')
        self.doctor_id = doctor_id


class PatientNotFoundError(ClinicError, LookupError):
    def __init__(self, patient_id: int):
        super().__init__('Patient not found.')
        self.patient_id = patient_id


class AppointmentNotFoundError(ClinicError, LookupError):
    def __init__(self, appointment_id: int):
        super().__init__('Appointment not found.')
        self.appointment_id = appointment_id


class NotAppointmentOwnerError(ClinicError, PermissionError):
    def __init__(self, appointment_id: int):
        super().__init__('Only the patient who booked this appointment can change it.')
        self.appointment_id = appointment_id


class InvalidAppointmentTimeError(ClinicError, ValueError):
    """The requested time is in the past or outside the doctor's configured slots."""


class SlotConflictError(ClinicError):
    def __init__(self):
        super().__init__('This time is already booked.')


class DuplicateAccountError(ClinicError):
    def __init__(self, email: str):
        super().__init__('An account with this email already exists.')
        self.email = email
