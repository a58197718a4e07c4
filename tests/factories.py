from collections.abc import Sequence
from datetime import date, datetime, time

from scheduler.core.errors import StoreUnavailable
from scheduler.models.appointment import Appointment, AppointmentForm
from scheduler.services.time_normalizer import to_naive_utc, to_storage_instant


def business_instant(day: date, hour: int, minute: int = 0) -> datetime:
    """Aware UTC instant for a business-timezone wall-clock time."""
    return to_storage_instant(day, time(hour, minute))


def make_appointment(appointment_id: int, day: date, start: time, end: time, **overrides) -> Appointment:
    fields = {
        "id": appointment_id,
        "title": f"Appointment {appointment_id}",
        "description": "Quarterly review",
        "location": "Main office",
        "type": "Planning",
        "start_utc": to_naive_utc(to_storage_instant(day, start)),
        "end_utc": to_naive_utc(to_storage_instant(day, end)),
        "customer_id": 1,
        "contact_id": 1,
    }
    fields.update(overrides)
    return Appointment(**fields)


def make_form(day: date | None, start: time | None, end: time | None, **overrides) -> AppointmentForm:
    fields = {
        "title": "Checkup",
        "description": "Annual review",
        "location": "Main office",
        "type": "Planning",
        "start_date": day,
        "start_time": start,
        "end_date": day,
        "end_time": end,
        "customer_id": 1,
        "contact_id": 1,
    }
    fields.update(overrides)
    return AppointmentForm(**fields)


class FakeAppointmentStore:
    def __init__(self, appointments: Sequence[Appointment] = ()) -> None:
        self.appointments = list(appointments)
        self.calls: list[int | None] = []

    async def list_appointments_except(self, appointment_id: int | None) -> list[Appointment]:
        self.calls.append(appointment_id)
        return [a for a in self.appointments if a.id != appointment_id]


class FailingAppointmentStore:
    def __init__(self) -> None:
        self.calls: list[int | None] = []

    async def list_appointments_except(self, appointment_id: int | None) -> list[Appointment]:
        self.calls.append(appointment_id)
        raise StoreUnavailable("The appointment store is unavailable")
