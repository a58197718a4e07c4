"""
Availability Service

Decides whether a proposed appointment interval may be booked:
- start strictly before end
- inside business hours (business timezone, whole hours only)
- no overlap with any other appointment, boundaries included
"""

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Protocol

from scheduler.core.config import settings
from scheduler.core.errors import InvalidInputError
from scheduler.models.appointment import Appointment
from scheduler.services.time_normalizer import to_business_timezone

logger = logging.getLogger(__name__)


class RejectionReason(str, Enum):
    ORDERING_VIOLATION = "ordering_violation"
    OUTSIDE_BUSINESS_HOURS = "outside_business_hours"
    OVERLAP = "overlap"


@dataclass(frozen=True)
class Accepted:
    accepted: bool = True


@dataclass(frozen=True)
class Rejected:
    reason: RejectionReason
    message: str
    conflicting_appointment: Appointment | None = None
    accepted: bool = False


ValidationResult = Accepted | Rejected


class AppointmentStore(Protocol):
    async def list_appointments_except(self, appointment_id: int | None) -> Sequence[Appointment]:
        """All appointments other than ``appointment_id``; raises StoreUnavailable on failure."""
        ...


def overlaps(s1: datetime, e1: datetime, s2: datetime, e2: datetime) -> bool:
    """
    Closed-interval overlap: intervals that share any instant, including a
    single touching endpoint, overlap.

    Covers a start or end falling inside the other interval, shared start or
    end boundaries, and one interval containing the other.
    """
    return s1 <= e2 and s2 <= e1


def within_business_hours(start: datetime, end: datetime) -> bool:
    """Whole-hour check on the business wall clock: start hour >= 8, end hour <= 22."""
    local_start = to_business_timezone(start)
    local_end = to_business_timezone(end)
    return (
        local_start.hour >= settings.business_start_hour
        and local_end.hour <= settings.business_end_hour
    )


def _ordering_rejection() -> Rejected:
    return Rejected(
        RejectionReason.ORDERING_VIOLATION,
        "Start and end times are incompatible: the start must be before the end.",
    )


def _business_hours_rejection() -> Rejected:
    return Rejected(
        RejectionReason.OUTSIDE_BUSINESS_HOURS,
        f"Please schedule the appointment between {settings.business_start_hour:02d}:00 and "
        f"{settings.business_end_hour:02d}:00 {settings.business_timezone}.",
    )


def _overlap_rejection(appointment: Appointment) -> Rejected:
    return Rejected(
        RejectionReason.OVERLAP,
        f"The appointment overlaps with existing appointment '{appointment.title}' "
        f"(ID {appointment.id}).",
        conflicting_appointment=appointment,
    )


def check_interval(
    start: datetime,
    end: datetime,
    candidates: Iterable[Appointment],
) -> ValidationResult:
    """
    Validate a proposed interval against an already-loaded set of appointments.

    Args:
        start: proposed start instant (aware, or naive UTC)
        end: proposed end instant (aware, or naive UTC)
        candidates: appointments to compare against, the edited one excluded

    Returns:
        Accepted, or Rejected carrying the reason (and the conflicting
        appointment for overlaps)

    Raises:
        InvalidInputError: if start or end is missing
    """
    if start is None or end is None:
        raise InvalidInputError("Both a start and an end are required")

    proposed_start = to_business_timezone(start)
    proposed_end = to_business_timezone(end)

    if not proposed_start < proposed_end:
        return _ordering_rejection()

    if not within_business_hours(proposed_start, proposed_end):
        return _business_hours_rejection()

    for appointment in candidates:
        existing_start = to_business_timezone(appointment.start_utc)
        existing_end = to_business_timezone(appointment.end_utc)
        if overlaps(proposed_start, proposed_end, existing_start, existing_end):
            return _overlap_rejection(appointment)

    return Accepted()


async def validate(
    store: AppointmentStore,
    proposed_start: datetime,
    proposed_end: datetime,
    exclude_appointment_id: int | None = None,
) -> ValidationResult:
    """
    Validate a proposed appointment against every other stored appointment.

    The candidate set is read once; the verdict is a point-in-time check, not a
    reservation.

    Raises:
        InvalidInputError: if start or end is missing
        StoreUnavailable: if the store cannot list appointments
    """
    if proposed_start is None or proposed_end is None:
        raise InvalidInputError("Both a start and an end are required")

    # Cheap checks first; the store is only read if they pass
    verdict = check_interval(proposed_start, proposed_end, ())
    if isinstance(verdict, Rejected):
        logger.info("Rejected %s - %s: %s", proposed_start, proposed_end, verdict.reason.value)
        return verdict

    candidates = await store.list_appointments_except(exclude_appointment_id)
    verdict = check_interval(proposed_start, proposed_end, candidates)
    if isinstance(verdict, Rejected):
        logger.info(
            "Rejected %s - %s: %s (appointment %s)",
            proposed_start,
            proposed_end,
            verdict.reason.value,
            verdict.conflicting_appointment.id if verdict.conflicting_appointment else None,
        )
    return verdict
