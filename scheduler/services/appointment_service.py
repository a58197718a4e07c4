import logging
from collections.abc import Sequence
from datetime import UTC, datetime, timedelta
from enum import Enum

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from scheduler.core.config import settings
from scheduler.core.errors import StoreUnavailable, UnknownReference
from scheduler.models.appointment import Appointment, AppointmentForm
from scheduler.models.contact import Contact
from scheduler.models.customer import Customer
from scheduler.services.availability import Rejected, validate
from scheduler.services.time_normalizer import business_period_bounds, to_naive_utc, to_storage_instant

logger = logging.getLogger(__name__)


class SqlAppointmentStore:
    """Appointment store backed by the request's database session."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def list_appointments_except(self, appointment_id: int | None) -> Sequence[Appointment]:
        q = select(Appointment)
        if appointment_id is not None:
            q = q.where(Appointment.id != appointment_id)
        try:
            result = await self.session.execute(q)
        except SQLAlchemyError as e:
            # An empty list here would read as "no conflicts"
            logger.warning("Could not load appointments for overlap check: %s", e)
            raise StoreUnavailable("The appointment store is unavailable") from e
        return list(result.scalars().all())


class AppointmentPeriod(str, Enum):
    ALL = "all"
    MONTH = "month"
    WEEK = "week"


def _proposed_interval(form: AppointmentForm) -> tuple[datetime, datetime]:
    start = to_storage_instant(form.start_date, form.start_time)
    end = to_storage_instant(form.end_date, form.end_time)
    return start, end


async def _require_owners(session: AsyncSession, form: AppointmentForm) -> None:
    """Raise UnknownReference if the form's customer or contact does not exist."""
    if await session.get(Customer, form.customer_id) is None:
        raise UnknownReference(f"Customer {form.customer_id} does not exist")
    if await session.get(Contact, form.contact_id) is None:
        raise UnknownReference(f"Contact {form.contact_id} does not exist")


async def create_appointment(session: AsyncSession, form: AppointmentForm) -> Appointment | Rejected:
    start, end = _proposed_interval(form)
    await _require_owners(session, form)
    verdict = await validate(SqlAppointmentStore(session), start, end)
    if isinstance(verdict, Rejected):
        return verdict
    appointment = Appointment(
        title=form.title,
        description=form.description,
        location=form.location,
        type=form.type,
        start_utc=to_naive_utc(start),
        end_utc=to_naive_utc(end),
        customer_id=form.customer_id,
        contact_id=form.contact_id,
        user_id=form.user_id,
    )
    session.add(appointment)
    await session.flush()
    await session.refresh(appointment)
    logger.info("Created appointment %d (%s - %s UTC)", appointment.id, appointment.start_utc, appointment.end_utc)
    return appointment


async def update_appointment(
    session: AsyncSession, appointment_id: int, form: AppointmentForm
) -> Appointment | Rejected | None:
    """Returns None if the appointment does not exist."""
    appointment = await session.get(Appointment, appointment_id)
    if not appointment:
        return None
    start, end = _proposed_interval(form)
    await _require_owners(session, form)
    verdict = await validate(SqlAppointmentStore(session), start, end, exclude_appointment_id=appointment_id)
    if isinstance(verdict, Rejected):
        return verdict
    appointment.title = form.title
    appointment.description = form.description
    appointment.location = form.location
    appointment.type = form.type
    appointment.start_utc = to_naive_utc(start)
    appointment.end_utc = to_naive_utc(end)
    appointment.customer_id = form.customer_id
    appointment.contact_id = form.contact_id
    appointment.user_id = form.user_id
    session.add(appointment)
    await session.flush()
    await session.refresh(appointment)
    logger.info("Updated appointment %d", appointment.id)
    return appointment


async def get_appointment(session: AsyncSession, appointment_id: int) -> Appointment | None:
    return await session.get(Appointment, appointment_id)


async def list_appointments(
    session: AsyncSession,
    customer_id: int | None = None,
    contact_id: int | None = None,
    period: AppointmentPeriod = AppointmentPeriod.ALL,
    now: datetime | None = None,
) -> list[Appointment]:
    """
    Appointments ordered by start.

    ``period`` narrows the list to starts in the current business-timezone
    calendar month or (Monday-first) week, relative to ``now``.
    """
    q = select(Appointment).order_by(Appointment.start_utc)
    if customer_id is not None:
        q = q.where(Appointment.customer_id == customer_id)
    if contact_id is not None:
        q = q.where(Appointment.contact_id == contact_id)
    period = AppointmentPeriod(period)
    if period is not AppointmentPeriod.ALL:
        start, end = business_period_bounds(period.value, now if now is not None else _utc_naive_now())
        q = q.where(Appointment.start_utc >= to_naive_utc(start), Appointment.start_utc < to_naive_utc(end))
    result = await session.execute(q)
    return list(result.scalars().all())


async def cancel_appointment(session: AsyncSession, appointment_id: int) -> bool:
    appointment = await session.get(Appointment, appointment_id)
    if not appointment:
        return False
    await session.delete(appointment)
    await session.flush()
    logger.info("Cancelled appointment %d", appointment_id)
    return True


def _utc_naive_now() -> datetime:
    """Naive UTC for comparison with TIMESTAMP WITHOUT TIME ZONE."""
    return datetime.now(UTC).replace(tzinfo=None)


async def appointments_starting_within(
    session: AsyncSession, minutes: int | None = None, now: datetime | None = None
) -> list[Appointment]:
    """Appointments whose start falls in [now, now + minutes]."""
    window = settings.upcoming_window_minutes if minutes is None else minutes
    start = to_naive_utc(now) if now is not None else _utc_naive_now()
    end = start + timedelta(minutes=window)
    result = await session.execute(
        select(Appointment)
        .where(Appointment.start_utc >= start, Appointment.start_utc <= end)
        .order_by(Appointment.start_utc)
    )
    return list(result.scalars().all())
