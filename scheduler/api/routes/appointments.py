import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from scheduler.api.deps import get_appointment_store, get_session
from scheduler.api.schemas.appointment import (
    ConflictingAppointment,
    RejectionDetail,
    ValidateIntervalRequest,
    ValidationVerdict,
)
from scheduler.models.appointment import Appointment, AppointmentForm, AppointmentPublic
from scheduler.services.appointment_service import (
    AppointmentPeriod,
    SqlAppointmentStore,
    appointments_starting_within,
    cancel_appointment,
    create_appointment,
    get_appointment,
    list_appointments,
    update_appointment,
)
from scheduler.services.availability import Rejected, validate
from scheduler.services.time_normalizer import format_report_timestamp

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/appointments", tags=["appointments"])


def _to_public(a: Appointment) -> AppointmentPublic:
    return AppointmentPublic(
        id=a.id,
        title=a.title,
        description=a.description,
        location=a.location,
        type=a.type,
        start_utc=a.start_utc,
        end_utc=a.end_utc,
        start_label=format_report_timestamp(a.start_utc),
        end_label=format_report_timestamp(a.end_utc),
        customer_id=a.customer_id,
        contact_id=a.contact_id,
        user_id=a.user_id,
        created_at=a.created_at,
    )


def _rejection_detail(verdict: Rejected) -> RejectionDetail:
    conflict = verdict.conflicting_appointment
    return RejectionDetail(
        reason=verdict.reason,
        message=verdict.message,
        conflicting_appointment=ConflictingAppointment(
            id=conflict.id,
            title=conflict.title,
            start_utc=conflict.start_utc,
            end_utc=conflict.end_utc,
        )
        if conflict
        else None,
    )


def _conflict(verdict: Rejected) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_409_CONFLICT,
        detail=_rejection_detail(verdict).model_dump(mode="json"),
    )


@router.post("", response_model=AppointmentPublic, status_code=status.HTTP_201_CREATED)
async def book_appointment(
    form: AppointmentForm,
    session: AsyncSession = Depends(get_session),
) -> AppointmentPublic:
    result = await create_appointment(session, form)
    if isinstance(result, Rejected):
        raise _conflict(result)
    return _to_public(result)


@router.get("", response_model=list[AppointmentPublic])
async def list_all_appointments(
    customer_id: int | None = Query(None),
    contact_id: int | None = Query(None),
    period: AppointmentPeriod = Query(AppointmentPeriod.ALL, description="Current business-timezone month or week"),
    session: AsyncSession = Depends(get_session),
) -> list[AppointmentPublic]:
    appointments = await list_appointments(session, customer_id=customer_id, contact_id=contact_id, period=period)
    return [_to_public(a) for a in appointments]


@router.get("/upcoming", response_model=list[AppointmentPublic])
async def upcoming_appointments(
    minutes: int | None = Query(None, ge=1, le=24 * 60),
    session: AsyncSession = Depends(get_session),
) -> list[AppointmentPublic]:
    """Appointments starting within the next `minutes` (default from settings, 15)."""
    appointments = await appointments_starting_within(session, minutes)
    return [_to_public(a) for a in appointments]


@router.post("/validate", response_model=ValidationVerdict)
async def validate_interval(
    body: ValidateIntervalRequest,
    store: SqlAppointmentStore = Depends(get_appointment_store),
) -> ValidationVerdict:
    """Dry run: check an interval without booking it."""
    verdict = await validate(store, body.start, body.end, body.exclude_appointment_id)
    if isinstance(verdict, Rejected):
        return ValidationVerdict(accepted=False, rejection=_rejection_detail(verdict))
    return ValidationVerdict(accepted=True)


@router.get("/{appointment_id}", response_model=AppointmentPublic)
async def read_appointment(
    appointment_id: int,
    session: AsyncSession = Depends(get_session),
) -> AppointmentPublic:
    appointment = await get_appointment(session, appointment_id)
    if not appointment:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Appointment not found")
    return _to_public(appointment)


@router.put("/{appointment_id}", response_model=AppointmentPublic)
async def edit_appointment(
    appointment_id: int,
    form: AppointmentForm,
    session: AsyncSession = Depends(get_session),
) -> AppointmentPublic:
    result = await update_appointment(session, appointment_id, form)
    if result is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Appointment not found")
    if isinstance(result, Rejected):
        raise _conflict(result)
    return _to_public(result)


@router.delete("/{appointment_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_appointment(
    appointment_id: int,
    session: AsyncSession = Depends(get_session),
) -> None:
    ok = await cancel_appointment(session, appointment_id)
    if not ok:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Appointment not found")
