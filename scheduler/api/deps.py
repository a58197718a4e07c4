from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from scheduler.core.db import get_session
from scheduler.services.appointment_service import SqlAppointmentStore

__all__ = ["get_session", "get_appointment_store"]


def get_appointment_store(session: AsyncSession = Depends(get_session)) -> SqlAppointmentStore:
    """Appointment store bound to the request session."""
    return SqlAppointmentStore(session)
