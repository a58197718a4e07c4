from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from scheduler.api.deps import get_session
from scheduler.services import report_service

router = APIRouter(prefix="/reports", tags=["reports"])


@router.get("/appointments-by-type")
async def appointments_by_type(session: AsyncSession = Depends(get_session)) -> dict[str, dict[str, int]]:
    """Appointment counts per type for each month (business timezone)."""
    return await report_service.count_by_type_and_month(session)


@router.get("/contact-schedule")
async def contact_schedule(session: AsyncSession = Depends(get_session)) -> list[dict]:
    return await report_service.contact_schedule(session)


@router.get("/customers-by-country")
async def customers_by_country(session: AsyncSession = Depends(get_session)) -> dict[str, list[dict]]:
    return await report_service.customers_by_country(session)
