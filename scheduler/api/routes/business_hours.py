from datetime import date

from fastapi import APIRouter, Query

from scheduler.api.schemas.appointment import BusinessHoursResponse, TimeChoiceInfo
from scheduler.core.config import settings
from scheduler.services.time_normalizer import business_time_choices

router = APIRouter(prefix="/business-hours", tags=["business-hours"])


@router.get("", response_model=BusinessHoursResponse)
async def business_hours(
    date_param: date = Query(..., alias="date"),
    step_minutes: int = Query(15, ge=1, le=240),
) -> BusinessHoursResponse:
    """Business-hours times for the given date (business timezone) with UTC instants and display labels."""
    choices = business_time_choices(date_param, step_minutes)
    return BusinessHoursResponse(
        date=date_param.isoformat(),
        timezone=settings.business_timezone,
        choices=[TimeChoiceInfo(business_time=c.business_time, instant_utc=c.instant_utc, label=c.label) for c in choices],
    )
