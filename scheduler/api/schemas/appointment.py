from datetime import datetime, time

from pydantic import BaseModel

from scheduler.services.availability import RejectionReason


class ConflictingAppointment(BaseModel):
    id: int
    title: str
    start_utc: datetime
    end_utc: datetime


class RejectionDetail(BaseModel):
    reason: RejectionReason
    message: str
    conflicting_appointment: ConflictingAppointment | None = None


class ValidateIntervalRequest(BaseModel):
    start: datetime
    end: datetime
    exclude_appointment_id: int | None = None


class ValidationVerdict(BaseModel):
    accepted: bool
    rejection: RejectionDetail | None = None


class TimeChoiceInfo(BaseModel):
    business_time: time
    instant_utc: datetime
    label: str


class BusinessHoursResponse(BaseModel):
    date: str  # YYYY-MM-DD
    timezone: str
    choices: list[TimeChoiceInfo]
