from datetime import UTC, date, datetime, time

from sqlalchemy import CheckConstraint, DateTime
from sqlmodel import Field, SQLModel


def _utc_naive_now() -> datetime:
    """Naive UTC for TIMESTAMP WITHOUT TIME ZONE columns."""
    return datetime.now(UTC).replace(tzinfo=None)


class Appointment(SQLModel, table=True):
    __tablename__ = "appointments"
    __table_args__ = (CheckConstraint("start_utc < end_utc", name="ck_appointments_start_before_end"),)
    id: int | None = Field(default=None, primary_key=True)
    title: str
    description: str
    location: str
    type: str = Field(index=True)
    # Naive UTC; start_utc < end_utc. Plain DateTime keeps the column timezone-naive.
    start_utc: datetime = Field(sa_type=DateTime, index=True)
    end_utc: datetime = Field(sa_type=DateTime)
    customer_id: int = Field(foreign_key="customers.id", index=True, ondelete="CASCADE")
    contact_id: int = Field(foreign_key="contacts.id", index=True)
    user_id: int | None = None
    created_at: datetime = Field(sa_type=DateTime, default_factory=_utc_naive_now)


class AppointmentForm(SQLModel):
    """Appointment as entered: dates and times are business-timezone wall clock."""

    title: str = Field(min_length=1, max_length=50)
    description: str = Field(min_length=1, max_length=50)
    location: str = Field(min_length=1, max_length=50)
    type: str = Field(min_length=1, max_length=50)
    # Missing parts are rejected by the time normalizer, not defaulted
    start_date: date | None = None
    start_time: time | None = None
    end_date: date | None = None
    end_time: time | None = None
    customer_id: int
    contact_id: int
    user_id: int | None = None


class AppointmentPublic(SQLModel):
    id: int
    title: str
    description: str
    location: str
    type: str
    start_utc: datetime
    end_utc: datetime
    start_label: str
    end_label: str
    customer_id: int
    contact_id: int
    user_id: int | None = None
    created_at: datetime
