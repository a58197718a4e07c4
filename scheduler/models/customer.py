import re
from datetime import UTC, datetime

from pydantic import field_validator
from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel

_NAME_RE = re.compile(r"[a-z]+\s[a-z]+", re.IGNORECASE)
_PHONE_RE = re.compile(r"\d{3}-\d{3}-\d{4}")
# US, UK and CA postal codes
_POSTAL_RE = re.compile(
    r"\d{5}(-\d{4})?"
    r"|[A-Z]{1,2}\d[A-Z\d]? \d[A-Z]{2}"
    r"|[A-Z]\d[A-Z] \d[A-Z]\d"
)


def _utc_naive_now() -> datetime:
    return datetime.now(UTC).replace(tzinfo=None)


class CustomerBase(SQLModel):
    name: str = Field(max_length=50)
    address: str = Field(max_length=100)
    postal_code: str = Field(max_length=50)
    phone: str = Field(max_length=50)
    division_id: int = Field(foreign_key="first_level_divisions.id", index=True)


class Customer(CustomerBase, table=True):
    __tablename__ = "customers"
    id: int | None = Field(default=None, primary_key=True)
    created_at: datetime = Field(sa_type=DateTime, default_factory=_utc_naive_now)


class CustomerCreate(CustomerBase):
    address: str = Field(min_length=1, max_length=100)
    division_id: int = Field(gt=0)

    @field_validator("name")
    @classmethod
    def _two_part_name(cls, v: str) -> str:
        if not _NAME_RE.fullmatch(v):
            raise ValueError("Names must consist of at least two words separated by a space")
        return v

    @field_validator("phone")
    @classmethod
    def _dashed_phone(cls, v: str) -> str:
        if not _PHONE_RE.fullmatch(v):
            raise ValueError("Phone must be a valid phone number using dashes, e.g. 555-123-4567")
        return v

    @field_validator("postal_code")
    @classmethod
    def _known_postal_format(cls, v: str) -> str:
        if not _POSTAL_RE.fullmatch(v):
            raise ValueError("Postal code must be a valid US, UK or CA postal code")
        return v


class CustomerPublic(CustomerBase):
    id: int
    created_at: datetime
