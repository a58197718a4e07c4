from pydantic import EmailStr, field_validator
from sqlmodel import Field, SQLModel

EMAIL_MAX_LENGTH = 50


class Contact(SQLModel, table=True):
    __tablename__ = "contacts"
    id: int | None = Field(default=None, primary_key=True)
    name: str = Field(unique=True, index=True, max_length=50)
    email: str = Field(max_length=EMAIL_MAX_LENGTH)


class ContactCreate(SQLModel):
    name: str = Field(min_length=1, max_length=50)
    email: EmailStr

    @field_validator("email")
    @classmethod
    def email_fits_column(cls, v: str) -> str:
        if len(v) > EMAIL_MAX_LENGTH:
            raise ValueError(f"email must be at most {EMAIL_MAX_LENGTH} characters")
        return v


class ContactPublic(SQLModel):
    id: int
    name: str
    email: str
