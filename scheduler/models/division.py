from sqlmodel import Field, SQLModel


class Country(SQLModel, table=True):
    __tablename__ = "countries"
    id: int | None = Field(default=None, primary_key=True)
    name: str = Field(unique=True, max_length=50)


class CountryCreate(SQLModel):
    id: int | None = Field(default=None, gt=0)
    name: str = Field(min_length=1, max_length=50)


class CountryPublic(SQLModel):
    id: int
    name: str


class Division(SQLModel, table=True):
    """First-level division (state, province, nation) customers are filed under."""

    __tablename__ = "first_level_divisions"
    id: int | None = Field(default=None, primary_key=True)
    name: str = Field(max_length=50)
    country_id: int = Field(foreign_key="countries.id", index=True)


class DivisionCreate(SQLModel):
    id: int | None = Field(default=None, gt=0)
    name: str = Field(min_length=1, max_length=50)
    country_id: int = Field(gt=0)


class DivisionPublic(SQLModel):
    id: int
    name: str
    country_id: int
