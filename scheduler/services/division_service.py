import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from scheduler.core.errors import UnknownReference
from scheduler.models.division import Country, CountryCreate, Division, DivisionCreate

logger = logging.getLogger(__name__)


async def list_countries(session: AsyncSession) -> list[Country]:
    result = await session.execute(select(Country).order_by(Country.id))
    return list(result.scalars().all())


async def create_country(session: AsyncSession, data: CountryCreate) -> Country:
    country = Country.model_validate(data)
    session.add(country)
    await session.flush()
    await session.refresh(country)
    logger.info("Created country %d (%s)", country.id, country.name)
    return country


async def list_divisions(session: AsyncSession, country_id: int | None = None) -> list[Division]:
    q = select(Division).order_by(Division.id)
    if country_id is not None:
        q = q.where(Division.country_id == country_id)
    result = await session.execute(q)
    return list(result.scalars().all())


async def create_division(session: AsyncSession, data: DivisionCreate) -> Division:
    if await session.get(Country, data.country_id) is None:
        raise UnknownReference(f"Country {data.country_id} does not exist")
    division = Division.model_validate(data)
    session.add(division)
    await session.flush()
    await session.refresh(division)
    logger.info("Created division %d (%s)", division.id, division.name)
    return division
