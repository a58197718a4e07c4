from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from scheduler.api.deps import get_session
from scheduler.models.division import CountryCreate, CountryPublic, DivisionCreate, DivisionPublic
from scheduler.services.division_service import create_country, create_division, list_countries, list_divisions

router = APIRouter(tags=["divisions"])


@router.get("/countries", response_model=list[CountryPublic])
async def list_all_countries(session: AsyncSession = Depends(get_session)) -> list[CountryPublic]:
    return [CountryPublic.model_validate(c) for c in await list_countries(session)]


@router.post("/countries", response_model=CountryPublic, status_code=status.HTTP_201_CREATED)
async def add_country(body: CountryCreate, session: AsyncSession = Depends(get_session)) -> CountryPublic:
    return CountryPublic.model_validate(await create_country(session, body))


@router.get("/divisions", response_model=list[DivisionPublic])
async def list_all_divisions(
    country_id: int | None = Query(None, description="Only divisions of this country"),
    session: AsyncSession = Depends(get_session),
) -> list[DivisionPublic]:
    return [DivisionPublic.model_validate(d) for d in await list_divisions(session, country_id)]


@router.post("/divisions", response_model=DivisionPublic, status_code=status.HTTP_201_CREATED)
async def add_division(body: DivisionCreate, session: AsyncSession = Depends(get_session)) -> DivisionPublic:
    """Unknown country ids are rejected with 422 (reason unknown_reference)."""
    return DivisionPublic.model_validate(await create_division(session, body))
