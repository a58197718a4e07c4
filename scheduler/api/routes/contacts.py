from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from scheduler.api.deps import get_session
from scheduler.models.contact import ContactCreate, ContactPublic
from scheduler.services.contact_service import create_contact, list_contacts

router = APIRouter(prefix="/contacts", tags=["contacts"])


@router.get("", response_model=list[ContactPublic])
async def list_all_contacts(session: AsyncSession = Depends(get_session)) -> list[ContactPublic]:
    return [ContactPublic.model_validate(c) for c in await list_contacts(session)]


@router.post("", response_model=ContactPublic, status_code=status.HTTP_201_CREATED)
async def add_contact(body: ContactCreate, session: AsyncSession = Depends(get_session)) -> ContactPublic:
    return ContactPublic.model_validate(await create_contact(session, body))
