from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from scheduler.models.contact import Contact, ContactCreate


async def list_contacts(session: AsyncSession) -> list[Contact]:
    result = await session.execute(select(Contact).order_by(Contact.name))
    return list(result.scalars().all())


async def create_contact(session: AsyncSession, data: ContactCreate) -> Contact:
    contact = Contact(name=data.name, email=str(data.email))
    session.add(contact)
    await session.flush()
    await session.refresh(contact)
    return contact
