import logging

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from scheduler.core.errors import UnknownReference
from scheduler.models.appointment import Appointment
from scheduler.models.customer import Customer, CustomerCreate
from scheduler.models.division import Division

logger = logging.getLogger(__name__)


async def list_customers(session: AsyncSession) -> list[Customer]:
    result = await session.execute(select(Customer).order_by(Customer.id))
    return list(result.scalars().all())


async def get_customer(session: AsyncSession, customer_id: int) -> Customer | None:
    return await session.get(Customer, customer_id)


async def _require_division(session: AsyncSession, division_id: int) -> None:
    if await session.get(Division, division_id) is None:
        raise UnknownReference(f"Division {division_id} does not exist")


async def create_customer(session: AsyncSession, data: CustomerCreate) -> Customer:
    await _require_division(session, data.division_id)
    customer = Customer.model_validate(data)
    session.add(customer)
    await session.flush()
    await session.refresh(customer)
    logger.info("Created customer %d", customer.id)
    return customer


async def update_customer(session: AsyncSession, customer_id: int, data: CustomerCreate) -> Customer | None:
    customer = await session.get(Customer, customer_id)
    if not customer:
        return None
    await _require_division(session, data.division_id)
    customer.sqlmodel_update(data.model_dump())
    session.add(customer)
    await session.flush()
    await session.refresh(customer)
    return customer


async def delete_customer(session: AsyncSession, customer_id: int) -> int | None:
    """Delete a customer and its appointments. Returns the number of appointments removed, or None if not found."""
    customer = await session.get(Customer, customer_id)
    if not customer:
        return None
    result = await session.execute(delete(Appointment).where(Appointment.customer_id == customer_id))
    removed = result.rowcount or 0
    await session.delete(customer)
    await session.flush()
    logger.info("Deleted customer %d and %d appointment(s)", customer_id, removed)
    return removed
