from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from scheduler.api.deps import get_session
from scheduler.models.customer import CustomerCreate, CustomerPublic
from scheduler.services.customer_service import (
    create_customer,
    delete_customer,
    get_customer,
    list_customers,
    update_customer,
)

router = APIRouter(prefix="/customers", tags=["customers"])


@router.get("", response_model=list[CustomerPublic])
async def list_all_customers(session: AsyncSession = Depends(get_session)) -> list[CustomerPublic]:
    return [CustomerPublic.model_validate(c) for c in await list_customers(session)]


@router.post("", response_model=CustomerPublic, status_code=status.HTTP_201_CREATED)
async def add_customer(body: CustomerCreate, session: AsyncSession = Depends(get_session)) -> CustomerPublic:
    customer = await create_customer(session, body)
    return CustomerPublic.model_validate(customer)


@router.get("/{customer_id}", response_model=CustomerPublic)
async def read_customer(customer_id: int, session: AsyncSession = Depends(get_session)) -> CustomerPublic:
    customer = await get_customer(session, customer_id)
    if not customer:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Customer not found")
    return CustomerPublic.model_validate(customer)


@router.put("/{customer_id}", response_model=CustomerPublic)
async def edit_customer(
    customer_id: int,
    body: CustomerCreate,
    session: AsyncSession = Depends(get_session),
) -> CustomerPublic:
    customer = await update_customer(session, customer_id, body)
    if not customer:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Customer not found")
    return CustomerPublic.model_validate(customer)


@router.delete("/{customer_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_customer(customer_id: int, session: AsyncSession = Depends(get_session)) -> None:
    """Deletes the customer together with all of its appointments."""
    removed = await delete_customer(session, customer_id)
    if removed is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Customer not found")
