"""Summary reports over appointments, contacts and customers."""

import calendar
from collections import Counter

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from scheduler.models.appointment import Appointment
from scheduler.models.contact import Contact
from scheduler.models.customer import Customer
from scheduler.models.division import Country, Division
from scheduler.services.time_normalizer import format_report_timestamp, to_business_timezone


async def count_by_type_and_month(session: AsyncSession) -> dict[str, dict[str, int]]:
    """Appointment counts per type, grouped by business-timezone month of the start."""
    result = await session.execute(select(Appointment))
    counts: Counter[tuple[int, str]] = Counter()
    for appointment in result.scalars().all():
        month = to_business_timezone(appointment.start_utc).month
        counts[(month, appointment.type)] += 1

    report: dict[str, dict[str, int]] = {}
    for month in range(1, 13):
        by_type = {t: n for (m, t), n in sorted(counts.items()) if m == month}
        report[calendar.month_name[month].upper()] = by_type
    return report


async def contact_schedule(session: AsyncSession) -> list[dict]:
    """Each contact with its appointments, ordered by start."""
    contacts = (await session.execute(select(Contact).order_by(Contact.name))).scalars().all()
    appointments = (
        await session.execute(select(Appointment).order_by(Appointment.start_utc))
    ).scalars().all()

    schedule = []
    for contact in contacts:
        entries = [
            {
                "appointment_id": a.id,
                "title": a.title,
                "type": a.type,
                "description": a.description,
                "start": format_report_timestamp(a.start_utc),
                "end": format_report_timestamp(a.end_utc),
                "customer_id": a.customer_id,
            }
            for a in appointments
            if a.contact_id == contact.id
        ]
        schedule.append({"contact_id": contact.id, "contact": contact.name, "appointments": entries})
    return schedule


async def customers_by_country(session: AsyncSession) -> dict[str, list[dict]]:
    """Customers grouped by the country of their first-level division; every country is listed."""
    countries = (await session.execute(select(Country).order_by(Country.id))).scalars().all()
    report: dict[str, list[dict]] = {country.name: [] for country in countries}
    rows = await session.execute(
        select(Customer, Division.name.label("division"), Country.name.label("country"))
        .join(Division, Customer.division_id == Division.id)
        .join(Country, Division.country_id == Country.id)
        .order_by(Customer.name)
    )
    for customer, division, country in rows.all():
        report[country].append(
            {"name": customer.name, "address": customer.address, "phone": customer.phone, "division": division}
        )
    return report
