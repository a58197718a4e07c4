import pytest

from factories import FailingAppointmentStore
from scheduler.api.deps import get_appointment_store
from scheduler.main import app

CUSTOMER = {
    "name": "Ada Lovelace",
    "address": "12 Analytical Way, London",
    "postal_code": "12345",
    "phone": "555-123-4567",
    "division_id": 2,
}


async def _seed_division(client) -> None:
    await client.post("/api/v1/countries", json={"id": 1, "name": "U.S"})
    await client.post("/api/v1/divisions", json={"id": 2, "name": "Alaska", "country_id": 1})


async def _seed(client) -> dict:
    await _seed_division(client)
    customer = (await client.post("/api/v1/customers", json=CUSTOMER)).json()
    contact = (
        await client.post("/api/v1/contacts", json={"name": "Anika Costa", "email": "acosta@example.com"})
    ).json()
    return {"customer_id": customer["id"], "contact_id": contact["id"]}


def _form(ids: dict, start: str, end: str, day: str = "2024-06-01", **overrides) -> dict:
    body = {
        "title": "Checkup",
        "description": "Annual review",
        "location": "Main office",
        "type": "Planning",
        "start_date": day,
        "start_time": start,
        "end_date": day,
        "end_time": end,
        **ids,
    }
    body.update(overrides)
    return body


@pytest.mark.asyncio
async def test_health(client):
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


@pytest.mark.asyncio
async def test_book_appointment(client):
    ids = await _seed(client)

    response = await client.post("/api/v1/appointments", json=_form(ids, "09:00", "10:00"))

    assert response.status_code == 201
    body = response.json()
    assert body["start_utc"] == "2024-06-01T13:00:00"
    assert body["start_label"] == "2024-06-01 09:00 EDT"
    assert body["end_label"] == "2024-06-01 10:00 EDT"


@pytest.mark.asyncio
async def test_double_booking_is_a_conflict(client):
    ids = await _seed(client)
    first = (await client.post("/api/v1/appointments", json=_form(ids, "09:00", "10:00"))).json()

    response = await client.post("/api/v1/appointments", json=_form(ids, "10:00", "11:00"))

    assert response.status_code == 409
    detail = response.json()["detail"]
    assert detail["reason"] == "overlap"
    assert detail["conflicting_appointment"]["id"] == first["id"]


@pytest.mark.asyncio
async def test_outside_business_hours_is_a_conflict(client):
    ids = await _seed(client)

    response = await client.post("/api/v1/appointments", json=_form(ids, "07:00", "09:00"))

    assert response.status_code == 409
    assert response.json()["detail"]["reason"] == "outside_business_hours"


@pytest.mark.asyncio
async def test_end_before_start_is_a_conflict(client):
    ids = await _seed(client)

    response = await client.post("/api/v1/appointments", json=_form(ids, "11:00", "10:00"))

    assert response.status_code == 409
    assert response.json()["detail"]["reason"] == "ordering_violation"


@pytest.mark.asyncio
async def test_missing_time_is_invalid_input(client):
    ids = await _seed(client)

    response = await client.post("/api/v1/appointments", json=_form(ids, "09:00", None))

    assert response.status_code == 422
    assert response.json()["detail"]["reason"] == "invalid_input"


@pytest.mark.asyncio
async def test_edit_keeps_own_slot(client):
    ids = await _seed(client)
    created = (await client.post("/api/v1/appointments", json=_form(ids, "09:00", "10:00"))).json()

    response = await client.put(
        f"/api/v1/appointments/{created['id']}", json=_form(ids, "09:00", "10:00", title="Follow-up")
    )

    assert response.status_code == 200
    assert response.json()["title"] == "Follow-up"


@pytest.mark.asyncio
async def test_edit_missing_appointment(client):
    ids = await _seed(client)
    response = await client.put("/api/v1/appointments/999", json=_form(ids, "09:00", "10:00"))
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_list_and_delete_appointment(client):
    ids = await _seed(client)
    created = (await client.post("/api/v1/appointments", json=_form(ids, "09:00", "10:00"))).json()

    listed = await client.get("/api/v1/appointments", params={"customer_id": ids["customer_id"]})
    assert [a["id"] for a in listed.json()] == [created["id"]]

    assert (await client.delete(f"/api/v1/appointments/{created['id']}")).status_code == 204
    assert (await client.delete(f"/api/v1/appointments/{created['id']}")).status_code == 404
    assert (await client.get(f"/api/v1/appointments/{created['id']}")).status_code == 404


@pytest.mark.asyncio
async def test_validate_dry_run(client):
    ids = await _seed(client)
    await client.post("/api/v1/appointments", json=_form(ids, "09:00", "10:00"))

    free = await client.post(
        "/api/v1/appointments/validate",
        json={"start": "2024-06-01T15:00:00Z", "end": "2024-06-01T16:00:00Z"},
    )
    taken = await client.post(
        "/api/v1/appointments/validate",
        json={"start": "2024-06-01T13:30:00Z", "end": "2024-06-01T13:45:00Z"},
    )

    assert free.json() == {"accepted": True, "rejection": None}
    assert taken.json()["accepted"] is False
    assert taken.json()["rejection"]["reason"] == "overlap"


@pytest.mark.asyncio
async def test_store_unavailable_is_503(client):
    app.dependency_overrides[get_appointment_store] = FailingAppointmentStore

    response = await client.post(
        "/api/v1/appointments/validate",
        json={"start": "2024-06-01T13:00:00Z", "end": "2024-06-01T14:00:00Z"},
    )

    assert response.status_code == 503
    assert response.json()["detail"]["reason"] == "store_unavailable"


@pytest.mark.asyncio
async def test_upcoming_appointments(client):
    response = await client.get("/api/v1/appointments/upcoming", params={"minutes": 15})
    assert response.status_code == 200
    assert response.json() == []


@pytest.mark.asyncio
async def test_customer_crud(client):
    await _seed_division(client)
    created = await client.post("/api/v1/customers", json=CUSTOMER)
    assert created.status_code == 201
    customer_id = created.json()["id"]

    updated = await client.put(f"/api/v1/customers/{customer_id}", json={**CUSTOMER, "phone": "555-987-6543"})
    assert updated.json()["phone"] == "555-987-6543"

    assert (await client.delete(f"/api/v1/customers/{customer_id}")).status_code == 204
    assert (await client.get(f"/api/v1/customers/{customer_id}")).status_code == 404


@pytest.mark.asyncio
async def test_invalid_customer_is_422(client):
    response = await client.post("/api/v1/customers", json={**CUSTOMER, "phone": "5551234567"})
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_business_hours_choices(client):
    response = await client.get("/api/v1/business-hours", params={"date": "2024-06-01", "step_minutes": 60})

    assert response.status_code == 200
    body = response.json()
    assert body["timezone"] == "America/New_York"
    assert len(body["choices"]) == 15
    assert body["choices"][0]["business_time"] == "08:00:00"


@pytest.mark.asyncio
async def test_reports(client):
    ids = await _seed(client)
    await client.post("/api/v1/appointments", json=_form(ids, "09:00", "10:00"))

    by_type = (await client.get("/api/v1/reports/appointments-by-type")).json()
    schedule = (await client.get("/api/v1/reports/contact-schedule")).json()
    countries = (await client.get("/api/v1/reports/customers-by-country")).json()

    assert by_type["JUNE"] == {"Planning": 1}
    assert schedule[0]["contact"] == "Anika Costa"
    assert len(schedule[0]["appointments"]) == 1
    assert [c["name"] for c in countries["U.S"]] == ["Ada Lovelace"]


@pytest.mark.asyncio
async def test_unknown_customer_is_422(client):
    ids = await _seed(client)

    response = await client.post("/api/v1/appointments", json=_form({**ids, "customer_id": 999}, "09:00", "10:00"))

    assert response.status_code == 422
    detail = response.json()["detail"]
    assert detail["reason"] == "unknown_reference"
    assert detail["message"] == "Customer 999 does not exist"
    assert (await client.get("/api/v1/appointments")).json() == []


@pytest.mark.asyncio
async def test_edit_to_unknown_contact_is_422(client):
    ids = await _seed(client)
    created = (await client.post("/api/v1/appointments", json=_form(ids, "09:00", "10:00"))).json()

    response = await client.put(
        f"/api/v1/appointments/{created['id']}", json=_form({**ids, "contact_id": 999}, "09:00", "10:00")
    )

    assert response.status_code == 422
    assert response.json()["detail"]["message"] == "Contact 999 does not exist"


@pytest.mark.asyncio
async def test_customer_with_unknown_division_is_422(client):
    response = await client.post("/api/v1/customers", json={**CUSTOMER, "division_id": 80})

    assert response.status_code == 422
    assert response.json()["detail"]["reason"] == "unknown_reference"


@pytest.mark.asyncio
async def test_countries_and_divisions(client):
    await _seed_division(client)
    await client.post("/api/v1/countries", json={"id": 3, "name": "Canada"})
    await client.post("/api/v1/divisions", json={"id": 61, "name": "Alberta", "country_id": 3})

    countries = (await client.get("/api/v1/countries")).json()
    canadian = (await client.get("/api/v1/divisions", params={"country_id": 3})).json()
    orphan = await client.post("/api/v1/divisions", json={"name": "Nowhere", "country_id": 42})

    assert [c["name"] for c in countries] == ["U.S", "Canada"]
    assert canadian == [{"id": 61, "name": "Alberta", "country_id": 3}]
    assert orphan.status_code == 422
    assert orphan.json()["detail"]["reason"] == "unknown_reference"


@pytest.mark.asyncio
async def test_list_appointments_by_period(client):
    ids = await _seed(client)
    await client.post("/api/v1/appointments", json=_form(ids, "09:00", "10:00", day="2000-01-03"))

    everything = await client.get("/api/v1/appointments", params={"period": "all"})
    this_week = await client.get("/api/v1/appointments", params={"period": "week"})
    bad = await client.get("/api/v1/appointments", params={"period": "year"})

    assert len(everything.json()) == 1
    assert this_week.json() == []
    assert bad.status_code == 422
