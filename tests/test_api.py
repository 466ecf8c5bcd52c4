import uuid
from decimal import Decimal

import pytest
from httpx import ASGITransport, AsyncClient

from budget_ledger.db.database import get_async_db
from budget_ledger.main import app

from conftest import OTHER_OWNER, OWNER

API = "/api/v1"
HEADERS = {"X-Owner-Id": OWNER}


@pytest.fixture
async def client(session_factory):
    async def override_get_async_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_async_db] = override_get_async_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


async def create_category(client, name, default_budget=0, headers=HEADERS):
    response = await client.post(
        f"{API}/categories/", json={"name": name, "default_budget": default_budget}, headers=headers
    )
    assert response.status_code == 201
    return response.json()[-1]


async def test_missing_owner_header_is_rejected(client):
    response = await client.get(f"{API}/categories/")
    assert response.status_code == 401
    assert response.json()["detail"] == "Missing owner identity"


async def test_category_crud(client):
    food = await create_category(client, "  Lebensmittel ", 400)
    assert food["name"] == "Lebensmittel"
    assert food["color"] == "#3b82f6"
    assert food["is_active"] is True

    response = await client.put(
        f"{API}/categories/{food['id']}",
        json={"name": "Essen", "default_budget": 450, "color": "#10b981"},
        headers=HEADERS,
    )
    assert response.status_code == 200
    assert [(c["name"], c["color"]) for c in response.json()] == [("Essen", "#10b981")]

    response = await client.delete(f"{API}/categories/{food['id']}", headers=HEADERS)
    assert response.status_code == 200
    assert response.json() == []

    # Мягко удалённая категория по ID всё ещё доступна
    response = await client.get(f"{API}/categories/{food['id']}", headers=HEADERS)
    assert response.status_code == 200
    assert response.json()["is_active"] is False


async def test_validation_error_maps_to_400(client):
    response = await client.post(f"{API}/categories/", json={"name": "   "}, headers=HEADERS)
    assert response.status_code == 400
    assert response.json()["detail"] == "Category name cannot be empty"

    response = await client.get(f"{API}/categories/", headers=HEADERS)
    assert response.json() == []


async def test_not_found_maps_to_404(client):
    response = await client.get(f"{API}/categories/{uuid.uuid4()}", headers=HEADERS)
    assert response.status_code == 404

    response = await client.delete(f"{API}/expenses/{uuid.uuid4()}", headers=HEADERS)
    assert response.status_code == 404


async def test_other_owner_sees_nothing(client):
    food = await create_category(client, "Lebensmittel")
    other = {"X-Owner-Id": OTHER_OWNER}

    response = await client.get(f"{API}/categories/", headers=other)
    assert response.json() == []
    response = await client.get(f"{API}/categories/{food['id']}", headers=other)
    assert response.status_code == 404


async def test_duplicate_month_maps_to_409(client):
    body = {"month": "2025-05", "income": 3500}
    response = await client.post(f"{API}/monthly-budgets/", json=body, headers=HEADERS)
    assert response.status_code == 201

    response = await client.post(f"{API}/monthly-budgets/", json=body, headers=HEADERS)
    assert response.status_code == 409

    response = await client.post(
        f"{API}/monthly-budgets/", params={"get_or_create": True}, json=body, headers=HEADERS
    )
    assert response.status_code == 201


async def test_absent_month_is_empty_view(client):
    response = await client.get(f"{API}/monthly-budgets/2025-05", headers=HEADERS)
    assert response.status_code == 200
    assert response.json() == {"month": "2025-05", "budget": None, "items": []}

    response = await client.get(f"{API}/monthly-budgets/not-a-month", headers=HEADERS)
    assert response.status_code == 400


async def test_budget_and_expense_flow(client):
    food = await create_category(client, "Lebensmittel", 400)
    savings = await create_category(client, "Sparen", 500)

    response = await client.post(
        f"{API}/monthly-budgets/", json={"month": "2025-05", "income": 3500}, headers=HEADERS
    )
    budget = response.json()

    response = await client.post(f"{API}/monthly-budgets/{budget['id']}/apply-defaults", headers=HEADERS)
    assert len(response.json()["items"]) == 2

    response = await client.put(
        f"{API}/monthly-budgets/{budget['id']}/items/{food['id']}", json={"amount": "350"}, headers=HEADERS
    )
    planned = {i["category_name"]: Decimal(i["planned_amount"]) for i in response.json()["items"]}
    assert planned == {"Lebensmittel": Decimal("350"), "Sparen": Decimal("500")}

    for category_id, amount in ((food["id"], "120.50"), (savings["id"], "500")):
        response = await client.post(
            f"{API}/expenses/",
            json={"category_id": category_id, "amount": amount, "expense_date": "2025-05-10"},
            headers=HEADERS,
        )
        assert response.status_code == 201

    response = await client.get(f"{API}/expenses/", params={"month": "2025-05"}, headers=HEADERS)
    body = response.json()
    assert len(body["expenses"]) == 2
    assert Decimal(body["total"]) == Decimal("620.50")

    response = await client.get(f"{API}/analytics/savings", params={"month": "2025-05"}, headers=HEADERS)
    report = response.json()
    assert Decimal(report["real_expenses"]) == Decimal("120.50")
    assert Decimal(report["total_saved"]) == Decimal("3379.50")

    response = await client.get(f"{API}/analytics/trend", headers=HEADERS)
    assert [p["month"] for p in response.json()] == ["2025-05"]

    response = await client.get(f"{API}/monthly-budgets/months", headers=HEADERS)
    assert response.json() == ["2025-05"]


async def test_non_positive_expense_is_rejected(client):
    food = await create_category(client, "Lebensmittel")
    response = await client.post(
        f"{API}/expenses/",
        json={"category_id": food["id"], "amount": 0, "expense_date": "2025-05-10"},
        headers=HEADERS,
    )
    assert response.status_code == 400

    response = await client.get(f"{API}/expenses/", params={"month": "2025-05"}, headers=HEADERS)
    assert response.json()["expenses"] == []


async def test_oversized_amount_is_rejected(client):
    food = await create_category(client, "Lebensmittel")
    response = await client.post(
        f"{API}/expenses/",
        json={"category_id": food["id"], "amount": "1e30", "expense_date": "2025-05-10"},
        headers=HEADERS,
    )
    assert response.status_code == 400


async def test_top_categories_limit_query(client):
    for name, amount in (("Miete", "900"), ("Lebensmittel", "300"), ("Auto", "100")):
        cat = await create_category(client, name)
        await client.post(
            f"{API}/expenses/",
            json={"category_id": cat["id"], "amount": amount, "expense_date": "2025-05-10"},
            headers=HEADERS,
        )

    response = await client.get(
        f"{API}/analytics/top-categories", params={"month": "2025-05", "limit": 2}, headers=HEADERS
    )
    assert [r["name"] for r in response.json()] == ["Miete", "Lebensmittel"]
