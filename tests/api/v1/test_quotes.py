"""
Tests for the quotes API endpoints (/api/v1/quotes).
"""
import pytest
from httpx import AsyncClient

from tests.factories import QuotePayloadFactory

QUOTES_PREFIX = "/api/v1/quotes"


async def _create_quote(client: AsyncClient, **overrides) -> dict:
    response = await client.post(QUOTES_PREFIX, json=QuotePayloadFactory(**overrides))
    assert response.status_code == 201, f"Quote creation failed: {response.text}"
    return response.json()


class TestCreateQuote:
    """POST /quotes"""

    @pytest.mark.asyncio
    async def test_scenario_a(self, client: AsyncClient):
        data = await _create_quote(client)

        assert data["covered_area"] == 70.0
        assert data["base_cost"] == 35000.0
        assert data["extras_cost"] == 0.0
        assert data["total_cost"] == 35000.0
        assert data["currency"] == "PEN"
        assert data["status"] == "new"
        assert data["line_items"] == []

    @pytest.mark.asyncio
    async def test_with_plan_and_items(self, client: AsyncClient, standard_plan, flat_service, percent_service):
        data = await _create_quote(
            client,
            pricing_plan_id=standard_plan.id,
            rate_per_area=None,
            line_items=[{"service_id": flat_service.id}, {"service_id": percent_service.id}],
        )

        assert data["plan_name"] == "Proyecto de arquitectura"
        assert data["plan_min_days"] == 30
        assert data["total_cost"] == 40000.0
        items = {item["service_id"]: item for item in data["line_items"]}
        assert items[percent_service.id]["pricing_mode"] == "percent"
        assert items[percent_service.id]["line_total"] == 3500.0
        assert items[flat_service.id]["name"] == "Saneamiento físico legal"

    @pytest.mark.asyncio
    async def test_scenario_e_returns_problem(self, client: AsyncClient):
        response = await client.post(QUOTES_PREFIX, json=QuotePayloadFactory(uncovered_percent=150))

        assert response.status_code == 422
        assert response.headers["content-type"].startswith("application/problem+json")
        body = response.json()
        assert body["code"] == "VAL_001"
        assert body["errors"][0]["field"] == "uncovered_percent"

    @pytest.mark.asyncio
    async def test_inactive_plan(self, client: AsyncClient, inactive_plan):
        response = await client.post(
            QUOTES_PREFIX, json=QuotePayloadFactory(pricing_plan_id=inactive_plan.id)
        )

        assert response.status_code == 400
        assert response.json()["code"] == "QTE_001"

    @pytest.mark.asyncio
    async def test_malformed_body(self, client: AsyncClient):
        response = await client.post(QUOTES_PREFIX, json=QuotePayloadFactory(total_area="lots"))

        assert response.status_code == 422
        assert response.json()["code"] == "VAL_001"


class TestReadQuotes:
    """GET /quotes, /quotes/{id}, /quotes/summary, /quotes/options"""

    @pytest.mark.asyncio
    async def test_get_quote(self, client: AsyncClient):
        created = await _create_quote(client)

        response = await client.get(f"{QUOTES_PREFIX}/{created['id']}")

        assert response.status_code == 200
        assert response.json()["total_cost"] == 35000.0

    @pytest.mark.asyncio
    async def test_get_missing_quote(self, client: AsyncClient):
        response = await client.get(f"{QUOTES_PREFIX}/9999")

        assert response.status_code == 404
        body = response.json()
        assert body["code"] == "RES_001"
        assert body["instance"] == f"{QUOTES_PREFIX}/9999"

    @pytest.mark.asyncio
    async def test_list_quotes(self, client: AsyncClient):
        await _create_quote(client)
        await _create_quote(client, status="accepted")

        response = await client.get(QUOTES_PREFIX, params={"status": "accepted"})

        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 1
        assert data["page"] == 1
        assert data["items"][0]["status"] == "accepted"
        assert "line_items" not in data["items"][0]

    @pytest.mark.asyncio
    async def test_list_unknown_status(self, client: AsyncClient):
        response = await client.get(QUOTES_PREFIX, params={"status": "archived"})
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_summary(self, client: AsyncClient):
        await _create_quote(client)
        await _create_quote(client, status="rejected")

        response = await client.get(f"{QUOTES_PREFIX}/summary")

        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 2
        assert data["counts"]["new"] == 1
        assert data["counts"]["rejected"] == 1
        assert data["counts"]["sent"] == 0

    @pytest.mark.asyncio
    async def test_options(self, client: AsyncClient, standard_plan, inactive_plan, flat_service, percent_service):
        response = await client.get(f"{QUOTES_PREFIX}/options")

        assert response.status_code == 200
        data = response.json()
        assert data["pricing_plans"][0]["id"] == standard_plan.id
        assert data["pricing_plans"][-1]["id"] == inactive_plan.id
        assert [s["id"] for s in data["services"]] == [flat_service.id, percent_service.id]
        assert data["services"][0]["price"] == 1500.0


class TestUpdateQuote:
    """PATCH /quotes/{id}"""

    @pytest.mark.asyncio
    async def test_scenario_d(self, client: AsyncClient, percent_service):
        quote = await _create_quote(client, line_items=[{"service_id": percent_service.id}])

        response = await client.patch(f"{QUOTES_PREFIX}/{quote['id']}", json={"total_area": 200})

        assert response.status_code == 200
        data = response.json()
        assert data["covered_area"] == 140.0
        assert data["base_cost"] == 70000.0
        assert data["line_items"][0]["line_total"] == 7000.0
        assert data["total_cost"] == 77000.0

    @pytest.mark.asyncio
    async def test_empty_patch(self, client: AsyncClient):
        quote = await _create_quote(client)

        response = await client.patch(f"{QUOTES_PREFIX}/{quote['id']}", json={})

        assert response.status_code == 422
        assert response.json()["detail"] == "No fields to update"

    @pytest.mark.asyncio
    async def test_scenario_e_no_state_change(self, client: AsyncClient):
        quote = await _create_quote(client)

        response = await client.patch(f"{QUOTES_PREFIX}/{quote['id']}", json={"uncovered_percent": 150})
        assert response.status_code == 422

        after = (await client.get(f"{QUOTES_PREFIX}/{quote['id']}")).json()
        assert after["uncovered_percent"] == 30.0
        assert after["total_cost"] == 35000.0

    @pytest.mark.asyncio
    async def test_status_change(self, client: AsyncClient):
        quote = await _create_quote(client)

        response = await client.patch(
            f"{QUOTES_PREFIX}/{quote['id']}", json={"status": "reviewed", "expires_at": "2026-12-31"}
        )

        assert response.status_code == 200
        assert response.json()["status"] == "reviewed"
        assert response.json()["expires_at"] == "2026-12-31"


class TestLineItemEndpoints:
    """/quotes/{id}/line-items"""

    @pytest.mark.asyncio
    async def test_scenario_b_and_c(self, client: AsyncClient, flat_service, percent_service):
        quote = await _create_quote(client)
        url = f"{QUOTES_PREFIX}/{quote['id']}/line-items"

        response = await client.post(url, json={"service_id": flat_service.id, "quantity": 1})
        assert response.status_code == 201
        assert response.json()["total_cost"] == 36500.0

        response = await client.post(url, json={"service_id": percent_service.id})
        assert response.status_code == 201
        data = response.json()
        assert data["extras_cost"] == 5000.0
        assert data["total_cost"] == 40000.0

    @pytest.mark.asyncio
    async def test_scenario_f(self, client: AsyncClient, inactive_service):
        quote = await _create_quote(client)

        response = await client.post(
            f"{QUOTES_PREFIX}/{quote['id']}/line-items", json={"service_id": inactive_service.id}
        )

        assert response.status_code == 400
        assert response.json()["code"] == "QTE_002"
        after = (await client.get(f"{QUOTES_PREFIX}/{quote['id']}")).json()
        assert after["extras_cost"] == 0.0
        assert after["total_cost"] == 35000.0

    @pytest.mark.asyncio
    async def test_update_and_remove(self, client: AsyncClient, flat_service):
        quote = await _create_quote(client, line_items=[{"service_id": flat_service.id}])
        item_id = quote["line_items"][0]["id"]
        url = f"{QUOTES_PREFIX}/{quote['id']}/line-items/{item_id}"

        response = await client.patch(url, json={"quantity": 2})
        assert response.status_code == 200
        assert response.json()["extras_cost"] == 3000.0

        response = await client.delete(url)
        assert response.status_code == 204

        after = (await client.get(f"{QUOTES_PREFIX}/{quote['id']}")).json()
        assert after["line_items"] == []
        assert after["total_cost"] == 35000.0

    @pytest.mark.asyncio
    async def test_remove_missing_item(self, client: AsyncClient):
        quote = await _create_quote(client)

        response = await client.delete(f"{QUOTES_PREFIX}/{quote['id']}/line-items/9999")

        assert response.status_code == 404


class TestAppEndpoints:

    @pytest.mark.asyncio
    async def test_health(self, client: AsyncClient):
        response = await client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    @pytest.mark.asyncio
    async def test_api_responses_not_cached(self, client: AsyncClient):
        response = await client.get(f"{QUOTES_PREFIX}/summary")
        assert "no-store" in response.headers["cache-control"]

    @pytest.mark.asyncio
    async def test_correlation_id_echoed(self, client: AsyncClient):
        response = await client.get("/health", headers={"X-Correlation-ID": "abc-123"})
        assert response.headers["x-correlation-id"] == "abc-123"
