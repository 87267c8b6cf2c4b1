"""Catalog API test cases (run against both repository implementations)."""
import pytest
from httpx import AsyncClient
from loguru import logger


class TestProductApi:
    """Test product CRUD endpoints."""

    @pytest.mark.asyncio
    async def test_list_empty(self, client: AsyncClient):
        response = await client.get("/api/v1/products")

        assert response.status_code == 200
        data = response.json()
        assert data["code"] == 200
        assert data["data"] == []

    @pytest.mark.asyncio
    async def test_create_and_get(self, client: AsyncClient):
        response = await client.post("/api/v1/products", json={"name": "Widget", "price": "9.99"})

        assert response.status_code == 200
        created = response.json()["data"]
        assert created["id"] is not None
        assert created["name"] == "Widget"

        response = await client.get(f"/api/v1/products/{created['id']}")

        assert response.status_code == 200
        product = response.json()["data"]
        assert product["name"] == "Widget"
        assert float(product["price"]) == pytest.approx(9.99)

    @pytest.mark.asyncio
    async def test_get_missing_returns_404(self, client: AsyncClient):
        response = await client.get("/api/v1/products/999")

        assert response.status_code == 404
        data = response.json()
        assert data["code"] == 404
        assert data["message"] == "Product not found"

    @pytest.mark.asyncio
    async def test_update(self, client: AsyncClient):
        created = (await client.post("/api/v1/products", json={"name": "Widget", "price": 1})).json()["data"]

        response = await client.put(
            f"/api/v1/products/{created['id']}", json={"name": "Widget Pro", "price": 2.5}
        )

        assert response.status_code == 200
        product = (await client.get(f"/api/v1/products/{created['id']}")).json()["data"]
        assert product["name"] == "Widget Pro"
        assert float(product["price"]) == pytest.approx(2.5)

    @pytest.mark.asyncio
    async def test_update_missing_is_noop(self, client: AsyncClient):
        response = await client.put("/api/v1/products/999", json={"name": "Ghost", "price": 1})

        assert response.status_code == 200
        assert (await client.get("/api/v1/products")).json()["data"] == []

    @pytest.mark.asyncio
    async def test_delete(self, client: AsyncClient):
        created = (await client.post("/api/v1/products", json={"name": "Widget", "price": 1})).json()["data"]

        response = await client.delete(f"/api/v1/products/{created['id']}")

        assert response.status_code == 200
        assert (await client.get(f"/api/v1/products/{created['id']}")).status_code == 404

    @pytest.mark.asyncio
    async def test_invalid_body_returns_422(self, client: AsyncClient):
        response = await client.post("/api/v1/products", json={"price": "not a number"})

        assert response.status_code == 422
        data = response.json()
        assert data["code"] == 422
        assert data["message"] == "Invalid request parameters"

    @pytest.mark.asyncio
    async def test_trace_id_is_echoed(self, client: AsyncClient):
        response = await client.get("/api/v1/products", headers={"X-Trace-ID": "trace-123"})

        assert response.headers["X-Trace-ID"] == "trace-123"

    @pytest.mark.asyncio
    async def test_oversized_trace_id_is_replaced(self, client: AsyncClient):
        response = await client.get("/api/v1/products", headers={"X-Trace-ID": "x" * 200})

        trace_id = response.headers["X-Trace-ID"]
        assert trace_id != "x" * 200
        assert len(trace_id) == 32

    @pytest.mark.asyncio
    async def test_error_log_carries_request_trace_id(self, client: AsyncClient):
        records = []
        sink_id = logger.add(lambda message: records.append(message.record), level="WARNING")
        try:
            response = await client.get("/api/v1/products/999", headers={"X-Trace-ID": "trace-404"})
        finally:
            logger.remove(sink_id)

        assert response.status_code == 404
        business_errors = [r for r in records if "BusinessError" in r["message"]]
        assert business_errors
        assert all(r["extra"]["trace_id"] == "trace-404" for r in business_errors)


class TestCategoryApi:
    """Test category CRUD endpoints."""

    @pytest.mark.asyncio
    async def test_create_and_list(self, client: AsyncClient):
        await client.post("/api/v1/categories", json={"name": "Tools", "description": "Hand tools"})
        await client.post("/api/v1/categories", json={"name": "Garden"})

        response = await client.get("/api/v1/categories")

        categories = response.json()["data"]
        assert sorted(c["name"] for c in categories) == ["Garden", "Tools"]
        garden = next(c for c in categories if c["name"] == "Garden")
        assert garden["description"] is None
