"""Unit tests for the cart quote endpoint."""
import pytest


FAMILY_ORDER = [
    {"item_id": "m1", "size": "Large", "quantity": 2},
    {"item_id": "s2"},
    {"item_id": "m7"},
    {"item_id": "s1"},
    {"item_id": "m5", "size": "Medium"},
]


class TestCartQuoteAPI:
    """Test POST /api/cart/quote."""

    @pytest.mark.asyncio
    async def test_quote_applies_deals(self, api_client):
        """Combo takes the pizzas, a side and the cola; the gourmet pizza gets 20% off."""
        response = await api_client.post("/api/cart/quote", json={"lines": FAMILY_ORDER})

        assert response.status_code == 200
        data = response.json()
        assert data["subtotal"] == 78.5
        assert data["discount"] == 13.1
        assert data["total"] == 65.4
        assert data["applied_deals"] == [
            {"rule_id": "d_feast", "name": "Family Feast (x1)", "times_applied": 1, "amount": 9.5},
            {"rule_id": "d_gourmet", "name": "20% Off Gourmet", "times_applied": 1, "amount": 3.6},
        ]
        assert [line["item_id"] for line in data["lines"]] == ["m1", "s2", "m7", "s1", "m5"]
        assert data["lines"][0]["total_price"] == 40.0

    @pytest.mark.asyncio
    async def test_quote_with_manual_discount(self, api_client):
        response = await api_client.post(
            "/api/cart/quote",
            json={
                "lines": FAMILY_ORDER,
                "manual_discount": {"type": "PERCENTAGE", "value": 10},
            },
        )

        data = response.json()
        assert data["discount"] == 19.64
        assert data["total"] == 58.86

    @pytest.mark.asyncio
    async def test_quote_without_auto_deals(self, api_client):
        response = await api_client.post(
            "/api/cart/quote",
            json={"lines": FAMILY_ORDER, "auto_deals_enabled": False},
        )

        data = response.json()
        assert data["discount"] == 0
        assert data["total"] == 78.5
        assert data["applied_deals"] == []

    @pytest.mark.asyncio
    async def test_empty_cart(self, api_client):
        response = await api_client.post("/api/cart/quote", json={"lines": []})

        assert response.status_code == 200
        assert response.json()["total"] == 0

    @pytest.mark.asyncio
    async def test_unknown_item(self, api_client):
        response = await api_client.post("/api/cart/quote", json={"lines": [{"item_id": "nope"}]})

        assert response.status_code == 404
        assert "nope" in response.json()["detail"]

    @pytest.mark.asyncio
    async def test_zero_quantity(self, api_client):
        response = await api_client.post(
            "/api/cart/quote", json={"lines": [{"item_id": "s1", "quantity": 0}]}
        )

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_unknown_size(self, api_client):
        response = await api_client.post(
            "/api/cart/quote", json={"lines": [{"item_id": "m1", "size": "Huge"}]}
        )

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_modifier_not_offered(self, api_client):
        """A size-restricted base on the wrong size is refused, not charged."""
        response = await api_client.post(
            "/api/cart/quote",
            json={"lines": [{"item_id": "m1", "size": "Large", "topping_ids": ["t_gf"]}]},
        )

        assert response.status_code == 422
        assert "Gluten Free Base" in response.json()["detail"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "manual_discount",
        [{"type": "FIXED", "value": -5}, {"type": "PERCENTAGE", "value": 150}],
    )
    async def test_invalid_manual_discount(self, api_client, manual_discount):
        response = await api_client.post(
            "/api/cart/quote",
            json={"lines": FAMILY_ORDER, "manual_discount": manual_discount},
        )

        assert response.status_code == 422


class TestLinePriceAPI:
    """Test POST /api/cart/line."""

    @pytest.mark.asyncio
    async def test_quantity_step(self, api_client):
        response = await api_client.post(
            "/api/cart/line",
            json={
                "item_id": "m1",
                "size": "Large",
                "topping_ids": ["t1"],
                "extra_charge_qty": 1,
                "quantity": 2,
                "quantity_delta": 1,
            },
        )

        assert response.status_code == 200
        data = response.json()
        assert data["quantity"] == 3
        assert data["total_price"] == 69.0

    @pytest.mark.asyncio
    async def test_step_below_one(self, api_client):
        response = await api_client.post(
            "/api/cart/line",
            json={"item_id": "s2", "quantity_delta": -3},
        )

        assert response.json()["quantity"] == 1
        assert response.json()["total_price"] == 8.5

    @pytest.mark.asyncio
    async def test_missing_size(self, api_client):
        response = await api_client.post("/api/cart/line", json={"item_id": "m1"})

        assert response.status_code == 422
