"""
Tests for WooCommerce product tools.

Covers request construction (only provided filters are sent), product and
variation reshaping, and the family-specific error hints.
"""
import pytest

from core.errors import TransportError, UpstreamError
from tests.helpers import is_error, result_json, result_text
from tools.woocommerce import (
    get_woo_product,
    get_woo_product_variations,
    list_woo_products,
    search_woo_products,
)

SOAP = {
    "id": 5,
    "name": "Soap",
    "meta_data": [{"key": "_internal", "value": "x"}, {"key": "volume", "value": "100ml"}],
}


class TestListWooProducts:
    """Tests for list_woo_products."""

    @pytest.mark.asyncio
    async def test_no_filters_sends_empty_query(self, fake_client):
        fake_client.respond([])

        await list_woo_products()

        assert fake_client.last_call == ("GET", "wc/v3/products", {})

    @pytest.mark.asyncio
    async def test_provided_filters_are_forwarded_verbatim(self, fake_client):
        fake_client.respond([])

        await list_woo_products(per_page=20, sku="SOAP-1", type="variable", featured=False, stock_status="instock")

        assert fake_client.last_call[2] == {
            "per_page": 20,
            "sku": "SOAP-1",
            "type": "variable",
            "featured": False,
            "stock_status": "instock",
        }

    @pytest.mark.asyncio
    async def test_products_are_summarized(self, fake_client):
        fake_client.respond([SOAP, {"id": 6, "name": "Shampoo"}])

        products = result_json(await list_woo_products())

        assert [p["id"] for p in products] == [5, 6]
        assert products[0]["custom_meta"] == {"volume": "100ml"}
        assert products[1]["custom_meta"] == {}

    @pytest.mark.asyncio
    async def test_non_list_body_passes_through(self, fake_client):
        fake_client.respond({"code": "woocommerce_rest_cannot_view"})

        assert result_json(await list_woo_products()) == {"code": "woocommerce_rest_cannot_view"}

    @pytest.mark.asyncio
    async def test_non_object_elements_pass_through(self, fake_client):
        fake_client.respond([{"id": 1}, "oops"])

        products = result_json(await list_woo_products())

        assert products[0]["id"] == 1
        assert products[1] == "oops"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("params", [
        {"type": "bundle"},
        {"stock_status": "sold"},
        {"order": "sideways"},
        {"per_page": 0},
        {"per_page": 101},
    ])
    async def test_invalid_parameters_never_reach_the_api(self, fake_client, params):
        result = await list_woo_products(**params)

        assert is_error(result) is True
        assert f"'{next(iter(params))}'" in result_text(result)
        assert fake_client.calls == []

    @pytest.mark.asyncio
    async def test_401_mentions_consumer_keys(self, fake_client):
        fake_client.respond(UpstreamError(401))

        result = await list_woo_products()

        assert is_error(result) is True
        text = result_text(result)
        assert text.startswith("Error listing WooCommerce products: Request failed with status code 401")
        assert "WOO_CONSUMER_KEY" in text
        assert "shop_manager" in text

    @pytest.mark.asyncio
    async def test_404_mentions_plugin(self, fake_client):
        fake_client.respond(UpstreamError(404))

        result = await list_woo_products()

        assert "WooCommerce plugin is installed and activated" in result_text(result)


class TestGetWooProduct:
    """Tests for get_woo_product."""

    @pytest.mark.asyncio
    async def test_id_goes_into_path(self, fake_client, list_sink):
        fake_client.respond(SOAP)

        product = result_json(await get_woo_product(id=5))

        assert fake_client.last_call == ("GET", "wc/v3/products/5", None)
        assert product["custom_meta"] == {"volume": "100ml"}
        assert len(product["meta_data_all"]) == 2
        assert list_sink.messages == ["Getting WooCommerce product ID: 5"]

    @pytest.mark.asyncio
    async def test_404_hint(self, fake_client):
        fake_client.respond(UpstreamError(404))

        result = await get_woo_product(id=999)

        assert is_error(result) is True
        assert "Product not found" in result_text(result)

    @pytest.mark.asyncio
    async def test_empty_body_passes_through(self, fake_client):
        fake_client.respond(None)

        result = await get_woo_product(id=5)

        assert is_error(result) is False
        assert result_json(result) is None


class TestVariations:
    """Tests for get_woo_product_variations."""

    @pytest.mark.asyncio
    async def test_two_variations(self, fake_client):
        fake_client.respond([
            {"id": 43, "sku": "S", "meta_data": [{"key": "size", "value": "S"}]},
            {"id": 44, "sku": "L", "meta_data": [{"key": "size", "value": "L"}, {"key": "_hidden", "value": 1}]},
        ])

        body = result_json(await get_woo_product_variations(product_id=42))

        assert fake_client.last_call == ("GET", "wc/v3/products/42/variations", {})
        assert body["product_id"] == 42
        assert body["variations_count"] == 2
        assert body["variations"][0]["custom_meta"] == {"size": "S"}
        assert body["variations"][1]["custom_meta"] == {"size": "L"}

    @pytest.mark.asyncio
    async def test_paging_forwarded(self, fake_client):
        fake_client.respond([])

        await get_woo_product_variations(product_id=42, page=2, per_page=50)

        assert fake_client.last_call[2] == {"page": 2, "per_page": 50}

    @pytest.mark.asyncio
    async def test_non_list_counts_zero(self, fake_client):
        fake_client.respond({"message": "odd"})

        body = result_json(await get_woo_product_variations(product_id=42))

        assert body["variations_count"] == 0
        assert body["variations"] == {"message": "odd"}

    @pytest.mark.asyncio
    async def test_403_mentions_consumer_keys(self, fake_client):
        fake_client.respond(UpstreamError(403))

        assert "WOO_CONSUMER_KEY" in result_text(await get_woo_product_variations(product_id=42))


class TestSearch:
    """Tests for search_woo_products."""

    @pytest.mark.asyncio
    async def test_default_per_page(self, fake_client):
        fake_client.respond([SOAP])

        body = result_json(await search_woo_products(search="soap"))

        assert fake_client.last_call == ("GET", "wc/v3/products", {"search": "soap", "per_page": 10})
        assert body["search_term"] == "soap"
        assert body["results_count"] == 1
        assert body["products"][0]["name"] == "Soap"

    @pytest.mark.asyncio
    async def test_search_is_required(self, fake_client):
        result = await search_woo_products()

        assert is_error(result) is True
        assert "'search'" in result_text(result)
        assert fake_client.calls == []

    @pytest.mark.asyncio
    async def test_transport_error_message_is_exact(self, fake_client):
        fake_client.respond(TransportError("getaddrinfo failed"))

        result = await search_woo_products(search="soap")

        assert is_error(result) is True
        assert result_text(result) == "Error searching WooCommerce products: getaddrinfo failed"

    @pytest.mark.asyncio
    async def test_401_mentions_consumer_keys(self, fake_client):
        fake_client.respond(UpstreamError(401))

        assert "shop_manager" in result_text(await search_woo_products(search="soap"))
