"""Integration tests for the HTTP fee-quote and order-placement adapters."""

import json
from unittest.mock import MagicMock, patch

import requests

from storefront.checkout.checkout import CheckoutRequest
from storefront.checkout.customer import CustomerDetails
from storefront.delivery.quotes.http_adapter import HttpFeeQuotes
from storefront.placement.http_adapter import HttpOrderPlacement


def _response(status_code=200, body=None):
    response = MagicMock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 300
    if isinstance(body, Exception):
        response.json.side_effect = body
    else:
        response.json.return_value = body
    return response


def _request():
    return CheckoutRequest(
        checkout_id="chk-001",
        category_id="cat1",
        category_name="Breakfast",
        vendor_id="v1",
        vendor_name="Asha's Kitchen",
        items=json.dumps([{"product_id": "p1", "name": "Poha", "price": 45, "quantity": 2}]),
        subtotal=90,
        delivery_fee=20,
        total=110,
        distance_km=1.5,
        latitude=19.0863,
        longitude=72.8826,
    )


def _customer():
    return CustomerDetails(name="Priya Shah", phone="9820012345", address="12 LBS Marg")


class TestHttpFeeQuotes:
    def test_successful_quote(self, center):
        body = {"distance": 3.4, "fee": 40, "time": 22, "serviceable": True}
        with patch("storefront.delivery.quotes.http_adapter.requests.post", return_value=_response(body=body)) as post:
            result = HttpFeeQuotes("http://fees.local/").quote(center)

        assert result.success is True
        assert result.quote.fee == 40
        assert result.quote.distance == 3.4
        assert result.quote.time == 22
        assert post.call_args.args[0] == "http://fees.local/delivery/calculate"
        assert post.call_args.kwargs["json"] == {"latitude": 19.0728, "longitude": 72.8826}

    def test_unreachable_service(self, center):
        with patch(
            "storefront.delivery.quotes.http_adapter.requests.post",
            side_effect=requests.ConnectionError("refused"),
        ):
            result = HttpFeeQuotes("http://fees.local").quote(center)

        assert result.success is False
        assert "unreachable" in result.failure_reason

    def test_error_status(self, center):
        with patch("storefront.delivery.quotes.http_adapter.requests.post", return_value=_response(503)):
            result = HttpFeeQuotes("http://fees.local").quote(center)

        assert result.success is False
        assert "503" in result.failure_reason

    def test_malformed_body(self, center):
        with patch(
            "storefront.delivery.quotes.http_adapter.requests.post",
            return_value=_response(body={"fee": 40}),
        ):
            result = HttpFeeQuotes("http://fees.local").quote(center)

        assert result.success is False

    def test_non_json_body(self, center):
        with patch(
            "storefront.delivery.quotes.http_adapter.requests.post",
            return_value=_response(body=ValueError("not json")),
        ):
            result = HttpFeeQuotes("http://fees.local").quote(center)

        assert result.success is False


class TestHttpOrderPlacement:
    def test_successful_placement(self):
        body = {"id": 42, "status": "confirmed"}
        with patch("storefront.placement.http_adapter.requests.post", return_value=_response(201, body)) as post:
            result = HttpOrderPlacement("http://orders.local").place_order(_request(), _customer())

        assert result.success is True
        assert result.order_id == "42"
        assert result.status == "confirmed"
        assert post.call_args.args[0] == "http://orders.local/api/orders"
        payload = post.call_args.kwargs["json"]
        assert payload["chefId"] == "v1"
        assert payload["total"] == 110

    def test_status_defaults_to_pending(self):
        with patch("storefront.placement.http_adapter.requests.post", return_value=_response(201, {"id": "o-1"})):
            result = HttpOrderPlacement("http://orders.local").place_order(_request(), _customer())

        assert result.status == "pending"

    def test_unreachable_service(self):
        with patch(
            "storefront.placement.http_adapter.requests.post",
            side_effect=requests.Timeout("slow"),
        ):
            result = HttpOrderPlacement("http://orders.local").place_order(_request(), _customer())

        assert result.success is False
        assert "unreachable" in result.failure_reason

    def test_rejected_order(self):
        with patch("storefront.placement.http_adapter.requests.post", return_value=_response(500, {})):
            result = HttpOrderPlacement("http://orders.local").place_order(_request(), _customer())

        assert result.success is False
        assert "500" in result.failure_reason

    def test_missing_order_id(self):
        with patch("storefront.placement.http_adapter.requests.post", return_value=_response(201, {"ok": True})):
            result = HttpOrderPlacement("http://orders.local").place_order(_request(), _customer())

        assert result.success is False
