import json
from decimal import Decimal

import pytest
import requests

from pricescope.errors import EmptyResultError, NetworkError, ParseError
from pricescope.marketplace import MarketplaceClient, Site

API = "https://api.example.test"


class FakeResponse:
    def __init__(self, status_code=200, text=""):
        self.status_code = status_code
        self.text = text

    def json(self, **kwargs):
        return json.loads(self.text, **kwargs)


class FakeSession:
    def __init__(self):
        self.routes = {}
        self.calls = []

    def add(self, path, status_code=200, body=None, text=None):
        if text is None:
            text = json.dumps(body)
        self.routes[f"{API}{path}"] = FakeResponse(status_code, text)

    def get(self, url, params=None, timeout=None):
        self.calls.append({"url": url, "params": params, "timeout": timeout})
        route = self.routes.get(url)
        if isinstance(route, Exception):
            raise route
        if route is None:
            return FakeResponse(404, "{}")
        return route


ARGENTINA = Site(id="MLA", name="Argentina", default_currency="ARS")


@pytest.fixture
def session():
    return FakeSession()


@pytest.fixture
def client(session):
    return MarketplaceClient(base_url=API + "/", reference_currency="USD", session=session, timeout=5)


def test_discover_sites(client, session):
    session.add(
        "/sites",
        body=[
            {"id": "MLA", "name": "Argentina", "default_currency_id": "ARS"},
            {"id": "MLB", "name": "Brasil", "default_currency_id": "BRL"},
        ],
    )

    sites = client.discover_sites()

    assert sites == [ARGENTINA, Site(id="MLB", name="Brasil", default_currency="BRL")]
    assert session.calls[0]["timeout"] == 5


def test_discover_sites_rejects_unexpected_shape(client, session):
    session.add("/sites", body={"sites": []})

    with pytest.raises(ParseError):
        client.discover_sites()


def test_query_top_listing_returns_first_result(client, session):
    session.add(
        "/sites/MLA/search",
        text=(
            '{"results": ['
            '{"title": "iPhone 11 Pro Max 512GB", "permalink": "https://example.test/1",'
            ' "price": 450000.10, "currency_id": "ARS"},'
            '{"title": "iPhone 11 Pro Max 64GB", "permalink": "https://example.test/2",'
            ' "price": 300000, "currency_id": "ARS"}'
            "]}"
        ),
    )

    listing = client.query_top_listing("iPhone 11 Pro Max", ARGENTINA)

    assert listing.title == "iPhone 11 Pro Max 512GB"
    assert listing.price == Decimal("450000.10")
    assert listing.currency_code == "ARS"
    assert session.calls[0]["params"] == {"q": "iPhone 11 Pro Max", "sort": "price_desc"}


def test_query_top_listing_empty_results(client, session):
    session.add("/sites/MLA/search", body={"results": []})

    with pytest.raises(EmptyResultError):
        client.query_top_listing("unobtainium", ARGENTINA)


def test_query_top_listing_missing_price(client, session):
    session.add(
        "/sites/MLA/search",
        body={"results": [{"title": "x", "permalink": "y", "currency_id": "ARS"}]},
    )

    with pytest.raises(ParseError):
        client.query_top_listing("x", ARGENTINA)


def test_non_2xx_is_network_error(client, session):
    session.add("/sites/MLA/search", status_code=503, text="unavailable")

    with pytest.raises(NetworkError) as excinfo:
        client.query_top_listing("x", ARGENTINA)

    assert excinfo.value.status_code == 503


def test_transport_failure_is_network_error(client, session):
    session.routes[f"{API}/sites"] = requests.ConnectionError("connection refused")

    with pytest.raises(NetworkError) as excinfo:
        client.discover_sites()

    assert excinfo.value.status_code is None


def test_malformed_body_is_parse_error(client, session):
    session.add("/sites", text="<html>not json</html>")

    with pytest.raises(ParseError):
        client.discover_sites()


def test_fetch_currency_ratio(client, session):
    session.add("/currency_conversions/search", text='{"currency_base": "BRL", "ratio": 0.18}')

    ratio = client.fetch_currency_ratio("BRL")

    assert ratio == Decimal("0.18")
    assert session.calls[0]["params"] == {"from": "BRL", "to": "USD"}


def test_fetch_currency_ratio_rejects_zero(client, session):
    session.add("/currency_conversions/search", body={"ratio": 0})

    with pytest.raises(ParseError):
        client.fetch_currency_ratio("BRL")
