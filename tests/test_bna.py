from decimal import Decimal

import pytest
import requests

from pricescope.banks import UnknownBankError, get_bank_scraper
from pricescope.banks.bna import BnaScraper, parse_ar_number
from pricescope.errors import NetworkError, PageLayoutError, ParseError

BNA_PAGE = """
<html><body>
<div id="billetes">
  <table class="table cotizacion">
    <thead><tr><th></th><th>Compra</th><th>Venta</th></tr></thead>
    <tbody>
      <tr><td class="tit">Dolar U.S.A</td><td>1.045,50</td><td>1.095,50</td></tr>
      <tr><td class="tit">Euro</td><td>1.120,00</td><td>1.180,00</td></tr>
    </tbody>
  </table>
</div>
<div id="divisas">
  <table><tbody><tr><td class="tit">Dolar U.S.A</td><td>1,00</td><td>2,00</td></tr></tbody></table>
</div>
</body></html>
"""


class FakeResponse:
    def __init__(self, status_code=200, text=""):
        self.status_code = status_code
        self.text = text


class FakeSession:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.requested = []

    def get(self, url, timeout=None):
        self.requested.append(url)
        if self.error:
            raise self.error
        return self.response


@pytest.fixture
def scraper():
    return BnaScraper(session=FakeSession(FakeResponse(text=BNA_PAGE)), timeout=5)


def test_parse_quote_reads_banknote_dollar_row(scraper):
    quote = scraper.parse_quote(BNA_PAGE)

    assert quote.currency == "USD"
    assert quote.buy == Decimal("1045.50")
    assert quote.sell == Decimal("1095.50")
    assert quote.average == Decimal("1070.50")


def test_scrape_quote_converts_at_average(scraper):
    quote = scraper.scrape_quote()

    assert scraper.session.requested == [scraper.url]
    assert quote.to_foreign(Decimal("2141")) == Decimal("2")


def test_missing_dollar_row_is_layout_error(scraper):
    page = BNA_PAGE.replace("Dolar U.S.A", "Real")

    with pytest.raises(PageLayoutError):
        scraper.parse_quote(page)


def test_missing_table_is_layout_error(scraper):
    with pytest.raises(PageLayoutError):
        scraper.parse_quote("<html><body><p>Mantenimiento</p></body></html>")


def test_unparseable_price_is_parse_error(scraper):
    page = BNA_PAGE.replace("1.045,50", "s/c")

    with pytest.raises(ParseError):
        scraper.parse_quote(page)


def test_non_2xx_page_is_network_error():
    bna = BnaScraper(session=FakeSession(FakeResponse(status_code=503, text="")))

    with pytest.raises(NetworkError) as excinfo:
        bna.scrape_quote()

    assert excinfo.value.status_code == 503


def test_transport_failure_is_network_error():
    bna = BnaScraper(session=FakeSession(error=requests.Timeout("timed out")))

    with pytest.raises(NetworkError):
        bna.scrape_quote()


@pytest.mark.parametrize(
    "text, expected",
    [
        ("350,25", Decimal("350.25")),
        ("1.045,50", Decimal("1045.50")),
        ("$ 98,7", Decimal("98.7")),
        ("123.45", Decimal("123.45")),
    ],
)
def test_parse_ar_number(text, expected):
    assert parse_ar_number(text) == expected


def test_parse_ar_number_rejects_zero():
    with pytest.raises(ParseError):
        parse_ar_number("0,00")


def test_get_bank_scraper():
    assert isinstance(get_bank_scraper(" BNA "), BnaScraper)

    with pytest.raises(UnknownBankError):
        get_bank_scraper("galicia")
