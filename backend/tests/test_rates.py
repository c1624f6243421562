from decimal import Decimal

import httpx
import pytest

from procurement.services.rates import RateProvider, parse_rates

BOI_BODY = {"exchangeRates": [
    {"key": "EUR", "currentExchangeRate": 4.01},
    {"key": "USD", "currentExchangeRate": 3.65},
    {"key": "CNY", "currentExchangeRate": 0.505},
]}


def provider(handler, **kwargs):
    return RateProvider(url="http://rates.test/", transport=httpx.MockTransport(handler), **kwargs)


class TestParseRates:

    def test_reads_usd_and_cny(self):
        quote = parse_rates(BOI_BODY)
        assert quote.usd == Decimal("3.65")
        assert quote.cny == Decimal("0.505")
        assert quote.is_live

    def test_missing_currency_keeps_default(self):
        quote = parse_rates({"exchangeRates": [{"key": "USD", "currentExchangeRate": 3.6}]})
        assert quote.cny == Decimal("0.52")

    @pytest.mark.parametrize("body", [
        {"exchangeRates": "oops"},
        {"exchangeRates": [{"key": "USD"}]},
        {"exchangeRates": [{"key": "USD", "currentExchangeRate": "abc"}]},
        {"exchangeRates": [{"key": "USD", "currentExchangeRate": None}]},
        {"exchangeRates": [{"key": "CNY", "currentExchangeRate": 0}]},
        {"exchangeRates": [{"key": "USD", "currentExchangeRate": -3.7}]},
    ])
    def test_malformed_body(self, body):
        with pytest.raises(ValueError):
            parse_rates(body)


class TestRateProvider:

    async def test_live_quote(self):
        quote = await provider(lambda request: httpx.Response(200, json=BOI_BODY)).get_rates()
        assert quote.is_live
        assert quote.usd == Decimal("3.65")

    @pytest.mark.parametrize("response", [
        httpx.Response(500),
        httpx.Response(200, text="<html>maintenance</html>"),
        httpx.Response(200, json=["not", "a", "dict"]),
    ])
    async def test_bad_response_falls_back(self, response):
        quote = await provider(lambda request: response).get_rates()
        assert not quote.is_live
        assert quote.usd == Decimal("3.76")
        assert quote.cny == Decimal("0.52")

    async def test_network_error_falls_back(self):
        def handler(request):
            raise httpx.ConnectError("unreachable", request=request)

        quote = await provider(handler).get_rates()
        assert not quote.is_live

    async def test_live_quote_is_cached(self):
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(200, json=BOI_BODY)

        rates = provider(handler, cache_seconds=3600)
        await rates.get_rates()
        await rates.get_rates()
        assert len(calls) == 1

    async def test_fallback_is_not_cached(self):
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(503)

        rates = provider(handler)
        await rates.get_rates()
        await rates.get_rates()
        assert len(calls) == 2
