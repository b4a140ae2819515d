from __future__ import annotations

from decimal import Decimal

import pandas as pd
import requests

from sentiment_signal_system.data_sources import market_source, news_source
from sentiment_signal_system.data_sources.market_source import MarketDataSource
from sentiment_signal_system.data_sources.mock_source import MockDataProvider
from sentiment_signal_system.data_sources.news_source import NewsDataSource, RateLimiter


class FakeClock:
    def __init__(self):
        self.now = 0.0
        self.sleeps = []

    def __call__(self):
        return self.now

    def sleep(self, seconds):
        self.sleeps.append(seconds)
        self.now += seconds


class DummyResponse:
    def __init__(self, status_code=200, payload=None, text="OK"):
        self.status_code = status_code
        self._payload = payload or {}
        self.text = text

    def json(self):
        return self._payload


class DummySession:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    def get(self, url, **kwargs):
        self.calls.append((url, kwargs))
        if self.error:
            raise self.error
        return self.response


NEWS_PAYLOAD = {
    "status": "ok",
    "articles": [
        {
            "title": "Bitcoin Surges Past Resistance",
            "description": "BTC rallies on strong inflows.",
            "content": "Analysts see further gains.",
            "source": {"name": "CryptoNews"},
            "publishedAt": "2023-10-04T16:00:00Z",
        },
        {"title": None, "description": "dropped", "source": {"name": "X"}},
    ],
}


def _news_source(session):
    return NewsDataSource(api_key="test-key", rate_limiter=RateLimiter(100), session=session)


def test_mock_provider_articles():
    articles = MockDataProvider.get_sample_articles()
    assert len(articles) == 4
    assert any("Bitcoin" in a.title for a in articles)


def test_mock_provider_filters():
    positive = MockDataProvider.get_positive_articles()
    negative = MockDataProvider.get_negative_articles()
    assert len(positive) == 3
    assert len(negative) == 1
    for article in positive:
        text = article.text.lower()
        assert "surge" in text or "boost" in text or "growth" in text
    for article in negative:
        text = article.text.lower()
        assert "correction" in text or "concern" in text or "downturn" in text


def test_rate_limiter_window():
    clock = FakeClock()
    limiter = RateLimiter(2, clock=clock, sleep=clock.sleep)
    assert limiter.get_rate() == 2
    assert limiter.is_allowed()
    assert limiter.is_allowed()
    assert not limiter.is_allowed()

    clock.now = 1.0
    assert limiter.is_allowed()


def test_rate_limiter_wait_sleeps_until_free():
    clock = FakeClock()
    limiter = RateLimiter(1, clock=clock, sleep=clock.sleep)
    limiter.wait()
    limiter.wait()
    assert clock.sleeps == [1.0]


def test_fetch_articles_parses_newsapi_payload():
    session = DummySession(DummyResponse(payload=NEWS_PAYLOAD))
    articles = _news_source(session).fetch_articles("bitcoin")

    assert len(articles) == 1
    article = articles[0]
    assert article.title == "Bitcoin Surges Past Resistance"
    assert article.content == "BTC rallies on strong inflows. Analysts see further gains."
    assert article.source == "CryptoNews"
    assert article.timestamp == 1696435200

    url, kwargs = session.calls[0]
    assert url.endswith("/everything")
    assert kwargs["params"]["q"] == "bitcoin"
    assert kwargs["params"]["apiKey"] == "test-key"


def test_fetch_articles_http_error_returns_empty():
    session = DummySession(DummyResponse(status_code=500, text="boom"))
    assert _news_source(session).fetch_articles("bitcoin") == []


def test_fetch_articles_api_error_returns_empty():
    session = DummySession(DummyResponse(payload={"status": "error", "message": "rateLimited"}))
    assert _news_source(session).fetch_articles("bitcoin") == []


def test_fetch_articles_network_error_returns_empty():
    session = DummySession(error=requests.ConnectionError("offline"))
    assert _news_source(session).fetch_articles("bitcoin") == []


def test_fetch_articles_unexpected_body_returns_empty():
    session = DummySession(DummyResponse(payload=[{"title": "not an envelope"}]))
    assert _news_source(session).fetch_articles("bitcoin") == []

    session = DummySession(DummyResponse(payload={"status": "ok", "articles": "nope"}))
    assert _news_source(session).fetch_articles("bitcoin") == []


def test_fetch_articles_tolerates_malformed_fields(monkeypatch):
    monkeypatch.setattr(news_source.time, "time", lambda: 1700000000)
    payload = {
        "status": "ok",
        "articles": [
            {"title": "Odd timestamp", "publishedAt": 1696435200, "source": "CryptoNews"},
            "not an article",
        ],
    }
    session = DummySession(DummyResponse(payload=payload))

    articles = _news_source(session).fetch_articles("bitcoin")
    assert len(articles) == 1
    assert articles[0].timestamp == 1700000000
    assert articles[0].source == "NewsAPI"


def test_fetch_articles_without_key_skips_request():
    session = DummySession(DummyResponse(payload=NEWS_PAYLOAD))
    source = NewsDataSource(api_key="", rate_limiter=RateLimiter(100), session=session)
    assert source.fetch_articles("bitcoin") == []
    assert session.calls == []


def test_collect_articles_drops_duplicates():
    session = DummySession(DummyResponse(payload=NEWS_PAYLOAD))
    articles = _news_source(session).collect_articles(["bitcoin", "btc"])
    assert len(session.calls) == 2
    assert len(articles) == 1


def test_create_sample_article():
    source = NewsDataSource(source="TestSource", api_key="", session=DummySession())
    article = source.create_sample_article("Test Title", "Test Content")
    assert article.title == "Test Title"
    assert article.content == "Test Content"
    assert article.source == "TestSource"
    assert article.timestamp > 0


def test_market_history_conversion():
    index = pd.DatetimeIndex(["2023-10-04 16:00:00", "2023-10-04 17:00:00"], tz="UTC")
    history = pd.DataFrame({"Close": [27000.5, float("nan")], "Volume": [10.0, 5.0]}, index=index)

    points = MarketDataSource.history_to_price_points(history)
    assert len(points) == 1
    assert points[0].timestamp == 1696435200
    assert points[0].price == Decimal("27000.5")
    assert points[0].volume == Decimal("10.0")


def test_market_ticker_mapping():
    source = MarketDataSource()
    assert source.ticker_for("btc") == "BTC-USD"
    assert source.ticker_for("AAPL") == "AAPL"


def test_fetch_price_history_uses_yfinance(monkeypatch):
    index = pd.DatetimeIndex(["2023-10-04 16:00:00"], tz="UTC")
    requested = []

    class FakeTicker:
        def __init__(self, ticker):
            requested.append(ticker)

        def history(self, period, interval):
            return pd.DataFrame({"Close": [1650.25], "Volume": [2.0]}, index=index)

    monkeypatch.setattr(market_source.yf, "Ticker", FakeTicker)
    points = MarketDataSource().fetch_price_history("ETH")
    assert requested == ["ETH-USD"]
    assert points[0].price == Decimal("1650.25")


def test_fetch_price_history_failure_returns_empty(monkeypatch):
    class BrokenTicker:
        def __init__(self, ticker):
            raise RuntimeError("no network")

    monkeypatch.setattr(market_source.yf, "Ticker", BrokenTicker)
    assert MarketDataSource().fetch_price_history("BTC") == []
