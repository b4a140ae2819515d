"""
News data source producing Article records for sentiment analysis
"""

import logging
import threading
import time
from collections import deque
from datetime import datetime
from typing import Callable, List, Optional, Sequence

import requests

from ..config.settings import API_CONFIG, DATA_CONFIG
from ..utils.data_structures import Article
from ..utils.errors import DataSourceError

class RateLimiter:
    """Sliding one-second window request limiter"""

    def __init__(self, requests_per_second: int, clock: Callable[[], float] = time.monotonic,
                 sleep: Callable[[float], None] = time.sleep):
        self.requests_per_second = max(1, int(requests_per_second))
        self._clock = clock
        self._sleep = sleep
        self._requests = deque()
        self._lock = threading.Lock()

    def get_rate(self) -> int:
        return self.requests_per_second

    def _seconds_until_free(self) -> float:
        """Record a request if one is free, otherwise return the wait time"""
        with self._lock:
            now = self._clock()
            while self._requests and now - self._requests[0] >= 1.0:
                self._requests.popleft()

            if len(self._requests) < self.requests_per_second:
                self._requests.append(now)
                return 0.0

            return 1.0 - (now - self._requests[0])

    def is_allowed(self) -> bool:
        """Admit and record a request if the window has room"""
        return self._seconds_until_free() == 0.0

    def wait(self):
        """Block until a request slot is available"""
        while True:
            delay = self._seconds_until_free()
            if delay == 0.0:
                return
            self._sleep(delay)

class NewsDataSource:
    """NewsAPI client for market news"""

    def __init__(self, source: str = "NewsAPI", api_key: Optional[str] = None,
                 rate_limiter: Optional[RateLimiter] = None, session=None):
        self.source = source
        self.api_key = API_CONFIG.NEWS_API_KEY if api_key is None else api_key
        self.base_url = API_CONFIG.NEWS_API_URL
        self.timeout = API_CONFIG.REQUEST_TIMEOUT
        self.rate_limiter = rate_limiter or RateLimiter(API_CONFIG.REQUESTS_PER_SECOND)
        self.session = session or requests.Session()
        self.symbols = DATA_CONFIG.SYMBOLS
        self.logger = logging.getLogger(__name__)

    def create_sample_article(self, title: str, content: str) -> Article:
        """Build an article stamped with the current time"""
        return Article(
            title=title,
            content=content,
            source=self.source,
            timestamp=int(time.time())
        )

    def _build_queries(self) -> List[str]:
        queries = ["cryptocurrency market", "bitcoin ethereum", "crypto regulation"]
        for symbol in self.symbols[:5]:
            queries.append(f"{symbol} crypto")
        return queries

    @staticmethod
    def _parse_timestamp(published_at) -> int:
        if isinstance(published_at, str) and published_at:
            try:
                return int(datetime.fromisoformat(published_at.replace('Z', '+00:00')).timestamp())
            except ValueError:
                pass
        return int(time.time())

    def _to_article(self, raw: dict) -> Article:
        description = raw.get('description') or ''
        content = raw.get('content') or ''
        source = raw.get('source')
        return Article(
            title=raw.get('title') or '',
            content=f"{description} {content}".strip(),
            source=(source.get('name') if isinstance(source, dict) else None) or self.source,
            timestamp=self._parse_timestamp(raw.get('publishedAt'))
        )

    def _request(self, query: str, page_size: int) -> List[dict]:
        params = {
            'q': query,
            'apiKey': self.api_key,
            'sortBy': 'publishedAt',
            'language': 'en',
            'pageSize': page_size
        }

        self.rate_limiter.wait()
        response = self.session.get(f"{self.base_url}/everything", params=params, timeout=self.timeout)

        if response.status_code != 200:
            raise DataSourceError(self.source, f"HTTP {response.status_code} - {response.text}")

        payload = response.json()
        if not isinstance(payload, dict):
            raise DataSourceError(self.source, f"unexpected response body: {type(payload).__name__}")
        if payload.get('status') == 'error':
            raise DataSourceError(self.source, payload.get('message', 'unknown error'))

        articles = payload.get('articles') or []
        if not isinstance(articles, list):
            raise DataSourceError(self.source, "articles field is not a list")
        return articles

    def fetch_articles(self, query: str, page_size: int = 20) -> List[Article]:
        """Fetch articles for a query; failures are logged and yield nothing"""
        if not self.api_key:
            self.logger.warning("NEWS_API_KEY is not set, skipping news fetch")
            return []

        try:
            raw_articles = self._request(query, page_size)
        except (requests.RequestException, DataSourceError, ValueError) as e:
            self.logger.error(f"Error fetching news for '{query}': {e}")
            return []

        return [self._to_article(raw) for raw in raw_articles
                if isinstance(raw, dict) and raw.get('title')]

    def collect_articles(self, queries: Optional[Sequence[str]] = None,
                         page_size: int = 20) -> List[Article]:
        """Fetch every query and drop duplicate headlines"""
        seen = set()
        articles = []

        for query in queries or self._build_queries():
            for article in self.fetch_articles(query, page_size):
                key = (article.title, article.source)
                if key in seen:
                    continue
                seen.add(key)
                articles.append(article)

        self.logger.info(f"Collected {len(articles)} unique articles")
        return articles
