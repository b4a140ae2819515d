"""
Fixed sample articles and prices for demos, tests and benchmarks
"""

from decimal import Decimal
from typing import List, Tuple

from ..utils.data_structures import Article, PricePoint

POSITIVE_MARKERS = ("surge", "boost", "growth")
NEGATIVE_MARKERS = ("correction", "concern", "downturn")

SAMPLE_START = 1696431600
SAMPLE_CLOSES = ("27450.0", "27610.5", "27980.0", "27720.25", "28150.0", "28405.75", "28310.0", "28690.5")

class MockDataProvider:
    """Static article provider"""

    @staticmethod
    def get_sample_articles() -> List[Article]:
        return [
            Article(
                title="Bitcoin Surges to New All-Time High",
                content="Bitcoin has reached unprecedented levels as institutional adoption continues to grow. "
                        "Major companies announce BTC purchases.",
                source="CryptoNews",
                timestamp=1696435200
            ),
            Article(
                title="Ethereum Upgrade Boosts Network Performance",
                content="The latest Ethereum upgrade shows promising results with improved transaction speeds "
                        "and reduced gas fees.",
                source="BlockchainDaily",
                timestamp=1696435300
            ),
            Article(
                title="Market Correction Expected Amid Regulatory Concerns",
                content="Analysts warn of potential market downturn as regulatory pressure increases. "
                        "Investors show caution in recent trading.",
                source="FinanceTimes",
                timestamp=1696435400
            ),
            Article(
                title="DeFi Protocols Report Strong Growth",
                content="Decentralized finance platforms continue to see increased adoption with total value "
                        "locked reaching new highs.",
                source="DeFiWatch",
                timestamp=1696435500
            ),
        ]

    @classmethod
    def _filter(cls, markers) -> List[Article]:
        return [
            article for article in cls.get_sample_articles()
            if any(marker in article.text.lower() for marker in markers)
        ]

    @classmethod
    def get_positive_articles(cls) -> List[Article]:
        return cls._filter(POSITIVE_MARKERS)

    @classmethod
    def get_negative_articles(cls) -> List[Article]:
        return cls._filter(NEGATIVE_MARKERS)

    @staticmethod
    def get_price_history() -> List[PricePoint]:
        """Hourly closes around the sample article timestamps"""
        return [
            PricePoint(timestamp=SAMPLE_START + hour * 3600, price=close)
            for hour, close in enumerate(SAMPLE_CLOSES)
        ]

    @staticmethod
    def get_price_scenarios() -> List[Tuple[str, Decimal, Decimal]]:
        """(name, old price, new price) market moves"""
        return [
            ("Bull Run", Decimal("50000.0"), Decimal("55000.0")),
            ("Bear Market", Decimal("50000.0"), Decimal("45000.0")),
            ("Sideways", Decimal("50000.0"), Decimal("50500.0")),
        ]
