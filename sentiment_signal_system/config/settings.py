"""
Configuration settings for the sentiment signal system
"""

import os
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Dict, Tuple

@dataclass
class APIConfig:
    """External API configuration settings"""
    NEWS_API_KEY: str = field(default_factory=lambda: os.getenv("NEWS_API_KEY", ""))
    NEWS_API_URL: str = "https://newsapi.org/v2"
    REQUEST_TIMEOUT: int = 10  # seconds
    REQUESTS_PER_SECOND: int = field(default_factory=lambda: int(os.getenv("NEWS_API_RPS", "5")))

@dataclass
class TradingConfig:
    """Trading signal configuration"""
    SIGNAL_THRESHOLD: Decimal = Decimal("0.65")
    SIGNAL_MARGIN: Decimal = Decimal("0.3")
    HOLD_CONFIDENCE_FLOOR: Decimal = Decimal("0.5")
    MIN_CONFIDENCE: Decimal = Decimal("0.7")
    HIGH_CONFIDENCE: Decimal = Decimal("0.8")
    DEFAULT_SYMBOL: str = "MARKET"

@dataclass
class DataConfig:
    """Data processing configuration"""
    MAX_THREADS: int = field(default_factory=lambda: int(os.getenv("SENTIMENT_MAX_THREADS", "8")))
    ENTITY_WORD_BOUNDARIES: bool = True

    # Scan order for entity extraction
    SYMBOLS: Tuple[str, ...] = ('BTC', 'ETH', 'USDT', 'BNB', 'XRP', 'ADA', 'DOGE', 'SOL')
    CRYPTO_TICKERS: Dict[str, str] = None

    def __post_init__(self):
        if self.CRYPTO_TICKERS is None:
            self.CRYPTO_TICKERS = {symbol: f"{symbol}-USD" for symbol in self.SYMBOLS}

@dataclass
class NLPConfig:
    """Sentiment scoring configuration"""
    ANALYZER: str = field(default_factory=lambda: os.getenv("SENTIMENT_ANALYZER", "keyword"))

    # Distribution reported when no keyword matches
    NO_HIT_POSITIVE: Decimal = Decimal("0.1")
    NO_HIT_NEGATIVE: Decimal = Decimal("0.1")
    NO_HIT_NEUTRAL: Decimal = Decimal("0.8")

    # ratio -> score affine map, keeps every axis within [0.05, 0.90]
    SCORE_SCALE: Decimal = Decimal("0.85")
    SCORE_OFFSET: Decimal = Decimal("0.05")

@dataclass
class CorrelationConfig:
    """Sentiment/price correlation configuration"""
    DIRECTION_THRESHOLD: Decimal = Decimal("0.7")
    MAX_LAG_HOURS: int = 24
    COEFFICIENT_PLACES: int = 4
    # price_target volatility when history is too short to estimate one
    DEFAULT_VOLATILITY: Decimal = Decimal("0.05")
    SCENARIO_MOVE_PERCENT: Decimal = Decimal("3")

# Global configuration instances
API_CONFIG = APIConfig()
TRADING_CONFIG = TradingConfig()
DATA_CONFIG = DataConfig()
NLP_CONFIG = NLPConfig()
CORRELATION_CONFIG = CorrelationConfig()
