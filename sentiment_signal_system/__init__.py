"""
Sentiment signal system

Scores market news into sentiment distributions, turns them into BUY/SELL/HOLD
signals and relates sentiment to price movement.
"""

from .utils.data_structures import (
    Article, CorrelationData, PriceDirection, PricePoint, SentimentScore,
    Signal, SignalType
)
from .utils.errors import DataSourceError, DecimalConversionError, SentimentSystemError
from .nlp.sentiment_processor import (
    KeywordLexicon, KeywordSentimentAnalyzer, VaderSentimentAnalyzer,
    analyze_sentiment, get_analyzer, preprocess_text
)
from .nlp.entity_extractor import EntityExtractor, extract_entities
from .signals.signal_engine import (
    SignalGenerator, calculate_signal_strength, generate_signal,
    generate_signal_with_type, is_signal_actionable
)
from .correlation.price_correlation import (
    CorrelationAnalyzer, analyze_sentiment_lag, calculate_correlation,
    calculate_price_change, calculate_price_target, predict_price_direction
)
from .data_sources.mock_source import MockDataProvider
from .data_sources.news_source import NewsDataSource, RateLimiter

__version__ = "0.1.0"
