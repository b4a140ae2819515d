"""
Main application runner for the sentiment signal system
"""

import logging
import sys
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from decimal import Decimal
from typing import List, Optional, Sequence, Tuple

from .config.settings import API_CONFIG, CORRELATION_CONFIG, DATA_CONFIG, TRADING_CONFIG
from .correlation.price_correlation import CorrelationAnalyzer
from .dashboard.formatting import (
    create_dashboard, format_analytics, format_correlation, format_price_scenario, progress_bar
)
from .data_sources.market_source import MarketDataSource
from .data_sources.mock_source import MockDataProvider
from .data_sources.news_source import NewsDataSource
from .nlp.entity_extractor import EntityExtractor
from .nlp.sentiment_processor import SentimentAnalyzer, get_analyzer
from .signals.signal_engine import SignalGenerator
from .utils.data_structures import Article, PricePoint, SentimentScore, Signal, SignalType

@dataclass(frozen=True)
class AnalysisResult:
    """Everything derived from one article"""
    article: Article
    sentiment: SentimentScore
    entities: Tuple[str, ...]
    signal: Signal
    signal_type: SignalType
    strength: int
    actionable: bool

class SentimentPipeline:
    """Article -> sentiment -> symbol -> signal"""

    def __init__(self, analyzer: Optional[SentimentAnalyzer] = None,
                 extractor: Optional[EntityExtractor] = None,
                 generator: Optional[SignalGenerator] = None,
                 max_workers: Optional[int] = None):
        self.analyzer = analyzer or get_analyzer()
        self.extractor = extractor or EntityExtractor()
        self.generator = generator or SignalGenerator()
        self.max_workers = max_workers or DATA_CONFIG.MAX_THREADS
        self.logger = logging.getLogger(__name__)

    def process_article(self, article: Article) -> AnalysisResult:
        sentiment = self.analyzer.analyze(article)
        entities = tuple(self.extractor.extract(article.text))
        symbol = entities[0] if entities else TRADING_CONFIG.DEFAULT_SYMBOL

        signal, signal_type = self.generator.generate_signal_with_type(sentiment, symbol)

        return AnalysisResult(
            article=article,
            sentiment=sentiment,
            entities=entities,
            signal=signal,
            signal_type=signal_type,
            strength=self.generator.signal_strength(sentiment),
            actionable=self.generator.is_actionable(signal)
        )

    def process_articles(self, articles: Sequence[Article]) -> List[AnalysisResult]:
        """Analyze articles concurrently, preserving input order"""
        if len(articles) <= 1:
            return [self.process_article(article) for article in articles]

        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            results = list(executor.map(self.process_article, articles))

        self.logger.info(
            f"Processed {len(results)} articles: "
            f"{self.generator.summarize([(r.signal, r.signal_type) for r in results])}"
        )
        return results

def render_report(results: Sequence[AnalysisResult]) -> str:
    return create_dashboard(
        [r.article for r in results],
        [r.sentiment for r in results],
        [(r.signal, r.signal_type) for r in results]
    )

def load_articles() -> List[Article]:
    """Live news when an API key is configured, sample articles otherwise"""
    if API_CONFIG.NEWS_API_KEY:
        articles = NewsDataSource().collect_articles()
        if articles:
            return articles
        logging.getLogger(__name__).warning("No live articles fetched, using sample articles")
    return MockDataProvider.get_sample_articles()

def load_price_history(symbol: str) -> List[PricePoint]:
    """Live Yahoo Finance history alongside live news, sample closes otherwise"""
    if API_CONFIG.NEWS_API_KEY:
        prices = MarketDataSource().fetch_price_history(symbol)
        if prices:
            return prices
        logging.getLogger(__name__).warning(f"No price history for {symbol}, using sample prices")
    return MockDataProvider.get_price_history()

def scenario_sentiment(change: Decimal) -> SentimentScore:
    """Sentiment consistent with a percentage price move"""
    move = CORRELATION_CONFIG.SCENARIO_MOVE_PERCENT
    if change > move:
        return SentimentScore(Decimal("0.85"), Decimal("0.05"), Decimal("0.10"))
    if change < -move:
        return SentimentScore(Decimal("0.05"), Decimal("0.85"), Decimal("0.10"))
    return SentimentScore(Decimal("0.3"), Decimal("0.3"), Decimal("0.4"))

def render_price_analysis(results: Sequence[AnalysisResult], prices: Sequence[PricePoint],
                          analyzer: Optional[CorrelationAnalyzer] = None) -> str:
    """Volatility, scenario targets and sentiment/price correlation"""
    analyzer = analyzer or CorrelationAnalyzer()
    volatility = analyzer.historical_volatility(prices) or CORRELATION_CONFIG.DEFAULT_VOLATILITY

    lines = ["📈 Price Correlation Analysis:", f"  Historical Volatility: {volatility}", ""]

    for name, old_price, new_price in MockDataProvider.get_price_scenarios():
        change = analyzer.price_change_percent(old_price, new_price)
        sentiment = scenario_sentiment(change)
        lines.append(format_price_scenario(
            name, old_price, new_price, change,
            analyzer.predict_direction(sentiment),
            analyzer.price_target(new_price, sentiment, volatility)
        ))
        lines.append("")

    sentiments = [(r.article.timestamp, r.sentiment) for r in results]
    lines.append(format_correlation(analyzer.correlation(sentiments, prices)))
    return "\n".join(lines)

def main() -> int:
    """Main function"""
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[logging.StreamHandler(sys.stderr)]
    )

    print("Sentiment Signal System")
    print("=" * 50)

    articles = load_articles()
    pipeline = SentimentPipeline()

    results = []
    for i, article in enumerate(articles):
        results.append(pipeline.process_article(article))
        print(f"{progress_bar(i + 1, len(articles), 30)} Processing article {i + 1} of {len(articles)}")

    print()
    print(render_report(results))
    print(format_analytics([r.signal for r in results], TRADING_CONFIG.HIGH_CONFIDENCE))
    print()

    symbol = next((r.signal.symbol for r in results if r.entities), DATA_CONFIG.SYMBOLS[0])
    print(render_price_analysis(results, load_price_history(symbol)))
    print()

    actionable = [r for r in results if r.actionable]
    print(f"Actionable signals (>= {TRADING_CONFIG.MIN_CONFIDENCE * 100:.0f}% confidence): {len(actionable)}")
    return 0

if __name__ == "__main__":
    sys.exit(main())
