"""
Throughput benchmarks for the scoring pipeline
"""

import time
from decimal import Decimal
from typing import Callable, Dict

from .app import SentimentPipeline
from .data_sources.mock_source import MockDataProvider
from .nlp.entity_extractor import EntityExtractor
from .nlp.sentiment_processor import KeywordSentimentAnalyzer
from .signals.signal_engine import SignalGenerator
from .utils.data_structures import SentimentScore

def _time(operation: Callable[[], None], operations: int) -> Dict[str, float]:
    start = time.perf_counter()
    operation()
    elapsed = time.perf_counter() - start

    return {
        'operations': operations,
        'seconds': elapsed,
        'ops_per_sec': operations / elapsed if elapsed > 0 else float('inf'),
        'avg_us': elapsed / operations * 1_000_000 if operations else 0.0
    }

def run_benchmarks(iterations: int = 1000) -> Dict[str, Dict[str, float]]:
    articles = MockDataProvider.get_sample_articles()
    analyzer = KeywordSentimentAnalyzer()
    extractor = EntityExtractor()
    generator = SignalGenerator()
    pipeline = SentimentPipeline(analyzer=analyzer, extractor=extractor, generator=generator)
    sentiment = SentimentScore(Decimal("0.75"), Decimal("0.15"), Decimal("0.10"))

    def analyze():
        for _ in range(iterations):
            for article in articles:
                analyzer.analyze(article)

    def signals():
        for _ in range(iterations):
            generator.generate_signal(sentiment, "BTC")

    def entities():
        for _ in range(iterations):
            for article in articles:
                extractor.extract(article.text)

    def full_pipeline():
        for _ in range(iterations):
            for article in articles:
                pipeline.process_article(article)

    return {
        'sentiment_analysis': _time(analyze, iterations * len(articles)),
        'signal_generation': _time(signals, iterations),
        'entity_extraction': _time(entities, iterations * len(articles)),
        'complete_pipeline': _time(full_pipeline, iterations * len(articles)),
    }

def main():
    for name, stats in run_benchmarks().items():
        print(f"{name.replace('_', ' ').title()}")
        print(f"  Total operations: {stats['operations']}")
        print(f"  Total time: {stats['seconds']:.4f}s")
        print(f"  Operations/sec: {stats['ops_per_sec']:.2f}")
        print(f"  Avg time per operation: {stats['avg_us']:.2f} µs")
        print()

if __name__ == "__main__":
    main()
