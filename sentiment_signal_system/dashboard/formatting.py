"""
Text rendering for sentiment, signals and analytics
"""

from decimal import Decimal
from typing import List, Sequence, Tuple

from ..utils.data_structures import (
    Article, CorrelationData, PriceDirection, SentimentScore, Signal, SignalType
)

SIGNAL_EMOJI = {
    SignalType.BUY: "🟢",
    SignalType.SELL: "🔴",
    SignalType.HOLD: "🟡",
}

DIRECTION_EMOJI = {
    PriceDirection.UP: "📈",
    PriceDirection.DOWN: "📉",
    PriceDirection.NEUTRAL: "➡️",
}

RULE = "═" * 60

def _percent(value: Decimal) -> Decimal:
    return value * 100

def format_sentiment(sentiment: SentimentScore) -> str:
    return (
        "📊 Sentiment Scores:\n"
        f"  🟢 Positive: {_percent(sentiment.positive):.2f}%\n"
        f"  🔴 Negative: {_percent(sentiment.negative):.2f}%\n"
        f"  ⚪ Neutral: {_percent(sentiment.neutral):.2f}%"
    )

def format_signal(signal: Signal, signal_type: SignalType) -> str:
    return (
        f"{SIGNAL_EMOJI[signal_type]} {signal_type.value} Signal for {signal.symbol} "
        f"(Confidence: {_percent(signal.confidence):.1f}%)"
    )

def format_article(article: Article) -> str:
    return (
        "📰 Article\n"
        f"  Title: {article.title}\n"
        f"  Source: {article.source}\n"
        f"  Timestamp: {article.timestamp}"
    )

def format_direction(direction: PriceDirection) -> str:
    return f"{DIRECTION_EMOJI[direction]} {direction.value}"

def format_correlation(data: CorrelationData) -> str:
    return (
        "🔗 Sentiment/Price Correlation:\n"
        f"  Coefficient: {data.correlation_coefficient}\n"
        f"  Lag: {data.lag_hours}h\n"
        f"  Samples: {data.sample_size}"
    )

def create_dashboard(articles: Sequence[Article],
                     sentiments: Sequence[SentimentScore],
                     signals: Sequence[Tuple[Signal, SignalType]]) -> str:
    lines: List[str] = [
        "╔" + RULE + "╗",
        "║" + "Sentiment Analysis Trading Dashboard".center(60) + "║",
        "╚" + RULE + "╝",
        "",
        "📊 Summary:",
        f"  Articles Analyzed: {len(articles)}",
        f"  Signals Generated: {len(signals)}",
        "",
    ]

    if sentiments:
        count = Decimal(len(sentiments))
        avg_positive = sum((s.positive for s in sentiments), Decimal(0)) / count
        avg_negative = sum((s.negative for s in sentiments), Decimal(0)) / count
        lines += [
            "📈 Average Sentiment:",
            f"  Positive: {_percent(avg_positive):.1f}%",
            f"  Negative: {_percent(avg_negative):.1f}%",
            "",
        ]

    if signals:
        lines.append("🎯 Active Signals:")
        lines += [f"  {format_signal(signal, signal_type)}" for signal, signal_type in signals]

    lines += ["", RULE]
    return "\n".join(lines) + "\n"

def progress_bar(current: int, total: int, width: int) -> str:
    if total <= 0:
        return "[" + " " * width + "] 0%"

    current = min(max(current, 0), total)
    percentage = current * 100 // total
    filled = current * width // total
    return f"[{'=' * filled}{' ' * (width - filled)}] {percentage}%"

def format_price_scenario(name: str, old_price: Decimal, new_price: Decimal, change: Decimal,
                          direction: PriceDirection, target: Decimal) -> str:
    if change > 0:
        trend = DIRECTION_EMOJI[PriceDirection.UP]
    elif change < 0:
        trend = DIRECTION_EMOJI[PriceDirection.DOWN]
    else:
        trend = DIRECTION_EMOJI[PriceDirection.NEUTRAL]

    return (
        f"Scenario: {name}\n"
        f"  Old Price: ${old_price:.2f}\n"
        f"  New Price: ${new_price:.2f}\n"
        f"  {trend} Price Change: {change:.2f}%\n"
        f"  Predicted Direction: {format_direction(direction)}\n"
        f"  Price Target: ${target:.2f}"
    )

def format_analytics(signals: Sequence[Signal], high_confidence: Decimal) -> str:
    """Average confidence and the number of signals above high_confidence"""
    lines = ["📊 Detailed Analytics:"]
    if not signals:
        lines.append("  No signals generated")
        return "\n".join(lines)

    average = sum((signal.confidence for signal in signals), Decimal(0)) / Decimal(len(signals))
    high_count = sum(1 for signal in signals if signal.confidence > high_confidence)
    lines += [
        f"  Average Signal Confidence: {_percent(average):.1f}%",
        f"  High Confidence Signals (>{_percent(high_confidence):.0f}%): {high_count}",
    ]
    return "\n".join(lines)
