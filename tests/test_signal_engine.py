from __future__ import annotations

from decimal import Decimal

from sentiment_signal_system.nlp.sentiment_processor import analyze_sentiment
from sentiment_signal_system.signals.signal_engine import (
    SignalGenerator,
    calculate_signal_strength,
    generate_signal,
    generate_signal_with_type,
    is_signal_actionable,
)
from sentiment_signal_system.utils.data_structures import Article, SentimentScore, Signal, SignalType


def _score(positive, negative, neutral) -> SentimentScore:
    return SentimentScore(Decimal(positive), Decimal(negative), Decimal(neutral))


def test_buy_signal():
    signal, signal_type = generate_signal_with_type(_score("0.85", "0.05", "0.10"), "BTC")
    assert signal_type == SignalType.BUY
    assert signal.symbol == "BTC"
    assert signal.confidence == Decimal("0.85")


def test_sell_signal():
    signal, signal_type = generate_signal_with_type(_score("0.05", "0.85", "0.10"), "ETH")
    assert signal_type == SignalType.SELL
    assert signal.symbol == "ETH"
    assert signal.confidence == Decimal("0.85")


def test_hold_confidence_has_a_floor():
    signal, signal_type = generate_signal_with_type(_score("0.3", "0.3", "0.4"), "BTC")
    assert signal_type == SignalType.HOLD
    assert signal.confidence == Decimal("0.5")

    signal, signal_type = generate_signal_with_type(_score("0.1", "0.1", "0.8"), "BTC")
    assert signal_type == SignalType.HOLD
    assert signal.confidence == Decimal("0.8")


def test_marginal_buy_and_sell():
    _, signal_type = generate_signal_with_type(_score("0.66", "0.34", "0.0"), "BTC")
    assert signal_type == SignalType.BUY

    _, signal_type = generate_signal_with_type(_score("0.34", "0.66", "0.0"), "BTC")
    assert signal_type == SignalType.SELL


def test_threshold_is_strict():
    _, signal_type = generate_signal_with_type(_score("0.65", "0.35", "0.0"), "BTC")
    assert signal_type == SignalType.HOLD


def test_margin_is_required():
    # positive clears the threshold but not the margin over negative
    _, signal_type = generate_signal_with_type(_score("0.70", "0.45", "0.0"), "BTC")
    assert signal_type == SignalType.HOLD


def test_malformed_sentiment_falls_through_to_hold():
    signal, signal_type = generate_signal_with_type(_score("0.9", "0.9", "-0.8"), "BTC")
    assert signal_type == SignalType.HOLD
    assert signal.confidence == Decimal("0.5")


def test_signal_embeds_the_given_sentiment():
    sentiment = _score("0.85", "0.05", "0.10")
    signal = generate_signal(sentiment, "SOL")
    assert signal.sentiment is sentiment
    assert isinstance(signal, Signal)


def test_wrapper_matches_typed_variant():
    sentiment = _score("0.2", "0.7", "0.1")
    assert generate_signal(sentiment, "XRP") == generate_signal_with_type(sentiment, "XRP")[0]


def test_signal_strength():
    assert calculate_signal_strength(_score("0.85", "0.05", "0.10")) == 85
    assert calculate_signal_strength(_score("0.1", "0.1", "0.8")) == 80
    assert calculate_signal_strength(_score("0.333", "0.333", "0.334")) == 33


def test_signal_strength_is_clamped():
    assert calculate_signal_strength(_score("1.5", "0", "0")) == 100
    assert calculate_signal_strength(_score("-0.2", "-0.3", "-0.1")) == 0


def test_signal_actionable():
    signal = Signal("BTC", _score("0.85", "0.05", "0.10"), Decimal("0.85"))
    assert is_signal_actionable(signal, Decimal("0.7"))
    assert not is_signal_actionable(signal, Decimal("0.9"))
    assert is_signal_actionable(signal, Decimal("0.85"))
    assert is_signal_actionable(signal)


def test_custom_thresholds():
    generator = SignalGenerator(threshold="0.5", margin="0.1")
    assert generator.classify(_score("0.55", "0.4", "0.05")) == SignalType.BUY


def test_batch_generation_and_summary():
    generator = SignalGenerator()
    signals = generator.generate_signals({
        "BTC": _score("0.9", "0.05", "0.05"),
        "ETH": _score("0.05", "0.9", "0.05"),
        "ADA": _score("0.1", "0.1", "0.8"),
    })
    assert [s.symbol for s, _ in signals] == ["BTC", "ETH", "ADA"]
    assert generator.summarize(signals) == {"BUY": 1, "SELL": 1, "HOLD": 1}


def test_article_to_buy_signal():
    article = Article(
        title="Bitcoin surges to record high",
        content="Great gains as bullish trend continues",
        source="Test",
        timestamp=0,
    )
    sentiment = analyze_sentiment(article)
    assert sentiment.positive > sentiment.negative
    assert sentiment.positive > Decimal("0.5")

    signal, signal_type = generate_signal_with_type(sentiment, "BTC")
    assert signal_type == SignalType.BUY
    assert signal.confidence > Decimal("0.7")


def test_generation_is_deterministic():
    sentiment = _score("0.75", "0.15", "0.10")
    assert generate_signal_with_type(sentiment, "BTC") == generate_signal_with_type(sentiment, "BTC")
