"""
Trading signal generation engine
"""

import logging
from decimal import Decimal
from typing import Dict, List, Mapping, Tuple

from ..config.settings import TRADING_CONFIG
from ..utils.data_structures import SentimentScore, Signal, SignalType, to_decimal

class SignalGenerator:
    """Classify sentiment distributions into BUY/SELL/HOLD signals.

    BUY requires ``positive > threshold`` and ``positive > negative + margin``;
    SELL mirrors it on the negative axis. The margin makes the two rules
    mutually exclusive. Everything else is HOLD, whose confidence is never
    reported below the configured floor.
    """

    def __init__(self, threshold=None, margin=None, hold_floor=None):
        self.threshold = to_decimal(threshold if threshold is not None else TRADING_CONFIG.SIGNAL_THRESHOLD)
        self.margin = to_decimal(margin if margin is not None else TRADING_CONFIG.SIGNAL_MARGIN)
        self.hold_floor = to_decimal(hold_floor if hold_floor is not None else TRADING_CONFIG.HOLD_CONFIDENCE_FLOOR)

        self.logger = logging.getLogger(__name__)

    def classify(self, sentiment: SentimentScore) -> SignalType:
        """BUY or SELL on a dominant side above threshold, otherwise HOLD"""
        if (sentiment.positive > self.threshold and
                sentiment.positive > sentiment.negative + self.margin):
            return SignalType.BUY

        if (sentiment.negative > self.threshold and
                sentiment.negative > sentiment.positive + self.margin):
            return SignalType.SELL

        return SignalType.HOLD

    def _confidence(self, sentiment: SentimentScore, signal_type: SignalType) -> Decimal:
        if signal_type == SignalType.BUY:
            return sentiment.positive
        if signal_type == SignalType.SELL:
            return sentiment.negative
        return max(sentiment.neutral, self.hold_floor)

    def generate_signal_with_type(self, sentiment: SentimentScore,
                                  symbol: str) -> Tuple[Signal, SignalType]:
        """Generate a signal together with its classification"""
        signal_type = self.classify(sentiment)
        signal = Signal(
            symbol=symbol,
            sentiment=sentiment,
            confidence=self._confidence(sentiment, signal_type)
        )

        self.logger.debug(f"Generated {signal_type.value} signal for {symbol} with confidence {signal.confidence}")

        return signal, signal_type

    def generate_signal(self, sentiment: SentimentScore, symbol: str) -> Signal:
        """Generate a signal without its classification"""
        signal, _ = self.generate_signal_with_type(sentiment, symbol)
        return signal

    def generate_signals(self, sentiments: Mapping[str, SentimentScore]) -> List[Tuple[Signal, SignalType]]:
        """Generate signals for multiple symbols"""
        return [
            self.generate_signal_with_type(sentiment, symbol)
            for symbol, sentiment in sentiments.items()
        ]

    @staticmethod
    def signal_strength(sentiment: SentimentScore) -> int:
        """Dominant sentiment component on a 0-100 scale (truncated)"""
        strength = int(sentiment.dominant * 100)
        return min(100, max(0, strength))

    @staticmethod
    def is_actionable(signal: Signal, min_confidence=None) -> bool:
        """Check if the signal is confident enough to act on"""
        if min_confidence is None:
            min_confidence = TRADING_CONFIG.MIN_CONFIDENCE
        return signal.confidence >= to_decimal(min_confidence)

    @staticmethod
    def summarize(signals: List[Tuple[Signal, SignalType]]) -> Dict[str, int]:
        """Count signals per type"""
        counts = {signal_type.value: 0 for signal_type in SignalType}
        for _, signal_type in signals:
            counts[signal_type.value] += 1
        return counts

_default_generator = SignalGenerator()

def generate_signal(sentiment: SentimentScore, symbol: str) -> Signal:
    return _default_generator.generate_signal(sentiment, symbol)

def generate_signal_with_type(sentiment: SentimentScore, symbol: str) -> Tuple[Signal, SignalType]:
    return _default_generator.generate_signal_with_type(sentiment, symbol)

def calculate_signal_strength(sentiment: SentimentScore) -> int:
    return SignalGenerator.signal_strength(sentiment)

def is_signal_actionable(signal: Signal, min_confidence=None) -> bool:
    return SignalGenerator.is_actionable(signal, min_confidence)
