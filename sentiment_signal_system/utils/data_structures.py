"""
Core data structures for the sentiment signal system
"""

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Optional
from enum import Enum

from .errors import DecimalConversionError

def to_decimal(value: Any) -> Decimal:
    """Coerce a numeric value to a finite Decimal.

    Floats go through their shortest ``str`` form so ``0.66`` becomes
    ``Decimal("0.66")`` rather than its binary expansion.
    """
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, bool):
        raise DecimalConversionError(value)
    elif isinstance(value, (int, float, str)):
        try:
            result = Decimal(str(value).strip())
        except InvalidOperation:
            raise DecimalConversionError(value) from None
    else:
        raise DecimalConversionError(value)

    if not result.is_finite():
        raise DecimalConversionError(value)
    return result

class SignalType(Enum):
    BUY = "BUY"
    SELL = "SELL"
    HOLD = "HOLD"

class PriceDirection(Enum):
    UP = "UP"
    DOWN = "DOWN"
    NEUTRAL = "NEUTRAL"

@dataclass(frozen=True)
class Article:
    """News article as delivered by a provider"""
    title: str
    content: str
    source: str
    timestamp: int = 0

    @property
    def text(self) -> str:
        return f"{self.title} {self.content}"

    def to_dict(self) -> Dict:
        return {
            'title': self.title,
            'content': self.content,
            'source': self.source,
            'timestamp': self.timestamp
        }

    @classmethod
    def from_dict(cls, data: Dict) -> "Article":
        return cls(
            title=data.get('title') or '',
            content=data.get('content') or '',
            source=data.get('source') or '',
            timestamp=int(data.get('timestamp') or 0)
        )

@dataclass(frozen=True)
class SentimentScore:
    """Three-way sentiment distribution.

    Components are expected to be non-negative and to sum to 1, but values
    are stored as given; callers building scores by hand own that invariant.
    """
    positive: Decimal
    negative: Decimal
    neutral: Decimal

    def __post_init__(self):
        object.__setattr__(self, 'positive', to_decimal(self.positive))
        object.__setattr__(self, 'negative', to_decimal(self.negative))
        object.__setattr__(self, 'neutral', to_decimal(self.neutral))

    @property
    def total(self) -> Decimal:
        return self.positive + self.negative + self.neutral

    @property
    def compound(self) -> Decimal:
        """Net polarity in [-1, 1]"""
        return self.positive - self.negative

    @property
    def dominant(self) -> Decimal:
        return max(self.positive, self.negative, self.neutral)

    def to_dict(self) -> Dict:
        return {
            'positive': str(self.positive),
            'negative': str(self.negative),
            'neutral': str(self.neutral)
        }

    @classmethod
    def from_dict(cls, data: Dict) -> "SentimentScore":
        return cls(
            positive=data['positive'],
            negative=data['negative'],
            neutral=data['neutral']
        )

@dataclass(frozen=True)
class Signal:
    """Trading recommendation for a symbol"""
    symbol: str
    sentiment: SentimentScore
    confidence: Decimal

    def __post_init__(self):
        object.__setattr__(self, 'confidence', to_decimal(self.confidence))

    def to_dict(self) -> Dict:
        return {
            'symbol': self.symbol,
            'sentiment': self.sentiment.to_dict(),
            'confidence': str(self.confidence)
        }

    @classmethod
    def from_dict(cls, data: Dict) -> "Signal":
        return cls(
            symbol=data['symbol'],
            sentiment=SentimentScore.from_dict(data['sentiment']),
            confidence=data['confidence']
        )

@dataclass(frozen=True)
class PricePoint:
    """Price observation at a point in time (epoch seconds)"""
    timestamp: int
    price: Decimal
    volume: Optional[Decimal] = None

    def __post_init__(self):
        object.__setattr__(self, 'price', to_decimal(self.price))
        if self.volume is not None:
            object.__setattr__(self, 'volume', to_decimal(self.volume))

    def to_dict(self) -> Dict:
        return {
            'timestamp': self.timestamp,
            'price': str(self.price),
            'volume': str(self.volume) if self.volume is not None else None
        }

    @classmethod
    def from_dict(cls, data: Dict) -> "PricePoint":
        return cls(
            timestamp=int(data['timestamp']),
            price=data['price'],
            volume=data.get('volume')
        )

@dataclass(frozen=True)
class CorrelationData:
    """Sentiment/price correlation statistics"""
    correlation_coefficient: Decimal
    lag_hours: int
    sample_size: int

    def __post_init__(self):
        object.__setattr__(self, 'correlation_coefficient', to_decimal(self.correlation_coefficient))

    @classmethod
    def empty(cls) -> "CorrelationData":
        return cls(correlation_coefficient=Decimal("0"), lag_hours=0, sample_size=0)

    def to_dict(self) -> Dict:
        return {
            'correlation_coefficient': str(self.correlation_coefficient),
            'lag_hours': self.lag_hours,
            'sample_size': self.sample_size
        }

    @classmethod
    def from_dict(cls, data: Dict) -> "CorrelationData":
        return cls(
            correlation_coefficient=data['correlation_coefficient'],
            lag_hours=int(data['lag_hours']),
            sample_size=int(data['sample_size'])
        )
