"""
Sentiment/price correlation analysis
"""

import logging
from decimal import Decimal
from typing import List, Optional, Sequence, Tuple

import numpy as np
import pandas as pd

from ..config.settings import CORRELATION_CONFIG
from ..utils.data_structures import (
    CorrelationData, PriceDirection, PricePoint, SentimentScore, to_decimal
)

SECONDS_PER_HOUR = 3600
MIN_PAIRED_SAMPLES = 2

TimedSentiment = Tuple[int, SentimentScore]

class CorrelationAnalyzer:
    """Relate a timestamped sentiment series to a price series.

    Price reactions are the percentage changes between consecutive price
    points, stamped at the later point. At lag L a sentiment observed at t is
    paired with the first reaction stamped at or after t + L hours, and the
    coefficient is Pearson's r over those pairs.
    """

    def __init__(self, max_lag_hours: Optional[int] = None, places: Optional[int] = None):
        self.max_lag_hours = CORRELATION_CONFIG.MAX_LAG_HOURS if max_lag_hours is None else max_lag_hours
        self.places = CORRELATION_CONFIG.COEFFICIENT_PLACES if places is None else places
        self.direction_threshold = CORRELATION_CONFIG.DIRECTION_THRESHOLD
        self.logger = logging.getLogger(__name__)

    def _quantize(self, value: float) -> Decimal:
        return Decimal(str(round(float(value), self.places))).quantize(Decimal(1).scaleb(-self.places))

    @staticmethod
    def _sentiment_frame(sentiments: Sequence[TimedSentiment]) -> pd.DataFrame:
        frame = pd.DataFrame({
            'timestamp': [int(timestamp) for timestamp, _ in sentiments],
            'sentiment': [float(score.compound) for _, score in sentiments]
        })
        frame['timestamp'] = frame['timestamp'].astype('int64')
        return frame.sort_values('timestamp', kind='mergesort').reset_index(drop=True)

    @staticmethod
    def _return_frame(prices: Sequence[PricePoint]) -> pd.DataFrame:
        frame = pd.DataFrame({
            'return_timestamp': [int(point.timestamp) for point in prices],
            'price': [float(point.price) for point in prices]
        })
        frame['return_timestamp'] = frame['return_timestamp'].astype('int64')
        frame = (frame.sort_values('return_timestamp', kind='mergesort')
                 .drop_duplicates('return_timestamp', keep='last'))

        previous = frame['price'].shift(1)
        frame['return'] = (frame['price'] - previous) / previous
        frame = frame.replace([np.inf, -np.inf], np.nan).dropna(subset=['return'])
        return frame[['return_timestamp', 'return']].reset_index(drop=True)

    def _lag_coefficient(self, sentiment_frame: pd.DataFrame,
                         return_frame: pd.DataFrame, lag_hours: int) -> Decimal:
        """Pearson r of sentiments against the returns L hours later"""
        if len(sentiment_frame) < MIN_PAIRED_SAMPLES or return_frame.empty:
            return Decimal(0)

        shifted = sentiment_frame.assign(
            target=sentiment_frame['timestamp'] + lag_hours * SECONDS_PER_HOUR
        )
        pairs = pd.merge_asof(
            shifted, return_frame,
            left_on='target', right_on='return_timestamp',
            direction='forward'
        ).dropna(subset=['return'])

        if len(pairs) < MIN_PAIRED_SAMPLES:
            return Decimal(0)
        if pairs['sentiment'].nunique() < 2 or pairs['return'].nunique() < 2:
            return Decimal(0)

        coefficient = pairs['sentiment'].corr(pairs['return'])
        if np.isnan(coefficient):
            return Decimal(0)
        return self._quantize(coefficient)

    def sentiment_lag_curve(self, sentiments: Sequence[TimedSentiment],
                            prices: Sequence[PricePoint],
                            max_lag_hours: int) -> List[Tuple[int, Decimal]]:
        """Correlation for every integer lag in [0, max_lag_hours]"""
        if max_lag_hours < 0:
            return []
        if not sentiments or not prices:
            return [(lag, Decimal(0)) for lag in range(max_lag_hours + 1)]

        sentiment_frame = self._sentiment_frame(sentiments)
        return_frame = self._return_frame(prices)

        return [
            (lag, self._lag_coefficient(sentiment_frame, return_frame, lag))
            for lag in range(max_lag_hours + 1)
        ]

    def correlation(self, sentiments: Sequence[TimedSentiment],
                    prices: Sequence[PricePoint]) -> CorrelationData:
        """Strongest sentiment/price correlation across the configured lags"""
        if not sentiments or not prices:
            return CorrelationData.empty()

        sample_size = min(len(sentiments), len(prices))
        curve = self.sentiment_lag_curve(sentiments, prices, self.max_lag_hours)

        # largest |r| wins, ties go to the shortest lag
        lag_hours, coefficient = max(curve, key=lambda entry: (abs(entry[1]), -entry[0]))

        self.logger.debug(f"Correlation {coefficient} at lag {lag_hours}h over {sample_size} samples")

        return CorrelationData(
            correlation_coefficient=coefficient,
            lag_hours=lag_hours,
            sample_size=sample_size
        )

    @staticmethod
    def price_change_percent(old_price, new_price) -> Decimal:
        """Percentage change from old to new, 0 when old is 0"""
        old_price = to_decimal(old_price)
        new_price = to_decimal(new_price)
        if old_price == 0:
            return Decimal(0)
        return ((new_price - old_price) / old_price) * 100

    def predict_direction(self, sentiment: SentimentScore) -> PriceDirection:
        """Expected move from a dominant positive or negative score"""
        if sentiment.positive > self.direction_threshold:
            return PriceDirection.UP
        if sentiment.negative > self.direction_threshold:
            return PriceDirection.DOWN
        return PriceDirection.NEUTRAL

    @staticmethod
    def price_target(current_price, sentiment: SentimentScore, volatility) -> Decimal:
        """Move the current price by net sentiment scaled with volatility"""
        expected_change = sentiment.compound * to_decimal(volatility)
        return to_decimal(current_price) * (1 + expected_change)

    @staticmethod
    def historical_volatility(prices: Sequence[PricePoint], places: int = 6) -> Decimal:
        """Sample standard deviation of consecutive price returns"""
        ordered = sorted(prices, key=lambda point: point.timestamp)
        if len(ordered) < 3:
            return Decimal(0)

        closes = np.array([float(point.price) for point in ordered])
        with np.errstate(divide='ignore', invalid='ignore'):
            returns = np.diff(closes) / closes[:-1]
        returns = returns[np.isfinite(returns)]
        if len(returns) < 2:
            return Decimal(0)

        volatility = float(np.std(returns, ddof=1))
        return Decimal(str(round(volatility, places)))

_default_analyzer = CorrelationAnalyzer()

def calculate_correlation(sentiments: Sequence[TimedSentiment],
                          prices: Sequence[PricePoint]) -> CorrelationData:
    return _default_analyzer.correlation(sentiments, prices)

def analyze_sentiment_lag(sentiments: Sequence[TimedSentiment],
                          prices: Sequence[PricePoint],
                          max_lag_hours: int) -> List[Tuple[int, Decimal]]:
    return _default_analyzer.sentiment_lag_curve(sentiments, prices, max_lag_hours)

def calculate_price_change(old_price, new_price) -> Decimal:
    return CorrelationAnalyzer.price_change_percent(old_price, new_price)

def predict_price_direction(sentiment: SentimentScore) -> PriceDirection:
    return _default_analyzer.predict_direction(sentiment)

def calculate_price_target(current_price, sentiment: SentimentScore, volatility) -> Decimal:
    return CorrelationAnalyzer.price_target(current_price, sentiment, volatility)
