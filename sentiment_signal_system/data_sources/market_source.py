"""
Market data source for price history
"""

import logging
from typing import Dict, List, Optional

import pandas as pd
import yfinance as yf

from ..config.settings import DATA_CONFIG
from ..utils.data_structures import PricePoint

class MarketDataSource:
    """Price history collector using Yahoo Finance"""

    def __init__(self, ticker_map: Optional[Dict[str, str]] = None):
        self.ticker_map = dict(ticker_map or DATA_CONFIG.CRYPTO_TICKERS)
        self.logger = logging.getLogger(__name__)

    def ticker_for(self, symbol: str) -> str:
        """Map an internal symbol to a Yahoo Finance ticker"""
        return self.ticker_map.get(symbol.upper(), symbol.upper())

    @staticmethod
    def history_to_price_points(history: pd.DataFrame) -> List[PricePoint]:
        """Convert a yfinance history frame into price points"""
        points = []
        if history is None or history.empty:
            return points

        for index, row in history.iterrows():
            close = row.get('Close')
            if close is None or pd.isna(close):
                continue

            volume = row.get('Volume')
            points.append(PricePoint(
                timestamp=int(pd.Timestamp(index).timestamp()),
                price=float(close),
                volume=None if volume is None or pd.isna(volume) else float(volume)
            ))

        return points

    def fetch_price_history(self, symbol: str, period: str = "5d",
                            interval: str = "1h") -> List[PricePoint]:
        yf_ticker = self.ticker_for(symbol)
        try:
            history = yf.Ticker(yf_ticker).history(period=period, interval=interval)
        except Exception as e:
            self.logger.error(f"Error fetching market data for {symbol} ({yf_ticker}): {e}")
            return []

        points = self.history_to_price_points(history)
        self.logger.info(f"Fetched {len(points)} price points for {symbol}")
        return points
