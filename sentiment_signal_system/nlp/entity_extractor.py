"""
Market symbol extraction from free text
"""

import re
from typing import List, Optional, Sequence

from ..config.settings import DATA_CONFIG, TRADING_CONFIG

class EntityExtractor:
    """Finds known market symbols in text.

    Results follow the configured symbol order, not order of appearance.
    """

    def __init__(self, symbols: Optional[Sequence[str]] = None,
                 word_boundaries: Optional[bool] = None):
        if symbols is None:
            symbols = DATA_CONFIG.SYMBOLS
        self.symbols = tuple(s.upper() for s in symbols)
        if word_boundaries is None:
            word_boundaries = DATA_CONFIG.ENTITY_WORD_BOUNDARIES
        self.word_boundaries = word_boundaries
        self._patterns = {
            symbol: re.compile(rf'\b{re.escape(symbol)}\b')
            for symbol in self.symbols
        }

    def _matches(self, symbol: str, upper_text: str) -> bool:
        if self.word_boundaries:
            return self._patterns[symbol].search(upper_text) is not None
        return symbol in upper_text

    def extract(self, text: str) -> List[str]:
        """Symbols mentioned in the text, each at most once"""
        upper_text = (text or "").upper()
        return [symbol for symbol in self.symbols if self._matches(symbol, upper_text)]

    def primary_symbol(self, text: str, default: Optional[str] = None) -> str:
        """First recognised symbol, or the market-wide default"""
        entities = self.extract(text)
        if entities:
            return entities[0]
        return TRADING_CONFIG.DEFAULT_SYMBOL if default is None else default

_default_extractor = EntityExtractor()

def extract_entities(text: str) -> List[str]:
    return _default_extractor.extract(text)
