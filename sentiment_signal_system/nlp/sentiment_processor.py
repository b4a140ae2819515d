"""
Keyword sentiment scoring with a pluggable VADER backend
"""

import logging
import re
from dataclasses import dataclass
from decimal import Decimal
from typing import FrozenSet, List, Optional, Protocol, Sequence, Tuple

from vaderSentiment.vaderSentiment import SentimentIntensityAnalyzer

from ..config.settings import NLP_CONFIG
from ..utils.data_structures import Article, SentimentScore, to_decimal

logger = logging.getLogger(__name__)

POSITIVE_KEYWORDS = frozenset([
    "surge", "surges", "bull", "bullish", "gain", "gains", "profit",
    "profits", "high", "highs", "up", "rise", "rises", "growth",
    "increase", "increases", "positive", "optimistic", "success",
    "successful", "strong", "stronger", "breakthrough", "record",
    "adoption", "unprecedented", "excellent", "great", "good"
])

NEGATIVE_KEYWORDS = frozenset([
    "crash", "crashes", "bear", "bearish", "loss", "losses", "down",
    "fall", "falls", "decline", "declines", "negative", "pessimistic",
    "failure", "weak", "weaker", "concern", "concerns", "worry", "worries",
    "correction", "downturn", "plunge", "plunges", "drop", "drops",
    "risk", "risks", "fear", "fears", "warning", "warnings"
])

def preprocess_text(text: str) -> str:
    """Trim, lowercase and collapse runs of whitespace"""
    if not text:
        return ""
    return re.sub(r'\s+', ' ', text.strip().lower())

def neutral_default() -> SentimentScore:
    """Low-confidence distribution used when a text carries no signal"""
    return SentimentScore(
        positive=NLP_CONFIG.NO_HIT_POSITIVE,
        negative=NLP_CONFIG.NO_HIT_NEGATIVE,
        neutral=NLP_CONFIG.NO_HIT_NEUTRAL
    )

class SentimentAnalyzer(Protocol):
    """Anything that maps text to a SentimentScore"""

    def analyze(self, article: Article) -> SentimentScore:
        ...

    def analyze_text(self, text: str) -> SentimentScore:
        ...

@dataclass(frozen=True)
class KeywordLexicon:
    """Positive/negative keyword tables used by the keyword analyzer"""
    positive: FrozenSet[str] = POSITIVE_KEYWORDS
    negative: FrozenSet[str] = NEGATIVE_KEYWORDS

    def __post_init__(self):
        object.__setattr__(self, 'positive', frozenset(k.lower() for k in self.positive))
        object.__setattr__(self, 'negative', frozenset(k.lower() for k in self.negative))

class KeywordSentimentAnalyzer:
    """Keyword-density sentiment scorer.

    Every keyword occurrence counts, including occurrences inside longer
    words ("surges" also scores a hit for "surge"). Hit ratios are mapped
    through ``ratio * 0.85 + 0.05`` so a scored article never reports 0 or 1
    on an axis.
    """

    def __init__(self, lexicon: Optional[KeywordLexicon] = None):
        self.lexicon = lexicon or KeywordLexicon()
        self.scale = NLP_CONFIG.SCORE_SCALE
        self.offset = NLP_CONFIG.SCORE_OFFSET
        self.logger = logging.getLogger(__name__)

    def keyword_hits(self, text: str) -> Tuple[int, int]:
        """Count positive and negative keyword occurrences in text"""
        text = (text or "").lower()
        positive_hits = sum(text.count(keyword) for keyword in self.lexicon.positive)
        negative_hits = sum(text.count(keyword) for keyword in self.lexicon.negative)
        return positive_hits, negative_hits

    def score_from_ratios(self, pos_ratio, neg_ratio) -> SentimentScore:
        """Map hit ratios into score space.

        Neutral takes whatever mass is left and is floored at zero, so inputs
        whose ratios sum above one yield a distribution that sums above one.
        """
        positive = to_decimal(pos_ratio) * self.scale + self.offset
        negative = to_decimal(neg_ratio) * self.scale + self.offset
        neutral = max(Decimal(1) - positive - negative, Decimal(0))
        return SentimentScore(positive=positive, negative=negative, neutral=neutral)

    def analyze_text(self, text: str) -> SentimentScore:
        """Score raw text by keyword density"""
        positive_hits, negative_hits = self.keyword_hits(text)
        total_hits = positive_hits + negative_hits

        if total_hits == 0:
            return neutral_default()

        pos_ratio = Decimal(positive_hits) / Decimal(total_hits)
        neg_ratio = Decimal(negative_hits) / Decimal(total_hits)
        score = self.score_from_ratios(pos_ratio, neg_ratio)

        self.logger.debug(
            f"Keyword hits +{positive_hits}/-{negative_hits} -> "
            f"pos={score.positive} neg={score.negative} neu={score.neutral}"
        )
        return score

    def analyze(self, article: Article) -> SentimentScore:
        """Score an article's title and content together"""
        return self.analyze_text(article.text)

    def analyze_batch(self, articles: Sequence[Article]) -> List[SentimentScore]:
        """Score multiple articles in order"""
        return [self.analyze(article) for article in articles]

class VaderSentimentAnalyzer:
    """VADER lexicon model mapped onto the decimal sentiment distribution"""

    def __init__(self):
        self.vader = SentimentIntensityAnalyzer()
        self.logger = logging.getLogger(__name__)

    def analyze_text(self, text: str) -> SentimentScore:
        """Score raw text with the VADER polarity model"""
        scores = self.vader.polarity_scores(text or "")

        # VADER reports all zeros when it finds no tokens
        if scores['pos'] + scores['neg'] + scores['neu'] == 0:
            return neutral_default()

        return SentimentScore(
            positive=scores['pos'],
            negative=scores['neg'],
            neutral=scores['neu']
        )

    def analyze(self, article: Article) -> SentimentScore:
        return self.analyze_text(article.text)

    def analyze_batch(self, articles: Sequence[Article]) -> List[SentimentScore]:
        """Score multiple articles in order"""
        return [self.analyze(article) for article in articles]

ANALYZERS = {
    'keyword': KeywordSentimentAnalyzer,
    'vader': VaderSentimentAnalyzer,
}

def get_analyzer(name: Optional[str] = None) -> SentimentAnalyzer:
    """Build an analyzer by name, falling back to the keyword scorer"""
    key = (name or NLP_CONFIG.ANALYZER or 'keyword').strip().lower()
    if key not in ANALYZERS:
        logger.warning(f"Unknown sentiment analyzer '{key}', using keyword analyzer")
        key = 'keyword'
    return ANALYZERS[key]()

_default_analyzer = KeywordSentimentAnalyzer()

def analyze_sentiment(article: Article) -> SentimentScore:
    """Score an article with the default keyword analyzer"""
    return _default_analyzer.analyze(article)
