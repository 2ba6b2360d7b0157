"""
Keyword-based sentiment analysis for creator posts.

Scores text from 0 to 100 without calling an external service:
0-40 negative, 41-59 neutral, 60-100 positive.
"""

import re
from typing import Dict, List

# Weights on a 1-3 scale
POSITIVE_KEYWORDS: Dict[str, int] = {
    'amazing': 3, 'excellent': 3, 'incredible': 3, 'fantastic': 3, 'brilliant': 3,
    'outstanding': 3, 'exceptional': 3, 'phenomenal': 3, 'bullish': 3, 'moon': 3,
    'gem': 3, 'winner': 3, 'best': 3, 'love': 3, 'perfect': 3,

    'great': 2, 'good': 2, 'nice': 2, 'happy': 2, 'excited': 2, 'awesome': 2,
    'solid': 2, 'strong': 2, 'growing': 2, 'bullrun': 2, 'pump': 2,
    'buy': 2, 'accumulate': 2, 'opportunity': 2, 'potential': 2, 'promising': 2,
    'undervalued': 2, 'innovation': 2, 'revolutionary': 2,

    'okay': 1, 'fine': 1, 'interesting': 1, 'cool': 1, 'up': 1, 'green': 1,
    'gain': 1, 'profit': 1, 'win': 1, 'positive': 1, 'support': 1, 'like': 1,
}

NEGATIVE_KEYWORDS: Dict[str, int] = {
    'scam': 3, 'fraud': 3, 'rug': 3, 'rugpull': 3, 'terrible': 3, 'awful': 3,
    'horrible': 3, 'disaster': 3, 'crash': 3, 'dump': 3, 'dead': 3, 'worthless': 3,
    'hate': 3, 'worst': 3, 'avoid': 3, 'ponzi': 3, 'fake': 3,

    'bad': 2, 'bearish': 2, 'sell': 2, 'selling': 2, 'drop': 2, 'fall': 2,
    'failing': 2, 'failed': 2, 'poor': 2, 'weak': 2, 'worried': 2, 'concern': 2,
    'risk': 2, 'risky': 2, 'overvalued': 2, 'bubble': 2, 'warning': 2,

    'down': 1, 'red': 1, 'loss': 1, 'lose': 1, 'problem': 1, 'issue': 1,
    'bug': 1, 'delay': 1, 'slow': 1, 'meh': 1, 'boring': 1,
}

# Multiply the weight of the next sentiment word
INTENSIFIERS: Dict[str, float] = {
    'very': 1.5, 'really': 1.5, 'extremely': 2, 'super': 1.5, 'so': 1.3,
    'absolutely': 2, 'totally': 1.5, 'completely': 1.5, 'highly': 1.5,
}

# Flip the polarity of the next sentiment word
NEGATORS = {
    'not', 'no', 'never', 'neither', 'nobody', 'nothing', 'nowhere',
    "don't", "doesn't", "didn't", "won't", "wouldn't", "couldn't",
    "shouldn't", "isn't", "aren't", "wasn't", "weren't", "ain't",
}

NEUTRAL_SCORE = 50
COMPRESSION_FACTOR = 0.6
POSITIVE_THRESHOLD = 60
NEGATIVE_THRESHOLD = 40

_URL_RE = re.compile(r'https?://\S+')
_MENTION_RE = re.compile(r'@\w+')
_CASHTAG_RE = re.compile(r'\$\w+')
_HASHTAG_RE = re.compile(r'#(\w+)')
_TOKEN_SPLIT_RE = re.compile(r'[\s,.!?;:\'"()\[\]{}]+')


def tokenize(text: str) -> List[str]:
    cleaned = _URL_RE.sub('', text.lower())
    cleaned = _MENTION_RE.sub('', cleaned)
    cleaned = _HASHTAG_RE.sub(r'\1', cleaned)
    return [word for word in _TOKEN_SPLIT_RE.split(cleaned) if len(word) > 1]


def analyze_sentiment(text: str) -> int:
    """
    Analyze sentiment of a single text.

    Returns:
        Score from 0 to 100; 50 for empty text or text with no sentiment words
    """
    if not text or len(text.strip()) < 3:
        return NEUTRAL_SCORE

    tokens = tokenize(text)

    positive_score = 0.0
    negative_score = 0.0
    intensifier = 1.0
    negated = False

    for i, word in enumerate(tokens):
        if word in NEGATORS:
            negated = True
            continue

        if word in INTENSIFIERS:
            intensifier = INTENSIFIERS[word]
            continue

        if word in POSITIVE_KEYWORDS or word in NEGATIVE_KEYWORDS:
            is_positive = word in POSITIVE_KEYWORDS
            weight = (POSITIVE_KEYWORDS[word] if is_positive else NEGATIVE_KEYWORDS[word]) * intensifier
            if is_positive != negated:
                positive_score += weight
            else:
                negative_score += weight
            intensifier = 1.0
            negated = False
            continue

        if i > 0:
            intensifier = 1.0
            negated = False

    total_weight = positive_score + negative_score
    if total_weight == 0:
        return NEUTRAL_SCORE

    raw_score = (positive_score / total_weight) * 100

    # Pull toward neutral so a single keyword cannot produce an extreme score
    compressed = NEUTRAL_SCORE + (raw_score - NEUTRAL_SCORE) * COMPRESSION_FACTOR

    return int(max(0, min(100, compressed + 0.5)))


def get_sentiment_label(score: float) -> str:
    """Map a 0-100 sentiment score to positive, neutral or negative."""
    if score >= POSITIVE_THRESHOLD:
        return 'positive'
    if score <= NEGATIVE_THRESHOLD:
        return 'negative'
    return 'neutral'


def clean_tweet_text(text: str) -> str:
    """Strip URLs, mentions, cashtags, hashtag signs and RT prefix; collapse whitespace."""
    cleaned = _URL_RE.sub('', text)
    cleaned = _MENTION_RE.sub('', cleaned)
    cleaned = _CASHTAG_RE.sub('', cleaned)
    cleaned = _HASHTAG_RE.sub(r'\1', cleaned)
    cleaned = re.sub(r'^RT\s+', '', cleaned, flags=re.IGNORECASE)
    return re.sub(r'\s+', ' ', cleaned).strip()


def analyze_tweet_sentiments(tweets: List[Dict]) -> List[Dict]:
    """Return copies of tweets with a 'sentiment_score' field added."""
    return [{**tweet, 'sentiment_score': analyze_sentiment(tweet.get('text', ''))} for tweet in tweets]
