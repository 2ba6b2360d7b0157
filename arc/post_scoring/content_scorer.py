"""
Content scorer for ARC campaign posts.

Scores a creator post from its content type, sentiment and engagement:

    delta = round(base_points × sentiment_multiplier × (1 + engagement / 4))

where engagement = log2(likes + 2·retweets + 2·quotes + replies + 1).
"""

import math

from arc.utils.config import (
    CONTENT_TYPE_BASE_POINTS,
    SENTIMENT_MULTIPLIERS,
    RETWEET_ENGAGEMENT_WEIGHT,
    QUOTE_ENGAGEMENT_WEIGHT,
    ENGAGEMENT_BONUS_DIVISOR
)
from .models import ScoredPost


def base_points(content_type: str) -> int:
    """Base points for a content type; unknown types score 0."""
    return CONTENT_TYPE_BASE_POINTS.get(content_type, 0)


def sentiment_multiplier(sentiment: str) -> float:
    """Multiplier for a sentiment label; anything not positive/neutral counts as negative."""
    return SENTIMENT_MULTIPLIERS.get(sentiment, SENTIMENT_MULTIPLIERS['negative'])


def engagement_score(likes: int, retweets: int, quotes: int, replies: int) -> float:
    """
    Log-scaled engagement so viral outliers do not dominate.

    Returns 0 when the weighted engagement sum is not positive.
    """
    raw = likes + retweets * RETWEET_ENGAGEMENT_WEIGHT + quotes * QUOTE_ENGAGEMENT_WEIGHT + replies
    if raw <= 0:
        return 0.0
    return math.log2(raw + 1)


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def score_post(
    tweet_id: str,
    content_type: str,
    sentiment: str,
    likes: int = 0,
    retweets: int = 0,
    quotes: int = 0,
    replies: int = 0
) -> ScoredPost:
    """
    Score a single post.

    Args:
        tweet_id: Tweet identifier (carried through to the result)
        content_type: One of thread, deep_dive, meme, quote_rt, retweet, reply, other
        sentiment: positive, neutral or negative
        likes, retweets, quotes, replies: Raw engagement counts

    Returns:
        ScoredPost with the full breakdown and integer delta_points
    """
    base = base_points(content_type)
    mult = sentiment_multiplier(sentiment)
    eng = engagement_score(likes, retweets, quotes, replies)

    delta = round_half_up(base * mult * (1 + eng / ENGAGEMENT_BONUS_DIVISOR))

    return ScoredPost(
        tweet_id=tweet_id,
        content_type=content_type,
        base_points=base,
        sentiment=sentiment,
        sentiment_multiplier=mult,
        engagement_score=eng,
        delta_points=delta
    )
