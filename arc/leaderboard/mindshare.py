"""
Project mindshare.

Each project's attention value is a log-scaled weighted sum of posts,
unique creators, engagement and CT heat, multiplied by bounded quality
factors. Attention values across projects in a window are then
normalized to basis points summing to 10,000.
"""

import math
from dataclasses import dataclass
from typing import Dict, List, Sequence, Tuple
import numpy as np

from arc.utils.config import (
    MINDSHARE_TOTAL_BPS,
    MINDSHARE_W1_POSTS,
    MINDSHARE_W2_CREATORS,
    MINDSHARE_W3_ENGAGEMENT,
    MINDSHARE_W4_CT_HEAT,
    MINDSHARE_CREATOR_ORG_BOUNDS,
    MINDSHARE_AUDIENCE_ORG_BOUNDS,
    MINDSHARE_ORIGINALITY_BOUNDS,
    MINDSHARE_SENTIMENT_BOUNDS,
    MINDSHARE_SMART_FOLLOWERS_BOUNDS
)


@dataclass
class MindshareInputs:
    posts_or_mentions: int = 0
    unique_creators: int = 0
    engagement_total: float = 0
    ct_heat_norm: float = 0            # 0-100
    creator_organic_score: float = 75  # 0-100
    audience_organic_score: float = 75  # 0-100
    originality_score: float = 80      # 0-100
    sentiment_multiplier: float = 1.0
    smart_followers_boost: float = 1.0
    keyword_match_strength: float = 1.0


def _clamp(value: float, bounds: Tuple[float, float]) -> float:
    low, high = bounds
    return max(low, min(high, value))


def calculate_attention_value(inputs: MindshareInputs) -> float:
    """Raw attention value before normalization, never negative."""
    core = (
        MINDSHARE_W1_POSTS * math.log1p(inputs.posts_or_mentions) +
        MINDSHARE_W2_CREATORS * math.log1p(inputs.unique_creators) +
        MINDSHARE_W3_ENGAGEMENT * math.log1p(inputs.engagement_total) +
        MINDSHARE_W4_CT_HEAT * inputs.ct_heat_norm
    )

    quality = (
        _clamp(inputs.creator_organic_score / 100, MINDSHARE_CREATOR_ORG_BOUNDS) *
        _clamp(inputs.audience_organic_score / 100, MINDSHARE_AUDIENCE_ORG_BOUNDS) *
        _clamp(inputs.originality_score / 100, MINDSHARE_ORIGINALITY_BOUNDS) *
        _clamp(inputs.sentiment_multiplier, MINDSHARE_SENTIMENT_BOUNDS) *
        _clamp(inputs.smart_followers_boost, MINDSHARE_SMART_FOLLOWERS_BOUNDS)
    )

    return max(0.0, core * quality * inputs.keyword_match_strength)


def matches_keywords(text: str, keywords: Sequence[str]) -> bool:
    lower = (text or '').lower()
    for keyword in keywords:
        k = keyword.lower()
        if k in lower or f"${k}" in lower or f"@{k}" in lower:
            return True
    return False


def aggregate_window_metrics(
    tweets: List[Dict],
    keywords: Sequence[str] = (),
    ct_heat_norm: float = 0
) -> MindshareInputs:
    """
    Aggregate a window of project tweets into mindshare inputs.

    With keywords, only matching tweets count; without, all tweets count at
    a reduced keyword strength of 0.8. Engagement weights replies 2x and
    retweets 3x; missing sentiment scores count as 50.
    """
    keywords = [k for k in keywords if k]
    relevant = [t for t in tweets if matches_keywords(t.get('text', ''), keywords)] if keywords else list(tweets)

    creators = {(t.get('author_handle') or t.get('author') or '').lower() for t in relevant}
    engagement_total = sum(
        (t.get('likes', t.get('favorite_count')) or 0) +
        (t.get('replies', t.get('reply_count')) or 0) * 2 +
        (t.get('retweets', t.get('retweet_count')) or 0) * 3
        for t in relevant
    )

    if relevant:
        avg_sentiment = sum(
            t['sentiment_score'] if t.get('sentiment_score') is not None else 50 for t in relevant
        ) / len(relevant)
    else:
        avg_sentiment = 50

    return MindshareInputs(
        posts_or_mentions=len(relevant),
        unique_creators=len(creators),
        engagement_total=engagement_total,
        ct_heat_norm=ct_heat_norm,
        sentiment_multiplier=0.8 + (avg_sentiment / 100) * 0.4,
        keyword_match_strength=1.0 if keywords else 0.8
    )


def calculate_project_attention(
    tweets: List[Dict],
    keywords: Sequence[str] = (),
    ct_heat_norm: float = 0
) -> float:
    """Attention value for one project's window; 0 when it has no tweets."""
    if not tweets:
        return 0.0
    return calculate_attention_value(aggregate_window_metrics(tweets, keywords, ct_heat_norm))


def normalize_mindshare_bps(attention_values: List[Tuple[str, float]]) -> Dict[str, int]:
    """
    Split 10,000 basis points across projects in proportion to attention.

    Shares are floored and the remainder handed out one point at a time to
    the highest-attention projects. If total attention is zero, points are
    split evenly with the remainder going to the first entries.

    Args:
        attention_values: (project_id, attention_value) pairs

    Returns:
        Dict mapping project_id to bps; sums to 10,000 when non-empty
    """
    if not attention_values:
        return {}

    count = len(attention_values)
    total = sum(max(0.0, value) for _, value in attention_values)

    if total == 0:
        per_project, remainder = divmod(MINDSHARE_TOTAL_BPS, count)
        return {
            project_id: per_project + (1 if i < remainder else 0)
            for i, (project_id, _) in enumerate(attention_values)
        }

    ranked = sorted(attention_values, key=lambda pair: pair[1], reverse=True)
    values = np.array([max(0.0, value) for _, value in ranked], dtype=float)
    shares = np.floor(values / total * MINDSHARE_TOTAL_BPS).astype(int)

    remainder = MINDSHARE_TOTAL_BPS - int(shares.sum())
    for i in range(min(max(remainder, 0), count)):
        shares[i] += 1

    return {project_id: int(bps) for (project_id, _), bps in zip(ranked, shares)}
