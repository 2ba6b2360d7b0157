"""Data models for ARC post scoring."""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

CONTENT_TYPES = ('thread', 'deep_dive', 'meme', 'quote_rt', 'retweet', 'reply', 'other')
SENTIMENTS = ('positive', 'neutral', 'negative')
RING_KEYS = ('core', 'momentum', 'discovery')


@dataclass
class EngagementMetrics:
    likes: int = 0
    retweets: int = 0
    quotes: int = 0
    replies: int = 0

    @classmethod
    def from_tweet(cls, tweet: Dict[str, Any]) -> 'EngagementMetrics':
        """Build metrics from a normalized tweet dict."""
        return cls(
            likes=tweet.get('favorite_count') or 0,
            retweets=tweet.get('retweet_count') or 0,
            quotes=tweet.get('quote_count') or 0,
            replies=tweet.get('reply_count') or 0
        )


@dataclass
class ScoredPost:
    """Full scoring breakdown for a single post."""
    tweet_id: str
    content_type: str
    base_points: int
    sentiment: str
    sentiment_multiplier: float
    engagement_score: float
    delta_points: int


@dataclass
class ArcCreatorContext:
    """A creator participating in an arena, as read from storage."""
    profile_id: str
    arena_id: str
    project_id: str
    twitter_username: str
    current_points: int
    current_ring: Optional[str] = None

    @classmethod
    def from_row(cls, row: Dict[str, Any], arena: Optional[Dict[str, Any]]) -> 'ArcCreatorContext':
        """Build a context from an arena_creators row and its arena."""
        ring = row.get('ring')
        try:
            current_points = int(float(row.get('arc_points') or 0))
        except (TypeError, ValueError):
            current_points = 0
        return cls(
            profile_id=row.get('profile_id', ''),
            arena_id=row.get('arena_id', ''),
            project_id=(arena or {}).get('project_id') or '',
            twitter_username=(row.get('twitter_username') or '').lstrip('@'),
            current_points=current_points,
            current_ring=ring if ring in RING_KEYS else None
        )


@dataclass
class ArcScoringInput:
    """Input for scoring a single Creator Manager post."""
    content_type: str
    sentiment: str
    engagement: EngagementMetrics = field(default_factory=EngagementMetrics)
    tweet_id: str = ''


@dataclass
class ArcScoringJobResult:
    processed_creators: int = 0
    processed_tweets: int = 0
    updated_points: int = 0


@dataclass
class AddArcPointsResult:
    success: bool
    points_awarded: int
    new_total_points: int
    error: Optional[str] = None
