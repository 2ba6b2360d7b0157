"""
ARC post scoring module.

Classifies creator posts, scores them with the ARC formula
(base * sentiment multiplier * engagement bonus) and credits the
points to arenas and Creator Manager programs.
"""

from .content_scorer import score_post, base_points, sentiment_multiplier, engagement_score
from .content_classifier import PostClassifier, classify_post
from .sentiment_analyzer import analyze_sentiment, get_sentiment_label
from .creator_manager import (
    calculate_arc_points_for_creator_manager,
    calculate_arc_points_detailed,
    add_arc_points_for_creator_manager,
    score_and_add_arc_points
)
from .models import (
    EngagementMetrics,
    ScoredPost,
    ArcCreatorContext,
    ArcScoringInput,
    ArcScoringJobResult,
    AddArcPointsResult
)
from .scoring_job import run_arc_scoring_job

__all__ = [
    'score_post',
    'base_points',
    'sentiment_multiplier',
    'engagement_score',
    'PostClassifier',
    'classify_post',
    'analyze_sentiment',
    'get_sentiment_label',
    'calculate_arc_points_for_creator_manager',
    'calculate_arc_points_detailed',
    'add_arc_points_for_creator_manager',
    'score_and_add_arc_points',
    'EngagementMetrics',
    'ScoredPost',
    'ArcCreatorContext',
    'ArcScoringInput',
    'ArcScoringJobResult',
    'AddArcPointsResult',
    'run_arc_scoring_job'
]
