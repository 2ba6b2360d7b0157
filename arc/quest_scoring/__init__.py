"""
Quest scoring module for evaluating quest submissions.

Scores submitted posts on objective alignment, campaign compliance,
clarity and safety, with a bounded engagement boost.
"""

from .quest_scorer import (
    QuestScoreInput,
    QuestScoreResult,
    score_quest_post,
    extract_objective_phrases
)
from .brand_aliases import normalize_brand_aliases, detect_brand_attribution

__all__ = [
    'QuestScoreInput',
    'QuestScoreResult',
    'score_quest_post',
    'extract_objective_phrases',
    'normalize_brand_aliases',
    'detect_brand_attribution'
]
