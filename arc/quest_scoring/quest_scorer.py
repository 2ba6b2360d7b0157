"""
Quest post scoring.

A submitted post earns a quality score out of 100 from four bounded
components, then up to a 10% boost from engagement on X:

- alignment  (0-70): objective phrases covered, higher base with brand attribution
- compliance (0-15): campaign link used, brand attributed
- clarity    (0-10): length, penalized for link spam and shouting
- safety     (0-5):  scam-language keywords
"""

import math
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple
import bittensor as bt

from arc.utils.config import (
    QUEST_ENGAGEMENT_CAP,
    QUEST_MAX_ENGAGEMENT_BOOST,
    QUEST_SAFETY_FLAGS
)

MIN_OBJECTIVE_PHRASE_LENGTH = 6
_OBJECTIVE_SPLIT_RE = re.compile(r'[.\n;•\-]')
_URL_RE = re.compile(r'https?://\S+', re.IGNORECASE)


@dataclass
class QuestScoreInput:
    text: str
    used_campaign_link: bool
    brand_attribution: bool
    platform: str
    objectives: Optional[str] = None
    likes: Optional[int] = None
    replies: Optional[int] = None
    reposts: Optional[int] = None


@dataclass
class QuestScoreResult:
    alignment_score: int
    compliance_score: int
    clarity_score: int
    safety_score: int
    post_quality_score: int
    post_final_score: float
    engagement_metric: float
    engagement_boost: float
    reason: Dict[str, Any] = field(default_factory=dict)


def clamp(value, low, high):
    return max(low, min(high, value))


def extract_objective_phrases(objectives: Optional[str]) -> List[str]:
    """Split free-text objectives into phrases of at least 6 characters."""
    if not objectives:
        return []
    phrases = [p.strip() for p in _OBJECTIVE_SPLIT_RE.split(objectives)]
    return [p for p in phrases if len(p) >= MIN_OBJECTIVE_PHRASE_LENGTH]


def compute_alignment_score(text: str, objectives: Optional[str] = None, brand_attribution: bool = False) -> int:
    if not text:
        return 0
    phrases = extract_objective_phrases(objectives)
    if not phrases:
        return 40 if brand_attribution else 20

    lower = text.lower()
    matched = [p for p in phrases if p.lower() in lower]
    ratio = len(matched) / len(phrases)
    base = 25 if brand_attribution else 10
    score = int(math.floor(base + 45 * ratio + 0.5))
    return clamp(score, 0, 70)


def compute_compliance_score(used_campaign_link: bool, brand_attribution: bool) -> int:
    score = 0
    if used_campaign_link:
        score += 8
    if brand_attribution:
        score += 7
    return clamp(score, 0, 15)


def compute_clarity_score(text: str) -> int:
    if not text:
        return 0
    trimmed = text.strip()
    length = len(trimmed)

    if length >= 120:
        score = 10
    elif length >= 80:
        score = 8
    elif length >= 40:
        score = 6
    elif length >= 20:
        score = 4
    else:
        score = 2

    if len(_URL_RE.findall(trimmed)) > 3:
        score -= 2

    alpha = re.sub(r'[^a-zA-Z]', '', trimmed)
    if len(alpha) > 10:
        upper = len(re.sub(r'[^A-Z]', '', alpha))
        if upper / len(alpha) > 0.6:
            score -= 2

    return clamp(score, 0, 10)


def compute_safety_score(text: str) -> int:
    if not text:
        return 0
    lower = text.lower()
    if any(flag in lower for flag in QUEST_SAFETY_FLAGS):
        return 2
    return 5


def compute_engagement_boost(likes: float = 0, replies: float = 0, reposts: float = 0) -> Tuple[float, float]:
    """
    Log-scaled engagement boost in [0, 1].

    Returns:
        Tuple of (engagement_metric, boost)
    """
    metric = max(0, float(likes) + float(replies) + 2 * float(reposts))
    boost = math.log1p(metric) / math.log1p(QUEST_ENGAGEMENT_CAP)
    return metric, clamp(boost, 0.0, 1.0)


def score_quest_post(quest_input: QuestScoreInput) -> QuestScoreResult:
    """
    Score a quest submission.

    Returns:
        QuestScoreResult; post_final_score is always within [0, 110]
    """
    alignment_score = compute_alignment_score(
        quest_input.text, quest_input.objectives, quest_input.brand_attribution
    )
    compliance_score = compute_compliance_score(
        quest_input.used_campaign_link, quest_input.brand_attribution
    )
    clarity_score = compute_clarity_score(quest_input.text)
    safety_score = compute_safety_score(quest_input.text)
    post_quality_score = clamp(alignment_score + compliance_score + clarity_score + safety_score, 0, 100)

    # Engagement only counts for X posts
    if quest_input.platform == 'x':
        engagement_metric, engagement_boost = compute_engagement_boost(
            quest_input.likes or 0, quest_input.replies or 0, quest_input.reposts or 0
        )
    else:
        engagement_metric, engagement_boost = 0, 0.0

    post_final_score = round(post_quality_score * (1 + QUEST_MAX_ENGAGEMENT_BOOST * engagement_boost), 2)

    bt.logging.debug(
        f"Quest post scored: quality={post_quality_score} "
        f"(alignment={alignment_score}, compliance={compliance_score}, "
        f"clarity={clarity_score}, safety={safety_score}), final={post_final_score}"
    )

    return QuestScoreResult(
        alignment_score=alignment_score,
        compliance_score=compliance_score,
        clarity_score=clarity_score,
        safety_score=safety_score,
        post_quality_score=post_quality_score,
        post_final_score=post_final_score,
        engagement_metric=engagement_metric,
        engagement_boost=engagement_boost,
        reason={
            'alignment': {'score': alignment_score},
            'compliance': {
                'score': compliance_score,
                'used_campaign_link': quest_input.used_campaign_link,
                'brand_attribution': quest_input.brand_attribution
            },
            'clarity': {'score': clarity_score},
            'safety': {'score': safety_score},
            'engagement': {'metric': engagement_metric, 'boost': engagement_boost}
        }
    )
