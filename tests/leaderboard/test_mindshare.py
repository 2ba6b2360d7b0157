"""
Tests for project mindshare calculation and BPS normalization.
"""

import math
import pytest

from arc.leaderboard.mindshare import (
    MindshareInputs,
    calculate_attention_value,
    aggregate_window_metrics,
    calculate_project_attention,
    normalize_mindshare_bps,
    matches_keywords
)

TWEETS = [
    {'author_handle': 'Alice', 'text': 'love $ARCD', 'likes': 10, 'replies': 2, 'retweets': 1, 'sentiment_score': 80},
    {'author_handle': 'alice', 'text': 'ARCD is live', 'likes': 1, 'replies': 0, 'retweets': 0, 'sentiment_score': None},
    {'author_handle': 'bob', 'text': 'unrelated', 'likes': 100},
]


class TestAttentionValue:

    def test_empty_inputs(self):
        assert calculate_attention_value(MindshareInputs()) == 0.0

    def test_posts_only(self):
        value = calculate_attention_value(MindshareInputs(posts_or_mentions=9))
        # 0.25 * ln(10) * (0.75 * 0.75 * 0.8 * 1.0 * 1.0)
        assert value == pytest.approx(0.25 * math.log(10) * 0.45)

    def test_quality_multipliers_are_clamped(self):
        base = dict(posts_or_mentions=5, unique_creators=3, engagement_total=100, ct_heat_norm=40)
        extreme = calculate_attention_value(MindshareInputs(
            **base, creator_organic_score=900, audience_organic_score=900, originality_score=900,
            sentiment_multiplier=9, smart_followers_boost=9
        ))
        capped = calculate_attention_value(MindshareInputs(
            **base, creator_organic_score=150, audience_organic_score=150, originality_score=130,
            sentiment_multiplier=1.2, smart_followers_boost=1.5
        ))
        assert extreme == pytest.approx(capped)

    def test_never_negative(self):
        assert calculate_attention_value(MindshareInputs(ct_heat_norm=-100)) == 0.0


class TestAggregateWindowMetrics:

    def test_with_keywords(self):
        inputs = aggregate_window_metrics(TWEETS, ['arcd'])
        assert inputs.posts_or_mentions == 2
        assert inputs.unique_creators == 1
        # 10 + 2*2 + 1*3 for the first tweet, 1 for the second
        assert inputs.engagement_total == 18
        assert inputs.sentiment_multiplier == pytest.approx(0.8 + 0.65 * 0.4)
        assert inputs.keyword_match_strength == 1.0

    def test_without_keywords(self):
        inputs = aggregate_window_metrics(TWEETS, [])
        assert inputs.posts_or_mentions == 3
        assert inputs.unique_creators == 2
        assert inputs.engagement_total == 118
        assert inputs.keyword_match_strength == 0.8

    def test_ct_heat_passed_through(self):
        assert aggregate_window_metrics(TWEETS, ct_heat_norm=42).ct_heat_norm == 42

    def test_matches_keywords_variants(self):
        assert matches_keywords("gm @ARCD fam", ['arcd'])
        assert not matches_keywords("gm fam", ['arcd'])

    def test_project_attention(self):
        assert calculate_project_attention([], ['arcd']) == 0.0
        assert calculate_project_attention(TWEETS, ['arcd']) > 0


class TestNormalizeMindshareBps:

    def test_empty(self):
        assert normalize_mindshare_bps([]) == {}

    def test_proportional(self):
        assert normalize_mindshare_bps([('a', 3.0), ('b', 1.0)]) == {'a': 7500, 'b': 2500}

    def test_remainder_goes_to_top_projects(self):
        result = normalize_mindshare_bps([('a', 1.0), ('b', 1.0), ('c', 1.0)])
        assert result == {'a': 3334, 'b': 3333, 'c': 3333}

    def test_all_zero_splits_evenly(self):
        result = normalize_mindshare_bps([('a', 0), ('b', 0), ('c', 0)])
        assert result == {'a': 3334, 'b': 3333, 'c': 3333}

    @pytest.mark.parametrize("values", [
        [0.1, 0.2, 0.3],
        [1e-9, 5.0, 7.77, 123.456],
        [1.0] * 7,
        [2.5],
        [0.0, 0.0, 4.2],
    ])
    def test_always_sums_to_total(self, values):
        result = normalize_mindshare_bps([(f"p{i}", v) for i, v in enumerate(values)])
        assert sum(result.values()) == 10000
        assert all(bps >= 0 for bps in result.values())
