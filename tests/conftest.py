"""
Global pytest configuration and fixtures for fast test execution.

Mocks outbound HTTP, removes retry delays and points the disk caches at
a per-test temporary directory so tests never touch the network or the
real cache.
"""

import pytest
from unittest.mock import patch, Mock

from arc.utils.twitter_cache import TwitterCache
from arc.utils.credited_cache import CreditedTweetsCache


@pytest.fixture(autouse=True)
def mock_external_apis():
    """
    Auto-use fixture that mocks all external API calls to speed up tests.
    This prevents real network requests during testing.
    """
    with patch('requests.get') as mock_requests_get:

        mock_response = Mock()
        mock_response.status_code = 200
        mock_response.json.return_value = {"errors": ["not mocked"]}
        mock_response.raise_for_status.return_value = None
        mock_requests_get.return_value = mock_response

        yield {
            'requests': mock_requests_get
        }


@pytest.fixture(autouse=True)
def disable_delays():
    """Disable sleep calls so retry and rate limit delays are instant."""
    with patch('time.sleep') as mock_sleep:
        mock_sleep.return_value = None
        yield mock_sleep


@pytest.fixture(autouse=True)
def isolated_caches(tmp_path):
    """Point the Twitter and credited-tweet caches at a temporary directory."""
    TwitterCache.cleanup()
    CreditedTweetsCache.cleanup()

    with patch.object(TwitterCache, '_cache_dir', str(tmp_path / "twitter")), \
         patch.object(CreditedTweetsCache, '_cache_dir', str(tmp_path / "credited")):
        yield tmp_path
        TwitterCache.cleanup()
        CreditedTweetsCache.cleanup()


@pytest.fixture
def make_tweet():
    """Factory for normalized tweets as returned by TwitterClient."""
    def _make_tweet(tweet_id="1", text="gm", author="creator", **overrides):
        tweet = {
            'tweet_id': tweet_id,
            'created_at': 'Wed Jan 01 00:00:00 +0000 2025',
            'text': text,
            'author': author,
            'tagged_accounts': [],
            'retweeted_user': None,
            'retweeted_tweet_id': None,
            'quoted_user': None,
            'quoted_tweet_id': None,
            'lang': 'en',
            'favorite_count': 0,
            'retweet_count': 0,
            'reply_count': 0,
            'quote_count': 0,
            'in_reply_to_status_id': None,
            'in_reply_to_user': None,
            'has_media': False,
            'is_long_form': False
        }
        tweet.update(overrides)
        return tweet
    return _make_tweet


# Performance optimization: disable logging during tests unless explicitly enabled
@pytest.fixture(autouse=True)
def fast_logging():
    """
    Reduce logging verbosity during tests for better performance.
    """
    import logging
    import bittensor as bt

    logging.getLogger().setLevel(logging.WARNING)
    bt.logging.set_debug(False)

    yield

    logging.getLogger().setLevel(logging.INFO)
