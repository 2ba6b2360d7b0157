"""
RapidAPI (twitter-v24) client for creator timelines.

Fetches a creator's own recent tweets, normalized by `tweet_parser`, and
keeps them in the timeline disk cache.
"""

import requests
import time
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional, Tuple
import bittensor as bt

from arc.utils.config import (
    RAPID_API_KEY,
    ARC_LOOKBACK_DAYS,
    TWEET_FETCH_LIMIT,
    TWITTER_CACHE_FRESHNESS,
    FORCE_CACHE_REFRESH
)
from arc.utils.error_handling import log_and_raise_config_error, ErrorMessages
from arc.utils.twitter_cache import get_cached_user_tweets, cache_user_tweets
from .tweet_parser import (
    parse_tweet,
    parse_twitter_date,
    followers_count,
    timeline_instructions,
    iter_timeline_tweets,
    bottom_cursor
)

RAPIDAPI_HOST = "twitter-v24.p.rapidapi.com"
RETRYABLE_STATUS_CODES = (429, 500, 502, 503, 504)
TIMELINE_PAGE_SIZE = 40
MAX_TIMELINE_PAGES = 5


class TwitterClient:
    """Timeline client with bounded retries and a freshness-checked cache."""

    def __init__(self, api_key: Optional[str] = None,
                 max_retries: int = 3, retry_delay: float = 2.0, rate_limit_delay: float = 1.0,
                 force_cache_refresh: Optional[bool] = None):
        """
        Args:
            api_key: RapidAPI key (default: RAPID_API_KEY from the environment)
            max_retries: Attempts per request before giving up
            retry_delay: Seconds to wait between attempts
            rate_limit_delay: Seconds to wait between timeline pages
            force_cache_refresh: Always hit the API, ignoring cache freshness

        Raises:
            ValueError: If no API key is configured
        """
        self.api_key = (api_key or RAPID_API_KEY or '').strip()
        if not self.api_key:
            log_and_raise_config_error(ErrorMessages.CREDENTIALS_MISSING, config_key='RAPID_API_KEY')

        self.base_url = f"https://{RAPIDAPI_HOST}"
        self.max_retries = max_retries
        self.retry_delay = retry_delay
        self.rate_limit_delay = rate_limit_delay
        self.force_cache_refresh = FORCE_CACHE_REFRESH if force_cache_refresh is None else force_cache_refresh
        self.headers = {"x-rapidapi-key": self.api_key, "x-rapidapi-host": RAPIDAPI_HOST}

        mode = "forced refresh" if self.force_cache_refresh else f"{TWITTER_CACHE_FRESHNESS / 3600:.1f}h cache freshness"
        bt.logging.info(f"TwitterClient initialized ({mode})")

    def _make_api_request(self, url: str, params: Dict) -> Tuple[Optional[Dict], Optional[str]]:
        """
        GET with retries on 429/5xx, timeouts and malformed payloads.

        Returns:
            (data, None) on success, (None, error_message) otherwise
        """
        error = "Max retries exceeded"
        for attempt in range(1, self.max_retries + 1):
            retry = attempt < self.max_retries
            try:
                response = requests.get(url, headers=self.headers, params=params, timeout=30)

                if response.status_code in RETRYABLE_STATUS_CODES:
                    error = f"Max retries on status {response.status_code}"
                    if retry:
                        bt.logging.warning(f"API error {response.status_code}, retrying in {self.retry_delay}s...")
                        time.sleep(self.retry_delay)
                        continue
                    return None, error

                response.raise_for_status()
                data = response.json()

                # Paginated responses drop the outer "data" wrapper
                if 'user' in data.get('data', {}):
                    return data, None
                if 'user' in data:
                    return {'data': data}, None
                if 'errors' in data:
                    return None, f"API error: {data['errors']}"
                error = "Invalid response structure"

            except requests.exceptions.Timeout:
                error = "Request timeout"
                bt.logging.warning(f"Request timeout (attempt {attempt}/{self.max_retries})")
            except Exception as e:
                error = str(e)

            if retry:
                time.sleep(self.retry_delay)

        return None, error

    def fetch_user_tweets(self, username: str, force_refresh: bool = False,
                          lookback_days: int = ARC_LOOKBACK_DAYS) -> Dict[str, Any]:
        """
        Fetch a creator's own tweets from the last `lookback_days` days.

        A cached timeline younger than TWITTER_CACHE_FRESHNESS that was fetched
        with at least this window is returned as is; otherwise it is served
        only when the API fails.

        Returns:
            Dict with 'user_info', 'tweets' and 'cache_info'
        """
        username = username.lower().lstrip('@')
        cached = get_cached_user_tweets(username)

        if cached and not (force_refresh or self.force_cache_refresh):
            age = (datetime.now() - cached.get('last_updated', datetime.min)).total_seconds()
            covers_window = cached.get('lookback_days', ARC_LOOKBACK_DAYS) >= lookback_days
            if age < TWITTER_CACHE_FRESHNESS and covers_window:
                bt.logging.debug(f"Using cached tweets for @{username} ({len(cached['tweets'])} tweets)")
                return self._cached_result(cached)

        cutoff = datetime.now(timezone.utc) - timedelta(days=lookback_days)
        tweets, user_info, fetched = self._fetch_timeline(username, cutoff)

        if not fetched:
            if cached:
                bt.logging.warning(f"API failed for @{username}, falling back to stale cache")
                return self._cached_result(cached)
        else:
            # Pinned tweets repeat on every page
            tweets = list({t['tweet_id']: t for t in tweets if t.get('tweet_id')}.values())
            cache_user_tweets(username, {'user_info': user_info, 'tweets': tweets, 'lookback_days': lookback_days})

        bt.logging.info(f"Fetched {len(tweets)} tweets for @{username}")
        return {
            'user_info': user_info,
            'tweets': tweets,
            'cache_info': {'cache_hit': False, 'new_tweets': len(tweets)}
        }

    @staticmethod
    def _cached_result(cached: Dict) -> Dict[str, Any]:
        return {
            'user_info': cached['user_info'],
            'tweets': cached['tweets'],
            'cache_info': {'cache_hit': True, 'new_tweets': 0}
        }

    def _fetch_timeline(self, username: str, cutoff: datetime) -> Tuple[List[Dict], Dict, bool]:
        """
        Page through /user/tweets until the cutoff, the fetch limit or the
        last page.

        Returns:
            (tweets, user_info, fetched) where fetched is False if no page loaded
        """
        url = f"{self.base_url}/user/tweets"
        params = {"username": username, "limit": str(TIMELINE_PAGE_SIZE)}
        tweets: List[Dict] = []
        user_info = {'username': username, 'followers_count': 0}
        fetched = False

        for _ in range(MAX_TIMELINE_PAGES):
            data, error = self._make_api_request(url, params)
            if error:
                bt.logging.error(f"RapidAPI failed for @{username}: {error}")
                break
            fetched = True

            instructions = timeline_instructions(data)
            done = self._collect_page(instructions, username, cutoff, tweets, user_info)

            cursor = bottom_cursor(instructions)
            if done or not cursor:
                break
            params["cursor"] = cursor
            time.sleep(self.rate_limit_delay)

        return tweets, user_info, fetched

    def _collect_page(self, instructions: List[Dict], username: str, cutoff: datetime,
                      tweets: List[Dict], user_info: Dict) -> bool:
        """Append the creator's tweets from one page; True once the cutoff or limit is hit."""
        for result, pinned in iter_timeline_tweets(instructions):
            tweet = parse_tweet(result)
            if not tweet:
                continue

            if not user_info['followers_count']:
                user_info['followers_count'] = followers_count(result)

            # Timelines can include other accounts' tweets
            if tweet['author'] != username:
                continue

            created = parse_twitter_date(tweet['created_at'])
            if not pinned and created is not None and created < cutoff:
                bt.logging.debug(f"Reached lookback cutoff for @{username}")
                return True

            tweets.append(tweet)
            if len(tweets) >= TWEET_FETCH_LIMIT:
                bt.logging.debug(f"Reached tweet limit ({TWEET_FETCH_LIMIT}) for @{username}")
                return True

        return False
