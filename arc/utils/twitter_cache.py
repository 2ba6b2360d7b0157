"""
Disk cache of creator timelines.

Entries are stamped with `last_updated` so TwitterClient can decide
whether a cached timeline is fresh enough to skip the API, and can still
serve a stale one when the API is down.
"""

from datetime import datetime
from typing import Any, Dict, Optional
import bittensor as bt

from arc.utils.config import CACHE_DIRS, TWITTER_CACHE_EXPIRY
from arc.utils.disk_cache import DiskCacheSingleton


class TwitterCache(DiskCacheSingleton):
    _cache_dir = CACHE_DIRS["twitter"]
    _cache_options = {'size_limit': int(1e9), 'disk_pickle_protocol': 4}


def get_user_tweets_cache_key(username: str) -> str:
    return f"user_tweets_{username.lower()}"


def cache_user_tweets(username: str, data: Dict[str, Any]) -> None:
    """Store a fetched timeline ({'user_info', 'tweets'}) for TWITTER_CACHE_EXPIRY seconds."""
    now = datetime.now()
    TwitterCache.get_cache().set(
        get_user_tweets_cache_key(username),
        {**data, 'last_updated': now, 'cache_timestamp': now.isoformat()},
        expire=TWITTER_CACHE_EXPIRY
    )
    bt.logging.debug(f"Cached {len(data.get('tweets', []))} tweets for @{username}")


def get_cached_user_tweets(username: str) -> Optional[Dict[str, Any]]:
    cached = TwitterCache.get_cache().get(get_user_tweets_cache_key(username))
    bt.logging.debug(f"Timeline cache {'hit' if cached else 'miss'} for @{username}")
    return cached or None


def clear_twitter_cache() -> None:
    if TwitterCache.clear():
        bt.logging.info("Cleared Twitter timeline cache")
    else:
        bt.logging.warning("Twitter cache not initialized")
