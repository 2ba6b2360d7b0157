"""
Ledger of tweets that have already been credited with ARC points.

The scoring job adds deltas to a creator's running total, so a tweet must
only ever be credited once per arena.
"""

from datetime import datetime
from typing import Iterable, List
import bittensor as bt

from arc.utils.config import CACHE_DIRS, CREDITED_TWEET_EXPIRY
from arc.utils.disk_cache import DiskCacheSingleton


class CreditedTweetsCache(DiskCacheSingleton):
    _cache_dir = CACHE_DIRS["credited"]


def get_credited_cache_key(arena_id: str, tweet_id: str) -> str:
    return f"credited_{arena_id}_{tweet_id}"


def is_tweet_credited(arena_id: str, tweet_id: str) -> bool:
    return get_credited_cache_key(arena_id, tweet_id) in CreditedTweetsCache.get_cache()


def filter_uncredited(arena_id: str, tweets: List[dict]) -> List[dict]:
    """Drop tweets already credited in this arena."""
    return [t for t in tweets if not is_tweet_credited(arena_id, t.get('tweet_id', ''))]


def mark_tweets_credited(arena_id: str, tweet_ids: Iterable[str]) -> int:
    """
    Record tweets as credited for an arena.

    Returns:
        Number of tweet ids recorded
    """
    cache = CreditedTweetsCache.get_cache()
    credited_at = datetime.now().isoformat()
    count = 0
    for tweet_id in tweet_ids:
        if not tweet_id:
            continue
        cache.set(get_credited_cache_key(arena_id, tweet_id), credited_at, expire=CREDITED_TWEET_EXPIRY)
        count += 1

    bt.logging.debug(f"Marked {count} tweets credited in arena {arena_id}")
    return count
