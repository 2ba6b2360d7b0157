"""
Content type and sentiment classification for ARC posts.

Works on normalized tweets as returned by TwitterClient.
"""

import re
from typing import Dict, Optional, Tuple
import bittensor as bt

from arc.utils.config import DEEP_DIVE_MIN_LENGTH, MEME_MAX_LENGTH
from .sentiment_analyzer import analyze_sentiment, clean_tweet_text, get_sentiment_label

THREAD_MARKER_RE = re.compile(r'🧵|^\s*1\s*/\s*\d*(?=\s|$)|\(1/\d+\)|^\s*thread\b', re.IGNORECASE)


class PostClassifier:
    """Classifies a tweet's content type and sentiment."""

    def __init__(self, deep_dive_min_length: Optional[int] = None, meme_max_length: Optional[int] = None):
        self.deep_dive_min_length = deep_dive_min_length if deep_dive_min_length is not None else DEEP_DIVE_MIN_LENGTH
        self.meme_max_length = meme_max_length if meme_max_length is not None else MEME_MAX_LENGTH

    def is_retweet(self, tweet: Dict) -> bool:
        return tweet.get('text', '').startswith('RT @') or bool(tweet.get('retweeted_tweet_id'))

    def is_thread(self, tweet: Dict) -> bool:
        """
        Thread posts either reply to the author's own tweet or carry a
        thread marker such as 🧵, "1/" or "(1/5)".
        """
        author = (tweet.get('author') or '').lower()
        reply_to = (tweet.get('in_reply_to_user') or '').lower()
        if author and reply_to == author:
            return True
        return bool(THREAD_MARKER_RE.search(tweet.get('text', '')))

    def is_reply(self, tweet: Dict) -> bool:
        return bool(tweet.get('in_reply_to_status_id') or tweet.get('in_reply_to_user'))

    def content_type(self, tweet: Dict) -> str:
        """
        Determine the content type.

        Checked in order: retweet, quote_rt, thread, reply, deep_dive, meme, other.
        """
        if self.is_retweet(tweet):
            return 'retweet'

        if tweet.get('quoted_tweet_id'):
            return 'quote_rt'

        if self.is_thread(tweet):
            return 'thread'

        if self.is_reply(tweet):
            return 'reply'

        text = clean_tweet_text(tweet.get('text', ''))

        if tweet.get('is_long_form') or len(text) >= self.deep_dive_min_length:
            return 'deep_dive'

        if tweet.get('has_media') and len(text) <= self.meme_max_length:
            return 'meme'

        return 'other'

    def sentiment(self, tweet: Dict) -> str:
        """Sentiment label, preferring a precomputed 'sentiment_score' when present."""
        score = tweet.get('sentiment_score')
        if score is None:
            score = analyze_sentiment(clean_tweet_text(tweet.get('text', '')))
        return get_sentiment_label(score)

    def classify(self, tweet: Dict) -> Tuple[str, str]:
        content_type = self.content_type(tweet)
        sentiment = self.sentiment(tweet)
        bt.logging.debug(
            f"Classified tweet {tweet.get('tweet_id', '')}: type={content_type}, sentiment={sentiment}"
        )
        return content_type, sentiment


def classify_post(tweet: Dict) -> Tuple[str, str]:
    """Classify a tweet with default thresholds, returning (content_type, sentiment)."""
    return PostClassifier().classify(tweet)
