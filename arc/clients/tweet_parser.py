"""
Normalization of twitter-v24 timeline payloads.

`parse_tweet` turns a GraphQL `tweet_results.result` object into the flat
dict the classifier and scorer work on; `iter_timeline_tweets` walks the
instructions of one timeline page.
"""

import re
from datetime import datetime
from typing import Dict, Iterator, List, Optional, Tuple

TWITTER_DATE_FORMAT = '%a %b %d %H:%M:%S %z %Y'

_RETWEET_PREFIX_RE = re.compile(r'RT @(\w+):')
_STATUS_URL_RE = re.compile(r'(?:twitter|x)\.com/([^/]+)/status/(\d+)')


def parse_twitter_date(created_at: str) -> Optional[datetime]:
    """Parse "Wed Oct 30 12:00:00 +0000 2025" into an aware datetime."""
    if not created_at:
        return None
    try:
        return datetime.strptime(created_at, TWITTER_DATE_FORMAT)
    except ValueError:
        return None


def _user_legacy(result: Dict) -> Dict:
    try:
        return result['core']['user_results']['result']['legacy'] or {}
    except (KeyError, TypeError):
        return {}


def _mentions(entities: Dict) -> List[str]:
    return [m.get('screen_name', '').lower() for m in entities.get('user_mentions', [])]


def _text_and_mentions(result: Dict, legacy: Dict) -> Tuple[str, List[str], bool]:
    """Note tweets carry their full text outside `legacy`."""
    note = result.get('note_tweet', {}).get('note_tweet_results', {}).get('result', {})
    if note and note.get('text'):
        return note['text'], _mentions(note.get('entity_set', {})), True
    return legacy.get('full_text', ''), _mentions(legacy.get('entities', {})), False


def _retweet_source(text: str, legacy: Dict) -> Tuple[Optional[str], Optional[str]]:
    match = _RETWEET_PREFIX_RE.match(text)
    user = match.group(1).lower() if match else None
    tweet_id = legacy.get('retweeted_status_result', {}).get('result', {}).get('rest_id')
    return user, tweet_id


def _quote_source(legacy: Dict) -> Tuple[Optional[str], Optional[str]]:
    tweet_id = (
        legacy.get('quoted_status_id_str')
        or legacy.get('quoted_status_result', {}).get('result', {}).get('rest_id')
    )
    user = None
    match = _STATUS_URL_RE.search(legacy.get('quoted_status_permalink', {}).get('expanded', ''))
    if match:
        user = match.group(1).lower()
        tweet_id = tweet_id or match.group(2)
    return user, tweet_id


def parse_tweet(result: Dict) -> Optional[Dict]:
    """
    Normalize one tweet result.

    Returns None when the tweet has no text.

    Normalized format:
        {
            'tweet_id': str,
            'created_at': str,              # "Wed Jan 01 00:00:00 +0000 2025"
            'text': str,
            'author': str|None,             # lowercased
            'tagged_accounts': List[str],
            'retweeted_user': str|None,
            'retweeted_tweet_id': str|None,
            'quoted_user': str|None,
            'quoted_tweet_id': str|None,
            'lang': str,
            'favorite_count': int,
            'retweet_count': int,
            'reply_count': int,
            'quote_count': int,
            'in_reply_to_status_id': str|None,
            'in_reply_to_user': str|None,   # lowercased
            'has_media': bool,
            'is_long_form': bool            # note tweet (extended text)
        }
    """
    if result.get('__typename') == 'TweetWithVisibilityResults':
        result = result.get('tweet', {})

    legacy = result.get('legacy', {})
    text, tagged, is_long_form = _text_and_mentions(result, legacy)
    if not text:
        return None

    retweeted_user = retweeted_tweet_id = None
    quoted_user = quoted_tweet_id = None
    if text.startswith('RT @'):
        retweeted_user, retweeted_tweet_id = _retweet_source(text, legacy)
        tagged = []
    elif legacy.get('is_quote_status'):
        quoted_user, quoted_tweet_id = _quote_source(legacy)

    screen_name = _user_legacy(result).get('screen_name')
    reply_user = legacy.get('in_reply_to_screen_name')
    media = legacy.get('extended_entities', {}).get('media') or legacy.get('entities', {}).get('media')

    return {
        'tweet_id': result.get('rest_id', ''),
        'created_at': legacy.get('created_at', ''),
        'text': text,
        'author': screen_name.lower() if screen_name else None,
        'tagged_accounts': tagged,
        'retweeted_user': retweeted_user,
        'retweeted_tweet_id': retweeted_tweet_id,
        'quoted_user': quoted_user,
        'quoted_tweet_id': quoted_tweet_id,
        'lang': legacy.get('lang', 'und'),
        'favorite_count': legacy.get('favorite_count', 0),
        'retweet_count': legacy.get('retweet_count', 0),
        'reply_count': legacy.get('reply_count', 0),
        'quote_count': legacy.get('quote_count', 0),
        'in_reply_to_status_id': legacy.get('in_reply_to_status_id_str'),
        'in_reply_to_user': reply_user.lower() if reply_user else None,
        'has_media': bool(media),
        'is_long_form': is_long_form
    }


def followers_count(result: Dict) -> int:
    return _user_legacy(result).get('followers_count', 0) or 0


def timeline_instructions(data: Dict) -> List[Dict]:
    try:
        return data['data']['user']['result']['timeline']['timeline'].get('instructions', [])
    except (KeyError, TypeError, AttributeError):
        return []


def iter_timeline_tweets(instructions: List[Dict]) -> Iterator[Tuple[Dict, bool]]:
    """Yield (tweet_result, is_pinned) for each tweet entry on a page."""
    for instruction in instructions:
        kind = instruction.get('type')
        if kind == 'TimelinePinEntry' and instruction.get('entry'):
            entries, pinned = [instruction['entry']], True
        elif kind == 'TimelineAddEntries':
            entries, pinned = instruction.get('entries', []), False
        else:
            continue

        for entry in entries:
            if not entry.get('entryId', '').startswith('tweet-'):
                continue
            try:
                yield entry['content']['itemContent']['tweet_results']['result'], pinned
            except (KeyError, TypeError):
                continue


def bottom_cursor(instructions: List[Dict]) -> Optional[str]:
    for instruction in instructions:
        for entry in instruction.get('entries', []):
            content = entry.get('content', {})
            if entry.get('entryId', '').startswith('cursor-') and content.get('cursorType') == 'Bottom':
                return content.get('value')
    return None
