"""
Tests for TwitterClient timeline fetching, caching and tweet parsing.
"""

import pytest
import requests
from datetime import datetime, timedelta, timezone
from unittest.mock import Mock, patch

from arc.clients.twitter_client import TwitterClient
from arc.clients.tweet_parser import parse_tweet, parse_twitter_date, bottom_cursor, iter_timeline_tweets
from arc.utils.twitter_cache import cache_user_tweets, get_cached_user_tweets, TwitterCache


def twitter_date(days_ago=0):
    return (datetime.now(timezone.utc) - timedelta(days=days_ago)).strftime('%a %b %d %H:%M:%S +0000 %Y')


def tweet_result(tweet_id, text, screen_name='alice', days_ago=1, **legacy_extra):
    legacy = {
        'full_text': text,
        'created_at': twitter_date(days_ago),
        'favorite_count': 3,
        'retweet_count': 1,
        'reply_count': 2,
        'quote_count': 0,
        'lang': 'en',
        'entities': {'user_mentions': []}
    }
    legacy.update(legacy_extra)
    return {
        'rest_id': tweet_id,
        'core': {'user_results': {'result': {'legacy': {'screen_name': screen_name, 'followers_count': 500}}}},
        'legacy': legacy
    }


def timeline_response(results, cursor=None, pinned=None):
    entries = [
        {'entryId': f"tweet-{r['rest_id']}",
         'content': {'itemContent': {'tweet_results': {'result': r}}}}
        for r in results
    ]
    if cursor:
        entries.append({'entryId': 'cursor-bottom-1', 'content': {'cursorType': 'Bottom', 'value': cursor}})
    instructions = [{'type': 'TimelineAddEntries', 'entries': entries}]
    if pinned:
        instructions.insert(0, {'type': 'TimelinePinEntry', 'entry': {
            'entryId': f"tweet-{pinned['rest_id']}",
            'content': {'itemContent': {'tweet_results': {'result': pinned}}}
        }})
    response = Mock()
    response.status_code = 200
    response.raise_for_status.return_value = None
    response.json.return_value = {
        'data': {'user': {'result': {'timeline': {'timeline': {'instructions': instructions}}}}}
    }
    return response


@pytest.fixture
def client():
    return TwitterClient(api_key="test_key")


class TestInit:

    def test_headers(self, client):
        assert client.api_key == "test_key"
        assert client.base_url == "https://twitter-v24.p.rapidapi.com"
        assert client.headers["x-rapidapi-key"] == "test_key"
        assert client.headers["x-rapidapi-host"] == "twitter-v24.p.rapidapi.com"

    def test_missing_key_raises(self):
        with patch('arc.clients.twitter_client.RAPID_API_KEY', None):
            with pytest.raises(ValueError, match="RAPID_API_KEY"):
                TwitterClient()

    def test_config(self):
        client = TwitterClient(api_key="k", max_retries=5, retry_delay=3.0, rate_limit_delay=0.5,
                               force_cache_refresh=True)
        assert client.max_retries == 5
        assert client.retry_delay == 3.0
        assert client.rate_limit_delay == 0.5
        assert client.force_cache_refresh is True


class TestMakeApiRequest:

    def test_retries_on_rate_limit(self, client, mock_external_apis):
        rate_limited = Mock(status_code=429)
        mock_external_apis['requests'].side_effect = [rate_limited, timeline_response([])]

        data, error = client._make_api_request("http://test", {})

        assert error is None
        assert 'data' in data
        assert mock_external_apis['requests'].call_count == 2

    def test_gives_up_after_max_retries(self, client, mock_external_apis):
        mock_external_apis['requests'].return_value = Mock(status_code=503)

        data, error = client._make_api_request("http://test", {})

        assert data is None
        assert "503" in error
        assert mock_external_apis['requests'].call_count == 3

    def test_timeout(self, client, mock_external_apis):
        mock_external_apis['requests'].side_effect = requests.exceptions.Timeout()
        data, error = client._make_api_request("http://test", {})
        assert data is None
        assert "timeout" in error.lower()

    def test_api_errors_payload(self, client, mock_external_apis):
        response = Mock(status_code=200)
        response.json.return_value = {'errors': [{'message': 'User not found'}]}
        mock_external_apis['requests'].return_value = response

        data, error = client._make_api_request("http://test", {})
        assert data is None
        assert "User not found" in error


class TestFetchUserTweets:

    def test_keeps_own_recent_tweets(self, client, mock_external_apis):
        mock_external_apis['requests'].return_value = timeline_response([
            tweet_result('1', 'my post'),
            tweet_result('2', 'someone else', screen_name='bob'),
            tweet_result('3', 'ancient post', days_ago=60),
            tweet_result('4', 'after cutoff'),
        ])

        result = client.fetch_user_tweets('@Alice')

        assert [t['tweet_id'] for t in result['tweets']] == ['1']
        assert result['user_info']['followers_count'] == 500
        assert result['cache_info']['cache_hit'] is False

    def test_pinned_tweet_kept_and_deduplicated(self, client, mock_external_apis):
        pinned = tweet_result('p', 'pinned intro', days_ago=90)
        mock_external_apis['requests'].return_value = timeline_response(
            [tweet_result('1', 'fresh')], pinned=pinned
        )

        result = client.fetch_user_tweets('alice')

        assert sorted(t['tweet_id'] for t in result['tweets']) == ['1', 'p']

    def test_paginates_with_cursor(self, client, mock_external_apis):
        mock_external_apis['requests'].side_effect = [
            timeline_response([tweet_result('1', 'page one')], cursor='next'),
            timeline_response([tweet_result('2', 'page two')]),
        ]

        result = client.fetch_user_tweets('alice')

        assert [t['tweet_id'] for t in result['tweets']] == ['1', '2']
        second_params = mock_external_apis['requests'].call_args_list[1].kwargs['params']
        assert second_params['cursor'] == 'next'

    def test_uses_fresh_cache(self, client, mock_external_apis):
        mock_external_apis['requests'].return_value = timeline_response([tweet_result('1', 'my post')])

        client.fetch_user_tweets('alice')
        second = client.fetch_user_tweets('alice')

        assert second['cache_info']['cache_hit'] is True
        assert mock_external_apis['requests'].call_count == 1

    def test_force_refresh_bypasses_cache(self, client, mock_external_apis):
        mock_external_apis['requests'].return_value = timeline_response([tweet_result('1', 'my post')])

        client.fetch_user_tweets('alice')
        client.fetch_user_tweets('alice', force_refresh=True)

        assert mock_external_apis['requests'].call_count == 2

    def test_falls_back_to_stale_cache(self, client, mock_external_apis):
        cache_user_tweets('alice', {'user_info': {'username': 'alice', 'followers_count': 7},
                                    'tweets': [{'tweet_id': 'old'}]})
        stale = get_cached_user_tweets('alice')
        stale['last_updated'] = datetime.now() - timedelta(days=2)
        TwitterCache.get_cache().set('user_tweets_alice', stale)

        mock_external_apis['requests'].return_value = Mock(status_code=500)

        result = client.fetch_user_tweets('alice')

        assert result['tweets'] == [{'tweet_id': 'old'}]
        assert result['cache_info']['cache_hit'] is True

    def test_api_failure_without_cache(self, client, mock_external_apis):
        mock_external_apis['requests'].return_value = Mock(status_code=500)
        result = client.fetch_user_tweets('nobody')
        assert result['tweets'] == []
        assert get_cached_user_tweets('nobody') is None


class TestParseTweet:

    def test_basic_fields(self, client):
        parsed = parse_tweet(tweet_result('1', 'hello @Arc', in_reply_to_screen_name='Bob',
                                                  in_reply_to_status_id_str='9'))
        assert parsed['tweet_id'] == '1'
        assert parsed['author'] == 'alice'
        assert parsed['favorite_count'] == 3
        assert parsed['in_reply_to_user'] == 'bob'
        assert parsed['in_reply_to_status_id'] == '9'
        assert parsed['has_media'] is False
        assert parsed['is_long_form'] is False

    def test_retweet(self, client):
        parsed = parse_tweet(tweet_result(
            '1', 'RT @arcadia: big news',
            retweeted_status_result={'result': {'rest_id': '77'}}
        ))
        assert parsed['retweeted_user'] == 'arcadia'
        assert parsed['retweeted_tweet_id'] == '77'

    def test_quote(self, client):
        parsed = parse_tweet(tweet_result(
            '1', 'look at this',
            is_quote_status=True,
            quoted_status_permalink={'expanded': 'https://x.com/Arcadia/status/555'}
        ))
        assert parsed['quoted_user'] == 'arcadia'
        assert parsed['quoted_tweet_id'] == '555'

    def test_media_and_long_form(self, client):
        result = tweet_result('1', 'short', extended_entities={'media': [{'type': 'photo'}]})
        result['note_tweet'] = {'note_tweet_results': {'result': {'text': 'a very long note', 'entity_set': {}}}}
        parsed = parse_tweet(result)
        assert parsed['has_media'] is True
        assert parsed['is_long_form'] is True
        assert parsed['text'] == 'a very long note'

    def test_visibility_wrapper(self, client):
        wrapped = {'__typename': 'TweetWithVisibilityResults', 'tweet': tweet_result('1', 'hidden-ish')}
        assert parse_tweet(wrapped)['tweet_id'] == '1'

    def test_empty_text_is_skipped(self, client):
        assert parse_tweet(tweet_result('1', '')) is None


def test_parse_twitter_date():
    parsed = parse_twitter_date('Wed Jan 01 00:00:00 +0000 2025')
    assert parsed == datetime(2025, 1, 1, tzinfo=timezone.utc)
    assert parse_twitter_date('') is None
    assert parse_twitter_date('yesterday') is None


class TestTimelineWalking:

    def test_iter_marks_pinned_entries(self):
        instructions = timeline_response(
            [tweet_result('1', 'fresh')], pinned=tweet_result('p', 'pinned')
        ).json.return_value['data']['user']['result']['timeline']['timeline']['instructions']

        walked = [(r['rest_id'], pinned) for r, pinned in iter_timeline_tweets(instructions)]
        assert walked == [('p', True), ('1', False)]

    def test_bottom_cursor(self):
        instructions = timeline_response([], cursor='abc').json.return_value[
            'data']['user']['result']['timeline']['timeline']['instructions']
        assert bottom_cursor(instructions) == 'abc'
        assert bottom_cursor([{'type': 'TimelineAddEntries', 'entries': []}]) is None
