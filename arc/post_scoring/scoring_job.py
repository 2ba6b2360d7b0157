"""
ARC scoring job.

Credits creators in active arenas with points for their recent
project-related posts: loads arenas and creators, fetches each creator's
timeline, classifies and scores new posts, and writes the increased
totals back to storage.
"""

import time
from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional, Tuple
import bittensor as bt

from arc.clients import ArcStore, TwitterClient
from arc.quest_scoring.brand_aliases import normalize_brand_aliases, detect_brand_attribution
from arc.utils.config import ARC_LOOKBACK_DAYS
from arc.utils.credited_cache import filter_uncredited, mark_tweets_credited
from arc.utils.logging import log_point_award

from .content_classifier import PostClassifier
from .content_scorer import score_post
from .models import ArcCreatorContext, ArcScoringJobResult, EngagementMetrics, ScoredPost


def fetch_creator_tweets_safe(
    client: TwitterClient,
    username: str,
    lookback_days: int = ARC_LOOKBACK_DAYS
) -> Tuple[List[Dict], Optional[str]]:
    """
    Safely fetch tweets for a creator with error handling.

    Returns:
        Tuple of (tweets_list, error_message)
    """
    try:
        result = client.fetch_user_tweets(username, lookback_days=lookback_days)
        return result.get('tweets', []), None
    except Exception as e:
        bt.logging.warning(f"Failed to fetch tweets for @{username}: {e}")
        return [], str(e)


def filter_tweets_by_date(tweets: List[Dict], cutoff_start: datetime) -> List[Dict]:
    """
    Keep tweets created at or after cutoff_start (UTC).

    Tweets without a date are dropped; tweets with an unparseable date are kept.
    """
    filtered = []
    for tweet in tweets:
        created_at = tweet.get('created_at', '')
        if not created_at:
            continue

        try:
            tweet_date = datetime.strptime(created_at, '%a %b %d %H:%M:%S %z %Y').astimezone(timezone.utc)
            if tweet_date >= cutoff_start:
                filtered.append(tweet)
        except ValueError as e:
            bt.logging.debug(f"Failed to parse date '{created_at}': {e}")
            filtered.append(tweet)

    return filtered


def get_project_aliases(project: Optional[Dict]) -> List[str]:
    """Aliases that mark a tweet as related to the project."""
    if not project:
        return []
    return normalize_brand_aliases(
        brand_name=project.get('name'),
        brand_handle=project.get('twitter_username'),
        aliases=project.get('arc_keywords') or []
    )


def filter_relevant_tweets(tweets: List[Dict], project: Optional[Dict]) -> List[Dict]:
    """
    Keep tweets that reference the project by name, handle or keyword.

    With no project metadata every tweet is considered relevant.
    """
    aliases = get_project_aliases(project)
    if not aliases:
        return tweets

    handle = (project or {}).get('twitter_username')
    relevant = []
    for tweet in tweets:
        text = tweet.get('text', '')
        quoted_user = tweet.get('quoted_user') or tweet.get('retweeted_user') or ''
        if detect_brand_attribution(text, aliases, handle):
            relevant.append(tweet)
        elif handle and quoted_user and quoted_user.lower() == handle.lower().lstrip('@'):
            # Quotes and retweets of the project account count even without a mention
            relevant.append(tweet)
    return relevant


def fetch_arc_relevant_tweets(
    creator: ArcCreatorContext,
    client: TwitterClient,
    project: Optional[Dict] = None,
    lookback_days: int = ARC_LOOKBACK_DAYS
) -> List[Dict]:
    """
    Fetch a creator's uncredited, project-related tweets within the lookback window.

    Raises:
        RuntimeError: If the timeline could not be fetched
    """
    tweets, error = fetch_creator_tweets_safe(client, creator.twitter_username, lookback_days)
    if error:
        raise RuntimeError(f"Tweet fetch failed for @{creator.twitter_username}: {error}")

    cutoff = datetime.now(timezone.utc) - timedelta(days=lookback_days)
    date_filtered = filter_tweets_by_date(tweets, cutoff)
    relevant = filter_relevant_tweets(date_filtered, project)
    uncredited = filter_uncredited(creator.arena_id, relevant)

    bt.logging.debug(
        f"@{creator.twitter_username}: {len(tweets)} fetched → {len(date_filtered)} in window "
        f"→ {len(relevant)} relevant → {len(uncredited)} uncredited"
    )
    return uncredited


def score_creator_tweets(
    tweets: List[Dict],
    classifier: PostClassifier
) -> List[ScoredPost]:
    """Classify and score each tweet."""
    scored = []
    for tweet in tweets:
        content_type, sentiment = classifier.classify(tweet)
        engagement = EngagementMetrics.from_tweet(tweet)
        scored.append(score_post(
            tweet_id=tweet.get('tweet_id', ''),
            content_type=content_type,
            sentiment=sentiment,
            likes=engagement.likes,
            retweets=engagement.retweets,
            quotes=engagement.quotes,
            replies=engagement.replies
        ))
    return scored


def build_creator_contexts(creators: List[Dict], arenas: List[Dict]) -> List[ArcCreatorContext]:
    arenas_by_id = {a.get('id'): a for a in arenas}
    return [ArcCreatorContext.from_row(c, arenas_by_id.get(c.get('arena_id'))) for c in creators]


def run_arc_scoring_job(
    store: Optional[ArcStore] = None,
    twitter_client: Optional[TwitterClient] = None,
    classifier: Optional[PostClassifier] = None,
    lookback_days: int = ARC_LOOKBACK_DAYS,
    events_logger=None
) -> ArcScoringJobResult:
    """
    Run the ARC scoring job for all active arenas.

    Creators are processed one at a time. A failure for one creator is
    logged and the job moves on to the next.

    Args:
        store: Storage access (default: ArcStore over the Supabase admin client)
        twitter_client: Timeline client (default: TwitterClient())
        classifier: Post classifier (default: PostClassifier())
        lookback_days: Only tweets newer than this are scored
        events_logger: Optional logger from setup_events_logger for award events

    Returns:
        ArcScoringJobResult with processed creator/tweet counts and awarded points

    Raises:
        RuntimeError: If arenas or creators cannot be loaded
    """
    start_time = time.time()
    store = store if store is not None else ArcStore()
    classifier = classifier if classifier is not None else PostClassifier()

    bt.logging.info("🔍 Starting ARC scoring job")

    arenas = store.get_active_arenas()
    if not arenas:
        bt.logging.info("No active arenas found")
        return ArcScoringJobResult()

    bt.logging.info(f"  → Found {len(arenas)} active arena(s)")

    arena_ids = [a['id'] for a in arenas if a.get('id')]
    creators = store.get_arena_creators(arena_ids)
    if not creators:
        bt.logging.info("No creators found in active arenas")
        return ArcScoringJobResult()

    bt.logging.info(f"  → Found {len(creators)} creator(s) in active arenas")

    contexts = build_creator_contexts(creators, arenas)
    projects = store.get_projects(sorted({c.project_id for c in contexts if c.project_id}))

    if twitter_client is None:
        twitter_client = TwitterClient()

    result = ArcScoringJobResult()

    for creator in contexts:
        if not creator.twitter_username:
            bt.logging.debug(f"Skipping creator {creator.profile_id} - no Twitter username")
            continue

        if not creator.project_id:
            bt.logging.debug(f"Skipping creator {creator.profile_id} - no project ID")
            continue

        try:
            tweets = fetch_arc_relevant_tweets(
                creator, twitter_client, projects.get(creator.project_id), lookback_days
            )

            if not tweets:
                bt.logging.debug(f"No new tweets found for @{creator.twitter_username}")
                continue

            bt.logging.debug(f"Processing {len(tweets)} tweet(s) for @{creator.twitter_username}")

            scored_posts = score_creator_tweets(tweets, classifier)
            result.processed_tweets += len(scored_posts)

            awarded = [p for p in scored_posts if p.delta_points > 0]
            creator_delta = sum(p.delta_points for p in awarded)

            for post in awarded:
                bt.logging.debug(
                    f"Tweet {post.tweet_id}: +{post.delta_points} points "
                    f"({post.content_type}, {post.sentiment}, {post.engagement_score:.2f} engagement)"
                )

            # Zero-point tweets are recorded too so they are not rescored next run
            credited = True
            if creator_delta > 0:
                new_points = creator.current_points + creator_delta
                try:
                    store.update_arena_creator_points(creator.arena_id, creator.profile_id, new_points)
                except RuntimeError as e:
                    bt.logging.error(f"Error updating points for creator {creator.profile_id}: {e}")
                    credited = False
                else:
                    result.updated_points += creator_delta
                    bt.logging.info(
                        f"Updated @{creator.twitter_username}: "
                        f"{creator.current_points} → {new_points} (+{creator_delta})"
                    )
                    log_point_award(
                        events_logger, creator.arena_id, creator.profile_id,
                        creator.twitter_username, creator_delta, new_points
                    )

            if credited:
                mark_tweets_credited(creator.arena_id, [p.tweet_id for p in scored_posts])

            result.processed_creators += 1

        except Exception as e:
            bt.logging.error(f"Error processing creator @{creator.twitter_username}: {e}")

    bt.logging.info(
        f"✅ ARC scoring job complete: {result.processed_creators} creators, "
        f"{result.processed_tweets} tweets, {result.updated_points} points awarded "
        f"({time.time() - start_time:.1f}s)"
    )

    return result


# CLI interface for standalone execution
if __name__ == "__main__":
    import argparse
    import sys
    from arc.utils.config import CACHE_ROOT, EVENTS_RETENTION_SIZE
    from arc.utils.logging import setup_events_logger

    try:
        parser = argparse.ArgumentParser(
            description="Run the ARC scoring job over all active arenas"
        )
        bt.logging.add_args(parser)

        parser.add_argument(
            "--lookback-days",
            type=int,
            default=ARC_LOOKBACK_DAYS,
            help="Only score tweets newer than this many days"
        )

        parser.add_argument(
            "--force-cache-refresh",
            action="store_true",
            help="Force cache refresh - ignores freshness check"
        )

        parser.add_argument(
            "--events-dir",
            type=str,
            default=str(CACHE_ROOT / "events"),
            help="Directory for the point award events log"
        )

        args_list = sys.argv[1:]
        if not any(arg.startswith('--logging.') for arg in args_list):
            args_list.insert(0, '--logging.info')

        config = bt.config(parser, args=args_list)
        bt.logging.set_config(config=config.logging)

        import os
        os.makedirs(config.events_dir, exist_ok=True)
        events_logger = setup_events_logger(config.events_dir, EVENTS_RETENTION_SIZE, job_name="arc_scoring")

        job_result = run_arc_scoring_job(
            twitter_client=TwitterClient(force_cache_refresh=config.force_cache_refresh or None),
            lookback_days=config.lookback_days,
            events_logger=events_logger
        )

        print(f"\n✅ ARC scoring complete")
        print(f"{'Creators processed':<22} {job_result.processed_creators}")
        print(f"{'Tweets processed':<22} {job_result.processed_tweets}")
        print(f"{'Points awarded':<22} {job_result.updated_points}")

    except KeyboardInterrupt:
        print("\n\n❌ Cancelled by user")
        exit(1)
    except Exception as e:
        bt.logging.error(f"ARC scoring failed: {e}")
        print(f"❌ Error: {e}")
        exit(1)
