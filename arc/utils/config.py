import os
from dotenv import load_dotenv
from pathlib import Path
import bittensor as bt

env_path = Path(__file__).parents[1] / '.env'
load_dotenv(dotenv_path=env_path)

# Cache Configuration
CACHE_ROOT = Path(__file__).resolve().parents[2] / "cache"
CACHE_DIRS = {
    "twitter": os.path.join(CACHE_ROOT, "twitter"),
    "credited": os.path.join(CACHE_ROOT, "credited")
}

__version__ = "0.4.1"

# Supabase
SUPABASE_URL = os.getenv('SUPABASE_URL') or os.getenv('NEXT_PUBLIC_SUPABASE_URL')
SUPABASE_SERVICE_ROLE_KEY = os.getenv('SUPABASE_SERVICE_ROLE_KEY')

RAPID_API_KEY = os.getenv('RAPID_API_KEY')

# Twitter API Configuration - Fetching Strategy
ARC_LOOKBACK_DAYS = int(os.getenv('ARC_LOOKBACK_DAYS', '7'))
TWEET_FETCH_LIMIT = 100
TWITTER_CACHE_EXPIRY = 30 * 24 * 60 * 60  # 30 days in seconds
TWITTER_CACHE_FRESHNESS = int(os.getenv('TWITTER_CACHE_FRESHNESS', str(6 * 60 * 60)))  # Default 6 hours in seconds
FORCE_CACHE_REFRESH = os.getenv('FORCE_CACHE_REFRESH', 'False').lower() == 'true'

# Credited tweets are remembered long enough to outlive any arena
CREDITED_TWEET_EXPIRY = 180 * 24 * 60 * 60

# Post scoring
CONTENT_TYPE_BASE_POINTS = {
    'thread': 30,
    'deep_dive': 50,
    'meme': 20,
    'quote_rt': 15,
    'retweet': 5,
    'reply': 5,
    'other': 0
}
SENTIMENT_MULTIPLIERS = {
    'positive': 1.2,
    'neutral': 1.0,
    'negative': 0.5
}
RETWEET_ENGAGEMENT_WEIGHT = 2
QUOTE_ENGAGEMENT_WEIGHT = 2
ENGAGEMENT_BONUS_DIVISOR = 4

# Content classification
DEEP_DIVE_MIN_LENGTH = 1000
MEME_MAX_LENGTH = 100

# Quest scoring
QUEST_ENGAGEMENT_CAP = 200
QUEST_MAX_ENGAGEMENT_BOOST = 0.1
QUEST_SAFETY_FLAGS = ['guaranteed', 'risk-free', '100%', 'double your', 'get rich', 'no risk']

# Mindshare weights (log-scaled inputs)
MINDSHARE_TOTAL_BPS = 10000
MINDSHARE_W1_POSTS = float(os.getenv('MINDSHARE_W1_POSTS', '0.25'))
MINDSHARE_W2_CREATORS = float(os.getenv('MINDSHARE_W2_CREATORS', '0.25'))
MINDSHARE_W3_ENGAGEMENT = float(os.getenv('MINDSHARE_W3_ENGAGEMENT', '0.30'))
MINDSHARE_W4_CT_HEAT = float(os.getenv('MINDSHARE_W4_CT_HEAT', '0.20'))

# Mindshare quality multiplier floors and caps
MINDSHARE_CREATOR_ORG_BOUNDS = (
    float(os.getenv('MINDSHARE_CREATOR_ORG_FLOOR', '0.5')),
    float(os.getenv('MINDSHARE_CREATOR_ORG_CAP', '1.5'))
)
MINDSHARE_AUDIENCE_ORG_BOUNDS = (
    float(os.getenv('MINDSHARE_AUDIENCE_ORG_FLOOR', '0.5')),
    float(os.getenv('MINDSHARE_AUDIENCE_ORG_CAP', '1.5'))
)
MINDSHARE_ORIGINALITY_BOUNDS = (
    float(os.getenv('MINDSHARE_ORIGINALITY_FLOOR', '0.7')),
    float(os.getenv('MINDSHARE_ORIGINALITY_CAP', '1.3'))
)
MINDSHARE_SENTIMENT_BOUNDS = (
    float(os.getenv('MINDSHARE_SENTIMENT_FLOOR', '0.8')),
    float(os.getenv('MINDSHARE_SENTIMENT_CAP', '1.2'))
)
MINDSHARE_SMART_FOLLOWERS_BOUNDS = (
    float(os.getenv('MINDSHARE_SMART_FOLLOWERS_FLOOR', '1.0')),
    float(os.getenv('MINDSHARE_SMART_FOLLOWERS_CAP', '1.5'))
)

# Treemap
TREEMAP_MAX_INTENSITY_PCT = 20

# Events log
EVENTS_RETENTION_SIZE = int(os.getenv('EVENTS_RETENTION_SIZE', str(50 * 1024 * 1024)))

# Log out all non-sensitive config variables
bt.logging.info(f"SUPABASE_URL: {SUPABASE_URL}")
bt.logging.info(f"ARC_LOOKBACK_DAYS: {ARC_LOOKBACK_DAYS}")
bt.logging.info(f"TWEET_FETCH_LIMIT: {TWEET_FETCH_LIMIT}")
bt.logging.info(f"TWITTER_CACHE_FRESHNESS: {TWITTER_CACHE_FRESHNESS}s ({TWITTER_CACHE_FRESHNESS/3600:.1f} hours)")
bt.logging.info(f"FORCE_CACHE_REFRESH: {FORCE_CACHE_REFRESH}")
bt.logging.info(f"MINDSHARE_WEIGHTS: posts={MINDSHARE_W1_POSTS}, creators={MINDSHARE_W2_CREATORS}, "
                f"engagement={MINDSHARE_W3_ENGAGEMENT}, ct_heat={MINDSHARE_W4_CT_HEAT}")
