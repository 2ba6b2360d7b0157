"""
API clients for external services.

Contains the Twitter timeline client and the Supabase ARC store.
"""

from .twitter_client import TwitterClient
from .supabase_store import ArcStore, get_supabase_client

__all__ = ['TwitterClient', 'ArcStore', 'get_supabase_client']
