"""
Supabase access for ARC arenas, arena creators and Creator Manager programs.
"""

from functools import lru_cache
from typing import Dict, List, Optional

import bittensor as bt
from supabase import Client, create_client

from arc.utils.config import SUPABASE_URL, SUPABASE_SERVICE_ROLE_KEY
from arc.utils.error_handling import (
    log_and_raise_api_error,
    log_and_raise_config_error,
    ErrorMessages
)


@lru_cache(maxsize=1)
def get_supabase_client() -> Client:
    """
    Get the singleton Supabase admin client (service role).

    Raises:
        ValueError: If the URL or service role key is not configured
    """
    if not SUPABASE_URL:
        log_and_raise_config_error(ErrorMessages.MISSING_CONFIG, config_key='SUPABASE_URL')
    if not SUPABASE_SERVICE_ROLE_KEY:
        log_and_raise_config_error(ErrorMessages.CREDENTIALS_MISSING, config_key='SUPABASE_SERVICE_ROLE_KEY')

    return create_client(SUPABASE_URL, SUPABASE_SERVICE_ROLE_KEY)


class ArcStore:
    """Thin table-level wrapper over the Supabase client."""

    def __init__(self, client: Optional[Client] = None):
        self.client = client if client is not None else get_supabase_client()

    def get_active_arenas(self) -> List[Dict]:
        try:
            result = self.client.table('arenas').select('*').eq('status', 'active').execute()
        except Exception as e:
            log_and_raise_api_error(e, 'arenas', {'status': 'active'}, context=ErrorMessages.LOAD_ARENAS_FAILED)
        return result.data or []

    def get_arena_creators(self, arena_ids: List[str]) -> List[Dict]:
        if not arena_ids:
            return []
        try:
            result = self.client.table('arena_creators').select('*').in_('arena_id', arena_ids).execute()
        except Exception as e:
            log_and_raise_api_error(e, 'arena_creators', {'arena_ids': arena_ids}, context=ErrorMessages.LOAD_CREATORS_FAILED)
        return result.data or []

    def get_projects(self, project_ids: List[str]) -> Dict[str, Dict]:
        """
        Load project records used for tweet relevance matching.

        Lookup failures are logged and yield an empty map; relevance then
        falls back to accepting all of a creator's tweets.
        """
        if not project_ids:
            return {}
        try:
            result = (
                self.client.table('projects')
                .select('id, name, twitter_username, arc_keywords')
                .in_('id', project_ids)
                .execute()
            )
        except Exception as e:
            bt.logging.warning(f"Failed to load projects for relevance matching: {e}")
            return {}
        return {p['id']: p for p in (result.data or []) if p.get('id')}

    def update_arena_creator_points(self, arena_id: str, profile_id: str, points: int) -> None:
        try:
            (
                self.client.table('arena_creators')
                .update({'arc_points': points})
                .eq('arena_id', arena_id)
                .eq('profile_id', profile_id)
                .execute()
            )
        except Exception as e:
            log_and_raise_api_error(
                e, 'arena_creators',
                {'arena_id': arena_id, 'profile_id': profile_id},
                context=ErrorMessages.UPDATE_POINTS_FAILED
            )

    def get_creator_manager_creator(self, program_id: str, creator_profile_id: str) -> Optional[Dict]:
        result = (
            self.client.table('creator_manager_creators')
            .select('arc_points')
            .eq('program_id', program_id)
            .eq('creator_profile_id', creator_profile_id)
            .limit(1)
            .execute()
        )
        rows = result.data or []
        return rows[0] if rows else None

    def update_creator_manager_points(self, program_id: str, creator_profile_id: str, points: int) -> None:
        (
            self.client.table('creator_manager_creators')
            .update({'arc_points': points})
            .eq('program_id', program_id)
            .eq('creator_profile_id', creator_profile_id)
            .execute()
        )
