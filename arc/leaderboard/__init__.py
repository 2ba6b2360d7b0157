"""
Leaderboard display helpers: treemap tiles and project mindshare.
"""

from .treemap import (
    normalize_for_treemap,
    growth_tile_value,
    growth_color,
    format_growth_pct,
    tier_label,
    build_treemap_tiles
)
from .mindshare import (
    MindshareInputs,
    calculate_attention_value,
    aggregate_window_metrics,
    calculate_project_attention,
    normalize_mindshare_bps
)

__all__ = [
    'normalize_for_treemap',
    'growth_tile_value',
    'growth_color',
    'format_growth_pct',
    'tier_label',
    'build_treemap_tiles',
    'MindshareInputs',
    'calculate_attention_value',
    'aggregate_window_metrics',
    'calculate_project_attention',
    'normalize_mindshare_bps'
]
