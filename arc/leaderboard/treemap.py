"""
Treemap tile preparation for the project growth leaderboard.

Tile sizes are square-root compressed so a few fast-growing projects do
not dominate the map; colors encode growth direction and magnitude.
"""

import math
from typing import Any, Dict, List, Optional, Sequence
import numpy as np
import bittensor as bt

from arc.post_scoring.content_scorer import round_half_up
from arc.utils.config import TREEMAP_MAX_INTENSITY_PCT

GROWTH_POSITIVE_RGB = (34, 197, 94)
GROWTH_NEGATIVE_RGB = (239, 68, 68)
GROWTH_NEUTRAL_COLOR = 'rgba(156, 163, 175, 0.3)'

TIER_LABELS = {
    'gamified': 'Gamified',
    'leaderboard': 'Leaderboard',
    'creator_manager': 'Creator Manager',
    'none': 'None'
}


def normalize_for_treemap(values: Sequence[float]) -> List[float]:
    """
    Scale sqrt(|v|) linearly into [1, 100].

    Returns [] for empty input and 50 for every entry when all values are equal.
    """
    if len(values) == 0:
        return []

    sqrt_values = np.sqrt(np.abs(np.asarray(values, dtype=float)))
    low, high = sqrt_values.min(), sqrt_values.max()
    if high == low:
        return [50.0] * len(values)

    scaled = 1 + (sqrt_values - low) / (high - low) * 99
    return scaled.tolist()


def growth_tile_value(growth_pct: float) -> int:
    return max(1, round_half_up(abs(growth_pct) * 100))


def growth_color(growth_pct: float) -> str:
    """rgba fill: green for growth, red for decline, gray when flat."""
    if growth_pct == 0:
        return GROWTH_NEUTRAL_COLOR

    intensity = min(abs(growth_pct) / TREEMAP_MAX_INTENSITY_PCT, 1)
    opacity = round(0.3 + intensity * 0.4, 3)
    r, g, b = GROWTH_POSITIVE_RGB if growth_pct > 0 else GROWTH_NEGATIVE_RGB
    return f"rgba({r}, {g}, {b}, {opacity})"


def format_growth_pct(growth_pct: float) -> str:
    sign = '+' if growth_pct >= 0 else ''
    return f"{sign}{growth_pct:.2f}%"


def tier_label(access_level: Optional[str]) -> str:
    return TIER_LABELS.get(access_level or 'none', 'None')


def is_tile_locked(item: Dict[str, Any]) -> bool:
    """Tiles open only for active ARC projects with some access level."""
    return not (item.get('arc_active') is True and (item.get('arc_access_level') or 'none') != 'none')


def build_treemap_tiles(items: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """
    Build treemap tiles from project growth items.

    Items with a missing or non-finite growth_pct are dropped.

    Args:
        items: Dicts with 'id', 'growth_pct' and optionally 'display_name',
            'name', 'twitter_username', 'slug', 'arc_access_level', 'arc_active'

    Returns:
        Tiles in input order with 'value' in [1, 100], 'fill', 'label',
        'tier' and the 'is_clickable' / 'is_locked' flags
    """
    valid = []
    for item in items:
        growth = item.get('growth_pct')
        if isinstance(growth, bool) or not isinstance(growth, (int, float)) or not math.isfinite(growth):
            bt.logging.debug(f"Dropping treemap item {item.get('id')} - invalid growth_pct: {growth!r}")
            continue
        valid.append(item)

    values = normalize_for_treemap([growth_tile_value(item['growth_pct']) for item in valid])

    tiles = []
    for item, value in zip(valid, values):
        growth = float(item['growth_pct'])
        access_level = item.get('arc_access_level') or 'none'
        locked = is_tile_locked(item)
        tiles.append({
            'project_id': item.get('id'),
            'name': item.get('display_name') or item.get('name') or 'Unknown',
            'twitter_username': item.get('twitter_username') or '',
            'slug': item.get('slug'),
            'value': value,
            'growth_pct': growth,
            'label': format_growth_pct(growth),
            'fill': growth_color(growth),
            'arc_access_level': access_level,
            'tier': tier_label(access_level),
            'is_clickable': not locked,
            'is_locked': locked
        })

    return tiles
