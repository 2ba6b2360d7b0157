"""
Brand alias normalization and attribution detection for quest posts.
"""

import re
from typing import List, Optional


def normalize_alias(value: str) -> str:
    return re.sub(r'\s+', ' ', value).strip().lower()


def normalize_brand_aliases(
    brand_name: Optional[str] = None,
    brand_handle: Optional[str] = None,
    aliases: Optional[List[str]] = None
) -> List[str]:
    """
    Build the list of lowercase aliases a post may use to reference a brand.

    Includes the full name, its first token and its compact alphanumeric form
    (each only when at least 4 characters), the handle with and without '@',
    and any extra aliases. Order is preserved and duplicates removed.
    """
    found = {}
    name = normalize_alias(brand_name) if brand_name else ''
    handle_raw = normalize_alias(brand_handle) if brand_handle else ''
    if handle_raw.startswith('@'):
        handle = handle_raw
    else:
        handle = f"@{handle_raw}" if handle_raw else ''

    if name:
        found[name] = True
        primary_token = name.split(' ')[0]
        if primary_token and len(primary_token) >= 4:
            found[primary_token] = True
        compact = re.sub(r'[^a-z0-9]', '', name)
        if len(compact) >= 4:
            found[compact] = True

    if handle:
        found[handle] = True
        found[re.sub(r'^@+', '', handle)] = True

    for alias in aliases or []:
        clean = normalize_alias(alias)
        if clean:
            found[clean] = True

    return [alias for alias in found if alias]


def detect_brand_attribution(text: str, aliases: List[str], handle: Optional[str] = None) -> bool:
    """
    Check whether a post attributes the brand.

    '@' aliases and aliases longer than 5 characters match as substrings;
    short aliases must stand alone so "arc" does not hit "search".
    """
    if not text:
        return False
    lower = text.lower()

    handle_clean = normalize_alias(handle) if handle else ''
    if handle_clean:
        handle_with_at = handle_clean if handle_clean.startswith('@') else f"@{handle_clean}"
        if handle_with_at in lower:
            return True

    for alias in aliases:
        if not alias:
            continue
        if alias.startswith('@'):
            if alias in lower:
                return True
            continue
        if len(alias) <= 5:
            if re.search(rf"(?<![a-z0-9_]){re.escape(alias)}(?![a-z0-9_])", lower):
                return True
        elif alias in lower:
            return True

    return False
