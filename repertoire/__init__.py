"""
Chess opening repertoire package.

Usage:
    python -m repertoire --help
    python -m repertoire --list --search sicilian
    python -m repertoire --replay 1 --ply 4
"""

from repertoire.constants import (
    DEFAULT_DESCRIPTION,
    DEFAULT_CATEGORY,
    MAX_NAME_LENGTH,
    MAX_CATEGORY_LENGTH,
)

__all__ = [
    # Constants
    'DEFAULT_DESCRIPTION',
    'DEFAULT_CATEGORY',
    'MAX_NAME_LENGTH',
    'MAX_CATEGORY_LENGTH',
    # Replay and catalog helpers (import from repertoire.player / repertoire.catalog)
    # - PositionPlayer, ChessRules, filter_by_search, group_by_category
]
