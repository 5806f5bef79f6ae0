"""
Catalog helpers: search filtering, category grouping and list summaries.

Functions accept either web.models.Opening instances or plain opening dicts
as returned by the REST API.
"""

from repertoire.constants import DEFAULT_CATEGORY


def _field(opening, name, default=None):
    if isinstance(opening, dict):
        return opening.get(name, default)
    return getattr(opening, name, default)


def filter_by_search(openings, term: str = None) -> list:
    """Openings whose name contains `term`, ignoring case. Blank term keeps all."""
    if not term or not term.strip():
        return list(openings)
    needle = term.strip().lower()
    return [o for o in openings if needle in (_field(o, 'name') or '').lower()]


def category_of(opening) -> str:
    return (_field(opening, 'category') or '').strip() or DEFAULT_CATEGORY


def group_by_category(openings) -> dict[str, list]:
    """
    Partition openings by category.

    Records without a category land under "Uncategorized". Groups appear in
    the order their first member appears in the input.
    """
    groups: dict[str, list] = {}
    for opening in openings:
        groups.setdefault(category_of(opening), []).append(opening)
    return groups


def summarize(opening) -> dict:
    """Card data for a catalog listing."""
    return {
        'id': _field(opening, 'id'),
        'name': _field(opening, 'name'),
        'description': _field(opening, 'description'),
        'category': category_of(opening),
        'mainLineMoves': len(_field(opening, 'moves') or []),
        'variations': len(_field(opening, 'variations') or []),
    }


def build_catalog(openings, term: str = None) -> list[dict]:
    """Search, group and summarize in one pass, ready for JSON output."""
    grouped = group_by_category(filter_by_search(openings, term))
    return [
        {'category': category, 'openings': [summarize(o) for o in members]}
        for category, members in grouped.items()
    ]
