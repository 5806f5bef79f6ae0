"""
Build opening payloads from PGN text.

The main line of each game becomes the opening's moves. Sidelines that branch
directly off the main line become variations; deeper nesting is flattened to
each sideline's own main continuation.
"""

import io
from typing import Optional

import chess.pgn


def _header(game: chess.pgn.Game, key: str) -> Optional[str]:
    value = game.headers.get(key)
    if not value or value == '?':
        return None
    return value


def _line_sans(node: chess.pgn.ChildNode) -> list[str]:
    """SAN moves from `node` following the first child each time."""
    sans = [node.san()]
    while node.variations:
        node = node.variations[0]
        sans.append(node.san())
    return sans


def _variation_name(node: chess.pgn.ChildNode, ply: int) -> str:
    if node.comment and node.comment.strip():
        return node.comment.strip().splitlines()[0]
    dots = '.' if ply % 2 == 0 else '...'
    return f"{ply // 2 + 1}{dots}{node.san()}"


def opening_from_game(game: chess.pgn.Game, category: str = None,
                      name: str = None) -> dict:
    """Convert a parsed PGN game into an opening payload."""
    moves = []
    variations = []
    node = game
    ply = 0
    while node.variations:
        for side in node.variations[1:]:
            variations.append({
                'name': _variation_name(side, ply),
                'startMove': ply + 1,
                'moves': _line_sans(side),
            })
        node = node.variations[0]
        moves.append(node.san())
        ply += 1

    payload = {
        'name': name or _header(game, 'Opening') or _header(game, 'Event') or '',
        'moves': moves,
        'variations': variations,
        'pgn': str(game),
    }
    description = (game.comment or '').strip() or _header(game, 'Variation')
    if description:
        payload['description'] = description
    if category or _header(game, 'ECO'):
        payload['category'] = category or _header(game, 'ECO')
    return payload


def read_openings(text: str, category: str = None) -> list[dict]:
    """Parse every game in a PGN string into opening payloads."""
    handle = io.StringIO(text)
    openings = []
    while True:
        game = chess.pgn.read_game(handle)
        if game is None:
            break
        if game.errors:
            raise ValueError(f"Invalid PGN: {game.errors[0]}")
        openings.append(opening_from_game(game, category))
    return openings
