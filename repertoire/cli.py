"""
Command-line interface for the chess opening repertoire.
"""

import argparse
import os
import sys
from pathlib import Path

from repertoire.catalog import filter_by_search, group_by_category, summarize
from repertoire.client import ApiError, OpeningsClient
from repertoire.constants import DEFAULT_PORT
from repertoire.openings import STARTER_OPENINGS
from repertoire.pgn import read_openings
from repertoire.player import PositionPlayer


class LocalStore:
    """In-process access to the repository configured by DATABASE_URL."""

    def __init__(self):
        from web.app import create_app
        self.app = create_app()
        self.repository = self.app.extensions['opening_repository']

    def list(self, search: str = None):
        with self.app.app_context():
            return filter_by_search([o.to_dict() for o in self.repository.list()], search)

    def get(self, opening_id) -> dict:
        with self.app.app_context():
            return self.repository.get_by_id(opening_id).to_dict()

    def create(self, data: dict) -> dict:
        with self.app.app_context():
            return self.repository.create(data).to_dict()

    def delete(self, opening_id) -> bool:
        with self.app.app_context():
            return self.repository.delete(opening_id)

    def seed(self, payloads) -> int:
        with self.app.app_context():
            return len(self.repository.seed(payloads))


def _seed_over_api(client: OpeningsClient, payloads) -> int:
    """Create each payload whose name the server does not have yet."""
    existing = {o['name'] for o in client.list()}
    added = 0
    for payload in payloads:
        if payload['name'] in existing:
            continue
        client.create(payload)
        existing.add(payload['name'])
        added += 1
    return added


def format_moves(rows) -> str:
    """Render move_list() rows as numbered notation, e.g. '1. e4 c5 2. Nf3'."""
    parts = []
    for i, row in enumerate(rows):
        if row['white']:
            parts.append(f"{row['number']}.")
        elif i == 0:
            parts.append(f"{row['number']}...")
        parts.append(f"({row['move']}?)" if row['skipped'] else row['move'])
    return ' '.join(parts)


def print_catalog(openings):
    if not openings:
        print("No openings found")
        return
    for category, members in group_by_category(openings).items():
        print(f"\n{category}")
        print("-" * len(category))
        for opening in members:
            card = summarize(opening)
            print(f"  [{card['id']:>4}] {card['name']:<36} "
                  f"{card['mainLineMoves']:>3} moves {card['variations']:>3} variations")
    print()


def print_opening(opening: dict):
    print(f"\n{opening['name']} [{opening['category']}] (id={opening['id']})")
    print(opening['description'])
    player = PositionPlayer.from_opening(opening)
    player.go_to(len(player.main_line))
    print(f"\n  {format_moves(player.move_list())}")
    for variation in player.variations:
        player.enter_variation(variation)
        player.go_to(len(variation.moves))
        print(f"\n  {variation.name} (from move {variation.start_move})")
        print(f"    {format_moves(player.move_list())}")
    print()


def replay(opening: dict, ply: int = None, variation_name: str = None) -> PositionPlayer:
    """Replay an opening (or one of its variations) up to `ply` moves of the active line."""
    player = PositionPlayer.from_opening(opening)
    if variation_name:
        matches = [v for v in player.variations if v.name.lower() == variation_name.lower()]
        if not matches:
            raise ValueError(f"Variation '{variation_name}' not found in {opening['name']}")
        player.enter_variation(matches[0])
    player.go_to(len(player.active_moves) if ply is None else ply)
    return player


def _import_pgn(store, path: Path, category: str = None) -> int:
    payloads = read_openings(path.read_text(), category)
    for payload in payloads:
        if not payload['name']:
            payload['name'] = path.stem
        opening = store.create(payload)
        print(f"Imported: {opening['name']} (id={opening['id']}, "
              f"{len(opening['moves'])} moves, {len(opening['variations'])} variations)")
    return len(payloads)


def main(argv=None):
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        description="Chess opening repertoire",
        epilog="Uses DATABASE_URL directly, or a running API server with --api URL"
    )
    parser.add_argument("--list", action="store_true",
                        help="List openings grouped by category")
    parser.add_argument("--search", "-s", type=str, default=None,
                        help="With --list: only openings whose name contains TERM")
    parser.add_argument("--show", type=int, default=None, metavar="ID",
                        help="Show an opening with its main line and variations")
    parser.add_argument("--replay", type=int, default=None, metavar="ID",
                        help="Replay an opening and print the resulting position")
    parser.add_argument("--ply", type=int, default=None,
                        help="With --replay: number of moves to play (default: all)")
    parser.add_argument("--variation", type=str, default=None, metavar="NAME",
                        help="With --replay: enter this variation first")
    parser.add_argument("--seed", action="store_true",
                        help="Add the starter opening book (skips names already present)")
    parser.add_argument("--import-pgn", type=str, default=None, metavar="FILE",
                        help="Import every game in a PGN file as an opening")
    parser.add_argument("--category", type=str, default=None,
                        help="With --import-pgn: category for imported openings")
    parser.add_argument("--delete", type=int, default=None, metavar="ID",
                        help="Delete an opening")
    parser.add_argument("--serve", action="store_true",
                        help="Run the API server")
    parser.add_argument("--port", "-p", type=int, default=None,
                        help=f"With --serve: port to listen on (default: $PORT or {DEFAULT_PORT})")
    parser.add_argument("--api", type=str, default=None, metavar="URL",
                        help="Talk to a running API server instead of the database")

    args = parser.parse_args(argv)

    if args.serve:
        from web.app import create_app
        port = args.port or int(os.environ.get('PORT', DEFAULT_PORT))
        create_app().run(host='0.0.0.0', port=port)
        sys.exit(0)

    from web.repository import RepositoryError

    store = OpeningsClient(args.api) if args.api else LocalStore()

    try:
        # Handle --list command
        if args.list:
            print_catalog(store.list(args.search))
            sys.exit(0)

        if args.show is not None:
            print_opening(store.get(args.show))
            sys.exit(0)

        if args.replay is not None:
            opening = store.get(args.replay)
            player = replay(opening, args.ply, args.variation)
            line = player.active_variation.name if player.in_variation else "main line"
            print(f"\n{opening['name']} ({line}), {player.cursor}/{len(player.active_moves)} moves played")
            print(f"  {format_moves(player.move_list())}")
            print(f"FEN: {player.position}")
            if player.skipped:
                print(f"Skipped illegal moves at: {', '.join(str(i + 1) for i in player.skipped)}")
            available = player.available_variations()
            if available:
                print(f"Variations from here: {', '.join(v.name for v in available)}")
            print()
            sys.exit(0)

        if args.seed:
            if isinstance(store, LocalStore):
                added = store.seed(STARTER_OPENINGS)
            else:
                added = _seed_over_api(store, STARTER_OPENINGS)
            print(f"Seeded {added} openings ({len(STARTER_OPENINGS) - added} already present)")
            sys.exit(0)

        if args.import_pgn:
            path = Path(args.import_pgn)
            if not path.exists():
                print(f"Error: PGN file not found: {path}")
                sys.exit(1)
            count = _import_pgn(store, path, args.category)
            print(f"Imported {count} openings from {path.name}")
            sys.exit(0)

        if args.delete is not None:
            store.delete(args.delete)
            print(f"Deleted: {args.delete}")
            sys.exit(0)
    except (RepositoryError, ApiError, ValueError) as e:
        print(f"Error: {e}")
        sys.exit(1)

    parser.print_help()
    sys.exit(1)
