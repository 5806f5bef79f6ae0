"""
Flask routes for the opening repertoire REST API.
"""

from flask import request, jsonify

from repertoire.catalog import build_catalog, filter_by_search
from repertoire.player import PositionPlayer
from web.repository import NotFound, StorageError, ValidationError


def _error(message, status):
    return jsonify({'error': message}), status


def register_routes(app, repository):
    """Register all routes with the Flask app, bound to `repository`."""

    @app.route('/health')
    def health():
        """Health check endpoint."""
        return {'status': 'ok'}

    @app.route('/api/openings')
    def list_openings():
        """All openings, optionally filtered by ?search= on the name."""
        try:
            openings = repository.list()
        except StorageError as e:
            return _error(str(e), 500)
        openings = filter_by_search(openings, request.args.get('search'))
        return jsonify([o.to_dict() for o in openings])

    @app.route('/api/openings/<opening_id>')
    def get_opening(opening_id):
        try:
            opening = repository.get_by_id(opening_id)
        except NotFound as e:
            return _error(str(e), 404)
        except StorageError as e:
            return _error(str(e), 500)
        return jsonify(opening.to_dict())

    @app.route('/api/openings', methods=['POST'])
    def create_opening():
        """
        Create an opening.

        Expects JSON body:
        {
            "name": "Sicilian Defense",
            "moves": ["e4", "c5"],
            "description": "optional",
            "category": "optional",
            "variations": [{"name": "...", "startMove": 2, "moves": ["e6"]}]
        }
        """
        data = request.get_json(silent=True)
        if data is None:
            return _error('missing JSON body', 400)
        try:
            opening = repository.create(data)
        except ValidationError as e:
            return _error(str(e), 400)
        except StorageError as e:
            return _error(str(e), 500)
        return jsonify({'success': True, 'opening': opening.to_dict()}), 201

    @app.route('/api/openings/<opening_id>', methods=['PUT'])
    def update_opening(opening_id):
        """Replace an opening's fields; variations are replaced as a whole."""
        data = request.get_json(silent=True)
        if data is None:
            return _error('missing JSON body', 400)
        try:
            opening = repository.update(opening_id, data)
        except ValidationError as e:
            return _error(str(e), 400)
        except NotFound as e:
            return _error(str(e), 404)
        except StorageError as e:
            return _error(str(e), 500)
        return jsonify({'success': True, 'opening': opening.to_dict()})

    @app.route('/api/openings/<opening_id>', methods=['DELETE'])
    def delete_opening(opening_id):
        try:
            repository.delete(opening_id)
        except NotFound as e:
            return _error(str(e), 404)
        except StorageError as e:
            return _error(str(e), 500)
        return jsonify({'success': True})

    @app.route('/api/catalog')
    def catalog():
        """Openings summarized and grouped by category, optionally filtered by ?search=."""
        try:
            openings = repository.list()
        except StorageError as e:
            return _error(str(e), 500)
        return jsonify({'groups': build_catalog(openings, request.args.get('search'))})

    @app.route('/api/openings/<opening_id>/position')
    def opening_position(opening_id):
        """
        Board position after replaying an opening.

        Query parameters:
            ply: number of moves of the active line to play (default: all)
            variation: 0-based index of a variation to enter first
        """
        try:
            opening = repository.get_by_id(opening_id)
        except NotFound as e:
            return _error(str(e), 404)
        except StorageError as e:
            return _error(str(e), 500)

        player = PositionPlayer.from_opening(opening)

        variation_index = request.args.get('variation', type=int)
        if variation_index is not None:
            if not 0 <= variation_index < len(player.variations):
                return _error('Variation not found', 404)
            player.enter_variation(player.variations[variation_index])

        ply = request.args.get('ply', type=int)
        player.go_to(len(player.active_moves) if ply is None else ply)

        variation = player.active_variation
        return jsonify({
            'openingId': opening.id,
            'fen': player.position,
            'cursor': player.cursor,
            'variation': variation.name if variation else None,
            'moves': player.move_list(),
            'skipped': player.skipped,
            'availableVariations': [v.name for v in player.available_variations()],
        })
