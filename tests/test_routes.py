"""Tests for the REST endpoints in web.routes."""

from unittest.mock import MagicMock

import chess
import pytest
from sqlalchemy.exc import OperationalError


def _create(client, payload):
    resp = client.post('/api/openings', json=payload)
    assert resp.status_code == 201
    return resp.get_json()['opening']


class TestOpeningsApi:
    """CRUD endpoints under /api/openings."""

    def test_health(self, client):
        assert client.get('/health').get_json() == {'status': 'ok'}

    def test_list_starts_empty(self, client):
        resp = client.get('/api/openings')
        assert resp.status_code == 200
        assert resp.get_json() == []

    def test_create_returns_success_body(self, client, sicilian):
        resp = client.post('/api/openings', json=sicilian)
        assert resp.status_code == 201
        body = resp.get_json()
        assert body['success'] is True
        assert body['opening']['name'] == 'Sicilian Defense'
        assert body['opening']['description'] == 'No description provided'
        assert body['opening']['category'] == 'Uncategorized'

    def test_create_without_moves_is_400(self, client):
        resp = client.post('/api/openings', json={'name': 'Empty', 'moves': []})
        assert resp.status_code == 400
        assert resp.get_json() == {'error': 'Name and moves are required.'}

    def test_create_without_body_is_400(self, client):
        resp = client.post('/api/openings', data='not json', content_type='text/plain')
        assert resp.status_code == 400
        assert 'error' in resp.get_json()

    def test_get_returns_raw_object(self, client, sicilian):
        created = _create(client, sicilian)
        resp = client.get(f"/api/openings/{created['id']}")
        assert resp.status_code == 200
        assert resp.get_json() == created

    def test_get_unknown_is_404(self, client):
        resp = client.get('/api/openings/12345')
        assert resp.status_code == 404
        assert resp.get_json() == {'error': 'Opening not found'}

    def test_update_replaces_fields(self, client, sicilian):
        created = _create(client, sicilian)
        resp = client.put(f"/api/openings/{created['id']}", json={
            'name': 'Open Sicilian',
            'moves': ['e4', 'c5', 'Nf3', 'd6', 'd4'],
            'category': 'Semi-Open Games',
        })
        assert resp.status_code == 200
        body = resp.get_json()
        assert body['success'] is True
        assert body['opening']['id'] == created['id']
        assert body['opening']['variations'] == []

        stored = client.get(f"/api/openings/{created['id']}").get_json()
        assert stored['name'] == 'Open Sicilian'
        assert stored['moves'] == ['e4', 'c5', 'Nf3', 'd6', 'd4']
        assert stored['category'] == 'Semi-Open Games'

    def test_update_unknown_is_404(self, client, sicilian):
        assert client.put('/api/openings/99', json=sicilian).status_code == 404

    def test_update_invalid_is_400(self, client, sicilian):
        created = _create(client, sicilian)
        resp = client.put(f"/api/openings/{created['id']}", json={'name': '', 'moves': ['e4']})
        assert resp.status_code == 400

    def test_delete(self, client, sicilian):
        created = _create(client, sicilian)
        resp = client.delete(f"/api/openings/{created['id']}")
        assert resp.status_code == 200
        assert resp.get_json() == {'success': True}
        assert client.get(f"/api/openings/{created['id']}").status_code == 404
        assert client.get('/api/openings').get_json() == []

    def test_delete_unknown_is_404(self, client):
        assert client.delete('/api/openings/3').status_code == 404

    def test_list_search(self, client, sicilian):
        _create(client, sicilian)
        _create(client, {'name': "Queen's Gambit", 'moves': ['d4', 'd5', 'c4']})
        names = [o['name'] for o in client.get('/api/openings?search=queen').get_json()]
        assert names == ["Queen's Gambit"]


class TestCatalogApi:
    """Tests for /api/catalog."""

    def test_groups_in_first_seen_order(self, client):
        _create(client, {'name': 'Ruy Lopez', 'moves': ['e4', 'e5'], 'category': 'Open Games'})
        _create(client, {'name': 'Grob Attack', 'moves': ['g4']})
        _create(client, {'name': 'Italian Game', 'moves': ['e4', 'e5'], 'category': 'Open Games'})

        groups = client.get('/api/catalog').get_json()['groups']
        assert [g['category'] for g in groups] == ['Open Games', 'Uncategorized']
        assert [o['name'] for o in groups[0]['openings']] == ['Ruy Lopez', 'Italian Game']
        assert groups[0]['openings'][0]['mainLineMoves'] == 2

    def test_search(self, client):
        _create(client, {'name': 'Ruy Lopez', 'moves': ['e4', 'e5'], 'category': 'Open Games'})
        _create(client, {'name': 'Grob Attack', 'moves': ['g4']})
        groups = client.get('/api/catalog?search=GROB').get_json()['groups']
        assert [g['category'] for g in groups] == ['Uncategorized']


class TestPositionApi:
    """Tests for /api/openings/<id>/position."""

    def test_full_main_line_by_default(self, client, sicilian):
        created = _create(client, sicilian)
        body = client.get(f"/api/openings/{created['id']}/position").get_json()
        board = chess.Board()
        for san in sicilian['moves']:
            board.push_san(san)
        assert body['fen'] == board.fen()
        assert body['cursor'] == 8
        assert body['variation'] is None
        assert body['availableVariations'] == ['French Defense']

    def test_ply(self, client, sicilian):
        created = _create(client, sicilian)
        body = client.get(f"/api/openings/{created['id']}/position?ply=0").get_json()
        assert body['fen'] == chess.STARTING_FEN
        assert body['availableVariations'] == []

    def test_variation_reports_skipped_moves(self, client, sicilian):
        created = _create(client, sicilian)
        body = client.get(f"/api/openings/{created['id']}/position?variation=0").get_json()
        assert body['variation'] == 'French Defense'
        assert body['cursor'] == 3
        assert body['skipped'] == [0]
        assert [m['move'] for m in body['moves']] == ['e6', 'd4', 'Nf6']

    def test_unknown_variation_is_404(self, client, sicilian):
        created = _create(client, sicilian)
        resp = client.get(f"/api/openings/{created['id']}/position?variation=5")
        assert resp.status_code == 404

    def test_unknown_opening_is_404(self, client):
        assert client.get('/api/openings/77/position').status_code == 404


class TestErrorBodies:
    """Error responses carry a JSON {error: message} body."""

    def test_non_numeric_id_is_json_404(self, client, sicilian):
        resp = client.get('/api/openings/not-an-id')
        assert resp.status_code == 404
        assert resp.get_json() == {'error': 'Opening not found'}

        assert client.put('/api/openings/abc', json=sicilian).get_json() == {'error': 'Opening not found'}
        assert client.delete('/api/openings/abc').status_code == 404
        assert client.get('/api/openings/abc/position').get_json() == {'error': 'Opening not found'}

    def test_storage_failure_on_create_is_500(self, app, client, sicilian):
        session = MagicMock()
        session.commit.side_effect = OperationalError('INSERT', {}, Exception('disk I/O error'))
        app.extensions['opening_repository'].session = session

        resp = client.post('/api/openings', json=sicilian)
        assert resp.status_code == 500
        assert 'error' in resp.get_json()
        session.rollback.assert_called_once()

    def test_storage_failure_on_list_is_500(self, app, client):
        session = MagicMock()
        session.query.side_effect = OperationalError('SELECT', {}, Exception('database is locked'))
        app.extensions['opening_repository'].session = session

        for path in ('/api/openings', '/api/catalog'):
            resp = client.get(path)
            assert resp.status_code == 500
            assert 'error' in resp.get_json()
