"""
HTTP client for the opening repertoire REST API.

Environment variables (can be set in .env file):
    REPERTOIRE_API_URL: Base URL of the API (default: http://localhost:5000)
"""

import os
from pathlib import Path

from dotenv import load_dotenv
import requests

from repertoire.constants import DEFAULT_API_URL, DEFAULT_REQUEST_TIMEOUT

load_dotenv(Path(__file__).parent.parent / '.env')


class ApiError(Exception):
    """A request failed. `status` is None when the server was never reached."""

    def __init__(self, status, message):
        super().__init__(message)
        self.status = status
        self.message = message

    def __str__(self):
        if self.status is None:
            return self.message
        return f"{self.status}: {self.message}"


class OpeningsClient:
    """Thin wrapper over the /api/openings endpoints. No retries."""

    def __init__(self, base_url: str = None, timeout: float = DEFAULT_REQUEST_TIMEOUT):
        base_url = base_url or os.getenv('REPERTOIRE_API_URL') or DEFAULT_API_URL
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.session = requests.Session()
        self.session.headers['Content-Type'] = 'application/json'

    def _request(self, method: str, path: str, **kwargs):
        try:
            resp = self.session.request(
                method, f'{self.base_url}{path}', timeout=self.timeout, **kwargs
            )
        except requests.RequestException as e:
            raise ApiError(None, f"API error ({method} {path}): {e}") from e

        if not resp.ok:
            try:
                message = resp.json().get('error') or resp.reason
            except ValueError:
                message = resp.reason
            raise ApiError(resp.status_code, message)
        return resp.json()

    def list(self, search: str = None) -> list:
        params = {'search': search} if search else None
        return self._request('GET', '/api/openings', params=params)

    def get(self, opening_id) -> dict:
        return self._request('GET', f'/api/openings/{opening_id}')

    def create(self, data: dict) -> dict:
        """Create an opening and return the stored record."""
        return self._request('POST', '/api/openings', json=data)['opening']

    def update(self, opening_id, data: dict) -> dict:
        return self._request('PUT', f'/api/openings/{opening_id}', json=data)['opening']

    def delete(self, opening_id) -> bool:
        return self._request('DELETE', f'/api/openings/{opening_id}').get('success', False)

    def catalog(self, search: str = None):
        params = {'search': search} if search else None
        return self._request('GET', '/api/catalog', params=params)['groups']

    def position(self, opening_id, ply: int = None, variation: int = None) -> dict:
        params = {}
        if ply is not None:
            params['ply'] = ply
        if variation is not None:
            params['variation'] = variation
        return self._request('GET', f'/api/openings/{opening_id}/position', params=params)
