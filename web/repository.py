"""
Opening repository: validation and persistence of Opening records.

A repository instance wraps a SQLAlchemy session and is handed to its
consumers (routes, CLI) by the application factory.
"""

import logging
from datetime import datetime
from functools import wraps

from sqlalchemy.exc import SQLAlchemyError

from repertoire.constants import (
    DEFAULT_DESCRIPTION,
    DEFAULT_CATEGORY,
    MAX_NAME_LENGTH,
    MAX_CATEGORY_LENGTH,
)
from web.models import Opening, Variation

logger = logging.getLogger(__name__)


class RepositoryError(Exception):
    """Base class for repository failures."""


class ValidationError(RepositoryError):
    """Input is missing required fields or is malformed (HTTP 400)."""


class NotFound(RepositoryError):
    """No opening with the requested id (HTTP 404)."""


class StorageError(RepositoryError):
    """The database rejected or failed the operation (HTTP 500)."""


def storage_errors(func):
    """Decorator translating SQLAlchemy failures into StorageError after a rollback."""
    @wraps(func)
    def wrapper(self, *args, **kwargs):
        try:
            return func(self, *args, **kwargs)
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.error("Storage failure in %s: %s", func.__name__, e)
            raise StorageError(str(e)) from e
    return wrapper


def _clean_text(value, field: str, default: str = None, max_length: int = None):
    if value is None or (isinstance(value, str) and not value.strip()):
        return default
    if not isinstance(value, str):
        raise ValidationError(f"{field} must be a string.")
    value = value.strip()
    if max_length and len(value) > max_length:
        raise ValidationError(f"{field} must be at most {max_length} characters.")
    return value


def _clean_moves(value, field: str) -> list[str]:
    if not isinstance(value, list):
        raise ValidationError(f"{field} must be a list of moves.")
    moves = []
    for move in value:
        if not isinstance(move, str) or not move.strip():
            raise ValidationError(f"{field} must contain only non-empty move strings.")
        moves.append(move.strip())
    return moves


def _clean_variation(raw, index: int, main_length: int) -> dict:
    label = f"variations[{index}]"
    if not isinstance(raw, dict):
        raise ValidationError(f"{label} must be an object.")

    name = _clean_text(raw.get('name'), f"{label}.name", max_length=MAX_NAME_LENGTH)
    if not name:
        raise ValidationError(f"{label}.name is required.")

    start = raw.get('startMove', raw.get('start_move'))
    if isinstance(start, bool) or not isinstance(start, int):
        raise ValidationError(f"{label}.startMove must be an integer.")
    # 1-based: a variation may replace any main-line move or extend past the last one
    if not 1 <= start <= main_length + 1:
        raise ValidationError(f"{label}.startMove must be between 1 and {main_length + 1}.")

    return {
        'name': name,
        'start_move': start,
        'moves': _clean_moves(raw.get('moves') if raw.get('moves') is not None else [],
                              f"{label}.moves"),
        'description': _clean_text(raw.get('description'), f"{label}.description"),
    }


def validate_opening(data) -> dict:
    """
    Check an opening payload and return its cleaned fields with defaults applied.

    Raises ValidationError when name or moves are missing or any field is malformed.
    """
    if not isinstance(data, dict):
        raise ValidationError('Request body must be a JSON object.')

    name = _clean_text(data.get('name'), 'name', max_length=MAX_NAME_LENGTH)
    moves = data.get('moves')
    if not name or not moves:
        raise ValidationError('Name and moves are required.')
    moves = _clean_moves(moves, 'moves')

    variations = data.get('variations')
    if variations is None:
        variations = []
    if not isinstance(variations, list):
        raise ValidationError('variations must be a list.')

    pgn = data.get('pgn')
    if pgn is not None and not isinstance(pgn, str):
        raise ValidationError('pgn must be a string.')

    return {
        'name': name,
        'description': _clean_text(data.get('description'), 'description', DEFAULT_DESCRIPTION),
        'category': _clean_text(data.get('category'), 'category', DEFAULT_CATEGORY,
                                max_length=MAX_CATEGORY_LENGTH),
        'moves': moves,
        'variations': [_clean_variation(v, i, len(moves)) for i, v in enumerate(variations)],
        'pgn': pgn,
    }


class OpeningRepository:
    """CRUD operations over Opening records."""

    def __init__(self, session):
        self.session = session

    @storage_errors
    def list(self) -> list[Opening]:
        return self.session.query(Opening).order_by(Opening.id).all()

    @storage_errors
    def get_by_id(self, opening_id) -> Opening:
        try:
            key = int(opening_id)
        except (TypeError, ValueError):
            raise NotFound('Opening not found') from None
        opening = self.session.get(Opening, key)
        if opening is None:
            raise NotFound('Opening not found')
        return opening

    @storage_errors
    def create(self, data) -> Opening:
        fields = validate_opening(data)
        opening = Opening()
        self._assign(opening, fields)
        opening.created_at = opening.updated_at
        self.session.add(opening)
        self.session.commit()
        logger.info("Created opening %d: %s", opening.id, opening.name)
        return opening

    @storage_errors
    def update(self, opening_id, data) -> Opening:
        """Replace every mutable field of an opening; variations are replaced as a whole."""
        fields = validate_opening(data)
        opening = self.get_by_id(opening_id)
        self._assign(opening, fields)
        self.session.commit()
        logger.info("Updated opening %d: %s", opening.id, opening.name)
        return opening

    @storage_errors
    def delete(self, opening_id) -> bool:
        opening = self.get_by_id(opening_id)
        self.session.delete(opening)
        self.session.commit()
        logger.info("Deleted opening %s", opening_id)
        return True

    @storage_errors
    def seed(self, payloads):
        """Create each payload whose name is not already in the repertoire."""
        existing = {name for (name,) in self.session.query(Opening.name).all()}
        created = []
        for payload in payloads:
            if payload.get('name') in existing:
                continue
            created.append(self.create(payload))
            existing.add(payload['name'])
        return created

    def _assign(self, opening: Opening, fields: dict):
        opening.name = fields['name']
        opening.description = fields['description']
        opening.category = fields['category']
        opening.moves = fields['moves']
        opening.pgn = fields['pgn']
        opening.variations = [
            Variation(position=i, **variation)
            for i, variation in enumerate(fields['variations'])
        ]
        opening.updated_at = datetime.utcnow()
