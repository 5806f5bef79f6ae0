"""
SQLAlchemy models for the opening repertoire.
"""

from datetime import datetime
from repertoire.constants import DEFAULT_CATEGORY
from web.database import db


class Opening(db.Model):
    """An opening: a main line plus named variations."""
    __tablename__ = 'openings'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text, nullable=False)
    category = db.Column(db.String(100), nullable=False, default=DEFAULT_CATEGORY)
    moves = db.Column(db.JSON, nullable=False)  # SAN strings, main line
    pgn = db.Column(db.Text)  # Source PGN, stored verbatim
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow)

    # Relationships
    variations = db.relationship('Variation', backref='opening', order_by='Variation.position',
                                 cascade='all, delete-orphan')

    __table_args__ = (
        db.Index('idx_openings_category', 'category'),
    )

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'description': self.description,
            'category': self.category,
            'moves': list(self.moves or []),
            'variations': [v.to_dict() for v in self.variations],
            'pgn': self.pgn,
            'createdAt': self.created_at.isoformat() if self.created_at else None,
            'updatedAt': self.updated_at.isoformat() if self.updated_at else None,
        }

    def __repr__(self):
        return f'<Opening {self.id}: {self.name}>'


class Variation(db.Model):
    """A named alternative continuation, embedded in its opening."""
    __tablename__ = 'variations'

    id = db.Column(db.Integer, primary_key=True)
    opening_id = db.Column(db.Integer, db.ForeignKey('openings.id', ondelete='CASCADE'), nullable=False)
    position = db.Column(db.Integer, nullable=False)  # Order within the opening
    name = db.Column(db.String(200), nullable=False)
    start_move = db.Column(db.Integer, nullable=False)  # 1-based main-line move it replaces
    moves = db.Column(db.JSON, nullable=False)
    description = db.Column(db.Text)

    __table_args__ = (
        db.Index('idx_variations_opening', 'opening_id'),
    )

    def to_dict(self):
        data = {
            'name': self.name,
            'startMove': self.start_move,
            'moves': list(self.moves or []),
        }
        if self.description:
            data['description'] = self.description
        return data

    def __repr__(self):
        return f'<Variation {self.name} @ {self.start_move}>'
