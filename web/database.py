"""
Shared Flask-SQLAlchemy handle, kept apart from the app to avoid circular imports.
"""

from flask_sqlalchemy import SQLAlchemy

db = SQLAlchemy()
