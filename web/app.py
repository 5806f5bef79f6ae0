#!/usr/bin/env python3
"""
Flask application for the chess opening repertoire API.
"""

import logging
import os
from pathlib import Path
from flask import Flask
from dotenv import load_dotenv

# Load environment variables from project root
project_root = Path(__file__).parent.parent
load_dotenv(project_root / '.env')

# Import db from separate module to avoid circular imports
from web.database import db
from repertoire.constants import DEFAULT_DATABASE_URL, DEFAULT_PORT


def database_url() -> str:
    """DATABASE_URL from the environment, adapted for psycopg3."""
    db_url = os.getenv('DATABASE_URL') or DEFAULT_DATABASE_URL
    if db_url.startswith('postgresql://'):
        db_url = db_url.replace('postgresql://', 'postgresql+psycopg://', 1)
    return db_url


def create_app(config=None):
    """Application factory. `config` overrides settings read from the environment."""
    app = Flask(__name__)

    # Configuration
    app.config['SQLALCHEMY_DATABASE_URI'] = database_url()
    app.config['SQLALCHEMY_TRACK_MODIFICATIONS'] = False
    app.config['SECRET_KEY'] = os.getenv('SECRET_KEY', 'dev-key-change-in-production')
    if config:
        app.config.update(config)

    logging.basicConfig(
        level=os.getenv('LOG_LEVEL', 'INFO').upper(),
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )

    # Initialize extensions
    db.init_app(app)

    # Register routes (import here to avoid circular imports)
    with app.app_context():
        from web import routes
        from web.repository import OpeningRepository

        db.create_all()
        repository = OpeningRepository(db.session)
        app.extensions['opening_repository'] = repository
        routes.register_routes(app, repository)

    return app


if __name__ == '__main__':
    app = create_app()
    port = int(os.environ.get('PORT', DEFAULT_PORT))
    app.run(host='0.0.0.0', port=port)
