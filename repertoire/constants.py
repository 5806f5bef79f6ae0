"""
Constants for the chess opening repertoire.
"""

# Field defaults applied when a record omits them
DEFAULT_DESCRIPTION = 'No description provided'
DEFAULT_CATEGORY = 'Uncategorized'

# Field limits (match the column sizes in web.models)
MAX_NAME_LENGTH = 200
MAX_CATEGORY_LENGTH = 100

# Configuration defaults
DEFAULT_DATABASE_URL = 'sqlite:///repertoire.db'
DEFAULT_PORT = 5000
DEFAULT_API_URL = 'http://localhost:5000'
DEFAULT_REQUEST_TIMEOUT = 30  # seconds
