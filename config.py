"""
config.py — Application Configuration
======================================
Loaded into Flask with app.config.from_object(Config).  Values come from
the environment (or a .env file) with development defaults.
"""

import os

from dotenv import load_dotenv

load_dotenv()

BASE_DIR = os.path.abspath(os.path.dirname(__file__))


class Config:
    """Visualizer settings."""

    SECRET_KEY = os.environ.get('SECRET_KEY')
    if not SECRET_KEY:
        # Fallback for development, though env is preferred
        SECRET_KEY = 'dev-secret-key-replace-in-production'

    # Session store: one JSON file, one key
    SESSION_STORE_PATH = os.environ.get('SESSION_STORE_PATH') or os.path.join(BASE_DIR, 'instance', 'session_store.json')
    SESSION_STORE_KEY  = 'codeweave-user'

    # Playback defaults
    DEFAULT_ALGORITHM = os.environ.get('DEFAULT_ALGORITHM', 'bubble-sort')
    DEFAULT_SIZE      = int(os.environ.get('DEFAULT_SIZE', 10))
    DEFAULT_SPEED     = int(os.environ.get('DEFAULT_SPEED', 50))
    VALUE_MIN         = 5
    VALUE_MAX         = 100

    DEFAULT_STRUCTURE = os.environ.get('DEFAULT_STRUCTURE', 'stack')

    # How often the browser polls /api/tick
    TICK_INTERVAL_MS = 40

    # Per-session workspaces: idle expiry and registry cap
    WORKSPACE_IDLE_SECONDS = int(os.environ.get('WORKSPACE_IDLE_SECONDS', 1800))
    MAX_WORKSPACES         = int(os.environ.get('MAX_WORKSPACES', 256))

    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
    LOG_FILE  = os.environ.get('LOG_FILE')

    @classmethod
    def init_app(cls, app):
        """Create the folder holding the session store."""
        folder = os.path.dirname(app.config['SESSION_STORE_PATH'])
        if folder:
            os.makedirs(folder, exist_ok=True)
