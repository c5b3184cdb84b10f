import os

# Project root, next to app.py
BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))


class Config:
    SECRET_KEY = os.environ.get('BLOODLINK_SECRET_KEY', 'bloodlink-secret-key-change-me')

    # Directory holding donors.json and targets.json
    DATA_DIR = os.environ.get('BLOODLINK_DATA_DIR', os.path.join(BASE_DIR, 'data'))

    # Typical donation age range, outside of it registration asks for confirmation
    MIN_DONOR_AGE = 16
    MAX_DONOR_AGE = 75

    # JSON endpoints exposing the raw load/save operations
    EXPOSE_DEBUG_API = True


class TestingConfig(Config):
    TESTING = True
    SECRET_KEY = 'testing'
