"""
Test environment setup.

JWT_SECRET has no default, so it must be in the environment before anything
imports app.core.config. DATABASE_URL points at SQLite so the module-level
engine never needs a Postgres driver; tests swap in their own in-memory engine
through tests.helpers.
"""

import os

os.environ.setdefault("JWT_SECRET", "test-only-secret-0123456789abcdefghijklmnop")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("APP_ENV", "dev")
