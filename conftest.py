"""Global pytest configuration."""

import os

# Settings need a database URL before the app is imported; tests override sessions
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
