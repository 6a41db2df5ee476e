"""Root conftest — shared test configuration."""

import os

# Ensure tests never reach a real database
os.environ.setdefault("STORAGE_BACKEND", "memory")
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///test.db",
)
os.environ.setdefault("LOG_FORMAT", "text")
