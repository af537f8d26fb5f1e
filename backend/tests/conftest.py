"""Root conftest — shared test configuration."""

import os

# Tests never touch a real database or a real mint
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///:memory:",
)
os.environ.setdefault("ACCEPTED_MINT", "TEST_MINT")
os.environ.setdefault("LOG_FORMAT", "text")
