"""Database Infrastructure — declarative base and the u64 amount column type.

Invariants:
    - All sessions are async (AsyncSession)
    - asyncpg in production, aiosqlite for local runs and tests
"""
