import asyncpg

from app.utils.config import Settings

settings = Settings()


async def open_connection() -> asyncpg.Connection:
    """Open a Postgres connection for a single request. The caller closes it."""
    if not settings.postgres_dsn:
        raise ValueError("POSTGRES_DSN is not configured.")
    return await asyncpg.connect(settings.postgres_dsn, statement_cache_size=0)
