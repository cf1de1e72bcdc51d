import logging
from datetime import datetime, timezone
from typing import Optional

import asyncpg

from app.schemas.function import UserIdentity


def _to_identity(row) -> UserIdentity:
    return UserIdentity(
        email=row["email"],
        user_id=str(row["id"]),
        plan=row["plan"] or "free",
    )


async def fetch_user_by_email(
    conn: asyncpg.Connection, email: str
) -> Optional[UserIdentity]:
    """Fetch the user that owns an email address."""
    row = await conn.fetchrow(
        """
        SELECT id, email, plan
          FROM users
         WHERE email = $1
        """,
        email,
    )
    if not row:
        logging.warning(f"No user found for email {email}")
        return None
    return _to_identity(row)


async def fetch_user_by_github_username(
    conn: asyncpg.Connection, github_username: str
) -> Optional[UserIdentity]:
    """Fetch the user linked to a GitHub username (case-insensitive)."""
    row = await conn.fetchrow(
        """
        SELECT id, email, plan
          FROM users
         WHERE lower(github_username) = lower($1)
        """,
        github_username,
    )
    if not row:
        logging.warning(f"No user found for GitHub username {github_username}")
        return None
    return _to_identity(row)


def start_of_month(now: Optional[datetime] = None) -> datetime:
    now = now or datetime.now(timezone.utc)
    return now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)


async def count_monthly_usage(conn: asyncpg.Connection, email: str) -> int:
    """Count the fig functions logged for an email since the start of the UTC month."""
    return await conn.fetchval(
        """
        SELECT COUNT(*)
          FROM figs
         WHERE email = $1
           AND created_at >= $2
        """,
        email,
        start_of_month(),
    )
