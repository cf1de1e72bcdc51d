import logging

import asyncpg

from app.schemas.function import UserIdentity
from app.services.user.db_utils import count_monthly_usage
from app.utils.config import Settings

settings = Settings()


def monthly_limit(plan: str) -> int:
    if plan == "pro":
        return settings.pro_monthly_quota
    return settings.free_monthly_quota


async def does_exceed_quota(conn: asyncpg.Connection, identity: UserIdentity) -> bool:
    """True when the user has already used every fig function of this month's plan."""
    used = await count_monthly_usage(conn, identity.email)
    limit = monthly_limit(identity.plan)
    if used >= limit:
        logging.warning(
            f"Monthly quota reached for {identity.email}: {used}/{limit} ({identity.plan})"
        )
        return True
    return False
