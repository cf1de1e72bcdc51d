import logging

import asyncpg
from starlette.concurrency import run_in_threadpool

from app.schemas.function import (
    Credential,
    FunctionRequest,
    IdentityResult,
    TokenCredential,
    UsernameCredential,
)
from app.services.user.db_utils import (
    fetch_user_by_email,
    fetch_user_by_github_username,
)
from app.services.user.google_utils import fetch_google_userinfo
from app.utils.errors import IdentityResolutionError


def credential_from_request(request: FunctionRequest) -> Credential:
    """A GitHub username wins over tokens when both are supplied."""
    if request.github_username:
        return UsernameCredential(github_username=request.github_username)
    return TokenCredential(
        access_token=request.access_token,
        refresh_token=request.refresh_token,
    )


async def resolve_identity(
    conn: asyncpg.Connection, credential: Credential
) -> IdentityResult:
    """
    Resolve the caller behind a credential.

    Raises:
        IdentityResolutionError: If no user matches the credential.
    """
    if isinstance(credential, UsernameCredential):
        identity = await fetch_user_by_github_username(
            conn, credential.github_username
        )
        if identity is None:
            raise IdentityResolutionError(
                f"Unknown GitHub username {credential.github_username}"
            )
        return IdentityResult(identity=identity)

    claims, new_tokens = await run_in_threadpool(
        fetch_google_userinfo, credential.access_token, credential.refresh_token
    )
    identity = await fetch_user_by_email(conn, claims["email"])
    if identity is None:
        raise IdentityResolutionError(f"No account for {claims['email']}")
    if new_tokens is not None:
        logging.info(f"Access token refreshed for {identity.email}")
    return IdentityResult(identity=identity, new_tokens=new_tokens)
