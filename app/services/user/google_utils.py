import logging
from typing import Optional, Tuple

import requests
from google.auth import exceptions as google_exceptions
from google.auth.transport.requests import AuthorizedSession
from google.oauth2.credentials import Credentials

from app.schemas.function import NewTokens
from app.utils.config import Settings
from app.utils.errors import IdentityResolutionError

settings = Settings()


def fetch_google_userinfo(
    access_token: Optional[str], refresh_token: Optional[str]
) -> Tuple[dict, Optional[NewTokens]]:
    """
    Fetches the OpenID userinfo for a Google token pair.

    An expired or missing access token is refreshed with the refresh token by
    the authorized session. When that happens the replacement tokens are
    returned so the caller can hand them back to the client.

    Returns:
        A tuple of the userinfo claims and the new tokens (None if unchanged).

    Raises:
        IdentityResolutionError: If the tokens are missing, rejected, or the claims lack an email.
    """
    if not access_token and not refresh_token:
        raise IdentityResolutionError("No access token or refresh token supplied")

    credentials = Credentials(
        token=access_token or None,
        refresh_token=refresh_token or None,
        token_uri=settings.google_token_uri,
        client_id=settings.google_client_id or None,
        client_secret=settings.google_client_secret or None,
    )
    session = AuthorizedSession(credentials)
    try:
        response = session.get(settings.google_userinfo_url)
    except (google_exceptions.GoogleAuthError, requests.RequestException) as e:
        logging.warning(f"Google token refresh or userinfo request failed: {e}")
        raise IdentityResolutionError(f"Failed to verify access token: {e}") from e
    finally:
        session.close()

    if response.status_code != 200:
        logging.warning(
            f"Google userinfo rejected the access token: status={response.status_code}"
        )
        raise IdentityResolutionError(
            f"Userinfo request failed with status {response.status_code}"
        )

    claims = response.json()
    if not claims.get("email"):
        raise IdentityResolutionError("Email claim missing from userinfo")

    new_tokens = None
    if credentials.token and credentials.token != access_token:
        new_tokens = NewTokens(
            access_token=credentials.token,
            refresh_token=credentials.refresh_token,
        )
    return claims, new_tokens
