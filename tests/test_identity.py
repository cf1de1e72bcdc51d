import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from app.schemas.function import (
    FunctionRequest,
    NewTokens,
    TokenCredential,
    UserIdentity,
    UsernameCredential,
)
from app.services.user import google_utils
from app.services.user.identity import credential_from_request, resolve_identity
from app.utils.errors import IdentityResolutionError

IDENTITY = "app.services.user.identity"
ADA = UserIdentity(email="ada@example.com", user_id="user-1", plan="pro")


def test_username_takes_precedence_over_tokens():
    credential = credential_from_request(
        FunctionRequest(github_username="ada", access_token="a", refresh_token="r")
    )
    assert isinstance(credential, UsernameCredential)
    assert credential.github_username == "ada"


def test_tokens_used_without_username():
    credential = credential_from_request(
        FunctionRequest(access_token="a", refresh_token="r")
    )
    assert isinstance(credential, TokenCredential)
    assert credential.access_token == "a"
    assert credential.refresh_token == "r"


def test_resolve_by_username(mocker):
    by_username = mocker.patch(
        f"{IDENTITY}.fetch_user_by_github_username",
        new_callable=AsyncMock,
        return_value=ADA,
    )
    userinfo = mocker.patch(f"{IDENTITY}.fetch_google_userinfo")

    result = asyncio.run(resolve_identity(MagicMock(), UsernameCredential(github_username="ada")))

    assert result.identity == ADA
    assert result.new_tokens is None
    by_username.assert_awaited_once()
    userinfo.assert_not_called()


def test_resolve_unknown_username(mocker):
    mocker.patch(
        f"{IDENTITY}.fetch_user_by_github_username",
        new_callable=AsyncMock,
        return_value=None,
    )
    with pytest.raises(IdentityResolutionError):
        asyncio.run(resolve_identity(MagicMock(), UsernameCredential(github_username="x")))


def test_resolve_by_token_passes_new_tokens(mocker):
    new_tokens = NewTokens(access_token="fresh", refresh_token="r")
    mocker.patch(
        f"{IDENTITY}.fetch_google_userinfo",
        return_value=({"email": "ada@example.com"}, new_tokens),
    )
    by_email = mocker.patch(
        f"{IDENTITY}.fetch_user_by_email", new_callable=AsyncMock, return_value=ADA
    )
    by_username = mocker.patch(
        f"{IDENTITY}.fetch_user_by_github_username", new_callable=AsyncMock
    )

    result = asyncio.run(
        resolve_identity(MagicMock(), TokenCredential(access_token="old", refresh_token="r"))
    )

    assert result.identity == ADA
    assert result.new_tokens == new_tokens
    assert by_email.call_args.args[1] == "ada@example.com"
    by_username.assert_not_called()


def test_resolve_token_without_account(mocker):
    mocker.patch(
        f"{IDENTITY}.fetch_google_userinfo",
        return_value=({"email": "ghost@example.com"}, None),
    )
    mocker.patch(f"{IDENTITY}.fetch_user_by_email", new_callable=AsyncMock, return_value=None)

    with pytest.raises(IdentityResolutionError):
        asyncio.run(resolve_identity(MagicMock(), TokenCredential(access_token="a")))


def test_google_userinfo_requires_a_token():
    with pytest.raises(IdentityResolutionError):
        google_utils.fetch_google_userinfo(None, None)


def _fake_session(mocker, status_code, claims, refreshed_token=None):
    response = MagicMock(status_code=status_code)
    response.json.return_value = claims

    def build_session(credentials):
        session = MagicMock()

        def get(url):
            if refreshed_token:
                credentials.token = refreshed_token
            return response

        session.get.side_effect = get
        return session

    return mocker.patch.object(google_utils, "AuthorizedSession", side_effect=build_session)


def test_google_userinfo_unchanged_token(mocker):
    _fake_session(mocker, 200, {"email": "ada@example.com"})

    claims, new_tokens = google_utils.fetch_google_userinfo("access", "refresh")

    assert claims["email"] == "ada@example.com"
    assert new_tokens is None


def test_google_userinfo_refreshed_token(mocker):
    _fake_session(mocker, 200, {"email": "ada@example.com"}, refreshed_token="fresh")

    _, new_tokens = google_utils.fetch_google_userinfo("stale", "refresh")

    assert new_tokens == NewTokens(access_token="fresh", refresh_token="refresh")


def test_google_userinfo_rejected(mocker):
    _fake_session(mocker, 401, {})

    with pytest.raises(IdentityResolutionError):
        google_utils.fetch_google_userinfo("bad", None)


def test_token_lookup_runs_off_the_event_loop(mocker):
    threadpool = mocker.patch(
        f"{IDENTITY}.run_in_threadpool",
        new_callable=AsyncMock,
        return_value=({"email": "ada@example.com"}, None),
    )
    mocker.patch(f"{IDENTITY}.fetch_user_by_email", new_callable=AsyncMock, return_value=ADA)

    result = asyncio.run(
        resolve_identity(MagicMock(), TokenCredential(access_token="a", refresh_token="r"))
    )

    assert result.identity == ADA
    threadpool.assert_awaited_once_with(google_utils.fetch_google_userinfo, "a", "r")
