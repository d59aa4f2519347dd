"""
DHV-XC client.

Talks to the DHV-XC flight database on behalf of a logged-in user: checks
credentials, verifies a session and downloads the "my flights" page. The
session is carried as the upstream cookie value; each call opens its own
httpx client so no cookie jar is shared between users.
"""

import os
import logging
from typing import Any, Dict, Optional

import httpx

logger = logging.getLogger(__name__)

DHV_XC_BASE_URL = os.getenv("DHV_XC_BASE_URL", "https://de.dhv-xc.de").rstrip("/")
DHV_XC_TIMEOUT = float(os.getenv("DHV_XC_TIMEOUT", "15.0"))

SESSION_COOKIE_NAME = "DHV_XC_SESSION"

_HEADERS = {
    "User-Agent": "Paragliding-Dashboard/1.0",
}


class DhvXcError(Exception):
    """Base class for failures talking to DHV-XC."""


class AuthenticationFailed(DhvXcError):
    """DHV-XC rejected the credentials."""


class SessionCookieMissing(DhvXcError):
    """Login succeeded but DHV-XC did not hand out a session cookie."""


class SessionExpired(DhvXcError):
    """The session cookie is no longer accepted."""


class UnexpectedResponse(DhvXcError):
    """DHV-XC answered successfully but with a body we cannot use."""


class UpstreamError(DhvXcError):
    """DHV-XC answered with an unexpected HTTP status."""

    def __init__(self, status_code: int, message: Optional[str] = None):
        self.status_code = status_code
        super().__init__(message or f"HTTP error! status: {status_code}")


def _client(transport: Optional[httpx.AsyncBaseTransport] = None) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        base_url=DHV_XC_BASE_URL,
        headers=_HEADERS,
        timeout=DHV_XC_TIMEOUT,
        transport=transport,
    )


def _session_headers(session: str) -> Dict[str, str]:
    return {"Cookie": f"{SESSION_COOKIE_NAME}={session}"}


def extract_session_cookie(set_cookie: str) -> str:
    """
    Pull the cookie value out of a ``Set-Cookie`` header.

    ``"DHV_XC_SESSION=abc=def; Path=/; HttpOnly"`` -> ``"abc=def"``
    """
    first_pair = set_cookie.split(";")[0]
    return "=".join(first_pair.split("=")[1:])


async def authenticate(
    username: str,
    password: str,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> str:
    """
    Check credentials against DHV-XC and return the session cookie value.

    Raises:
        AuthenticationFailed: credentials rejected.
        SessionCookieMissing: no ``Set-Cookie`` in the login response.
        httpx.HTTPError: transport level failure.
    """
    async with _client(transport) as client:
        response = await client.post(
            "/api/v1/authcheck",
            json={"user": username, "pass": password},
        )

    try:
        data: Any = response.json()
    except ValueError:
        data = {}

    error = data.get("error") if isinstance(data, dict) else None
    if response.is_error or error:
        logger.warning(f"DHV-XC login rejected for {username} (HTTP {response.status_code})")
        raise AuthenticationFailed(error or "Authentication failed")

    set_cookie = response.headers.get("set-cookie")
    if not set_cookie:
        raise SessionCookieMissing("No session cookie received")

    return extract_session_cookie(set_cookie)


async def fetch_user(
    session: str,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> Dict[str, Any]:
    """Return the DHV-XC profile of the session's user."""
    async with _client(transport) as client:
        response = await client.get("/api/v1/user", headers=_session_headers(session))

    if response.is_error:
        raise SessionExpired("Session invalid")

    try:
        user: Any = response.json()
    except ValueError as e:
        raise UnexpectedResponse("User profile is not valid JSON") from e
    if not isinstance(user, dict):
        raise UnexpectedResponse(f"User profile has unexpected type {type(user).__name__}")
    return user


async def fetch_flights_html(
    session: str,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> str:
    """Download the user's "my flights" listing page."""
    async with _client(transport) as client:
        response = await client.get("/flights/my", headers=_session_headers(session))

    if response.status_code == 401:
        raise SessionExpired("Session expired")
    if response.is_error:
        logger.error(f"DHV-XC flights page returned HTTP {response.status_code}")
        raise UpstreamError(response.status_code)
    return response.text
