"""
Session router.

Logs a user into DHV-XC and keeps the upstream session cookie in an
httponly cookie of our own, so the browser never sees the credentials
again after login.
"""

import os
import logging
from typing import Optional

import httpx
from fastapi import APIRouter, Cookie, HTTPException, Response, status

from data_ingestion import dhv_xc
from data_ingestion.dhv_xc import SESSION_COOKIE_NAME
from models.auth import AuthResult, AuthStatus, LoginRequest
from models.responses import ErrorResponse

logger = logging.getLogger(__name__)

SECURE_COOKIES = os.getenv("ENVIRONMENT", "development").lower() == "production"

router = APIRouter(
    prefix="/api/auth",
    tags=["Authentication"],
)


@router.post(
    "",
    response_model=AuthResult,
    summary="Log in with DHV-XC credentials",
    responses={
        400: {"model": ErrorResponse, "description": "Missing username or password"},
        401: {"model": ErrorResponse, "description": "Credentials rejected by DHV-XC"},
        500: {"model": ErrorResponse, "description": "DHV-XC unreachable or no session issued"},
    },
)
async def login(credentials: LoginRequest, response: Response):
    """Authenticate against DHV-XC and store the session cookie."""
    try:
        session = await dhv_xc.authenticate(credentials.username, credentials.password)
    except dhv_xc.AuthenticationFailed as e:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(e))
    except dhv_xc.SessionCookieMissing as e:
        logger.error(f"Login for {credentials.username} returned no session cookie")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))
    except httpx.HTTPError as e:
        logger.error(f"Authentication error: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to authenticate",
        )

    # No max_age: the cookie ends with the browser session
    response.set_cookie(
        key=SESSION_COOKIE_NAME,
        value=session,
        httponly=True,
        secure=SECURE_COOKIES,
        samesite="lax",
        path="/",
    )
    return AuthResult(success=True, message="Authentication successful")


@router.get(
    "/check",
    response_model=AuthStatus,
    summary="Check the current session",
    responses={
        401: {"model": ErrorResponse, "description": "No session or session rejected by DHV-XC"},
        500: {"model": ErrorResponse, "description": "DHV-XC unreachable"},
    },
)
async def check_session(
    session: Optional[str] = Cookie(None, alias=SESSION_COOKIE_NAME),
):
    """Verify the stored session with DHV-XC and return the user name."""
    if not session:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")

    try:
        user = await dhv_xc.fetch_user(session)
    except dhv_xc.SessionExpired as e:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(e))
    except (httpx.HTTPError, dhv_xc.UnexpectedResponse) as e:
        logger.error(f"Auth check error: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to verify authentication",
        )

    return AuthStatus(username=str(user.get("username") or ""), authenticated=True)


@router.post("/logout", response_model=AuthResult, summary="Log out")
async def logout(response: Response):
    """Drop the stored session cookie."""
    response.delete_cookie(key=SESSION_COOKIE_NAME, path="/")
    return AuthResult(success=True, message="Logged out successfully")
