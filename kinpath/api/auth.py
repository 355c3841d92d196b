import secrets

from fastapi import HTTPException, Request, status
from fastapi.security import HTTPBasicCredentials
from loguru import logger

from kinpath.config import settings


def verify_basic_auth(credentials: HTTPBasicCredentials) -> bool:
    """Verify basic auth credentials without raising exceptions."""
    if settings.auth_username is None or settings.auth_password is None:
        logger.warning("Login attempted but no credentials are configured")
        return False
    is_correct_username = secrets.compare_digest(credentials.username, settings.auth_username)
    is_correct_password = secrets.compare_digest(credentials.password, settings.auth_password)
    return is_correct_username and is_correct_password


def verify_session(request: Request) -> str:
    """Verify session-based authentication."""
    if not request.session.get("authenticated"):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )
    return request.session.get("username", "")


def is_authenticated(request: Request) -> bool:
    """Check if user is authenticated via session."""
    return bool(request.session.get("authenticated"))
