"""FastAPI dependency utilities."""

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from rating_notifications.application.use_cases.notifications import NotificationService
from rating_notifications.domain.exceptions import IdentityError
from rating_notifications.infrastructure.database import get_db
from rating_notifications.infrastructure.security import decode_access_token

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/token", auto_error=False)


def resolve_profile_id(token: str | None) -> str:
    """Return the profile id carried by ``token``.

    Raises :class:`IdentityError` when the token is missing, invalid or expired.
    """

    if not token:
        raise IdentityError("Missing bearer token")
    try:
        payload = decode_access_token(token)
    except ValueError as exc:
        raise IdentityError("Invalid credentials") from exc

    profile_id = payload.get("sub")
    if not isinstance(profile_id, str) or not profile_id:
        raise IdentityError("Invalid credentials")
    return profile_id


def get_current_profile_id(token: str | None = Depends(oauth2_scheme)) -> str:
    """Return the authenticated profile id from the provided token."""

    try:
        return resolve_profile_id(token)
    except IdentityError as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
            headers={"WWW-Authenticate": "Bearer"},
        ) from exc


def get_notification_service(db: Session = Depends(get_db)) -> NotificationService:
    """Return a :class:`NotificationService` bound to the request session."""

    return NotificationService.from_session(db)
