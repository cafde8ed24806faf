# FileServer/dependencies.py
import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends, Query, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
import jwt  # PyJWT

from . import config

bearer_scheme = HTTPBearer(auto_error=False)


class NotAuthenticated(Exception):
    """Missing, invalid, expired or revoked token."""

    def __init__(self, reason: str = "Not authenticated"):
        self.reason = reason
        super().__init__(reason)


def create_access_token(username: str, expires_minutes: Optional[int] = None) -> str:
    expire = datetime.now(timezone.utc) + timedelta(minutes=expires_minutes or config.ACCESS_TOKEN_EXPIRE_MINUTES)
    payload = {"sub": username, "jti": uuid.uuid4().hex, "exp": expire}
    return jwt.encode(payload, config.SECRET_KEY, algorithm=config.ALGORITHM)


def decode_token(token: str) -> dict:
    try:
        return jwt.decode(token, config.SECRET_KEY, algorithms=[config.ALGORITHM])
    except jwt.ExpiredSignatureError:
        raise NotAuthenticated("token expired")
    except jwt.InvalidTokenError:
        raise NotAuthenticated("invalid token")


def get_auth(request: Request):
    return request.app.state.auth


def get_files(request: Request):
    return request.app.state.files


def raw_token(
    creds: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    token: Optional[str] = Query(default=None),
) -> str:
    """Bearer header first, then the ?token= query parameter used by download links."""
    if creds and creds.credentials:
        return creds.credentials
    return token or ""


def get_current_user(token: str = Depends(raw_token), auth=Depends(get_auth)) -> dict:
    if not token:
        raise NotAuthenticated()
    payload = decode_token(token)
    username = payload.get("sub"); jti = payload.get("jti")
    if not (username and jti):
        raise NotAuthenticated("invalid token payload")
    if auth.is_revoked(jti):
        raise NotAuthenticated("token revoked")
    return {"username": username, "jti": jti, "exp": payload.get("exp"), "token": token}
