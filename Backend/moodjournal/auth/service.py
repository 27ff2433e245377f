import logging
from uuid import UUID
from datetime import datetime, timedelta, timezone
from jose import jwt, JWTError
from fastapi import HTTPException, Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from typing import Optional

from moodjournal.core.config import SECRET_KEY, ALGORITHM, ACCESS_TOKEN_EXPIRE_MINUTES

# Accounts live in the identity service; this module only checks its tokens.
logger = logging.getLogger(__name__)
bearer = HTTPBearer()


def create_token(user_id: UUID, expires_delta: Optional[timedelta] = None) -> str:
    """
    Mints an access token in the identity service's format.

    Args:
        user_id (UUID): Account the token is issued for.
        expires_delta (Optional[timedelta]): Lifetime; defaults to ACCESS_TOKEN_EXPIRE_MINUTES.

    Returns:
        str: Signed JWT.
    """
    now = datetime.now(timezone.utc)
    if expires_delta is None:
        expires_delta = timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)
    payload = {
        "sub": str(user_id),
        "type": "access",
        "iat": now,
        "exp": now + expires_delta,
    }
    return jwt.encode(payload, SECRET_KEY, algorithm=ALGORITHM)


def decode_token(token: str) -> dict:
    """
    Decodes and validates a JWT token.

    Args:
        token (str): JWT string.

    Returns:
        dict: Decoded payload.

    Raises:
        HTTPException: If token is invalid or expired.
    """
    try:
        return jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM], options={"verify_aud": False})
    except JWTError as e:
        logger.info(f"Rejected bearer token: {e}")
        raise HTTPException(status_code=401, detail="Invalid or expired authentication token")


def get_current_user_id(
    creds: HTTPAuthorizationCredentials = Depends(bearer),
) -> UUID:
    """
    Extracts the account ID from an access token.

    Args:
        creds (HTTPAuthorizationCredentials): Bearer token.

    Returns:
        UUID: Account UUID.

    Raises:
        HTTPException: If token is invalid, is not an access token, or lacks a subject.
    """
    payload = decode_token(creds.credentials)
    if payload.get("type") != "access":
        raise HTTPException(status_code=401, detail="Invalid token type")
    user_id = payload.get("sub")
    if not user_id:
        raise HTTPException(status_code=401, detail="Token missing subject field")
    try:
        return UUID(user_id)
    except ValueError:
        raise HTTPException(status_code=401, detail="Invalid user ID in token")
