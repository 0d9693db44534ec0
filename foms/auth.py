"""
Bearer-token identity.

Sign-in and token issuance belong to the identity provider; this module only
verifies the JWT it hands out. Endpoints receive an Optional[Identity] and the
service layer decides whether a signed-in caller is required.
"""
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from foms.config import get_settings

security = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class Identity:
    subject: str
    email: Optional[str] = None


def create_access_token(subject: str, email: Optional[str] = None) -> str:
    """Issue a token the way the identity provider does. Local development and tests only."""
    settings = get_settings()
    expire = datetime.utcnow() + timedelta(minutes=settings.access_token_expire_minutes)
    payload = {
        "sub": subject,
        "email": email,
        "exp": expire,
    }
    if settings.token_issuer:
        payload["iss"] = settings.token_issuer
    return jwt.encode(payload, settings.secret_key, algorithm=settings.algorithm)


def decode_token(token: str) -> Optional[Identity]:
    settings = get_settings()
    options = {"verify_iss": settings.token_issuer is not None}
    try:
        payload = jwt.decode(
            token,
            settings.secret_key,
            algorithms=[settings.algorithm],
            issuer=settings.token_issuer,
            options=options,
        )
    except JWTError:
        return None

    subject = payload.get("sub")
    if not subject:
        return None
    return Identity(subject=subject, email=payload.get("email"))


def get_optional_identity(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Optional[Identity]:
    """The caller's identity, or None when signed out or the token is invalid."""
    if not credentials:
        return None
    return decode_token(credentials.credentials)
