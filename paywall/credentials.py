from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Response
from jose import jwt

ALGORITHM = "HS256"
TOKEN_TYPE = "access"
TOKEN_TTL = timedelta(days=7)
COOKIE_NAME = "mqa_token"


def issue_token(secret: str, tier: str, identity: str, issued_at: Optional[datetime] = None) -> str:
    """Sign an access credential for ``tier`` that expires after seven days."""
    issued_at = issued_at or datetime.now(timezone.utc)
    claims = {
        "typ": TOKEN_TYPE,
        "tier": tier,
        "email": identity,
        "ts": int(issued_at.timestamp() * 1000),
        "iat": int(issued_at.timestamp()),
        "exp": int((issued_at + TOKEN_TTL).timestamp()),
    }
    return jwt.encode(claims, secret, algorithm=ALGORITHM)


def set_access_cookie(response: Response, token: str, secure: bool) -> None:
    response.set_cookie(
        key=COOKIE_NAME,
        value=token,
        httponly=True,
        secure=secure,
        samesite="lax",
        max_age=int(TOKEN_TTL.total_seconds()),
        path="/",
    )
