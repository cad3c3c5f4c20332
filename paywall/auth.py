import logging
from typing import Any, Callable, Dict

from fastapi import Request
from jose import JWTError, jwt

from paywall.credentials import ALGORITHM, COOKIE_NAME, TOKEN_TYPE
from paywall.errors import CredentialInvalid

logger = logging.getLogger(__name__)

BLOCKED_URL = "/public/bloqueado.html"


def verify_credential(token: str, secret: str) -> Dict[str, Any]:
    """Check signature and expiry; return the claims."""
    try:
        claims = jwt.decode(token, secret, algorithms=[ALGORITHM])
    except JWTError as exc:
        raise CredentialInvalid(str(exc)) from exc
    if claims.get("typ") != TOKEN_TYPE:
        raise CredentialInvalid(f"unexpected token type {claims.get('typ')!r}")
    return claims


def require_tier(tier: str) -> Callable[[Request], Dict[str, Any]]:
    """Dependency admitting only requests whose cookie grants ``tier``.

    Denials raise ``CredentialInvalid``, which the app turns into a redirect
    to the blocked page.
    """

    def guard(request: Request) -> Dict[str, Any]:
        token = request.cookies.get(COOKIE_NAME)
        if not token:
            raise CredentialInvalid("missing credential")
        claims = verify_credential(token, request.app.state.settings.jwt_secret)
        if claims.get("tier") != tier:
            raise CredentialInvalid(f"credential for {claims.get('tier')!r}, need {tier!r}")
        request.state.claim = claims
        return claims

    return guard
