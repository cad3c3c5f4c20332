import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from dotenv import load_dotenv

from paywall.errors import ConfigurationError

logger = logging.getLogger(__name__)

BASE_DIR = Path(__file__).resolve().parent.parent
ENV_PATH = BASE_DIR / ".env"

DEV_JWT_SECRET = "change-me-please"
PRODUCTION = "production"


@dataclass(frozen=True)
class Settings:
    paypal_client_id: str
    paypal_client_secret: str
    jwt_secret: str
    app_base_url: str = "https://meuqianimal.com.br"
    environment: str = PRODUCTION
    port: int = 10000
    paypal_api_base: str = "https://api-m.paypal.com"
    paypal_timeout: float = 15.0
    brand_name: str = "Meu QI Animal"
    static_dir: Path = BASE_DIR / "public"
    protected_dir: Path = BASE_DIR / "protected"

    @property
    def is_production(self) -> bool:
        return self.environment == PRODUCTION


def _clean(value: Optional[str]) -> str:
    return (value or "").strip().strip("'").strip('"')


def _number(env: Mapping[str, str], name: str, default, cast):
    raw = _clean(env.get(name))
    if not raw:
        return default
    try:
        value = cast(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}")
    if value <= 0:
        raise ConfigurationError(f"{name} must be positive, got {raw!r}")
    return value


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Build the process settings once, at startup.

    Reads ``environ`` when given, otherwise the process environment after
    loading the project ``.env`` file. Raises ``ConfigurationError`` when a
    required value is missing or unusable.
    """
    if environ is None:
        load_dotenv(dotenv_path=ENV_PATH)
        environ = os.environ

    client_id = _clean(environ.get("PAYPAL_CLIENT_ID"))
    client_secret = _clean(environ.get("PAYPAL_CLIENT_SECRET"))
    if not client_id or not client_secret:
        raise ConfigurationError("PAYPAL_CLIENT_ID and PAYPAL_CLIENT_SECRET must be set")

    environment = _clean(environ.get("APP_ENV")).lower() or PRODUCTION

    jwt_secret = _clean(environ.get("JWT_SECRET"))
    if environment == PRODUCTION:
        if not jwt_secret or jwt_secret == DEV_JWT_SECRET:
            raise ConfigurationError("JWT_SECRET must be set to a private value in production")
    elif not jwt_secret:
        logger.warning("JWT_SECRET is not set, using the development signing secret")
        jwt_secret = DEV_JWT_SECRET

    defaults = Settings(client_id, client_secret, jwt_secret)
    base_url = _clean(environ.get("APP_BASE_URL")) or defaults.app_base_url
    api_base = _clean(environ.get("PAYPAL_API_BASE")) or defaults.paypal_api_base
    static_dir = _clean(environ.get("STATIC_DIR"))
    protected_dir = _clean(environ.get("PROTECTED_DIR"))

    return Settings(
        paypal_client_id=client_id,
        paypal_client_secret=client_secret,
        jwt_secret=jwt_secret,
        app_base_url=base_url.rstrip("/"),
        environment=environment,
        port=_number(environ, "PORT", defaults.port, int),
        paypal_api_base=api_base.rstrip("/"),
        paypal_timeout=_number(environ, "PAYPAL_TIMEOUT", defaults.paypal_timeout, float),
        brand_name=_clean(environ.get("BRAND_NAME")) or defaults.brand_name,
        static_dir=Path(static_dir) if static_dir else defaults.static_dir,
        protected_dir=Path(protected_dir) if protected_dir else defaults.protected_dir,
    )
