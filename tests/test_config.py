from pathlib import Path

import pytest

from paywall.config import DEV_JWT_SECRET, load_settings
from paywall.errors import ConfigurationError

BASE_ENV = {
    "PAYPAL_CLIENT_ID": "client-id",
    "PAYPAL_CLIENT_SECRET": "client-secret",
    "JWT_SECRET": "s3cret",
}


def test_defaults():
    settings = load_settings(BASE_ENV)

    assert settings.environment == "production"
    assert settings.is_production
    assert settings.port == 10000
    assert settings.app_base_url == "https://meuqianimal.com.br"
    assert settings.paypal_api_base == "https://api-m.paypal.com"
    assert settings.paypal_timeout == 15.0


def test_overrides():
    settings = load_settings({
        **BASE_ENV,
        "APP_ENV": "development",
        "PORT": "8080",
        "APP_BASE_URL": "http://localhost:8080/",
        "PAYPAL_API_BASE": "https://api-m.sandbox.paypal.com",
        "PAYPAL_TIMEOUT": "2.5",
        "PROTECTED_DIR": "/srv/protected",
    })

    assert not settings.is_production
    assert settings.port == 8080
    assert settings.app_base_url == "http://localhost:8080"
    assert settings.paypal_api_base == "https://api-m.sandbox.paypal.com"
    assert settings.paypal_timeout == 2.5
    assert settings.protected_dir == Path("/srv/protected")


@pytest.mark.parametrize("missing", ["PAYPAL_CLIENT_ID", "PAYPAL_CLIENT_SECRET"])
def test_provider_credentials_required(missing):
    env = {k: v for k, v in BASE_ENV.items() if k != missing}

    with pytest.raises(ConfigurationError):
        load_settings(env)


@pytest.mark.parametrize("secret", [None, DEV_JWT_SECRET])
def test_production_requires_private_jwt_secret(secret):
    env = {k: v for k, v in BASE_ENV.items() if k != "JWT_SECRET"}
    if secret:
        env["JWT_SECRET"] = secret

    with pytest.raises(ConfigurationError):
        load_settings(env)


def test_development_falls_back_to_dev_secret():
    env = {k: v for k, v in BASE_ENV.items() if k != "JWT_SECRET"}

    settings = load_settings({**env, "APP_ENV": "development"})

    assert settings.jwt_secret == DEV_JWT_SECRET


@pytest.mark.parametrize("name, value", [("PORT", "abc"), ("PORT", "0"), ("PAYPAL_TIMEOUT", "-1")])
def test_invalid_numbers(name, value):
    with pytest.raises(ConfigurationError):
        load_settings({**BASE_ENV, name: value})
