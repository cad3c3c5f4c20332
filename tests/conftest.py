import pytest
from fastapi.testclient import TestClient

from paywall.config import Settings
from paywall.main import create_app


@pytest.fixture
def settings(tmp_path):
    protected = tmp_path / "protected"
    protected.mkdir()
    (protected / "predador.html").write_text("<h1>predador premium</h1>")
    (protected / "cachorro.html").write_text("<h1>cachorro premium</h1>")
    public = tmp_path / "public"
    public.mkdir()
    (public / "bloqueado.html").write_text("<h1>blocked</h1>")

    return Settings(
        paypal_client_id="client-id",
        paypal_client_secret="client-secret",
        jwt_secret="test-secret",
        app_base_url="https://shop.example",
        environment="development",
        paypal_api_base="https://paypal.test",
        static_dir=public,
        protected_dir=protected,
    )


@pytest.fixture
def paypal(mocker):
    # Provider stub; tests configure return values per call
    client = mocker.Mock()
    client.get_access_token.return_value = "A21-token"
    return client


@pytest.fixture
def client(settings, paypal):
    with TestClient(create_app(settings, client=paypal)) as c:
        yield c
