import logging
from typing import Any, Dict, Optional
from urllib.parse import quote

import httpx

from paywall.catalog import Product
from paywall.config import Settings
from paywall.errors import ProviderAuthError, ProviderRequestError

logger = logging.getLogger(__name__)


def _error_detail(resp: httpx.Response):
    try:
        return resp.json()
    except ValueError:
        return resp.text


class PayPalClient:
    """
    Sync PayPal client. Handlers run in the server threadpool, so a slow
    provider call only holds its own worker.
    """

    def __init__(self, settings: Settings, transport: Optional[httpx.BaseTransport] = None) -> None:
        self._settings = settings
        self._client = httpx.Client(
            base_url=settings.paypal_api_base,
            timeout=settings.paypal_timeout,
            transport=transport,
        )

    def close(self) -> None:
        self._client.close()

    def get_access_token(self) -> str:
        """Exchange the client id/secret for a short-lived bearer token."""
        try:
            resp = self._client.post(
                "/v1/oauth2/token",
                data={"grant_type": "client_credentials"},
                auth=(self._settings.paypal_client_id, self._settings.paypal_client_secret),
                headers={"Accept": "application/json"},
            )
        except httpx.HTTPError as exc:
            logger.warning("paypal.token transport error: %s", exc)
            raise ProviderAuthError(f"token request failed: {exc}") from exc

        if resp.is_error:
            detail = _error_detail(resp)
            logger.warning("paypal.token status=%s detail=%s", resp.status_code, detail)
            raise ProviderAuthError("token request rejected", resp.status_code, detail)

        try:
            body = resp.json()
        except ValueError:
            body = None
        token = body.get("access_token") if isinstance(body, dict) else None
        if not token:
            raise ProviderAuthError("token response without access_token", resp.status_code, resp.text)
        return token

    def create_order(self, access_token: str, product: Product) -> str:
        base_url = self._settings.app_base_url
        payload = {
            "intent": "CAPTURE",
            "purchase_units": [
                {
                    "amount": {"currency_code": product.currency, "value": product.amount},
                    "description": f"{self._settings.brand_name} - {product.label}",
                }
            ],
            "application_context": {
                "brand_name": self._settings.brand_name,
                "user_action": "PAY_NOW",
                "return_url": f"{base_url}/return",
                "cancel_url": f"{base_url}/cancel",
            },
        }
        data = self._post("/v2/checkout/orders", access_token, payload)
        order_id = data.get("id")
        if not order_id:
            raise ProviderRequestError("order response without id", detail=data)
        return order_id

    def capture_order(self, access_token: str, order_id: str) -> Dict[str, Any]:
        path = f"/v2/checkout/orders/{quote(order_id, safe='')}/capture"
        return self._post(path, access_token, {})

    def _post(self, path: str, access_token: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        try:
            resp = self._client.post(
                path,
                json=payload,
                headers={"Authorization": f"Bearer {access_token}"},
            )
        except httpx.HTTPError as exc:
            logger.warning("paypal.request %s transport error: %s", path, exc)
            raise ProviderRequestError(f"request to {path} failed: {exc}") from exc

        if resp.is_error:
            detail = _error_detail(resp)
            logger.warning("paypal.request %s status=%s detail=%s", path, resp.status_code, detail)
            raise ProviderRequestError(f"request to {path} rejected", resp.status_code, detail)

        try:
            data = resp.json()
        except ValueError as exc:
            raise ProviderRequestError(f"non-JSON response from {path}", resp.status_code, resp.text) from exc
        if not isinstance(data, dict):
            raise ProviderRequestError(f"unexpected response from {path}", resp.status_code, data)
        return data
