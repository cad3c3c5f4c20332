import logging
from typing import Mapping

from paywall.catalog import PRICES, Product, lookup
from paywall.errors import (
    InvalidRequestError,
    PaymentCaptureError,
    PaymentCreateError,
    PaymentVerificationFailed,
    ProviderError,
    UnknownProductError,
)
from paywall.models import CaptureResult, VerifiedPurchase
from paywall.paypal_client import PayPalClient

logger = logging.getLogger(__name__)


def verify_capture(capture: CaptureResult, product: Product) -> None:
    """Accept only a COMPLETED capture of exactly the catalog amount and currency.

    Amounts are compared as strings, so "4.9" or "4.990" never pass for "4.99".
    """
    if not capture.completed:
        raise PaymentVerificationFailed(f"status={capture.status}")
    if capture.amount != product.amount:
        raise PaymentVerificationFailed(f"amount={capture.amount} expected={product.amount}")
    if capture.currency != product.currency:
        raise PaymentVerificationFailed(f"currency={capture.currency} expected={product.currency}")


class TransactionService:
    def __init__(self, client: PayPalClient, catalog: Mapping[str, Product] = PRICES) -> None:
        self._client = client
        self._catalog = catalog

    def create_transaction(self, product_id: str) -> str:
        product = lookup(product_id, self._catalog)
        try:
            token = self._client.get_access_token()
            order_id = self._client.create_order(token, product)
        except ProviderError as exc:
            logger.error("payments.create failed product=%s status=%s detail=%s",
                         product.id, exc.status_code, exc.detail or exc)
            raise PaymentCreateError(str(exc)) from exc
        logger.info("payments.create order_id=%s product=%s", order_id, product.id)
        return order_id

    def capture_transaction(self, order_id: str, product_id: str) -> VerifiedPurchase:
        if not order_id:
            raise InvalidRequestError("missing order id")
        try:
            product = lookup(product_id, self._catalog)
        except UnknownProductError as exc:
            raise InvalidRequestError(f"unknown product {product_id!r}") from exc

        try:
            token = self._client.get_access_token()
            data = self._client.capture_order(token, order_id)
        except ProviderError as exc:
            logger.error("payments.capture failed order_id=%s status=%s detail=%s",
                         order_id, exc.status_code, exc.detail or exc)
            raise PaymentCaptureError(str(exc)) from exc

        capture = CaptureResult.from_payload(data)
        try:
            verify_capture(capture, product)
        except PaymentVerificationFailed as exc:
            logger.warning("payments.capture rejected order_id=%s product=%s %s",
                           order_id, product.id, exc)
            raise

        logger.info("payments.capture verified order_id=%s tier=%s", order_id, product.id)
        return VerifiedPurchase(tier=product.id, payer=capture.payer, order_id=order_id)
