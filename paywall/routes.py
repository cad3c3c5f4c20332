import json

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import FileResponse

from paywall.auth import require_tier
from paywall.catalog import PRICES
from paywall.config import Settings
from paywall.credentials import issue_token, set_access_cookie
from paywall.models import CaptureOrderRequest, CreateOrderRequest
from paywall.transactions import TransactionService

router = APIRouter()


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_transactions(request: Request) -> TransactionService:
    return request.app.state.transactions


@router.post("/api/paypal/create")
def create_order_api(
    body: CreateOrderRequest,
    transactions: TransactionService = Depends(get_transactions),
):
    order_id = transactions.create_transaction(body.product_id)
    return {"orderId": order_id}


@router.post("/api/paypal/capture")
def capture_order_api(
    body: CaptureOrderRequest,
    response: Response,
    transactions: TransactionService = Depends(get_transactions),
    settings: Settings = Depends(get_settings),
):
    purchase = transactions.capture_transaction(body.order_id, body.product_id)

    token = issue_token(settings.jwt_secret, purchase.tier, purchase.payer)
    set_access_cookie(response, token, secure=settings.is_production)

    return {"ok": True, "tier": purchase.tier}


def _premium_page(tier: str):
    def premium_page(
        claim: dict = Depends(require_tier(tier)),
        settings: Settings = Depends(get_settings),
    ):
        return FileResponse(settings.protected_dir / f"{tier}.html")

    premium_page.__name__ = f"premium_{tier}"
    return premium_page


for _tier in PRICES:
    router.add_api_route(f"/premium/{_tier}", _premium_page(_tier), methods=["GET"])


@router.get("/config.js")
def paypal_config(settings: Settings = Depends(get_settings)):
    script = f"window.PAYPAL_CLIENT_ID={json.dumps(settings.paypal_client_id)};"
    return Response(content=script, media_type="application/javascript")


@router.get("/healthz")
def healthz():
    return {"ok": True}


@router.get("/")
def storefront(settings: Settings = Depends(get_settings)):
    return FileResponse(settings.static_dir / "index.html")
