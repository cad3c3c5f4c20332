import logging
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, RedirectResponse
from fastapi.staticfiles import StaticFiles
from starlette.status import HTTP_302_FOUND

from paywall.auth import BLOCKED_URL
from paywall.config import Settings, load_settings
from paywall.errors import (
    ConfigurationError,
    CredentialInvalid,
    InvalidRequestError,
    TransactionError,
)
from paywall.paypal_client import PayPalClient
from paywall.routes import router
from paywall.transactions import TransactionService

logger = logging.getLogger(__name__)


def create_app(settings: Settings, client: Optional[PayPalClient] = None) -> FastAPI:
    client = client or PayPalClient(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        client.close()

    app = FastAPI(title="Premium Access Paywall", lifespan=lifespan)
    app.state.settings = settings
    app.state.transactions = TransactionService(client)

    app.include_router(router)
    app.mount("/public", StaticFiles(directory=settings.static_dir, html=True, check_dir=False), name="public")

    @app.exception_handler(TransactionError)
    async def transaction_error(request: Request, exc: TransactionError):
        return JSONResponse(status_code=exc.status_code, content={"error": exc.public_message})

    @app.exception_handler(RequestValidationError)
    async def invalid_body(request: Request, exc: RequestValidationError):
        logger.info("rejected body path=%s errors=%s", request.url.path, len(exc.errors()))
        return JSONResponse(status_code=400, content={"error": InvalidRequestError.public_message})

    @app.exception_handler(CredentialInvalid)
    async def blocked(request: Request, exc: CredentialInvalid):
        logger.debug("access denied path=%s reason=%s", request.url.path, exc)
        return RedirectResponse(url=BLOCKED_URL, status_code=HTTP_302_FOUND)

    return app


def run() -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    try:
        settings = load_settings()
    except ConfigurationError as exc:
        logger.error("refusing to start: %s", exc)
        raise SystemExit(1)

    logger.info("starting on port %s (env=%s)", settings.port, settings.environment)
    uvicorn.run(create_app(settings), host="0.0.0.0", port=settings.port)


if __name__ == "__main__":
    run()
