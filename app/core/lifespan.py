"""Application lifespan: startup and shutdown.

Single place for all startup/shutdown logic (SRP). Used by main.py;
no business logic here, only wiring of the external clients (Firebase
Realtime Database, Authentication and Storage, Razorpay) onto app.state.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

import httpx
from fastapi import FastAPI

from app.core.config import get_settings
from app.infrastructure.external.payments import RazorpayGateway
from app.infrastructure.firebase import init_firebase

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Build the shared HTTP client and service clients, yield, then close the client.

    Route dependencies read app.state.database, identity, storage and
    payment_gateway; tests replace those dependencies instead.
    """
    settings = get_settings()

    # ---- Startup ----
    # One HTTP client for every Firebase REST call (connection reuse).
    app.state.http_client = httpx.AsyncClient(timeout=settings.http_timeout_seconds)

    firebase = init_firebase(settings, app.state.http_client)
    app.state.database = firebase.database
    app.state.identity = firebase.identity
    app.state.storage = firebase.storage
    if firebase.storage is None:
        logger.warning("Firebase Storage not configured; image uploads are disabled")

    if settings.razorpay_key_id:
        app.state.payment_gateway = RazorpayGateway(
            settings.razorpay_key_id,
            settings.razorpay_key_secret.get_secret_value(),
        )
    else:
        app.state.payment_gateway = None
        logger.warning("RAZORPAY_KEY_ID not set; payment routes are disabled")

    logger.info("%s %s started", settings.app_name, settings.app_version)

    yield

    # ---- Shutdown ----
    if getattr(app.state, "http_client", None) is not None:
        await app.state.http_client.aclose()
        app.state.http_client = None
        logger.info("HTTP client closed")
