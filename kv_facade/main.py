"""
kv_facade - Application Entry Point

FastAPI application exposing a small HTTP façade over a key-value store.

Startup order (lifespan):
1. Open the key-value store connection. With `fail_fast` (default) a failure
   aborts startup before the server listens; otherwise it is logged and the
   store-backed routes answer 500 until restart.
2. Create the outbound HTTP client used by fetch-and-save.
Both are closed again on shutdown.

Run (development):

    uvicorn kv_facade.main:create_app --factory --reload --port 3000

or use the `kv-facade` command (see kv_facade/__main__.py).
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

import httpx
from fastapi import FastAPI

from kv_facade import __version__
from kv_facade.api.router import plain_router, router, viewer_router
from kv_facade.config import Settings, load_settings
from kv_facade.databases.kv import KVStore, build_store
from kv_facade.errors import StoreUnavailable
from kv_facade.fetch_and_save import FetchAndSave

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str) -> None:
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)


def create_app(
    settings: Optional[Settings] = None,
    store: Optional[KVStore] = None,
    http_client: Optional[httpx.Client] = None,
) -> FastAPI:
    """
    Build the application.

    Args:
        settings: Runtime settings; loaded from file/environment when omitted.
        store: Store to use instead of the one named by `settings.store_url`.
            It is connected and closed by the application lifespan.
        http_client: Client for outbound fetches. A caller-supplied client is
            left open on shutdown.
    """
    if settings is None:
        # Factory path (uvicorn --factory, reload subprocess): nothing configured logging yet.
        settings = load_settings()
        configure_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        kv_store = store or build_store(settings.store_url, table=settings.store_table)
        try:
            kv_store.connect()
            logger.info(f"Key-value store '{kv_store.NAME}' ready")
        except StoreUnavailable as exc:
            if settings.fail_fast:
                logger.error(f"Could not connect to the key-value store: {exc}")
                raise
            logger.error(
                f"Could not connect to the key-value store, starting degraded: {exc}"
            )

        client = http_client or httpx.Client(
            timeout=settings.fetch_timeout, follow_redirects=True
        )
        app.state.settings = settings
        app.state.store = kv_store
        app.state.fetch_and_save = FetchAndSave(
            kv_store, client, url=settings.fetch_url, key_prefix=settings.key_prefix
        )
        try:
            yield
        finally:
            if http_client is None:
                client.close()
            kv_store.close()

    app = FastAPI(
        title="kv_facade",
        version=__version__,
        description="HTTP façade over a key-value store",
        lifespan=lifespan,
    )

    if settings.variant == "viewer":
        app.include_router(viewer_router)
    else:
        app.include_router(plain_router)
    app.include_router(router)

    return app
