"""
HTTP routes for the key-value façade.

API Endpoints:
  GET  /set/{key}/{value}   : Write a value (plain text confirmation)
  GET  /get/{key}           : Read a value (plain text)
  GET  /health              : Store round-trip check

Viewer variant only (`viewer_router`):
  GET  /                    : HTML page with one button per key
  GET  /get-value/{key}     : JSON {"value": ...} used by the page
  GET  /fetch-and-save      : Fetch the configured page and store its <pre> text

Plain variant only (`plain_router`):
  GET  /                    : Welcome text

Every handler catches failures at its own boundary and answers with an error
response carrying the error message. The store and the workflow come from
`app.state`, set up by the application lifespan.
"""

import logging
from typing import Dict, Optional

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import HTMLResponse, JSONResponse, PlainTextResponse

from kv_facade.databases.kv import KVStore
from kv_facade.fetch_and_save import FetchAndSave
from kv_facade.utils.viewer import WELCOME_TEXT, render_key_viewer

logger = logging.getLogger(__name__)

router = APIRouter()
viewer_router = APIRouter()
plain_router = APIRouter()


def get_store(request: Request) -> KVStore:
    return request.app.state.store


def get_fetch_and_save(request: Request) -> FetchAndSave:
    return request.app.state.fetch_and_save


# =======================================================
# COMMON ROUTES
# =======================================================


@router.get("/set/{key}/{value}", response_class=PlainTextResponse)
def set_value(key: str, value: str, store: KVStore = Depends(get_store)):
    try:
        store.set(key, value)
    except Exception as exc:
        logger.error(f"Error setting key '{key}': {exc}")
        return PlainTextResponse(
            f'Error setting key: "{key}". Error: {exc}', status_code=500
        )
    return PlainTextResponse(f'Successfully set key: "{key}" with value: "{value}"')


@router.get("/get/{key}", response_class=PlainTextResponse)
def get_value(key: str, store: KVStore = Depends(get_store)):
    try:
        value = store.get(key)
    except Exception as exc:
        logger.error(f"Error getting key '{key}': {exc}")
        return PlainTextResponse(
            f'Error getting key: "{key}". Error: {exc}', status_code=500
        )
    if value is None:
        return PlainTextResponse(f'Key "{key}" not found.', status_code=404)
    return PlainTextResponse(f'The value for key "{key}" is: "{value}"')


@router.get("/health", summary="Health check")
def health(store: KVStore = Depends(get_store)) -> Dict[str, str]:
    try:
        store.ping()
    except Exception as exc:
        raise HTTPException(status_code=503, detail=str(exc))
    return {"status": "ok"}


# =======================================================
# VIEWER VARIANT
# =======================================================


@viewer_router.get("/", response_class=HTMLResponse)
def key_viewer(store: KVStore = Depends(get_store)):
    try:
        keys = store.list_keys()
    except Exception as exc:
        logger.error(f"Error listing keys: {exc}")
        return PlainTextResponse(
            f"Error retrieving keys from the store. Error: {exc}", status_code=500
        )
    return HTMLResponse(render_key_viewer(keys))


@viewer_router.get("/get-value/{key}")
def get_value_json(key: str, store: KVStore = Depends(get_store)):
    try:
        value: Optional[str] = store.get(key)
    except Exception as exc:
        logger.error(f"Error getting key '{key}': {exc}")
        return JSONResponse({"error": "Error getting value."}, status_code=500)
    if value is None:
        return JSONResponse({"value": None}, status_code=404)
    return JSONResponse({"value": value})


@viewer_router.get("/fetch-and-save", response_class=PlainTextResponse)
def fetch_and_save(workflow: FetchAndSave = Depends(get_fetch_and_save)):
    try:
        result = workflow.run()
    except Exception as exc:
        logger.error(f"Error fetching and saving content from {workflow.url}: {exc}")
        return PlainTextResponse(
            f"Error fetching or saving content. Error: {exc}", status_code=500
        )
    return PlainTextResponse(
        f"Successfully fetched content from {result.url}, extracted text, "
        f'and saved to a new key: "{result.key}"'
    )


# =======================================================
# PLAIN VARIANT
# =======================================================


@plain_router.get("/", response_class=PlainTextResponse)
def welcome():
    return PlainTextResponse(WELCOME_TEXT)
