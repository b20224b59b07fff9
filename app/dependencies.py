# app/dependencies.py
"""FastAPI dependencies handing out the clients built in the app lifespan."""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import Depends, Header, Request
from openai import OpenAI

from app.exceptions import ConfigurationError, UnauthorizedError
from services.crawler import fetch_html
from services.storage import ScanStore

logger = logging.getLogger(__name__)


def get_llm_client(request: Request) -> Optional[OpenAI]:
    # None is allowed here; the workflow rejects it after input validation
    return getattr(request.app.state, "openai_client", None)


def get_scan_store(request: Request) -> ScanStore:
    store = getattr(request.app.state, "scan_store", None)
    if store is None:
        logger.error("[dependencies] scan store requested but Supabase is not configured")
        raise ConfigurationError()
    return store


def _bearer_token(authorization: Optional[str]) -> Optional[str]:
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def get_current_user_id(
    authorization: Optional[str] = Header(None),
    store: ScanStore = Depends(get_scan_store),
) -> str:
    """Supabase user id behind the bearer token, else 401."""
    token = _bearer_token(authorization)
    if token is None:
        raise UnauthorizedError()

    user_id = store.get_user_id(token)
    if not user_id:
        raise UnauthorizedError()
    return user_id


def get_fetcher():
    """Page fetch function used by the analysis workflow."""
    return fetch_html
