# app/api/routes.py
from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from openai import OpenAI

from agents.brand_agent import analyze_brand
from app.config import Settings, get_settings
from app.dependencies import get_current_user_id, get_fetcher, get_llm_client, get_scan_store
from app.exceptions import (
    AriClearError,
    BadRequestError,
    ConfigurationError,
    InternalError,
    NotFoundError,
    StorageError,
)
from app.graph.lg_workflow import run_analysis
from models.brand_models import BrandAwarenessRequest
from models.scan_models import (
    AnalyzeRequest,
    ChecklistUpdateRequest,
    CreateScanRequest,
    PreorderRequest,
)
from services.storage import ScanStore, build_scan_record, compute_scan_stats

logger = logging.getLogger(__name__)

router = APIRouter()


# --------- Analysis ---------


@router.post("/analyze")
def api_analyze(
    payload: AnalyzeRequest,
    llm_client: Optional[OpenAI] = Depends(get_llm_client),
    settings: Settings = Depends(get_settings),
    fetcher=Depends(get_fetcher),
) -> dict:
    """
    Score one homepage URL.
    Returns the validated AnalysisReport, or {"error": ...} with a status.
    """
    logger.info("[api.analyze] start url=%s", payload.url)
    try:
        state = run_analysis(
            payload.url,
            llm_client=llm_client,
            settings=settings,
            fetcher=fetcher,
        )
    except AriClearError:
        raise
    except Exception as e:
        logger.exception("[api.analyze] unexpected error url=%s", payload.url)
        raise InternalError("Server error while analyzing the URL.") from e

    return state["report"].to_dict()


@router.post("/brand-awareness/analyze")
def api_brand_awareness(
    payload: BrandAwarenessRequest,
    llm_client: Optional[OpenAI] = Depends(get_llm_client),
    settings: Settings = Depends(get_settings),
) -> dict:
    if not (payload.business_name and payload.business_description and payload.target_audience):
        raise BadRequestError("Missing required fields")

    if llm_client is None:
        logger.error("[api.brand-awareness] no OpenAI client configured")
        raise ConfigurationError("Server error while analyzing brand awareness")

    try:
        report = analyze_brand(
            llm_client,
            payload.business_name,
            payload.business_description,
            payload.target_audience,
            payload.platforms.active(),
            model=settings.brand_model,
            temperature=settings.brand_temperature,
        )
    except AriClearError:
        raise
    except Exception as e:
        logger.exception("[api.brand-awareness] unexpected error")
        raise InternalError("Server error while analyzing brand awareness") from e

    logger.info("[api.brand-awareness] done brand=%s", payload.business_name)
    return report.to_dict()


# --------- Scan history ---------


@router.get("/scans")
def api_list_scans(
    filter_by: Optional[str] = Query(None, alias="filter"),
    sort_by: str = Query("date", alias="sortBy"),
    user_id: str = Depends(get_current_user_id),
    store: ScanStore = Depends(get_scan_store),
) -> dict:
    scans = store.list_scans(user_id, filter_by=filter_by, sort_by=sort_by)
    logger.info("[api.scans] user=%s filter=%s sort=%s found=%s", user_id, filter_by, sort_by, len(scans))
    return {"scans": scans}


@router.post("/scans", status_code=201)
def api_create_scan(
    payload: CreateScanRequest,
    user_id: str = Depends(get_current_user_id),
    store: ScanStore = Depends(get_scan_store),
) -> dict:
    if not payload.analyze_result or not payload.url:
        raise BadRequestError("Missing required fields")

    record = build_scan_record(user_id, payload.url, payload.analyze_result)
    logger.info(
        "[api.scans] saving user=%s domain=%s human=%s ai=%s overall=%s",
        user_id,
        record.domain,
        record.human_score,
        record.ai_score,
        record.overall_score,
    )
    return {"scan": store.create_scan(record)}


@router.get("/scans/stats")
def api_scan_stats(
    user_id: str = Depends(get_current_user_id),
    store: ScanStore = Depends(get_scan_store),
) -> dict:
    return {"stats": compute_scan_stats(store.all_scans(user_id))}


@router.get("/scans/{scan_id}")
def api_get_scan(
    scan_id: str,
    user_id: str = Depends(get_current_user_id),
    store: ScanStore = Depends(get_scan_store),
) -> dict:
    scan = store.get_scan(user_id, scan_id)
    if not scan:
        raise NotFoundError("Scan not found")
    return {"scan": scan}


@router.patch("/scans/{scan_id}")
def api_update_scan(
    scan_id: str,
    payload: ChecklistUpdateRequest,
    user_id: str = Depends(get_current_user_id),
    store: ScanStore = Depends(get_scan_store),
) -> dict:
    if payload.checklist is None:
        raise BadRequestError("Missing checklist data")

    scan = store.update_checklist(user_id, scan_id, payload.checklist)
    if not scan:
        raise StorageError("Failed to update scan")
    return {"scan": scan}


@router.delete("/scans/{scan_id}")
def api_delete_scan(
    scan_id: str,
    user_id: str = Depends(get_current_user_id),
    store: ScanStore = Depends(get_scan_store),
) -> dict:
    store.delete_scan(user_id, scan_id)
    logger.info("[api.scans] deleted id=%s user=%s", scan_id, user_id)
    return {"success": True}


# --------- Pre-order ---------


@router.post("/preorder", status_code=201)
def api_preorder(
    payload: PreorderRequest,
    store: ScanStore = Depends(get_scan_store),
) -> dict:
    if not payload.email or not isinstance(payload.email, str):
        raise BadRequestError("Invalid email")

    email = payload.email.strip().lower()
    url = payload.url.strip() if isinstance(payload.url, str) and payload.url.strip() else None

    row = store.save_preorder(email, url, payload.source_url)
    return {"ok": True, "row": row}
