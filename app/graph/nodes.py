# app/graph/nodes.py
from __future__ import annotations

import logging
from typing import Callable, List

from openai import OpenAI

from agents.report_agent import generate_report
from app.config import Settings
from app.graph.lg_state import AnalysisState
from models.analysis_models import AnalysisReport
from models.page_models import ExtractedPageContent
from services.crawler import require_http_url
from services.html_parser import extract_page_content
from services.scoring import aggregate_score

logger = logging.getLogger(__name__)

Fetcher = Callable[..., str]


def _log_progress(state: AnalysisState, node: str, message: str) -> AnalysisState:
    """Append a progress line to the state and log it."""
    line = f"[{node}] {message}"

    messages: List[str] = list(state.get("progress_messages", []))
    messages.append(line)

    state["progress_messages"] = messages
    state["current_node"] = node

    logger.info(line)
    return state


# ---------- input ----------


def validate_input_node(state: AnalysisState) -> AnalysisState:
    """Reject anything but an absolute http(s) URL, before any network call."""
    state["url"] = require_http_url(state.get("url"))
    return _log_progress(state, "validate_input", f"ok: {state['url']}")


# ---------- fetch ----------


def fetch_node(state: AnalysisState, fetcher: Fetcher, settings: Settings) -> AnalysisState:
    state = _log_progress(state, "fetch", "start")

    state["html"] = fetcher(
        state["url"],
        timeout=settings.fetch_timeout,
        user_agent=settings.fetch_user_agent,
    )

    return _log_progress(state, "fetch", f"done: {len(state['html'])} chars")


# ---------- extract ----------


def extract_node(state: AnalysisState, settings: Settings) -> AnalysisState:
    # html is only needed here; do not carry it further
    html = state.pop("html", "")

    extracted: ExtractedPageContent = extract_page_content(
        html,
        max_snippet_len=settings.max_snippet_len,
        max_h2s=settings.max_h2s,
    )
    state["extracted"] = extracted

    return _log_progress(
        state,
        "extract",
        f"done: title={bool(extracted.title)} h1={bool(extracted.h1)} "
        f"h2s={len(extracted.h2s)} snippet={len(extracted.body_snippet)}",
    )


# ---------- generate ----------


def generate_node(state: AnalysisState, llm_client: OpenAI, settings: Settings) -> AnalysisState:
    state = _log_progress(state, "generate", f"start: model={settings.openai_model}")

    report: AnalysisReport = generate_report(
        llm_client,
        state["url"],
        state["extracted"],
        model=settings.openai_model,
        temperature=settings.report_temperature,
    )
    state["report"] = report

    return _log_progress(state, "generate", "done: report validated")


# ---------- score ----------


def score_node(state: AnalysisState) -> AnalysisState:
    report: AnalysisReport = state["report"]
    state["overall_score"] = aggregate_score(report.human.clarity_score, report.ai.ai_seo_score)
    return _log_progress(state, "score", f"done: overall={state['overall_score']}")
