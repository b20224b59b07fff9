# app/graph/lg_workflow.py
from __future__ import annotations

import logging
from typing import Any, Optional

from openai import OpenAI

from app.config import Settings
from app.exceptions import ConfigurationError
from app.graph import nodes
from app.graph.lg_state import AnalysisState, create_initial_state
from services.crawler import fetch_html

logger = logging.getLogger(__name__)


def run_analysis(
    url: Any,
    *,
    llm_client: Optional[OpenAI],
    settings: Settings,
    fetcher: nodes.Fetcher = fetch_html,
) -> AnalysisState:
    """
    Straight-line pipeline behind /api/analyze.

    validate_input -> fetch -> extract -> generate -> score

    No retries and no partial results: the first failing node raises and
    the state is dropped.
    """
    state = create_initial_state(url)

    # 1) input check, no network
    state = nodes.validate_input_node(state)

    if llm_client is None:
        logger.error("[lg_workflow] no OpenAI client configured (OPENAI_API_KEY missing)")
        raise ConfigurationError("Server error while analyzing the URL.")

    # 2) page fetch
    state = nodes.fetch_node(state, fetcher, settings)

    # 3) HTML -> ExtractedPageContent
    state = nodes.extract_node(state, settings)

    # 4) LLM report, validated
    state = nodes.generate_node(state, llm_client, settings)

    # 5) overall score
    state = nodes.score_node(state)

    logger.info(
        "[lg_workflow] run_analysis done url=%s overall=%s",
        state["url"],
        state.get("overall_score"),
    )
    return state
