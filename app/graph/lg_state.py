# app/graph/lg_state.py
from __future__ import annotations

from typing import Any, Dict


class AnalysisState(Dict[str, Any]):
    """
    State container passed node to node.
    A plain dict; the subclass only makes signatures easier to read.

    Keys filled along the way:
      url, html, extracted, report, overall_score,
      progress_messages, current_node
    """
    pass


def create_initial_state(url: Any) -> AnalysisState:
    state: AnalysisState = AnalysisState()
    state["url"] = url
    state["progress_messages"] = []
    state["current_node"] = None
    return state
