# models/page_models.py

from __future__ import annotations

from typing import List

from pydantic import BaseModel, ConfigDict, Field


class ExtractedPageContent(BaseModel):
    """
    Text features pulled from one page's HTML.
    Built fresh per analysis, sent once as the LLM user payload, never stored.
    """

    model_config = ConfigDict(populate_by_name=True)

    title: str = ""
    meta_description: str = Field("", alias="metaDescription")
    h1: str = ""

    # first few <h2> texts, empty ones dropped
    h2s: List[str] = Field(default_factory=list)

    # body text with noise tags removed, whitespace collapsed, hard-truncated
    body_snippet: str = Field("", alias="bodySnippet")

    def to_payload(self) -> dict:
        """camelCase dict used in the generation request."""
        return self.model_dump(by_alias=True)
