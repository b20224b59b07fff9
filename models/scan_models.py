# models/scan_models.py

from __future__ import annotations

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class IssueEntry(BaseModel):
    id: str
    issue: Any = None
    whyItHurts: Any = None
    fix: Any = None


class ChecklistEntry(BaseModel):
    id: str
    label: Any = None
    checked: bool = False


class ScanRecord(BaseModel):
    """
    One row of the `scans` table.
    Flattened from an analysis result so history pages can filter and sort
    without opening the report JSON.
    """

    user_id: str
    domain: str
    url: str

    overall_score: int
    human_score: Union[int, float]
    ai_score: Union[int, float]

    human_clarity_description: Optional[str] = None
    human_value_prop: Optional[str] = None
    human_audience: Optional[str] = None
    human_confusions: List[Any] = Field(default_factory=list)

    ai_comprehension: Optional[str] = None
    ai_indexer_read: Optional[str] = None
    ai_missing_keywords: List[Any] = Field(default_factory=list)

    suggested_headline: Optional[str] = None
    suggested_subheadline: Optional[str] = None
    suggested_cta: Optional[str] = None

    action_plan: List[Any] = Field(default_factory=list)
    ai_prompt: Optional[str] = None

    issues: List[IssueEntry] = Field(default_factory=list)
    checklist: List[ChecklistEntry] = Field(default_factory=list)
    suggestions: List[Any] = Field(default_factory=list)

    def to_row(self) -> Dict[str, Any]:
        return self.model_dump()


# --------- Request bodies ---------


class AnalyzeRequest(BaseModel):
    url: Optional[Any] = None


class CreateScanRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    url: Optional[str] = None
    analyze_result: Optional[Dict[str, Any]] = Field(None, alias="analyzeResult")


class ChecklistUpdateRequest(BaseModel):
    checklist: Optional[List[Dict[str, Any]]] = None


class PreorderRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    email: Optional[Any] = None
    url: Optional[Any] = None
    source_url: Optional[Any] = Field(None, alias="sourceURL")
