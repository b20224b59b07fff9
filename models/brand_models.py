# models/brand_models.py

from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

from models.analysis_models import ItemList, Score


class PlatformHandles(BaseModel):
    """Social handles the business is active on. Blank values are ignored."""

    instagram: Optional[str] = None
    facebook: Optional[str] = None
    twitter: Optional[str] = None
    linkedin: Optional[str] = None
    tiktok: Optional[str] = None
    youtube: Optional[str] = None

    def active(self) -> Dict[str, str]:
        """platform -> handle, only for non-blank handles, in declaration order."""
        return {
            name: value
            for name, value in self.model_dump().items()
            if isinstance(value, str) and value.strip()
        }


class BrandAwarenessRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    business_name: Optional[str] = Field(None, alias="businessName")
    business_description: Optional[str] = Field(None, alias="businessDescription")
    target_audience: Optional[str] = Field(None, alias="targetAudience")
    platforms: PlatformHandles = Field(default_factory=PlatformHandles)


class MetricAnalysis(BaseModel):
    model_config = ConfigDict(strict=True)

    score: Score
    rating: str
    summary: str
    insights: ItemList
    recommendations: str


class BrandAwarenessReport(BaseModel):
    """
    Brand clarity / engagement / consistency scoring for one business.
    Validated fail-closed, same policy as AnalysisReport.
    """

    model_config = ConfigDict(strict=True)

    overall_score: Score = Field(alias="overallScore")
    brand_clarity: MetricAnalysis = Field(alias="brandClarity")
    engagement_quality: MetricAnalysis = Field(alias="engagementQuality")
    content_consistency: MetricAnalysis = Field(alias="contentConsistency")
    platform_specific: Dict[str, Any] = Field(alias="platformSpecific")

    def to_dict(self) -> dict:
        return self.model_dump(by_alias=True)
