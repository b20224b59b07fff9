# models/analysis_models.py

from __future__ import annotations

from typing import Any, List, Union

from pydantic import BaseModel, ConfigDict, Field, StrictInt, confloat

# -----------------------------------------
# Scores: any JSON number except bool / NaN / inf.
# Range (0-100) is requested from the generator, not enforced here.
# -----------------------------------------
Score = Union[StrictInt, confloat(strict=True, allow_inf_nan=False)]

# Array fields must be JSON arrays; their elements are passed through as-is.
ItemList = List[Any]


class _ReportPart(BaseModel):
    # strict: no "80" -> 80, no 1 -> "1", no "a" -> ["a"], camelCase keys only
    model_config = ConfigDict(strict=True)


# -----------------------------------------
# human
# -----------------------------------------
class HumanSection(_ReportPart):
    """How a first-time visitor reads the page.

    Attributes:
        clarity_score: 0-100, does a visitor get it in ~10 seconds.
        what_it_seems_like: one-line read of what the site is.
        one_sentence_value_prop: the value proposition as understood.
        best_guess_audience: who the page seems to be for.
        confusions: 3-6 short points of confusion.
        top_issues: 3-7 {issue, whyItHurts, fix} records.
    """

    clarity_score: Score = Field(alias="clarityScore")
    what_it_seems_like: str = Field(alias="whatItSeemsLike")
    one_sentence_value_prop: str = Field(alias="oneSentenceValueProp")
    best_guess_audience: str = Field(alias="bestGuessAudience")
    confusions: ItemList
    top_issues: ItemList = Field(alias="topIssues")


# -----------------------------------------
# ai
# -----------------------------------------
class AiSection(_ReportPart):
    """How a language model / indexer reads the page.

    Attributes:
        ai_seo_score: 0-100, can a model classify the site and pull keywords.
        ai_summary: the model's own summary of the site.
        indexer_read: what an AI indexer would file the page under.
        missing_keywords: 5-10 keywords the page should carry.
        structured_data_suggestions: 2-5 schema.org / metadata suggestions.
    """

    ai_seo_score: Score = Field(alias="aiSeoScore")
    ai_summary: str = Field(alias="aiSummary")
    indexer_read: str = Field(alias="indexerRead")
    missing_keywords: ItemList = Field(alias="missingKeywords")
    structured_data_suggestions: ItemList = Field(alias="structuredDataSuggestions")


# -----------------------------------------
# copy / plan / prompts
# -----------------------------------------
class CopySection(_ReportPart):
    suggested_headline: str = Field(alias="suggestedHeadline")
    suggested_subheadline: str = Field(alias="suggestedSubheadline")
    suggested_cta: str = Field(alias="suggestedCTA")


class PlanSection(_ReportPart):
    # {title, impact, effort, details} records
    next_steps: ItemList = Field(alias="nextSteps")


class PromptsSection(_ReportPart):
    ai_seo_prompt: str = Field(alias="aiSeoPrompt")


class AnalysisReport(_ReportPart):
    """Validated comprehension report for one URL at one point in time.

    Every section and field is required; there are no defaults. Build it
    with ``services.report_validator.validate_report`` rather than directly.
    """

    human: HumanSection
    ai: AiSection
    # "copy" would shadow BaseModel.copy
    copy_section: CopySection = Field(alias="copy")
    plan: PlanSection
    prompts: PromptsSection

    def to_dict(self) -> dict:
        """camelCase dict, same shape the generator returned."""
        return self.model_dump(by_alias=True)
