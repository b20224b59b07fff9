# agents/report_agent.py

from __future__ import annotations

import json
import logging

from openai import OpenAI

from models.analysis_models import AnalysisReport
from models.page_models import ExtractedPageContent
from services.llm_client import complete_json
from services.report_validator import parse_generator_output

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gpt-4.1-mini"
DEFAULT_TEMPERATURE = 0.2

REPORT_INSTRUCTIONS = """
You are AriClear, a website clarity + AI SEO comprehension auditor.

Analyze the provided page content.

Return ONLY a valid JSON object with this EXACT shape (no extra keys, no markdown):

{
  "human": {
    "clarityScore": number (0-100),
    "whatItSeemsLike": string,
    "oneSentenceValueProp": string,
    "bestGuessAudience": string,
    "confusions": string[] (3-6 items),
    "topIssues": [
      { "issue": string, "whyItHurts": string, "fix": string }
    ] (3-7 items)
  },
  "ai": {
    "aiSeoScore": number (0-100),
    "aiSummary": string,
    "indexerRead": string,
    "missingKeywords": string[] (5-10 items),
    "structuredDataSuggestions": string[] (2-5 items)
  },
  "copy": {
    "suggestedHeadline": string,
    "suggestedSubheadline": string,
    "suggestedCTA": string
  },
  "plan": {
    "nextSteps": [
      {
        "title": string,
        "impact": "high" | "medium" | "low",
        "effort": "low" | "medium" | "high",
        "details": string
      }
    ] (3-7 items)
  },
  "prompts": {
    "aiSeoPrompt": string
  }
}

Guidelines:
- "human.clarityScore": based on whether a first-time visitor understands what the site does in ~10 seconds.
- "ai.aiSeoScore": based on whether an AI model can classify the site and extract keywords cleanly.
- "ai.indexerRead": how an AI indexer would categorize the page, in one or two sentences.
- "prompts.aiSeoPrompt": a prompt the site owner can paste into an assistant to improve the page for AI search.
- Keep suggestions specific and actionable, not generic.
- Make the suggested headline/subheadline/CTA match what the site actually offers.
""".strip()


def build_user_payload(url: str, extracted: ExtractedPageContent) -> str:
    return json.dumps({"url": url, "extracted": extracted.to_payload()}, indent=2, ensure_ascii=False)


def generate_report(
    client: OpenAI,
    url: str,
    extracted: ExtractedPageContent,
    model: str = DEFAULT_MODEL,
    temperature: float = DEFAULT_TEMPERATURE,
) -> AnalysisReport:
    """
    Ask the generation service for a report on `extracted` and validate it.

    Raises EmptyGenerationError / MalformedGenerationError /
    UnexpectedShapeError for bad output, RateLimitedError /
    UpstreamServiceError for service failures. Never returns a partial report.
    """
    text = complete_json(
        client,
        model=model,
        instructions=REPORT_INSTRUCTIONS,
        user_content=build_user_payload(url, extracted),
        temperature=temperature,
        log_tag="report_agent",
    )
    report = parse_generator_output(text, AnalysisReport, log_tag="report_agent")

    logger.info(
        "[report_agent] report ok url=%s clarity=%s ai_seo=%s",
        url,
        report.human.clarity_score,
        report.ai.ai_seo_score,
    )
    return report
