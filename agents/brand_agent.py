# agents/brand_agent.py

from __future__ import annotations

import json
import logging
from typing import Dict

from openai import OpenAI

from models.brand_models import BrandAwarenessReport
from services.llm_client import complete_json
from services.report_validator import parse_generator_output

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gpt-4o-mini"
DEFAULT_TEMPERATURE = 0.3

NO_PLATFORMS = "general analysis (no specific platforms provided)"


def build_instructions(
    business_name: str,
    business_description: str,
    target_audience: str,
    active_platforms: Dict[str, str],
) -> str:
    platform_list = ", ".join(active_platforms) if active_platforms else NO_PLATFORMS

    return f"""
You are a brand awareness expert analyzing social media presence and brand clarity.

Analyze the following business and provide a comprehensive brand awareness evaluation.

Business Information:
- Name: {business_name}
- Description: {business_description}
- Target Audience: {target_audience}
- Active Platforms: {platform_list}

Provide scores (1-100) and detailed insights for these three core metrics:

1. BRAND CLARITY (Do people understand what the business does?)
   - How clear is the messaging?
   - Is the value proposition obvious?
   - Would a first-time visitor understand the business immediately?

2. ENGAGEMENT QUALITY (Are interactions meaningful?)
   - Quality of potential audience interactions
   - Authenticity of engagement approach
   - Community building effectiveness

3. CONTENT CONSISTENCY (Is messaging coherent across platforms?)
   - Visual identity consistency potential
   - Message alignment across touchpoints
   - Brand voice consistency
   - Content strategy coherence

Return ONLY valid JSON with this EXACT shape (no extra keys, no markdown, no backticks):

{{
  "overallScore": number (0-100, average of the three metrics),
  "brandClarity": {{
    "score": number (0-100),
    "rating": "Excellent" | "Good" | "Needs Work",
    "summary": "2-3 sentence summary of brand clarity assessment",
    "insights": ["specific insight 1", "specific insight 2", "specific insight 3"],
    "recommendations": "detailed 2-3 sentence recommendation paragraph"
  }},
  "engagementQuality": {{ same shape as brandClarity }},
  "contentConsistency": {{ same shape as brandClarity }},
  "platformSpecific": {{
    "platformName": "brief platform-specific insight for each active platform"
  }}
}}

Rating Guidelines:
- "Excellent": 80-100 (Strong, clear, effective)
- "Good": 60-79 (Solid foundation, room for improvement)
- "Needs Work": 0-59 (Significant improvements needed)

Rules:
- Be specific to the business description and target audience provided
- Insights should be actionable and unique to this business
- Recommendations should be concrete and implementable
- For platformSpecific, only include platforms that were listed as active
- If no platforms were provided, return an empty object for platformSpecific
""".strip()


def analyze_brand(
    client: OpenAI,
    business_name: str,
    business_description: str,
    target_audience: str,
    active_platforms: Dict[str, str],
    model: str = DEFAULT_MODEL,
    temperature: float = DEFAULT_TEMPERATURE,
) -> BrandAwarenessReport:
    """Brand-awareness scoring; same fail-closed handling as the homepage report."""
    logger.info("[brand_agent] analyzing brand=%s platforms=%s", business_name, list(active_platforms))

    user_content = json.dumps(
        {
            "businessName": business_name,
            "businessDescription": business_description,
            "targetAudience": target_audience,
            "platforms": [
                {"platform": key, "handle": value} for key, value in active_platforms.items()
            ],
        },
        indent=2,
        ensure_ascii=False,
    )

    text = complete_json(
        client,
        model=model,
        instructions=build_instructions(
            business_name, business_description, target_audience, active_platforms
        ),
        user_content=user_content,
        temperature=temperature,
        log_tag="brand_agent",
    )

    # this endpoint has always answered without trailing periods
    return parse_generator_output(
        text,
        BrandAwarenessReport,
        empty_message="Empty AI response",
        malformed_message="AI returned invalid JSON",
        shape_message="AI returned unexpected response shape",
        log_tag="brand_agent",
    )
