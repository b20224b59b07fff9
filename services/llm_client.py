# services/llm_client.py
import logging
from typing import Optional

import openai
from openai import OpenAI

from app.config import Settings
from app.exceptions import RateLimitedError, UpstreamServiceError

logger = logging.getLogger(__name__)


def build_openai_client(settings: Settings) -> Optional[OpenAI]:
    """
    OpenAI client for the process; owned by the app lifespan, not by import.
    Returns None when OPENAI_API_KEY is not set.
    """
    if not settings.openai_api_key:
        logger.warning("[llm_client] OPENAI_API_KEY is not set; analysis endpoints will fail")
        return None
    return OpenAI(api_key=settings.openai_api_key)


def complete_json(
    client: OpenAI,
    *,
    model: str,
    instructions: str,
    user_content: str,
    temperature: float,
    log_tag: str = "llm_client",
) -> Optional[str]:
    """
    One Chat Completions call in JSON mode; returns the raw message text.

    Service failures are mapped here and never retried:
    - 429 / quota       -> RateLimitedError
    - other HTTP status -> UpstreamServiceError(status)
    - no response       -> UpstreamServiceError
    """
    logger.info("[%s] LLM call start model=%s payload_length=%s", log_tag, model, len(user_content))
    try:
        resp = client.chat.completions.create(
            model=model,
            messages=[
                {"role": "system", "content": instructions},
                {"role": "user", "content": user_content},
            ],
            response_format={"type": "json_object"},
            temperature=temperature,
        )
    except openai.RateLimitError as e:
        logger.warning("[%s] rate limited: %s", log_tag, e)
        raise RateLimitedError() from e
    except openai.APIStatusError as e:
        logger.error("[%s] API error status=%s: %s", log_tag, e.status_code, e)
        raise UpstreamServiceError(_error_detail(e), e.status_code) from e
    except openai.APIConnectionError as e:
        logger.error("[%s] could not reach the API: %s", log_tag, e)
        raise UpstreamServiceError(_error_detail(e)) from e

    content = resp.choices[0].message.content if resp.choices else None
    logger.info("[%s] LLM response length=%s", log_tag, len(content or ""))
    return content


def _error_detail(e: openai.APIError) -> str:
    return getattr(e, "message", None) or str(e)
