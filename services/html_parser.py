# services/html_parser.py

from __future__ import annotations

import logging
import re
from typing import List

from bs4 import BeautifulSoup

from models.page_models import ExtractedPageContent

logger = logging.getLogger(__name__)

MAX_SNIPPET_LEN = 5000
MAX_H2S = 6

# never part of the prose sent to the LLM
NOISE_TAGS = ["script", "style", "noscript", "svg", "img"]

_WHITESPACE_RE = re.compile(r"\s+")


def _first_text(soup: BeautifulSoup, name: str) -> str:
    tag = soup.find(name)
    return tag.get_text().strip() if tag else ""


def _meta_description(soup: BeautifulSoup) -> str:
    tag = soup.find("meta", attrs={"name": "description"})
    if not tag:
        return ""
    content = tag.get("content")
    return content.strip() if isinstance(content, str) else ""


def _h2_texts(soup: BeautifulSoup, limit: int) -> List[str]:
    """First `limit` <h2> elements, then empty texts dropped."""
    if limit <= 0:
        # bs4 treats limit=0 as "no limit"
        return []
    texts = [h.get_text().strip() for h in soup.find_all("h2", limit=limit)]
    return [t for t in texts if t]


def _body_snippet(soup: BeautifulSoup, max_len: int) -> str:
    for tag in soup(NOISE_TAGS):
        tag.decompose()
    # html.parser does not synthesize <body> for fragments
    root = soup.body
    if root is None:
        for tag in soup(["head", "title", "meta"]):
            tag.decompose()
        root = soup
    text = root.get_text(separator=" ")
    text = _WHITESPACE_RE.sub(" ", text).strip()
    # hard character cutoff, not sentence-aware
    return text[:max_len]


def extract_page_content(
    html: str,
    max_snippet_len: int = MAX_SNIPPET_LEN,
    max_h2s: int = MAX_H2S,
) -> ExtractedPageContent:
    """
    Turn raw HTML into ExtractedPageContent.
    No network access. Total over any input: missing elements become ""
    or [], and markup the parser cannot handle yields an empty result.
    """
    if not isinstance(html, str) or not html:
        return ExtractedPageContent()

    try:
        soup = BeautifulSoup(html, "html.parser")

        title = _first_text(soup, "title")
        meta_description = _meta_description(soup)
        h1 = _first_text(soup, "h1")
        h2s = _h2_texts(soup, max_h2s)

        # decomposes noise tags, so runs last
        body_snippet = _body_snippet(soup, max_snippet_len)
    except Exception as e:
        logger.warning("[html_parser] could not parse HTML (length=%s): %s", len(html), e)
        return ExtractedPageContent()

    return ExtractedPageContent(
        title=title,
        meta_description=meta_description,
        h1=h1,
        h2s=h2s,
        body_snippet=body_snippet,
    )
