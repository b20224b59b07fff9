# services/storage.py
"""Supabase-backed persistence for scans and pre-order sign-ups.

The report validator never fills in missing fields. This module is the one
place that does: when a scan is saved, an absent sub-score counts as 0, an
absent text becomes null and an absent list becomes []. Keep the two
policies apart.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Iterable, List, Optional
from urllib.parse import urlparse

from postgrest.exceptions import APIError
from supabase import Client, create_client

from app.config import Settings
from app.exceptions import BadRequestError, DuplicateError, StorageError
from models.scan_models import ChecklistEntry, IssueEntry, ScanRecord
from services.scoring import aggregate_score, average_score

logger = logging.getLogger(__name__)

SCANS_TABLE = "scans"
MAILCOLLECTION_TABLE = "mailcollection"

UNIQUE_VIOLATION = "23505"
LOW_SCORE_THRESHOLD = 70
RECENT_DAYS = 7


def build_supabase_client(settings: Settings) -> Optional[Client]:
    """Service-role client for the process, or None when not configured."""
    if not settings.supabase_url or not settings.supabase_key:
        logger.warning("[storage] SUPABASE_URL / SUPABASE_KEY not set; scan history is disabled")
        return None
    return create_client(settings.supabase_url, settings.supabase_key)


# ============================================================
# Record building (persistence-boundary defaults)
# ============================================================


def _section(result: Dict[str, Any], key: str) -> Dict[str, Any]:
    value = result.get(key)
    return value if isinstance(value, dict) else {}


def _score_or_zero(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0
    return value


def _text_or_none(value: Any) -> Optional[str]:
    return value if isinstance(value, str) and value else None


def _list_or_empty(value: Any) -> List[Any]:
    return value if isinstance(value, list) else []


def domain_of(url: str) -> str:
    try:
        hostname = urlparse(url).hostname
    except ValueError:
        hostname = None
    if not hostname:
        raise BadRequestError("Invalid URL")
    return hostname


def build_scan_record(user_id: str, url: str, analyze_result: Dict[str, Any]) -> ScanRecord:
    """Flatten an analysis result into a `scans` row."""
    human = _section(analyze_result, "human")
    ai = _section(analyze_result, "ai")
    copy = _section(analyze_result, "copy")
    plan = _section(analyze_result, "plan")
    prompts = _section(analyze_result, "prompts")

    human_score = _score_or_zero(human.get("clarityScore"))
    ai_score = _score_or_zero(ai.get("aiSeoScore"))

    top_issues = [i for i in _list_or_empty(human.get("topIssues")) if isinstance(i, dict)]

    return ScanRecord(
        user_id=user_id,
        domain=domain_of(url),
        url=url,
        overall_score=aggregate_score(human_score, ai_score),
        human_score=human_score,
        ai_score=ai_score,
        human_clarity_description=_text_or_none(human.get("whatItSeemsLike")),
        human_value_prop=_text_or_none(human.get("oneSentenceValueProp")),
        human_audience=_text_or_none(human.get("bestGuessAudience")),
        human_confusions=_list_or_empty(human.get("confusions")),
        ai_comprehension=_text_or_none(ai.get("aiSummary")),
        ai_indexer_read=_text_or_none(ai.get("indexerRead")),
        ai_missing_keywords=_list_or_empty(ai.get("missingKeywords")),
        suggested_headline=_text_or_none(copy.get("suggestedHeadline")),
        suggested_subheadline=_text_or_none(copy.get("suggestedSubheadline")),
        suggested_cta=_text_or_none(copy.get("suggestedCTA")),
        action_plan=_list_or_empty(plan.get("nextSteps")),
        ai_prompt=_text_or_none(prompts.get("aiSeoPrompt")),
        issues=[
            IssueEntry(
                id=f"issue-{idx}",
                issue=issue.get("issue"),
                whyItHurts=issue.get("whyItHurts"),
                fix=issue.get("fix"),
            )
            for idx, issue in enumerate(top_issues)
        ],
        checklist=[
            ChecklistEntry(id=f"issue-{idx}", label=issue.get("issue"), checked=False)
            for idx, issue in enumerate(top_issues)
        ],
        suggestions=_list_or_empty(ai.get("structuredDataSuggestions")),
    )


# ============================================================
# Stats
# ============================================================


def _parse_timestamp(value: Any) -> Optional[datetime]:
    if not isinstance(value, str):
        return None
    try:
        ts = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    return ts


def compute_scan_stats(scans: Iterable[Dict[str, Any]], now: Optional[datetime] = None) -> Dict[str, Any]:
    """Dashboard numbers over a user's whole scan history."""
    rows = list(scans)
    now = now or datetime.now(timezone.utc)
    week_ago = now - timedelta(days=RECENT_DAYS)

    scores = [row.get("overall_score") or 0 for row in rows]

    recent = 0
    for row in rows:
        created = _parse_timestamp(row.get("created_at"))
        if created is not None and created > week_ago:
            recent += 1

    return {
        "totalScans": len(rows),
        "averageScore": average_score(scores),
        "uniqueDomains": len({row.get("domain") for row in rows}),
        "totalIssues": sum(len(row.get("issues") or []) for row in rows),
        "recentScans": recent,
        "scoreDistribution": {
            "excellent": sum(1 for s in scores if s >= 90),
            "good": sum(1 for s in scores if LOW_SCORE_THRESHOLD <= s < 90),
            "needsImprovement": sum(1 for s in scores if s < LOW_SCORE_THRESHOLD),
        },
    }


# ============================================================
# Store
# ============================================================


class ScanStore:
    """Thin wrapper over a Supabase client; one instance per process."""

    def __init__(self, client: Client):
        self.client = client

    # ---------- auth ----------

    def get_user_id(self, access_token: str) -> Optional[str]:
        """User id for a Supabase access token, None when it is not valid."""
        try:
            resp = self.client.auth.get_user(access_token)
        except Exception as e:
            logger.info("[storage] token rejected: %s", e)
            return None
        user = getattr(resp, "user", None) if resp else None
        return getattr(user, "id", None)

    # ---------- scans ----------

    def create_scan(self, record: ScanRecord) -> Dict[str, Any]:
        try:
            resp = self.client.table(SCANS_TABLE).insert(record.to_row()).execute()
        except APIError as e:
            logger.error("[storage] insert scan failed: %s", e.message)
            raise StorageError("Failed to save scan", extra={"details": e.message}) from e

        if not resp.data:
            raise StorageError("Failed to save scan", extra={"details": "no row returned"})
        logger.info("[storage] scan saved id=%s domain=%s", resp.data[0].get("id"), record.domain)
        return resp.data[0]

    def list_scans(
        self,
        user_id: str,
        filter_by: Optional[str] = None,
        sort_by: str = "date",
        now: Optional[datetime] = None,
    ) -> List[Dict[str, Any]]:
        """
        filter_by: "recent" (last 7 days) / "low-score" (overall < 70) / None
        sort_by:   "score" (highest first) / anything else (newest first)
        """
        query = self.client.table(SCANS_TABLE).select("*").eq("user_id", user_id)

        if filter_by == "recent":
            week_ago = (now or datetime.now(timezone.utc)) - timedelta(days=RECENT_DAYS)
            query = query.gte("created_at", week_ago.isoformat())
        elif filter_by == "low-score":
            query = query.lt("overall_score", LOW_SCORE_THRESHOLD)

        if sort_by == "score":
            query = query.order("overall_score", desc=True)
        else:
            query = query.order("created_at", desc=True)

        try:
            resp = query.execute()
        except APIError as e:
            logger.error("[storage] list scans failed: %s", e.message)
            raise StorageError("Failed to fetch scans", extra={"details": e.message}) from e
        return resp.data or []

    def get_scan(self, user_id: str, scan_id: str) -> Optional[Dict[str, Any]]:
        try:
            resp = (
                self.client.table(SCANS_TABLE)
                .select("*")
                .eq("id", scan_id)
                .eq("user_id", user_id)
                .limit(1)
                .execute()
            )
        except APIError as e:
            # a malformed id is reported by postgres as an error, not as no rows
            logger.info("[storage] get scan id=%s failed: %s", scan_id, e.message)
            return None
        return resp.data[0] if resp.data else None

    def update_checklist(
        self, user_id: str, scan_id: str, checklist: List[Dict[str, Any]]
    ) -> Optional[Dict[str, Any]]:
        try:
            resp = (
                self.client.table(SCANS_TABLE)
                .update({"checklist": checklist})
                .eq("id", scan_id)
                .eq("user_id", user_id)
                .execute()
            )
        except APIError as e:
            logger.error("[storage] update checklist id=%s failed: %s", scan_id, e.message)
            return None
        return resp.data[0] if resp.data else None

    def delete_scan(self, user_id: str, scan_id: str) -> None:
        try:
            self.client.table(SCANS_TABLE).delete().eq("id", scan_id).eq("user_id", user_id).execute()
        except APIError as e:
            logger.error("[storage] delete scan id=%s failed: %s", scan_id, e.message)
            raise StorageError("Failed to delete scan") from e

    def all_scans(self, user_id: str) -> List[Dict[str, Any]]:
        try:
            resp = self.client.table(SCANS_TABLE).select("*").eq("user_id", user_id).execute()
        except APIError as e:
            logger.error("[storage] fetch scans for stats failed: %s", e.message)
            raise StorageError("Failed to fetch scans") from e
        return resp.data or []

    # ---------- pre-order ----------

    def save_preorder(self, email: str, url: Optional[str], source_url: Any) -> Optional[Dict[str, Any]]:
        row = {"email": email, "url": url, "sourceURL": source_url}
        try:
            resp = self.client.table(MAILCOLLECTION_TABLE).insert([row]).execute()
        except APIError as e:
            if e.code == UNIQUE_VIOLATION:
                raise DuplicateError("EMAIL_EXISTS") from e
            logger.error("[storage] preorder insert failed code=%s: %s", e.code, e.message)
            raise StorageError("DATABASE_ERROR") from e
        return resp.data[0] if resp.data else None
