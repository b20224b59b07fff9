"""Shared fixtures: a valid report, fake OpenAI client, fake scan store."""

import copy
import json
import uuid
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from app.config import Settings, get_settings
from app.dependencies import get_fetcher, get_llm_client, get_scan_store
from app.exceptions import DuplicateError
from app.main import app

ACME_HTML = "<html><head><title>Acme</title></head><body><h1>Welcome</h1></body></html>"

VALID_REPORT = {
    "human": {
        "clarityScore": 72,
        "whatItSeemsLike": "A project management tool for small agencies.",
        "oneSentenceValueProp": "Plan client work and track hours in one place.",
        "bestGuessAudience": "Agency owners with 5-20 staff",
        "confusions": [
            "Pricing is not visible",
            "Hero image does not show the product",
            "Two different product names are used",
        ],
        "topIssues": [
            {"issue": "Vague headline", "whyItHurts": "Visitors leave", "fix": "Name the product category"},
            {"issue": "No social proof", "whyItHurts": "Low trust", "fix": "Add two client logos"},
            {"issue": "CTA below fold", "whyItHurts": "Fewer sign-ups", "fix": "Move CTA into hero"},
        ],
    },
    "ai": {
        "aiSeoScore": 65,
        "aiSummary": "Acme sells a SaaS tool for agencies.",
        "indexerRead": "B2B SaaS / project management",
        "missingKeywords": ["agency", "time tracking", "client portal", "invoicing", "project planning"],
        "structuredDataSuggestions": ["Add Organization schema", "Add SoftwareApplication schema"],
    },
    "copy": {
        "suggestedHeadline": "Project management built for agencies",
        "suggestedSubheadline": "Plan work, track hours and bill clients from one dashboard.",
        "suggestedCTA": "Start free trial",
    },
    "plan": {
        "nextSteps": [
            {"title": "Rewrite hero", "impact": "high", "effort": "low", "details": "Use the suggested headline."},
            {"title": "Add pricing link", "impact": "medium", "effort": "low", "details": "Link from nav."},
            {"title": "Add schema", "impact": "medium", "effort": "medium", "details": "JSON-LD in head."},
        ]
    },
    "prompts": {"aiSeoPrompt": "Rewrite my homepage so an AI assistant can describe Acme in one sentence."},
}


def make_completion(content):
    """Shape of openai's ChatCompletion as far as the code reads it."""
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


@pytest.fixture
def valid_report():
    return copy.deepcopy(VALID_REPORT)


@pytest.fixture
def fake_llm():
    """OpenAI stand-in; answers with the valid report unless told otherwise."""
    llm = MagicMock()
    llm.chat.completions.create.return_value = make_completion(json.dumps(VALID_REPORT))
    return llm


@pytest.fixture
def fake_fetcher():
    fetcher = MagicMock(return_value=ACME_HTML)
    return fetcher


@pytest.fixture
def test_settings():
    return Settings(_env_file=None, openai_api_key="test-key")


class FakeScanStore:
    """In-memory ScanStore with the same method surface."""

    def __init__(self):
        self.scans = {}
        self.preorders = []

    def get_user_id(self, access_token):
        return "user-1" if access_token == "good-token" else None

    def create_scan(self, record):
        row = record.to_row()
        row["id"] = str(uuid.uuid4())
        row["created_at"] = "2026-10-18T12:00:00+00:00"
        self.scans[row["id"]] = row
        return row

    def list_scans(self, user_id, filter_by=None, sort_by="date", now=None):
        return [s for s in self.scans.values() if s["user_id"] == user_id]

    def all_scans(self, user_id):
        return [s for s in self.scans.values() if s["user_id"] == user_id]

    def get_scan(self, user_id, scan_id):
        scan = self.scans.get(scan_id)
        return scan if scan and scan["user_id"] == user_id else None

    def update_checklist(self, user_id, scan_id, checklist):
        scan = self.get_scan(user_id, scan_id)
        if scan is None:
            return None
        scan["checklist"] = checklist
        return scan

    def delete_scan(self, user_id, scan_id):
        if self.get_scan(user_id, scan_id):
            del self.scans[scan_id]

    def save_preorder(self, email, url, source_url):
        if any(p["email"] == email for p in self.preorders):
            raise DuplicateError("EMAIL_EXISTS")
        row = {"email": email, "url": url, "sourceURL": source_url}
        self.preorders.append(row)
        return row


@pytest.fixture
def fake_store():
    return FakeScanStore()


@pytest.fixture
def client(fake_llm, fake_fetcher, fake_store, test_settings):
    """TestClient with every outbound collaborator replaced."""
    app.dependency_overrides[get_llm_client] = lambda: fake_llm
    app.dependency_overrides[get_fetcher] = lambda: fake_fetcher
    app.dependency_overrides[get_scan_store] = lambda: fake_store
    app.dependency_overrides[get_settings] = lambda: test_settings
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    return {"Authorization": "Bearer good-token"}
