"""Tests for POST /api/brand-awareness/analyze."""

import json

import httpx
import openai
import pytest

from conftest import make_completion

METRIC = {
    "score": 70,
    "rating": "Good",
    "summary": "Clear enough.",
    "insights": ["a", "b", "c"],
    "recommendations": "Say what you sell.",
}

BRAND_REPORT = {
    "overallScore": 70,
    "brandClarity": METRIC,
    "engagementQuality": METRIC,
    "contentConsistency": METRIC,
    "platformSpecific": {"instagram": "Post more reels."},
}

REQUEST = {
    "businessName": "Acme",
    "businessDescription": "Tools for agencies",
    "targetAudience": "Agency owners",
    "platforms": {"instagram": "@acme", "twitter": "  ", "linkedin": ""},
}


@pytest.fixture
def brand_llm(fake_llm):
    fake_llm.chat.completions.create.return_value = make_completion(json.dumps(BRAND_REPORT))
    return fake_llm


def test_brand_report(client, brand_llm):
    response = client.post("/api/brand-awareness/analyze", json=REQUEST)
    assert response.status_code == 200
    assert response.json() == BRAND_REPORT

    _, kwargs = brand_llm.chat.completions.create.call_args
    assert kwargs["model"] == "gpt-4o-mini"
    assert kwargs["temperature"] == 0.3
    payload = json.loads(kwargs["messages"][1]["content"])
    # blank handles dropped
    assert payload["platforms"] == [{"platform": "instagram", "handle": "@acme"}]
    assert "Active Platforms: instagram" in kwargs["messages"][0]["content"]


@pytest.mark.parametrize("missing", ["businessName", "businessDescription", "targetAudience"])
def test_missing_required_field(client, brand_llm, missing):
    body = dict(REQUEST)
    body[missing] = ""
    response = client.post("/api/brand-awareness/analyze", json=body)
    assert response.status_code == 400
    assert response.json() == {"error": "Missing required fields"}
    brand_llm.chat.completions.create.assert_not_called()


def test_brand_shape_error(client, fake_llm):
    broken = dict(BRAND_REPORT)
    del broken["platformSpecific"]
    fake_llm.chat.completions.create.return_value = make_completion(json.dumps(broken))
    response = client.post("/api/brand-awareness/analyze", json=REQUEST)
    assert response.status_code == 500
    assert response.json() == {"error": "AI returned unexpected response shape"}


def test_brand_insights_may_hold_any_values(client, fake_llm):
    odd = dict(BRAND_REPORT, brandClarity=dict(METRIC, insights=["a", 2, {"note": "c"}]))
    fake_llm.chat.completions.create.return_value = make_completion(json.dumps(odd))
    response = client.post("/api/brand-awareness/analyze", json=REQUEST)
    assert response.status_code == 200
    assert response.json()["brandClarity"]["insights"] == ["a", 2, {"note": "c"}]


def test_brand_insights_must_be_a_list(client, fake_llm):
    broken = dict(BRAND_REPORT, brandClarity=dict(METRIC, insights="a, b"))
    fake_llm.chat.completions.create.return_value = make_completion(json.dumps(broken))
    response = client.post("/api/brand-awareness/analyze", json=REQUEST)
    assert response.status_code == 500
    assert response.json() == {"error": "AI returned unexpected response shape"}


def test_brand_invalid_json(client, fake_llm):
    fake_llm.chat.completions.create.return_value = make_completion("{{nope")
    response = client.post("/api/brand-awareness/analyze", json=REQUEST)
    assert response.status_code == 500
    assert response.json() == {"error": "AI returned invalid JSON"}


def test_brand_rate_limited(client, fake_llm):
    response_429 = httpx.Response(429, request=httpx.Request("POST", "https://api.openai.com/v1/chat/completions"))
    fake_llm.chat.completions.create.side_effect = openai.RateLimitError(
        "rate_limit_exceeded", response=response_429, body=None
    )
    response = client.post("/api/brand-awareness/analyze", json=REQUEST)
    assert response.status_code == 429
    assert response.json()["rateLimited"] is True
