"""Tests for the fail-closed report contract."""

import json

import pytest

from app.exceptions import EmptyGenerationError, MalformedGenerationError, UnexpectedShapeError
from models.analysis_models import AnalysisReport
from services.report_validator import parse_generator_output, validate_report


def _drop(report, path):
    node = report
    *parents, leaf = path.split(".")
    for key in parents:
        node = node[key]
    del node[leaf]
    return report


def _set(report, path, value):
    node = report
    *parents, leaf = path.split(".")
    for key in parents:
        node = node[key]
    node[leaf] = value
    return report


def test_valid_report_is_accepted_unchanged(valid_report):
    original = json.loads(json.dumps(valid_report))
    report = validate_report(valid_report)

    assert isinstance(report, AnalysisReport)
    assert report.to_dict() == original
    # input is not mutated
    assert valid_report == original


def test_int_scores_stay_ints(valid_report):
    report = validate_report(valid_report)
    assert type(report.human.clarity_score) is int
    assert type(report.to_dict()["ai"]["aiSeoScore"]) is int


def test_float_scores_are_accepted(valid_report):
    valid_report["human"]["clarityScore"] = 72.5
    assert validate_report(valid_report).human.clarity_score == 72.5


def test_empty_nested_lists_are_tolerated(valid_report):
    valid_report["human"]["confusions"] = []
    valid_report["ai"]["missingKeywords"] = []
    valid_report["plan"]["nextSteps"] = []
    report = validate_report(valid_report)
    assert report.human.confusions == []


def test_extra_keys_are_ignored(valid_report):
    valid_report["debug"] = {"tokens": 1200}
    valid_report["human"]["mood"] = "upbeat"
    report = validate_report(valid_report)
    assert "debug" not in report.to_dict()


def test_out_of_range_score_is_not_clamped(valid_report):
    valid_report["ai"]["aiSeoScore"] = 150
    assert validate_report(valid_report).ai.ai_seo_score == 150


@pytest.mark.parametrize(
    "path",
    [
        "human",
        "ai",
        "copy",
        "plan",
        "prompts",
        "human.clarityScore",
        "human.whatItSeemsLike",
        "human.oneSentenceValueProp",
        "human.bestGuessAudience",
        "human.confusions",
        "human.topIssues",
        "ai.aiSeoScore",
        "ai.aiSummary",
        "ai.indexerRead",
        "ai.missingKeywords",
        "ai.structuredDataSuggestions",
        "copy.suggestedHeadline",
        "copy.suggestedSubheadline",
        "copy.suggestedCTA",
        "plan.nextSteps",
        "prompts.aiSeoPrompt",
    ],
)
def test_missing_field_is_rejected(valid_report, path):
    with pytest.raises(UnexpectedShapeError):
        validate_report(_drop(valid_report, path))


@pytest.mark.parametrize(
    "path, value",
    [
        ("human.clarityScore", "80"),
        ("human.clarityScore", None),
        ("human.clarityScore", True),
        ("ai.aiSeoScore", [65]),
        ("ai.aiSeoScore", float("nan")),
        ("human.whatItSeemsLike", 42),
        ("human.confusions", "not a list"),
        ("human.confusions", {"0": "a"}),
        ("human.topIssues", None),
        ("ai.missingKeywords", "seo, ai"),
        ("ai.structuredDataSuggestions", 3),
        ("copy.suggestedCTA", None),
        ("copy.suggestedHeadline", ["Headline"]),
        ("plan.nextSteps", {"title": "x"}),
        ("prompts.aiSeoPrompt", 0),
        ("human", "text"),
        ("ai", []),
        ("copy", None),
        ("plan", "later"),
    ],
)
def test_wrong_type_is_rejected(valid_report, path, value):
    with pytest.raises(UnexpectedShapeError):
        validate_report(_set(valid_report, path, value))


def test_snake_case_keys_are_not_accepted(valid_report):
    valid_report["human"]["clarity_score"] = valid_report["human"].pop("clarityScore")
    with pytest.raises(UnexpectedShapeError):
        validate_report(valid_report)


@pytest.mark.parametrize(
    "path, value",
    [
        ("human.confusions", ["ok", 3]),
        ("ai.missingKeywords", [{"kw": "x"}]),
        ("ai.structuredDataSuggestions", [None]),
        ("human.topIssues", ["Vague headline"]),
        ("human.topIssues", [{"issue": "x", "whyItHurts": "y"}]),
        ("plan.nextSteps", [{"title": "Rewrite hero", "impact": "High", "effort": "tiny", "details": "x"}]),
    ],
)
def test_array_elements_are_passed_through(valid_report, path, value):
    report = validate_report(_set(valid_report, path, value))
    section, key = path.split(".")
    assert report.to_dict()[section][key] == value


@pytest.mark.parametrize("value", [None, [], "report", 7, True])
def test_non_object_top_level_is_rejected(value):
    with pytest.raises(UnexpectedShapeError):
        validate_report(value)


def test_rejection_names_the_failing_field(valid_report):
    del valid_report["ai"]["missingKeywords"]
    with pytest.raises(UnexpectedShapeError) as exc_info:
        validate_report(valid_report)
    assert "missingKeywords" in exc_info.value.reason
    assert exc_info.value.message == "AI returned unexpected response shape."


# ---------- raw text ----------


def test_parse_valid_text(valid_report):
    report = parse_generator_output("  " + json.dumps(valid_report) + "\n")
    assert report.copy_section.suggested_cta == "Start free trial"


@pytest.mark.parametrize("text", [None, "", "   \n"])
def test_parse_empty_text(text):
    with pytest.raises(EmptyGenerationError):
        parse_generator_output(text)


def test_parse_malformed_text():
    with pytest.raises(MalformedGenerationError) as exc_info:
        parse_generator_output("not json")
    assert exc_info.value.message == "AI returned invalid JSON."


def test_parse_json_array_is_a_shape_error():
    with pytest.raises(UnexpectedShapeError):
        parse_generator_output("[1, 2, 3]")


def test_bad_output_is_logged_with_raw_text(caplog):
    with caplog.at_level("ERROR"):
        with pytest.raises(MalformedGenerationError):
            parse_generator_output("{broken", log_tag="test")
    assert "{broken" in caplog.text
