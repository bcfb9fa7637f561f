"""
Classifier and scoring model tests
"""

import pytest

from fraudscan.core.scoring import (
    SAFE_THRESHOLD,
    SUSPICIOUS_THRESHOLD,
    Flag,
    RiskLevel,
    ScoreCard,
    Severity,
    build_summary,
    clamp_score,
    classify_score,
    severity_counts,
)


@pytest.mark.parametrize("score, expected", [
    (100, RiskLevel.SAFE),
    (SAFE_THRESHOLD, RiskLevel.SAFE),
    (SAFE_THRESHOLD - 1, RiskLevel.SUSPICIOUS),
    (SUSPICIOUS_THRESHOLD, RiskLevel.SUSPICIOUS),
    (SUSPICIOUS_THRESHOLD - 1, RiskLevel.DANGER),
    (0, RiskLevel.DANGER),
])
def test_classify_score_thresholds(score, expected):
    assert classify_score(score) == expected


def test_threshold_constants():
    assert SAFE_THRESHOLD == 80
    assert SUSPICIOUS_THRESHOLD == 50


def test_classification_is_monotonic():
    order = {RiskLevel.DANGER: 0, RiskLevel.SUSPICIOUS: 1, RiskLevel.SAFE: 2}
    ranks = [order[classify_score(score)] for score in range(0, 101)]
    assert ranks == sorted(ranks)


@pytest.mark.parametrize("raw, expected", [(-45, 0), (0, 0), (73, 73), (100, 100), (140, 100)])
def test_clamp_score(raw, expected):
    assert clamp_score(raw) == expected


def test_build_summary_email_templates():
    assert build_summary(RiskLevel.SAFE, 0, "email") == (
        "Email analysis complete. No major issues detected. "
        "This appears to be legitimate communication."
    )
    assert build_summary(RiskLevel.DANGER, 3, "email").startswith(
        "Email analysis complete. Found 3 red flag(s). This email shows strong indicators of fraud."
    )


def test_build_summary_url_templates():
    assert build_summary(RiskLevel.SUSPICIOUS, 1, "url") == (
        "Website analysis complete. Found 1 security issue(s). "
        "Exercise caution when visiting this website and verify its authenticity."
    )
    assert "No major red flags detected." in build_summary(RiskLevel.SAFE, 0, "url")


def test_build_summary_rejects_unknown_subject():
    with pytest.raises(ValueError):
        build_summary(RiskLevel.SAFE, 0, "sms")


def test_severity_counts_covers_every_severity():
    flags = [
        Flag("A", Severity.HIGH, "a"),
        Flag("B", Severity.HIGH, "b"),
        Flag("C", Severity.LOW, "c"),
    ]
    assert severity_counts(flags) == {"low": 1, "medium": 0, "high": 2}
    assert severity_counts([]) == {"low": 0, "medium": 0, "high": 0}


def test_flags_are_immutable():
    flag = Flag("Insecure Connection", Severity.HIGH, "no https")
    with pytest.raises(AttributeError):
        flag.severity = Severity.LOW


def test_score_card_accumulates_and_clamps():
    card = ScoreCard(90)
    card.add_flag("First", Severity.HIGH, 50, "one")
    card.add_flag("Second", Severity.HIGH, 60, "two")

    result = card.finish("url")

    assert card.score == -20
    assert result.score == 0
    assert result.level == RiskLevel.DANGER
    assert [f.type for f in result.flags] == ["First", "Second"]
    assert [f.penalty for f in result.flags] == [50, 60]


def test_result_to_dict_is_json_ready():
    card = ScoreCard(95)
    card.add_flag("Urgency Tactics", Severity.MEDIUM, 15, "pressure")
    data = card.finish("email").to_dict()

    assert data["score"] == 80
    assert data["level"] == "safe"
    assert data["flags"][0]["severity"] == "medium"
    assert data["domain_info"] is None
    assert data["subject_type"] == "email"
    assert data["timestamp"]


def test_analyzer_recommendation_is_optional():
    from typing import Optional, get_type_hints

    from fraudscan.core.email_analyzer import EmailAnalyzer
    from fraudscan.core.url_analyzer import UrlAnalyzer

    for analyzer in (EmailAnalyzer, UrlAnalyzer):
        assert get_type_hints(analyzer._add)["recommendation"] == Optional[str]
