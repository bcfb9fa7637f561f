"""
Quick check verdict tests
"""

import pytest

from fraudscan.core.quick_check import Verdict, quick_check


@pytest.mark.parametrize("value, verdict, message", [
    ("admin@updatemybank.ru", Verdict.FRAUDULENT, "Suspicious email address!"),
    ("Admin@UpdateMyBank.ru", Verdict.FRAUDULENT, "Suspicious email address!"),
    ("someone@shop.xyz", Verdict.WARNING, "High-risk domain in email!"),
    ("friend@example.com", Verdict.SAFE, "Email seems legit."),
])
def test_email_values(rules, value, verdict, message):
    result = quick_check(value, rules)

    assert result.is_email is True
    assert result.verdict == verdict
    assert result.message == message


@pytest.mark.parametrize("value, verdict, message", [
    ("paypal-verify.ml", Verdict.FRAUDULENT, "Fraudulent website detected!"),
    ("http://example.com", Verdict.WARNING, "Site is not using HTTPS!"),
    ("example.com", Verdict.WARNING, "Site is not using HTTPS!"),
    ("https://example.com", Verdict.SAFE, "Website seems safe."),
])
def test_website_values(rules, value, verdict, message):
    result = quick_check(value, rules)

    assert result.is_email is False
    assert result.verdict == verdict
    assert result.message == message


@pytest.mark.parametrize("value", ["not a url", "", "   ", "https://example.com:99999"])
def test_invalid_values(rules, value):
    result = quick_check(value, rules)

    assert result.verdict == Verdict.INVALID
    assert result.message == "Invalid input. Not a valid URL or email."


def test_to_dict(rules):
    assert quick_check("friend@example.com", rules).to_dict() == {
        "is_email": True,
        "verdict": "safe",
        "message": "Email seems legit.",
    }
