"""
Quick Check
One-line verdict for a single value that may be an email address or a website
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from fraudscan.core.rule_tables import RuleTables, find_high_risk_fragment, get_rule_tables
from fraudscan.core.url_analyzer import parse_url


EMAIL_ADDRESS_PATTERN = re.compile(r'^[^\s@]+@[^\s@]+\.[^\s@]+$')


class Verdict(str, Enum):
    SAFE = "safe"
    WARNING = "warning"
    FRAUDULENT = "fraudulent"
    INVALID = "invalid"


@dataclass
class QuickCheckResult:
    is_email: bool
    verdict: Verdict
    message: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "is_email": self.is_email,
            "verdict": self.verdict.value,
            "message": self.message,
        }


def quick_check(value: str, rules: Optional[RuleTables] = None) -> QuickCheckResult:
    """Classify value as an email address or a website and give a short verdict"""
    rules = rules or get_rule_tables()
    value = (value or "").strip()

    if EMAIL_ADDRESS_PATTERN.match(value):
        address = value.lower()
        if address in rules.malicious_senders:
            return QuickCheckResult(True, Verdict.FRAUDULENT, "Suspicious email address!")
        if find_high_risk_fragment(address.rsplit('@', 1)[1], rules):
            return QuickCheckResult(True, Verdict.WARNING, "High-risk domain in email!")
        return QuickCheckResult(True, Verdict.SAFE, "Email seems legit.")

    parsed = parse_url(value)
    if parsed is None:
        return QuickCheckResult(False, Verdict.INVALID, "Invalid input. Not a valid URL or email.")

    _, hostname = parsed
    if find_high_risk_fragment(hostname, rules):
        return QuickCheckResult(False, Verdict.FRAUDULENT, "Fraudulent website detected!")
    if not value.lower().startswith("https"):
        return QuickCheckResult(False, Verdict.WARNING, "Site is not using HTTPS!")
    return QuickCheckResult(False, Verdict.SAFE, "Website seems safe.")
