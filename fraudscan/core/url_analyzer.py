"""
URL Analyzer
Scores a website URL (scheme optional) and synthesizes domain metadata.

No lookups are performed: domain age, reputation and registrar are derived
from the final score so that results stay deterministic and offline.
"""

import re
import logging
from typing import Optional, Tuple
from urllib.parse import urlsplit

from fraudscan.core.rule_tables import RuleTables, find_high_risk_fragment, get_rule_tables
from fraudscan.core.scoring import (
    AnalysisResult,
    DomainInfo,
    RiskLevel,
    ScoreCard,
    Severity,
    clamp_score,
    classify_score,
)

logger = logging.getLogger(__name__)

SCHEME_PATTERN = re.compile(r'^https?://', re.IGNORECASE)

# Characters a browser would refuse in a host
FORBIDDEN_HOST_CHARS = re.compile(r'[\s<>"\'\\^`{|}%#?/@]')

IPV4_PATTERN = re.compile(r'^\d{1,3}\.\d{1,3}\.\d{1,3}\.\d{1,3}$')
REPEATED_CHARS_PATTERN = re.compile(r'\d{2,}|-{2,}')
# Cyrillic and Greek blocks
NON_LATIN_PATTERN = re.compile(r'[\u0370-\u03ff\u0400-\u04ff]')

# (exclusive upper score bound, label); anything higher is "Over 1 year"
AGE_BANDS = (
    (40, "Less than 1 week"),
    (60, "Less than 1 month"),
    (75, "2-6 months"),
)
DEFAULT_AGE = "Over 1 year"

REPUTATION_BY_LEVEL = {
    RiskLevel.SAFE: "Good",
    RiskLevel.SUSPICIOUS: "Unknown",
    RiskLevel.DANGER: "Poor",
}

REGISTRAR_BY_LEVEL = {
    RiskLevel.SAFE: "Established registrar",
    RiskLevel.SUSPICIOUS: "Unverified registrar",
    RiskLevel.DANGER: "High-abuse registrar",
}


def normalize_url(raw: str) -> str:
    """Trim input and add https:// when no http(s) scheme is present"""
    candidate = (raw or "").strip()
    if not SCHEME_PATTERN.match(candidate):
        candidate = f"https://{candidate}"
    return candidate


def parse_url(raw: str) -> Optional[Tuple[str, str]]:
    """
    Normalize and parse a URL.

    Returns:
        (scheme, hostname) with both lowercased, or None if the URL is malformed
    """
    candidate = normalize_url(raw)
    try:
        parts = urlsplit(candidate)
        # Raises ValueError for a non-numeric or out-of-range port
        parts.port
    except ValueError as e:
        logger.debug(f"URL parse error: {e}")
        return None

    hostname = parts.hostname
    if not hostname or FORBIDDEN_HOST_CHARS.search(hostname):
        return None
    return parts.scheme.lower(), hostname


def decode_hostname(hostname: str) -> str:
    """Decode punycode (xn--) labels so homographs are visible"""
    labels = []
    for label in hostname.split('.'):
        if label.startswith('xn--'):
            try:
                label = label.encode('ascii').decode('idna')
            except UnicodeError:
                pass
        labels.append(label)
    return '.'.join(labels)


def synthesize_age(score: int) -> str:
    for bound, label in AGE_BANDS:
        if score < bound:
            return label
    return DEFAULT_AGE


class UrlAnalyzer:
    """Rule-based website URL risk scorer"""

    BASELINE_SCORE = 90
    INVALID_SCORE = 0
    MAX_DOMAIN_LENGTH = 25
    MAX_SUBDOMAINS = 2

    PENALTIES = {
        "High-Risk Domain": 50,
        "Insecure Connection": 30,
        "Typosquatting Attempt": 40,
        "Suspicious Domain Length": 15,
        "Excessive Subdomains": 20,
        "Suspicious Domain Format": 10,
        "Homograph Attack": 35,
        "IP Address URL": 40,
        "URL Shortener": 25,
    }

    def __init__(self, rules: Optional[RuleTables] = None):
        self.rules = rules or get_rule_tables()

    def analyze(self, url: str) -> AnalysisResult:
        """Score one URL. Malformed input is reported as a flag, never raised."""
        parsed = parse_url(url)
        if parsed is None:
            return self._invalid_result(url)

        scheme, hostname = parsed
        card = ScoreCard(self.BASELINE_SCORE)

        self._check_high_risk_domain(card, hostname)
        self._check_scheme(card, scheme)
        self._check_typosquatting(card, hostname)
        self._check_structure(card, hostname)
        self._check_homograph(card, hostname)
        self._check_ip_literal(card, hostname)
        self._check_shortener(card, hostname)

        final_score = clamp_score(card.score)
        level = classify_score(final_score)
        insecure = any(f.type == "Insecure Connection" for f in card.flags)
        domain_info = DomainInfo(
            domain=hostname,
            age=synthesize_age(final_score),
            reputation=REPUTATION_BY_LEVEL[level],
            ssl=scheme == "https" and not insecure,
            registrar=REGISTRAR_BY_LEVEL[level],
        )

        result = card.finish("url", domain_info)
        logger.debug(f"URL analysis: {hostname} score={result.score} level={result.level.value}")
        return result

    def _add(self, card: ScoreCard, flag_type: str, severity: Severity,
             description: str, recommendation: Optional[str] = None):
        card.add_flag(flag_type, severity, self.PENALTIES[flag_type], description, recommendation)

    def _invalid_result(self, url: str) -> AnalysisResult:
        card = ScoreCard(self.INVALID_SCORE)
        card.add_flag(
            "Invalid URL Format", Severity.HIGH, 0,
            "URL format is invalid or malformed",
            "Check the address for typos before visiting it."
        )
        raw = (url or "").strip()
        domain = SCHEME_PATTERN.sub('', raw).split('/')[0]
        return card.finish("url", DomainInfo(
            domain=domain,
            age="Unknown",
            reputation=REPUTATION_BY_LEVEL[RiskLevel.DANGER],
            ssl=False,
            registrar="Unknown",
        ))

    def _check_high_risk_domain(self, card: ScoreCard, hostname: str):
        fragment = find_high_risk_fragment(hostname, self.rules)
        if fragment:
            self._add(
                card, "High-Risk Domain", Severity.HIGH,
                f"Domain uses high-risk TLD or contains suspicious pattern: {fragment}",
                "Avoid entering credentials or payment details on this site."
            )

    def _check_scheme(self, card: ScoreCard, scheme: str):
        if scheme == "http":
            self._add(
                card, "Insecure Connection", Severity.HIGH,
                "Website does not use HTTPS encryption - data transmitted is not secure",
                "Never submit passwords or payment data over an unencrypted connection."
            )

    def _check_typosquatting(self, card: ScoreCard, hostname: str):
        for pattern in self.rules.typosquat_patterns:
            if pattern in hostname:
                self._add(
                    card, "Typosquatting Attempt", Severity.HIGH,
                    f"Domain contains suspicious pattern \"{pattern}\" often used to mimic legitimate services",
                    "Type the official address yourself instead of following this link."
                )
                break

    def _check_structure(self, card: ScoreCard, hostname: str):
        """Length, subdomain depth and repeated digit/hyphen runs"""
        if len(hostname) > self.MAX_DOMAIN_LENGTH:
            self._add(
                card, "Suspicious Domain Length", Severity.MEDIUM,
                f"Unusually long domain name ({len(hostname)} characters) may indicate obfuscation"
            )

        subdomain_count = len(hostname.split('.')) - 2
        if subdomain_count > self.MAX_SUBDOMAINS:
            self._add(
                card, "Excessive Subdomains", Severity.MEDIUM,
                f"Domain has {subdomain_count} subdomain levels, possibly to confuse users"
            )

        if REPEATED_CHARS_PATTERN.search(hostname):
            self._add(
                card, "Suspicious Domain Format", Severity.LOW,
                "Domain contains unusual character patterns"
            )

    def _check_homograph(self, card: ScoreCard, hostname: str):
        if NON_LATIN_PATTERN.search(decode_hostname(hostname)):
            self._add(
                card, "Homograph Attack", Severity.HIGH,
                "Domain contains non-Latin characters that may mimic legitimate domains",
                "Compare the address character by character with the official site."
            )

    def _check_ip_literal(self, card: ScoreCard, hostname: str):
        if IPV4_PATTERN.match(hostname):
            self._add(
                card, "IP Address URL", Severity.HIGH,
                "URL uses IP address instead of domain name - highly suspicious"
            )

    def _check_shortener(self, card: ScoreCard, hostname: str):
        if any(hostname == s or hostname.endswith("." + s) for s in self.rules.shorteners):
            self._add(
                card, "URL Shortener", Severity.MEDIUM,
                "URL shortener service hides the actual destination"
            )


def analyze_url(url: str, rules: Optional[RuleTables] = None) -> AnalysisResult:
    """Convenience function to analyze a URL"""
    return UrlAnalyzer(rules).analyze(url)
