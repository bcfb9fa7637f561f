"""
Email Analyzer
Scores raw email text (headers + body) against the sender, keyword,
sensitive-data, link and spelling rules
"""

import re
import logging
from typing import List, Optional, Pattern, Tuple

import tldextract

from fraudscan.core.rule_tables import RuleTables, find_high_risk_fragment, get_rule_tables
from fraudscan.core.scoring import AnalysisResult, ScoreCard, Severity
from fraudscan.utils.email_parser import EmailParser, get_email_parser

logger = logging.getLogger(__name__)

# Offline extractor: bundled public suffix snapshot, no fetching, no disk cache
_domain_extractor = tldextract.TLDExtract(suffix_list_urls=(), cache_dir=None)


class EmailAnalyzer:
    """Rule-based email risk scorer"""

    BASELINE_SCORE = 95
    KEYWORD_THRESHOLD = 3
    GRAMMAR_THRESHOLD = 2
    MAX_KEYWORDS_NAMED = 3

    PENALTIES = {
        "Known Malicious Sender": 40,
        "High-Risk Domain": 35,
        "Domain Impersonation": 45,
        "Multiple Phishing Keywords": 35,
        "Urgency Tactics": 15,
        "Sensitive Data Request": 40,
        "Malformed URL": 10,
        "Mismatched Link Domain": 20,
        "Malicious Link Domain": 35,
        "Shortened URL": 15,
        "Poor Grammar/Spelling": 10,
    }

    def __init__(self, rules: Optional[RuleTables] = None, parser: Optional[EmailParser] = None):
        self.rules = rules or get_rule_tables()
        self.parser = parser or get_email_parser()
        self._sensitive: List[Tuple[str, Pattern]] = [
            (label, re.compile(pattern, re.IGNORECASE))
            for label, pattern in self.rules.sensitive_patterns
        ]
        self._misspellings: Optional[Pattern] = None
        if self.rules.misspellings:
            self._misspellings = re.compile(
                r'\b(' + '|'.join(re.escape(w) for w in self.rules.misspellings) + r')\b',
                re.IGNORECASE
            )

    def analyze(self, content: str) -> AnalysisResult:
        """Score one email. Never raises on malformed content."""
        content = content or ""
        card = ScoreCard(self.BASELINE_SCORE)

        sender = self.parser.extract_sender(content)
        sender_domain = self.parser.sender_domain(sender)

        if sender:
            self._check_sender(card, sender, sender_domain)
        self._check_keywords(card, content)
        self._check_sensitive_data(card, content)
        self._check_links(card, content, sender_domain)
        self._check_grammar(card, content)

        result = card.finish("email")
        logger.debug(f"Email analysis: score={result.score} level={result.level.value} flags={len(result.flags)}")
        return result

    def _add(self, card: ScoreCard, flag_type: str, severity: Severity,
             description: str, recommendation: Optional[str] = None):
        card.add_flag(flag_type, severity, self.PENALTIES[flag_type], description, recommendation)

    def _check_sender(self, card: ScoreCard, sender: str, sender_domain: str):
        """Known-bad sender list, then high-risk and impersonating domains"""
        if sender in self.rules.malicious_senders:
            self._add(
                card, "Known Malicious Sender", Severity.HIGH,
                f"Sender {sender} is in our fraud database",
                "Do not reply, click links or open attachments. Report the message and delete it."
            )
            return

        if not sender_domain:
            return

        fragment = find_high_risk_fragment(sender_domain, self.rules)
        if fragment:
            self._add(
                card, "High-Risk Domain", Severity.HIGH,
                f"Sender domain contains high-risk TLD or pattern: {fragment}",
                "Treat messages from this domain as untrusted."
            )

        # Every brand is checked; several may fire for one domain
        for brand, canonical in self.rules.brand_domains:
            if brand in sender_domain and not sender_domain.endswith(canonical):
                self._add(
                    card, "Domain Impersonation", Severity.HIGH,
                    f"Domain {sender_domain} mimics {brand.capitalize()} but is not the official {canonical}",
                    f"Contact {brand.capitalize()} through {canonical} directly instead of using this message."
                )

    def _check_keywords(self, card: ScoreCard, content: str):
        """Count distinct phishing phrases present in the body"""
        lower_content = content.lower()
        found = [kw for kw in self.rules.phishing_keywords if kw.lower() in lower_content]

        if len(found) >= self.KEYWORD_THRESHOLD:
            named = ", ".join(f"'{kw}'" for kw in found[:self.MAX_KEYWORDS_NAMED])
            self._add(
                card, "Multiple Phishing Keywords", Severity.HIGH,
                f"Contains {len(found)} suspicious keywords indicating phishing attempt ({named})"
            )
        elif found:
            self._add(
                card, "Urgency Tactics", Severity.MEDIUM,
                f"Uses pressure tactics with {len(found)} suspicious keyword(s)"
            )

    def _check_sensitive_data(self, card: ScoreCard, content: str):
        """One flag per sensitive-data pattern that matches"""
        for label, pattern in self._sensitive:
            if pattern.search(content):
                self._add(
                    card, "Sensitive Data Request", Severity.HIGH,
                    f"Requests or exposes sensitive information ({label})",
                    "Legitimate organizations never ask for this information by email."
                )

    def _check_links(self, card: ScoreCard, content: str, sender_domain: str):
        """Malformed, mismatched, malicious and shortened links"""
        sender_root = self._domain_root(sender_domain) if sender_domain else ""

        for link in self.parser.extract_links(content):
            hostname = self.parser.link_hostname(link)
            if not hostname:
                self._add(
                    card, "Malformed URL", Severity.MEDIUM,
                    f"Contains invalid or suspicious URL format: {link[:80]}"
                )
                continue

            if sender_domain and hostname != sender_domain and sender_root not in hostname:
                self._add(
                    card, "Mismatched Link Domain", Severity.MEDIUM,
                    f"Link domain ({hostname}) doesn't match sender domain ({sender_domain})"
                )

            if find_high_risk_fragment(hostname, self.rules):
                self._add(
                    card, "Malicious Link Domain", Severity.HIGH,
                    f"Link contains high-risk domain: {hostname}",
                    "Do not open this link."
                )

            if self._is_shortener(hostname):
                self._add(
                    card, "Shortened URL", Severity.MEDIUM,
                    f"Shortened URL ({hostname}) hides the real destination"
                )

    def _check_grammar(self, card: ScoreCard, content: str):
        if not self._misspellings:
            return
        errors = self._misspellings.findall(content)
        if len(errors) > self.GRAMMAR_THRESHOLD:
            self._add(
                card, "Poor Grammar/Spelling", Severity.LOW,
                f"{len(errors)} spelling errors suggest non-professional sender"
            )

    def _is_shortener(self, hostname: str) -> bool:
        return any(hostname == s or hostname.endswith("." + s) for s in self.rules.shorteners)

    @staticmethod
    def _domain_root(domain: str) -> str:
        """Registrable label of a domain ("paypal" for mail.paypal.co.uk)"""
        extracted = _domain_extractor(domain)
        return extracted.domain or domain.split('.')[0]


def analyze_email(content: str, rules: Optional[RuleTables] = None) -> AnalysisResult:
    """Convenience function to analyze an email"""
    return EmailAnalyzer(rules).analyze(content)
