"""
Rule Tables
Static, read-only detection data shared by the email and URL analyzers.

The built-in tables can be extended with a JSON file (settings.RULES_FILE).
Keys match the RuleTables field names; list values are appended to the
defaults and the "brand_domains" object is merged. Keys starting with "_"
are treated as comments.
"""

import json
import logging
import re
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from fraudscan.core.config import settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RuleTables:
    """Immutable bundle of every rule list the analyzers consult"""
    malicious_senders: Tuple[str, ...]
    high_risk_fragments: Tuple[str, ...]
    phishing_keywords: Tuple[str, ...]
    sensitive_patterns: Tuple[Tuple[str, str], ...]  # (label, regex)
    brand_domains: Tuple[Tuple[str, str], ...]  # (brand, canonical domain)
    shorteners: Tuple[str, ...]
    typosquat_patterns: Tuple[str, ...]
    misspellings: Tuple[str, ...]

    def summary(self) -> Dict[str, int]:
        """Entry count per table, for startup logging"""
        return {f.name: len(getattr(self, f.name)) for f in fields(self)}


DEFAULT_RULES = RuleTables(
    malicious_senders=(
        "support@paypal.verify.com",
        "admin@updatemybank.ru",
        "security@bankofamerica-update.com",
        "noreply@amazon.secure-verify.net",
        "account@microsoft-security.co",
        "service@apple-id-locked.org",
    ),
    # Bare entries are TLDs, dotted entries are known-bad domain fragments
    high_risk_fragments=(
        "xyz", "tk", "ml", "ga", "cf",
        "phishing.com", "scamlink.net", "secure-bank.tk",
        "paypal-verify.ml", "amazon-security.xyz",
    ),
    phishing_keywords=(
        "urgent", "verify account", "suspended", "click here", "act now",
        "limited time", "congratulations", "you've won", "claim now",
        "update payment", "confirm identity", "security alert",
        "unusual activity", "account locked", "expires today", "final notice",
    ),
    sensitive_patterns=(
        ("credit card number", r"\b\d{4}[-\s]\d{4}[-\s]\d{4}[-\s]\d{4}\b"),
        ("social security number", r"\b\d{3}[-\s]\d{2}[-\s]\d{4}\b"),
        ("password", r"password\s*[:=]\s*\w+"),
        ("PIN", r"\bpin\s*[:=]\s*\d+"),
        ("routing number", r"routing\s+number"),
        ("account number", r"account\s+number"),
    ),
    brand_domains=(
        ("paypal", "paypal.com"),
        ("amazon", "amazon.com"),
        ("microsoft", "microsoft.com"),
        ("apple", "apple.com"),
        ("google", "google.com"),
        ("facebook", "facebook.com"),
        ("netflix", "netflix.com"),
    ),
    shorteners=(
        "bit.ly", "tinyurl.com", "t.co", "goo.gl", "ow.ly",
        "short.link", "is.gd", "v.gd", "tiny.cc",
    ),
    typosquat_patterns=(
        "secure-", "-bank", "verify-", "-secure", "bank-", "-verify",
        "paypal-", "-paypal", "amazon-", "-amazon", "microsoft-", "-microsoft",
        "apple-", "-apple", "google-", "-google", "facebook-", "-facebook",
    ),
    misspellings=(
        "recieve", "seperate", "definately", "occured", "accomodate", "necesary",
    ),
)


def matches_high_risk_fragment(host: str, fragment: str) -> bool:
    """
    Check a hostname (or email domain) against one red-flag fragment.

    Both bare TLD fragments ("tk") and known-bad domains ("scamlink.net")
    match anywhere in the host, so "xyzdeals.com" is caught by "xyz".
    """
    host = host.lower()
    fragment = fragment.lower().lstrip(".")
    if not host or not fragment:
        return False
    return fragment in host


def find_high_risk_fragment(host: str, rules: RuleTables) -> Optional[str]:
    """Return the first configured fragment matching host, or None"""
    for fragment in rules.high_risk_fragments:
        if matches_high_risk_fragment(host, fragment):
            return fragment
    return None


def _merge_list(current: Tuple[Any, ...], extra: Any, key: str) -> Tuple[Any, ...]:
    if not isinstance(extra, list):
        logger.warning(f"Ignoring rule table '{key}': expected a list")
        return current
    merged = list(current)
    for entry in extra:
        if not isinstance(entry, str):
            logger.warning(f"Skipping {key} entry {entry!r}: expected a string")
            continue
        if entry.startswith("_"):
            continue
        entry = entry.lower()
        if entry not in merged:
            merged.append(entry)
    return tuple(merged)


def _merge_patterns(current: Tuple[Tuple[str, str], ...], extra: Any) -> Tuple[Tuple[str, str], ...]:
    if not isinstance(extra, list):
        logger.warning("Ignoring rule table 'sensitive_patterns': expected a list")
        return current
    merged = list(current)
    for entry in extra:
        if not (isinstance(entry, (list, tuple)) and len(entry) == 2):
            logger.warning(f"Skipping sensitive pattern {entry!r}: expected [label, regex]")
            continue
        label, pattern = str(entry[0]), str(entry[1])
        try:
            re.compile(pattern)
        except re.error as e:
            logger.warning(f"Skipping sensitive pattern '{label}': {e}")
            continue
        merged.append((label, pattern))
    return tuple(merged)


def _merge_brands(current: Tuple[Tuple[str, str], ...], extra: Any) -> Tuple[Tuple[str, str], ...]:
    if not isinstance(extra, dict):
        logger.warning("Ignoring rule table 'brand_domains': expected an object")
        return current
    merged = dict(current)
    for brand, domain in extra.items():
        if brand.startswith("_"):
            continue
        merged[brand.lower()] = str(domain).lower()
    return tuple(merged.items())


def merge_rule_tables(base: RuleTables, config: Dict[str, Any]) -> RuleTables:
    """Return a new RuleTables with config entries layered onto base"""
    changes = {}
    for f in fields(base):
        if f.name not in config:
            continue
        current = getattr(base, f.name)
        if f.name == "sensitive_patterns":
            changes[f.name] = _merge_patterns(current, config[f.name])
        elif f.name == "brand_domains":
            changes[f.name] = _merge_brands(current, config[f.name])
        else:
            changes[f.name] = _merge_list(current, config[f.name], f.name)

    unknown = [k for k in config if not k.startswith("_") and k not in {f.name for f in fields(base)}]
    if unknown:
        logger.warning(f"Unknown rule table keys ignored: {', '.join(sorted(unknown))}")

    return replace(base, **changes)


def load_rule_tables(path: Optional[str] = None) -> RuleTables:
    """
    Load rule tables, extending the defaults with a JSON file if one is given.
    Returns the defaults if the file doesn't exist or is invalid.
    """
    if not path:
        return DEFAULT_RULES

    config_path = Path(path)
    try:
        if config_path.exists():
            with open(config_path, 'r', encoding='utf-8') as f:
                config = json.load(f)
            if not isinstance(config, dict):
                logger.warning(f"Rule file {config_path} must contain a JSON object")
                return DEFAULT_RULES
            logger.info(f"Loaded rule tables from {config_path}")
            return merge_rule_tables(DEFAULT_RULES, config)
        logger.warning(f"Rule file not found: {config_path}, using defaults")
    except (json.JSONDecodeError, IOError) as e:
        logger.warning(f"Failed to load rule file: {e}")
    return DEFAULT_RULES


# Singleton instance
_rules: Optional[RuleTables] = None


def get_rule_tables() -> RuleTables:
    """Get or load the process-wide rule tables"""
    global _rules
    if _rules is None:
        _rules = load_rule_tables(settings.RULES_FILE)
    return _rules
