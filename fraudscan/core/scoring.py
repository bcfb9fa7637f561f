"""
Scoring model and classifier
Flags, results, score clamping and level classification shared by both analyzers
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional

# Level thresholds (inclusive lower bounds)
SAFE_THRESHOLD = 80
SUSPICIOUS_THRESHOLD = 50

MIN_SCORE = 0
MAX_SCORE = 100


class Severity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class RiskLevel(str, Enum):
    SAFE = "safe"
    SUSPICIOUS = "suspicious"
    DANGER = "danger"


@dataclass(frozen=True)
class Flag:
    """A single rule violation"""
    type: str
    severity: Severity
    description: str
    recommendation: Optional[str] = None
    penalty: int = 0  # Points deducted from the score

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type,
            "severity": self.severity.value,
            "description": self.description,
            "recommendation": self.recommendation,
            "penalty": self.penalty,
        }


@dataclass
class DomainInfo:
    """Synthesized domain metadata (derived from the score, never looked up)"""
    domain: str
    age: str
    reputation: str
    ssl: bool
    registrar: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "domain": self.domain,
            "age": self.age,
            "reputation": self.reputation,
            "ssl": self.ssl,
            "registrar": self.registrar,
        }


@dataclass
class AnalysisResult:
    """Complete result of one email or URL analysis"""
    score: int
    level: RiskLevel
    flags: List[Flag]
    analysis: str
    subject_type: str
    domain_info: Optional[DomainInfo] = None
    timestamp: str = field(default_factory=lambda: datetime.now(timezone.utc).isoformat())

    def to_dict(self) -> Dict[str, Any]:
        return {
            "score": self.score,
            "level": self.level.value,
            "flags": [f.to_dict() for f in self.flags],
            "domain_info": self.domain_info.to_dict() if self.domain_info else None,
            "analysis": self.analysis,
            "subject_type": self.subject_type,
            "timestamp": self.timestamp,
        }


def clamp_score(score: int) -> int:
    """Clamp a raw score into [0, 100]"""
    return max(MIN_SCORE, min(MAX_SCORE, int(score)))


def classify_score(score: int) -> RiskLevel:
    """Map a final score to its risk level"""
    if score >= SAFE_THRESHOLD:
        return RiskLevel.SAFE
    if score >= SUSPICIOUS_THRESHOLD:
        return RiskLevel.SUSPICIOUS
    return RiskLevel.DANGER


# Summary templates keyed by subject type
_FINDINGS = {
    "email": ("Found {count} red flag(s).", "No major issues detected."),
    "url": ("Found {count} security issue(s).", "No major red flags detected."),
}

_GUIDANCE = {
    "email": {
        RiskLevel.SAFE: "This appears to be legitimate communication.",
        RiskLevel.SUSPICIOUS: "Exercise caution with this email and verify sender independently.",
        RiskLevel.DANGER: "This email shows strong indicators of fraud. Do not respond or click any links.",
    },
    "url": {
        RiskLevel.SAFE: "This website appears to be legitimate and safe.",
        RiskLevel.SUSPICIOUS: "Exercise caution when visiting this website and verify its authenticity.",
        RiskLevel.DANGER: "This website shows strong indicators of being fraudulent. "
                          "Avoid visiting or entering personal information.",
    },
}

_TITLES = {"email": "Email", "url": "Website"}


def build_summary(level: RiskLevel, flag_count: int, subject_type: str) -> str:
    """Deterministic one-paragraph summary for a finished analysis"""
    if subject_type not in _GUIDANCE:
        raise ValueError(f"Unknown subject type: {subject_type}")

    found, clean = _FINDINGS[subject_type]
    findings = found.format(count=flag_count) if flag_count > 0 else clean
    return f"{_TITLES[subject_type]} analysis complete. {findings} {_GUIDANCE[subject_type][level]}"


def severity_counts(flags: List[Flag]) -> Dict[str, int]:
    """Tally flags per severity (every severity present, zero if unused)"""
    counts = {severity.value: 0 for severity in Severity}
    for flag in flags:
        counts[flag.severity.value] += 1
    return counts


class ScoreCard:
    """Accumulates flags and deductions for a single analysis run"""

    def __init__(self, baseline: int):
        self.score = baseline
        self.flags: List[Flag] = []

    def add_flag(self, flag_type: str, severity: Severity, penalty: int,
                 description: str, recommendation: Optional[str] = None):
        """Record a rule violation and apply its deduction"""
        self.score -= penalty
        self.flags.append(Flag(
            type=flag_type,
            severity=severity,
            description=description,
            recommendation=recommendation,
            penalty=penalty,
        ))

    def finish(self, subject_type: str, domain_info: Optional[DomainInfo] = None) -> AnalysisResult:
        """Clamp, classify and build the final result"""
        final_score = clamp_score(self.score)
        level = classify_score(final_score)
        return AnalysisResult(
            score=final_score,
            level=level,
            flags=list(self.flags),
            analysis=build_summary(level, len(self.flags), subject_type),
            subject_type=subject_type,
            domain_info=domain_info,
        )
