"""
Analysis Runner
Multi-phase entry point for callers that want staged progress feedback.

The analyzers themselves are plain synchronous functions; this wrapper
reports real phases (started, analyzing, complete) through an optional
callback.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from fraudscan.core.email_analyzer import EmailAnalyzer
from fraudscan.core.rule_tables import RuleTables
from fraudscan.core.scoring import AnalysisResult
from fraudscan.core.url_analyzer import UrlAnalyzer

logger = logging.getLogger(__name__)

ANALYZERS = {
    "email": EmailAnalyzer,
    "url": UrlAnalyzer,
}


class AnalysisPhase(str, Enum):
    STARTED = "started"
    ANALYZING = "analyzing"
    COMPLETE = "complete"


@dataclass(frozen=True)
class ProgressEvent:
    kind: str
    phase: AnalysisPhase
    percent: int


ProgressCallback = Callable[[ProgressEvent], None]


def _emit(on_progress: Optional[ProgressCallback], event: ProgressEvent):
    if on_progress is None:
        return
    try:
        on_progress(event)
    except Exception as e:
        # Callback errors never abort the analysis
        logger.warning(f"Progress callback failed during {event.phase.value}: {e}")


def run_analysis(
    kind: str,
    content: str,
    rules: Optional[RuleTables] = None,
    on_progress: Optional[ProgressCallback] = None,
) -> AnalysisResult:
    """
    Run an email or URL analysis with progress reporting.

    Args:
        kind: "email" or "url"
        content: Email text or URL
        rules: Rule tables to use (process-wide tables if omitted)
        on_progress: Called with a ProgressEvent at each phase

    Raises:
        ValueError: If kind is not a known analysis type
    """
    if kind not in ANALYZERS:
        raise ValueError(f"Unknown analysis type: {kind}")

    _emit(on_progress, ProgressEvent(kind, AnalysisPhase.STARTED, 0))
    analyzer = ANALYZERS[kind](rules)

    _emit(on_progress, ProgressEvent(kind, AnalysisPhase.ANALYZING, 50))
    result = analyzer.analyze(content)

    _emit(on_progress, ProgressEvent(kind, AnalysisPhase.COMPLETE, 100))
    logger.debug(f"{kind} analysis complete: score={result.score} level={result.level.value}")
    return result
