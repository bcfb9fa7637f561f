"""
Analysis API Endpoints
Scores pasted email text and website URLs, plus a quick single-value check

Input is validated here (the scoring engine accepts any string);
every successful analysis is recorded in the in-memory scan history.
"""

from typing import Optional, List, Dict, Any
from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel
import logging
from slowapi import Limiter
from slowapi.util import get_remote_address

from fraudscan.core.config import settings
from fraudscan.core.input_sanitizer import (
    sanitize_email_content,
    sanitize_url_input,
    log_security_event
)
from fraudscan.core.quick_check import quick_check
from fraudscan.core.rule_tables import get_rule_tables
from fraudscan.core.scoring import AnalysisResult, severity_counts
from fraudscan.services.analysis_runner import run_analysis
from fraudscan.services.history import get_scan_history
from fraudscan.utils.email_parser import get_email_parser

logger = logging.getLogger(__name__)

limiter = Limiter(key_func=get_remote_address)
router = APIRouter()


class EmailAnalysisRequest(BaseModel):
    """Raw email text, headers and body together"""
    content: str


class UrlAnalysisRequest(BaseModel):
    """URL or bare hostname"""
    url: str


class QuickCheckRequest(BaseModel):
    """Email address or website"""
    value: str


class FlagResult(BaseModel):
    """Individual rule violation"""
    type: str
    severity: str
    description: str
    recommendation: Optional[str] = None
    penalty: int


class DomainInfoResult(BaseModel):
    """Synthesized domain metadata"""
    domain: str
    age: str
    reputation: str
    ssl: bool
    registrar: str


class AnalysisResponse(BaseModel):
    """Response model for email and URL analysis"""
    score: int
    level: str
    flags: List[FlagResult]
    domain_info: Optional[DomainInfoResult] = None
    analysis: str
    subject_type: str
    timestamp: str
    severity_counts: Dict[str, int]
    history_id: Optional[str] = None
    email_metadata: Optional[Dict[str, Any]] = None


class QuickCheckResponse(BaseModel):
    is_email: bool
    verdict: str
    message: str


def _client_ip(request: Request) -> str:
    return request.client.host if request.client else "unknown"


def _record_and_respond(kind: str, content: str, result: AnalysisResult,
                        email_metadata: dict = None) -> AnalysisResponse:
    """Add the result to scan history and build the response"""
    entry = get_scan_history().add(kind, content, result)

    return AnalysisResponse(
        **result.to_dict(),
        severity_counts=severity_counts(result.flags),
        history_id=entry.id,
        email_metadata=email_metadata
    )


@router.post("/analyze/email", response_model=AnalysisResponse)
@limiter.limit(settings.RATE_LIMIT)
def analyze_email_content(request: Request, payload: EmailAnalysisRequest) -> AnalysisResponse:
    """
    Analyze pasted email text for fraud indicators

    Returns the risk score, level, flags in rule order, a summary
    sentence and basic metadata (sender, subject, link count).
    """
    content, error = sanitize_email_content(payload.content)
    if error:
        if payload.content.strip():
            log_security_event("INVALID_EMAIL_CONTENT", error, _client_ip(request))
        raise HTTPException(status_code=400, detail=error)

    result = run_analysis("email", content, rules=get_rule_tables())
    email_metadata = get_email_parser().parse_text(content)

    logger.info(f"Email analyzed: score={result.score} level={result.level.value} flags={len(result.flags)}")
    return _record_and_respond("email", content, result, email_metadata)


@router.post("/analyze/url", response_model=AnalysisResponse)
@limiter.limit(settings.RATE_LIMIT)
def analyze_website_url(request: Request, payload: UrlAnalysisRequest) -> AnalysisResponse:
    """
    Analyze a website URL (scheme optional) for fraud indicators

    Malformed URLs are not rejected: they come back as an
    "Invalid URL Format" flag with the minimum score.
    """
    url, error = sanitize_url_input(payload.url)
    if error:
        if payload.url.strip():
            log_security_event("INVALID_URL", error, _client_ip(request))
        raise HTTPException(status_code=400, detail=error)

    result = run_analysis("url", url, rules=get_rule_tables())

    logger.info(f"URL analyzed: score={result.score} level={result.level.value} flags={len(result.flags)}")
    return _record_and_respond("url", url, result)


@router.post("/analyze/quick-check", response_model=QuickCheckResponse)
@limiter.limit(settings.RATE_LIMIT)
def quick_check_value(request: Request, payload: QuickCheckRequest) -> QuickCheckResponse:
    """
    One-line verdict for an email address or a website
    Not recorded in history
    """
    value, error = sanitize_url_input(payload.value)
    if error:
        raise HTTPException(status_code=400, detail=error.replace("URL", "Value"))

    result = quick_check(value, get_rule_tables())
    return QuickCheckResponse(**result.to_dict())
