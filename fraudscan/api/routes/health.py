"""
Health check endpoint
Provides system status information
"""

from typing import Dict
from fastapi import APIRouter, Request
from pydantic import BaseModel
from datetime import datetime, timezone
import time

from fraudscan.core.config import APP_VERSION
from fraudscan.utils.startup import get_init_status

router = APIRouter()

# Track startup time
_startup_time = time.time()


class HealthResponse(BaseModel):
    """Health check response model"""
    status: str
    version: str
    uptime_seconds: float
    timestamp: str


class StatusResponse(BaseModel):
    """System status response model"""
    initialized: bool
    rule_tables: Dict[str, int]
    history_entries: int


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """
    Health check endpoint

    Returns:
        HealthResponse: System health status
    """
    uptime = time.time() - _startup_time

    return HealthResponse(
        status="healthy",
        version=APP_VERSION,
        uptime_seconds=round(uptime, 2),
        timestamp=datetime.now(timezone.utc).isoformat()
    )


@router.get("/status", response_model=StatusResponse)
async def system_status(request: Request):
    """
    System status endpoint - loaded rule tables and history size

    Returns:
        StatusResponse: Rule table sizes and history entry count
    """
    status = get_init_status(request.app)

    return StatusResponse(
        initialized=status["initialized"],
        rule_tables=status["rule_tables"],
        history_entries=status["history_entries"]
    )
