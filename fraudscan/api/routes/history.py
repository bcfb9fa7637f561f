"""
Scan History API Endpoints
Lists and clears the in-memory record of recent analyses
"""

from typing import List
from fastapi import APIRouter
from pydantic import BaseModel

from fraudscan.core.input_sanitizer import validate_limit
from fraudscan.services.history import get_scan_history

router = APIRouter()


class HistoryEntryResponse(BaseModel):
    id: str
    type: str
    truncated_content: str
    score: int
    level: str
    flag_count: int
    analysis: str
    created_at: str


class HistoryListResponse(BaseModel):
    entries: List[HistoryEntryResponse]
    total: int
    capacity: int


class HistoryClearResponse(BaseModel):
    removed: int


@router.get("/history", response_model=HistoryListResponse)
def list_history(limit: int = 10) -> HistoryListResponse:
    """Most recent analyses, newest first"""
    history = get_scan_history()
    limit = validate_limit(limit, max_limit=history.max_entries, default=history.max_entries)

    entries = [
        HistoryEntryResponse(
            id=entry.id,
            type=entry.type,
            truncated_content=entry.truncated_content,
            score=entry.result.score,
            level=entry.result.level.value,
            flag_count=len(entry.result.flags),
            analysis=entry.result.analysis,
            created_at=entry.created_at
        )
        for entry in history.list(limit)
    ]
    return HistoryListResponse(entries=entries, total=len(history), capacity=history.max_entries)


@router.delete("/history", response_model=HistoryClearResponse)
def clear_history() -> HistoryClearResponse:
    """Forget every remembered analysis"""
    return HistoryClearResponse(removed=get_scan_history().clear())
