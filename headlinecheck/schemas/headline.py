"""
API Schemas — Request and Response Models

Pydantic models for the HeadlineCheck API.
"""

from __future__ import annotations

from typing import Any, Optional, Union
from pydantic import BaseModel, Field


# ============================================================
# DETECT
# ============================================================

class DetectRequest(BaseModel):
    """POST /detect request body."""
    headline: str = Field(..., max_length=2_000,
                          description="The headline to classify. Empty text is allowed.")

    model_config = {"json_schema_extra": {"examples": [
        {"headline": "Scientists confirm teleportation technology is ready for public use"},
    ]}}


class DetectBatchRequest(BaseModel):
    """POST /detect/batch request body."""
    items: list[DetectRequest] = Field(..., min_length=1, max_length=100)


class ScoreBreakdown(BaseModel):
    fake_score: int
    trust_score: int
    final_score: int
    reasons: list[str]


class DetectResponse(BaseModel):
    """POST /detect response body."""
    headline: str
    label: str
    confidence: int
    explanation: str
    engine_version: str
    score_breakdown: Optional[ScoreBreakdown] = None


class DetectBatchResponse(BaseModel):
    """POST /detect/batch response body."""
    results: list[DetectResponse]
    total: int


# ============================================================
# HEADLINE LOG
# ============================================================

class LogRequest(BaseModel):
    """POST /log-headline request body."""
    headline: Optional[Any] = None  # Checked by the route so non-strings get a 400
    label: Optional[Any] = None
    confidence: Optional[float] = None


class LogResponse(BaseModel):
    ok: bool


class LogEntry(BaseModel):
    timestamp: str
    headline: str
    label: str
    confidence: Union[int, float]


class LogEntriesResponse(BaseModel):
    entries: list[LogEntry]
    total_count: int


# ============================================================
# META
# ============================================================

class RuleResponse(BaseModel):
    id: str
    name: str
    weight: int
    target: str
    phrases: list[str]
    explanation: str


class RulesResponse(BaseModel):
    engine_version: str
    total_rules: int
    rules: list[RuleResponse]


class HealthResponse(BaseModel):
    status: str
    version: str
    engine_version: str
    log_entries: int
