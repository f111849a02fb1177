"""
Matcher Schemas — Serialized Request and Failure Report

Pydantic models for the diagnostic/audit projection of a pattern
request and for the report an assertion framework renders.
"""

from __future__ import annotations

from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


# ============================================================
# REQUEST
# ============================================================

class HavePatternsRequest(BaseModel):
    """The requested pattern list, as it appears in audit logs."""
    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={"examples": [
            {"have-patterns": ["Listening on", "!/panic|fatal/"]},
        ]},
    )

    patterns: list[str] = Field(
        ..., alias="have-patterns",
        description="Raw pattern strings: substrings or /regex/, '!' negates.",
    )


# ============================================================
# REPORT
# ============================================================

class MatcherResult(BaseModel):
    """What a failed (or unexpectedly passing) assertion reports."""
    actual: str
    message: str
    expected: list[str]
    missing_elements: Optional[list[str]] = None
