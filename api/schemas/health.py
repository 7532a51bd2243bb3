# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-12
# Description: health.py
# -----------------------------------------------------------------------------
from typing import Any, Dict

from pydantic import BaseModel, Field

class HealthResponse(BaseModel):
    status: str
    message: str

class HealthSummary(BaseModel):
    total: int
    passed: int
    failed: int

class DeepHealthResponse(BaseModel):
    status: str
    results: Dict[str, bool]
    summary: HealthSummary
    details: Dict[str, Any] = Field(default_factory=dict)
