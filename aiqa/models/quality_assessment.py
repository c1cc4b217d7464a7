"""Quality assessment contract supplied by the question-generation pipeline."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from aiqa.models.metrics import AlertSeverity


class QualityFlag(BaseModel):
    """Single quality concern raised against a generated question."""

    severity: AlertSeverity = Field(..., description="LOW/MEDIUM/HIGH/CRITICAL")
    type: Optional[str] = Field(default=None, description="Flag category, e.g. math_error")
    message: Optional[str] = Field(default=None, description="Human-readable detail")

    model_config = ConfigDict(extra="allow")


class QualityAssessment(BaseModel):
    """Overall quality score plus any flags for one generated question."""

    overall_quality: float = Field(..., ge=0.0, le=1.0)
    flags: List[QualityFlag] = Field(default_factory=list)

    model_config = ConfigDict(extra="allow")

    def has_severity(self, severity: AlertSeverity) -> bool:
        return any(flag.severity == severity for flag in self.flags)
