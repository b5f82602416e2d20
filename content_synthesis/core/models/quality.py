"""
Quality analysis and improvement models.

QualityReport is ephemeral: it is recomputed on demand and never treated
as the source of truth for stored content.
"""

from enum import Enum
from typing import Optional, List

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class IssueType(str, Enum):
    """Categories of quality issues."""
    GENERIC_PHRASE = "generic-phrase"
    REPETITION = "repetition"
    STRUCTURE = "structure"
    TONE = "tone"
    UNIQUENESS = "uniqueness"


class Severity(str, Enum):
    """Issue severity."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class ChangeType(str, Enum):
    """Kinds of edits an improvement can make."""
    REPLACED = "replaced"
    ADDED = "added"
    REMOVED = "removed"


class QualityIssue(BaseModel):
    """A single detected problem."""

    model_config = ConfigDict(use_enum_values=True)

    type: IssueType
    severity: Severity
    message: str
    suggestion: str = ""
    location: Optional[int] = Field(None, ge=0, description="Character offset")


class QualityReport(BaseModel):
    """Naturalness score for one piece of content."""

    model_config = ConfigDict(populate_by_name=True)

    human_like_score: int = Field(..., ge=0, le=100, alias="humanLikeScore")
    ai_probability: float = Field(..., ge=0.0, le=1.0, alias="aiProbability")
    issues: List[QualityIssue] = Field(default_factory=list)
    strengths: List[str] = Field(default_factory=list)
    suggestions: List[str] = Field(default_factory=list)

    source: str = Field(default="local", description="Adapter name or 'local'")

    @field_validator('human_like_score', mode='before')
    @classmethod
    def clamp_score(cls, v):
        return max(0, min(100, int(round(float(v)))))

    @field_validator('ai_probability', mode='before')
    @classmethod
    def clamp_probability(cls, v):
        return max(0.0, min(1.0, float(v)))


class ContentChange(BaseModel):
    """One edit applied by the improvement engine."""

    model_config = ConfigDict(use_enum_values=True)

    type: ChangeType
    original: Optional[str] = None
    improved: str
    reason: str


class ScoreDelta(BaseModel):
    """Before/after human-likeness score."""

    before: int = Field(..., ge=0, le=100)
    after: int = Field(..., ge=0, le=100)
    improvement: int = 0

    @model_validator(mode='after')
    def compute_improvement(self):
        self.improvement = self.after - self.before
        return self


class ImprovementResult(BaseModel):
    """A proposed rewrite with its score delta."""

    original: str
    improved: str
    changes: List[ContentChange] = Field(default_factory=list)
    score: ScoreDelta
    source: str = Field(default="local", description="Adapter name or 'local'")

    @property
    def should_persist(self) -> bool:
        """Only a strictly positive improvement may replace stored content."""
        return self.score.improvement > 0 and self.improved != self.original
