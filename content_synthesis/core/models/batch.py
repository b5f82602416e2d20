"""
Batch processing models.

Per-item states and aggregate outcomes for the listing batch and the
improvement batch.
"""

from datetime import datetime
from enum import Enum
from typing import Optional, List, Dict, Any

from pydantic import BaseModel, ConfigDict, Field


class ItemState(str, Enum):
    """Lifecycle of one batch item."""
    PENDING = "pending"
    EXTRACTING = "extracting"
    GENERATING = "generating"
    RECONCILING = "reconciling"
    SLUGGING = "slugging"
    PERSISTING = "persisting"
    DONE = "done"
    FAILED = "failed"


class ItemOutcome(BaseModel):
    """What happened to one group in a listing batch."""

    model_config = ConfigDict(use_enum_values=True, validate_assignment=True)

    key: str
    state: ItemState = ItemState.PENDING
    failed_stage: Optional[ItemState] = None
    record_id: Optional[str] = None
    slug: Optional[str] = None
    error: Optional[str] = None


class BatchResult(BaseModel):
    """Aggregate counters returned by the batch trigger."""

    message: str = ""
    created: int = 0
    skipped: int = 0
    errors: int = 0
    total: int = 0

    items: List[ItemOutcome] = Field(default_factory=list)
    stopped_early: bool = False
    started_at: datetime = Field(default_factory=datetime.utcnow)
    completed_at: Optional[datetime] = None

    def summary(self) -> Dict[str, Any]:
        """The externally observable contract of a run."""
        return {
            "message": self.message,
            "created": self.created,
            "skipped": self.skipped,
            "errors": self.errors,
            "total": self.total,
        }


class ImprovementOutcome(str, Enum):
    """Result of one improvement item."""
    IMPROVED = "improved"
    SKIPPED = "skipped"
    ERROR = "error"


class ImprovementItemResult(BaseModel):
    """Per-item record of an improvement batch."""

    model_config = ConfigDict(use_enum_values=True, validate_assignment=True)

    id: str
    source: str
    title: str
    score_before: int = 0
    score_after: int = 0
    outcome: ImprovementOutcome
    reason: Optional[str] = None
    error: Optional[str] = None


class ImprovementBatchResult(BaseModel):
    """Aggregate counters of an improvement batch."""

    message: str = ""
    improved: int = 0
    skipped: int = 0
    errors: int = 0
    total: int = 0
    dry_run: bool = False
    stopped_early: bool = False

    items: List[ImprovementItemResult] = Field(default_factory=list)
