"""
Content API schemas.

This module contains Pydantic schemas for request bodies of the content
and listing endpoints.
"""

from typing import Optional, List, Dict, Any

from pydantic import BaseModel, Field, field_validator

from ...core.models.content import ContentKind


class GenerateContentSchema(BaseModel):
    """Schema for single content generation."""

    kind: ContentKind = Field(...)
    context: Dict[str, Any] = Field(default_factory=dict)
    target_word_count: Optional[int] = Field(None, ge=50, le=10000)
    locale: Optional[str] = Field(None, min_length=2, max_length=10)
    persist: bool = Field(False)


class AnalyzeContentSchema(BaseModel):
    """Schema for quality analysis."""

    content: str = Field(..., min_length=1)
    title: str = Field("", max_length=500)


class ImproveContentSchema(BaseModel):
    """Schema for a one-off improvement."""

    content: str = Field(..., min_length=1)
    title: str = Field("", max_length=500)


class ImproveBatchSchema(BaseModel):
    """Schema for batch improvement."""

    sources: Optional[List[str]] = Field(None)
    limit: Optional[int] = Field(None, ge=1, le=10000)
    min_score: Optional[int] = Field(None, ge=0, le=100)
    dry_run: bool = Field(False)

    @field_validator('sources', mode='before')
    @classmethod
    def split_sources(cls, v):
        if isinstance(v, str):
            return [s.strip() for s in v.split(',') if s.strip()]
        return v


class TaskAcceptedSchema(BaseModel):
    """Response for an enqueued batch."""

    task_id: str
    status: str = "queued"
    status_url: str
