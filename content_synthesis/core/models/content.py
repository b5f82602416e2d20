"""
Content data models and schemas.

This module defines the records that flow through one work item:
the generation request, the facts extracted from a folder or topic
name, the provider output and the persisted content record.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional, List, Dict, Any
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ContentKind(str, Enum):
    """Kinds of content the pipeline can synthesize."""
    LISTING = "listing"
    ARTICLE = "article"
    QA = "qa"
    CUSTOM = "custom"


class ListingIntent(str, Enum):
    """Whether a listing is offered for sale or for rent."""
    SALE = "sale"
    RENT = "rent"


class ContentStatus(str, Enum):
    """Publication status of a stored record."""
    DRAFT = "draft"
    PUBLISHED = "published"


class GenerationConstraints(BaseModel):
    """Output constraints passed to providers."""

    model_config = ConfigDict(frozen=True)

    target_word_count: int = Field(default=600, ge=50, le=10000, description="Target body length in words")
    locale: str = Field(default="tr-TR", description="Output locale")


class GenerationRequest(BaseModel):
    """
    One unit of generation work.

    Frozen: a request is immutable once it has been dispatched to the router.
    """

    model_config = ConfigDict(frozen=True, use_enum_values=True)

    kind: ContentKind = Field(..., description="Content kind")
    context: Dict[str, str] = Field(default_factory=dict, description="Topic and fact context")
    constraints: GenerationConstraints = Field(default_factory=GenerationConstraints)

    @field_validator('context', mode='before')
    @classmethod
    def stringify_context(cls, v):
        if v is None:
            return {}
        return {str(k): "" if val is None else str(val) for k, val in dict(v).items()}


class FactBundle(BaseModel):
    """
    Facts derived from a folder or topic name.

    Every field except ``intent`` is best-effort and may be missing.
    """

    model_config = ConfigDict(use_enum_values=True)

    price: Optional[Decimal] = Field(None, ge=0, description="Asking price")
    room_count: Optional[int] = Field(None, ge=0, description="Number of rooms")
    area_sqm: Optional[int] = Field(None, ge=0, description="Area in square meters")
    neighborhood: Optional[str] = Field(None, description="Neighborhood name")
    intent: ListingIntent = Field(default=ListingIntent.SALE, description="Sale or rent")

    def present_fields(self) -> Dict[str, Any]:
        """Fields that were actually extracted."""
        return {k: v for k, v in self.model_dump().items() if v is not None}


class GeneratedContent(BaseModel):
    """Output of a successful provider call or of the local generator."""

    title: str = Field(..., min_length=1)
    body: str = Field(..., min_length=1)
    excerpt: str = Field(..., min_length=1)
    meta_description: str = Field(..., min_length=1)
    keywords: List[str] = Field(default_factory=list)

    # Structured facts the model inferred (listing kind only)
    facts: Dict[str, Any] = Field(default_factory=dict)

    provider: Optional[str] = Field(None, description="Adapter that produced this content")

    @field_validator('keywords', mode='before')
    @classmethod
    def normalize_keywords(cls, v):
        if v is None:
            return []
        if isinstance(v, str):
            v = v.split(',')
        seen = []
        for keyword in v:
            keyword = str(keyword).strip()
            if keyword and keyword.lower() not in [k.lower() for k in seen]:
                seen.append(keyword)
        return seen


class MediaFile(BaseModel):
    """A single image in storage."""

    path: str
    name: str
    url: str


class MediaGroup(BaseModel):
    """Images that live in one logical folder."""

    folder_key: str
    files: List[MediaFile] = Field(default_factory=list)

    @property
    def file_names(self) -> List[str]:
        return [f.name for f in self.files]

    @property
    def urls(self) -> List[str]:
        return [f.url for f in self.files]


class ContentRecord(BaseModel):
    """A persisted content record."""

    model_config = ConfigDict(use_enum_values=True)

    id: str = Field(default_factory=lambda: str(uuid4()))
    title: str
    slug: str
    body: str
    excerpt: str = ""
    meta_description: str = ""
    keywords: List[str] = Field(default_factory=list)
    category: str = ContentKind.CUSTOM.value
    status: ContentStatus = ContentStatus.PUBLISHED
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    # Kind-specific columns (price, features, images for listings)
    attributes: Dict[str, Any] = Field(default_factory=dict)

    def to_row(self) -> Dict[str, Any]:
        """Flatten into a datastore row."""
        row = self.model_dump(mode='json', exclude={'attributes'})
        row.update(self.attributes)
        return row


class ContentItem(BaseModel):
    """An existing stored item picked up for quality improvement."""

    id: str
    title: str = "Untitled"
    body: str
    source: str
