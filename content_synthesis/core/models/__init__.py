"""
Data models and schemas for the content synthesis pipeline.

This module contains all the data models, validation schemas, and
type definitions used throughout the system.
"""

from .content import (
    ContentKind,
    ListingIntent,
    ContentStatus,
    GenerationConstraints,
    GenerationRequest,
    FactBundle,
    GeneratedContent,
    MediaFile,
    MediaGroup,
    ContentRecord,
    ContentItem
)

from .quality import (
    IssueType,
    Severity,
    ChangeType,
    QualityIssue,
    QualityReport,
    ContentChange,
    ScoreDelta,
    ImprovementResult
)

from .batch import (
    ItemState,
    ItemOutcome,
    BatchResult,
    ImprovementOutcome,
    ImprovementItemResult,
    ImprovementBatchResult
)

from .llm import (
    LLMProvider,
    ResponseShape,
    ProviderSettings,
    ProviderRequest,
    LLMResponse
)

from .errors import (
    ContentSynthesisError,
    ValidationError,
    ProviderError,
    InvalidResponseError,
    GenerationError,
    StorageError,
    DatastoreError,
    ConfigurationError
)

__all__ = [
    # Content models
    'ContentKind',
    'ListingIntent',
    'ContentStatus',
    'GenerationConstraints',
    'GenerationRequest',
    'FactBundle',
    'GeneratedContent',
    'MediaFile',
    'MediaGroup',
    'ContentRecord',
    'ContentItem',

    # Quality models
    'IssueType',
    'Severity',
    'ChangeType',
    'QualityIssue',
    'QualityReport',
    'ContentChange',
    'ScoreDelta',
    'ImprovementResult',

    # Batch models
    'ItemState',
    'ItemOutcome',
    'BatchResult',
    'ImprovementOutcome',
    'ImprovementItemResult',
    'ImprovementBatchResult',

    # LLM models
    'LLMProvider',
    'ResponseShape',
    'ProviderSettings',
    'ProviderRequest',
    'LLMResponse',

    # Error models
    'ContentSynthesisError',
    'ValidationError',
    'ProviderError',
    'InvalidResponseError',
    'GenerationError',
    'StorageError',
    'DatastoreError',
    'ConfigurationError'
]
