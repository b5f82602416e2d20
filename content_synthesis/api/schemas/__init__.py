"""
API request and response schemas.
"""

from .content import (
    GenerateContentSchema,
    AnalyzeContentSchema,
    ImproveContentSchema,
    ImproveBatchSchema,
    TaskAcceptedSchema
)

__all__ = [
    'GenerateContentSchema',
    'AnalyzeContentSchema',
    'ImproveContentSchema',
    'ImproveBatchSchema',
    'TaskAcceptedSchema'
]
