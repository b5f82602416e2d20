"""
Content synthesis pipeline.

This module contains the fact extractor, slug resolver, grouping
orchestrator, quality analyzer, improvement engine and batch runners.
"""

from .facts import extract
from .slugs import resolve, ensure_unique
from .grouping import GroupingOrchestrator, GroupingResult
from .quality import QualityAnalyzer
from .improvement import ImprovementEngine
from .listing import ListingSynthesizer, reconcile
from .batch import BatchRunner, ImprovementBatchRunner, create_listings_from_storage

__all__ = [
    'extract',
    'resolve',
    'ensure_unique',
    'GroupingOrchestrator',
    'GroupingResult',
    'QualityAnalyzer',
    'ImprovementEngine',
    'ListingSynthesizer',
    'reconcile',
    'BatchRunner',
    'ImprovementBatchRunner',
    'create_listings_from_storage'
]
