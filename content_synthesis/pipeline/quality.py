"""
Quality analyzer.

Scores content through the provider router when providers are enabled,
and with local word and sentence statistics otherwise.
"""

import logging

from ..core.models.quality import QualityReport
from ..heuristics import analyze_locally, LOCAL_SOURCE


logger = logging.getLogger(__name__)


class QualityAnalyzer:
    """Human-likeness scoring with a guaranteed local answer."""

    def __init__(self, router=None, use_providers: bool = True):
        """
        Initialize the analyzer.

        Args:
            router: ProviderRouter, or None for local-only analysis
            use_providers: Set False to force the local path
        """
        self.router = router
        self.use_providers = use_providers and router is not None

    def analyze(self, content: str, title: str = "") -> QualityReport:
        """
        Score content.

        Args:
            content: Plain text or HTML
            title: Content title

        Returns:
            QualityReport
        """
        if self.use_providers:
            report = self.router.analyze(content, title)
        else:
            report = analyze_locally(content, title)

        logger.debug(f"Analyzed '{title[:50]}': score {report.human_like_score} via {report.source}")
        return report

    def analyze_locally(self, content: str, title: str = "") -> QualityReport:
        return analyze_locally(content, title)

    def rescore(self, content: str, title: str, like: QualityReport) -> QualityReport:
        """Score content through the same path that produced ``like``."""
        if like.source == LOCAL_SOURCE:
            return analyze_locally(content, title)
        return self.analyze(content, title)
