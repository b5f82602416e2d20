"""
Improvement engine.

Rewrites content to raise its human-likeness score. The provider path
sends the analysis as rewrite instructions; the local path deletes or
replaces known filler phrases. Either way the result carries a
before/after score, and callers persist it only when the score rose.
"""

import logging
from typing import List, Optional

from ..core.models.quality import (
    QualityReport, ImprovementResult, ContentChange, ChangeType, ScoreDelta
)
from ..heuristics import apply_substitutions, analyze_locally, LOCAL_SOURCE
from .quality import QualityAnalyzer


logger = logging.getLogger(__name__)


class ImprovementEngine:
    """Produces scored rewrites."""

    def __init__(self, analyzer: QualityAnalyzer, router=None):
        """
        Initialize the engine.

        Args:
            analyzer: Quality analyzer used for before/after scores
            router: ProviderRouter for rewrites, or None for local only
        """
        self.analyzer = analyzer
        self.router = router

    def _provider_rewrite(self, content: str, title: str, analysis: QualityReport):
        if self.router is None or not self.router.adapters:
            return None
        return self.router.rewrite(content, title, analysis)

    @staticmethod
    def _rewrite_changes(analysis: QualityReport, source: str) -> List[ContentChange]:
        changes = [ContentChange(
            type=ChangeType.REPLACED,
            original=None,
            improved=f"{source} tarafından yeniden yazıldı",
            reason="Kalite analizine göre tam yeniden yazım"
        )]
        for issue in analysis.issues:
            changes.append(ContentChange(
                type=ChangeType.REPLACED,
                original=issue.message,
                improved=issue.suggestion or "Yeniden yazımda giderildi",
                reason=f"{issue.type} ({issue.severity})"
            ))
        return changes

    def improve(self, content: str, title: str = "",
                analysis: Optional[QualityReport] = None) -> ImprovementResult:
        """
        Rewrite content and score the result.

        Args:
            content: Original text or HTML
            title: Content title
            analysis: Existing analysis of ``content``; computed if missing

        Returns:
            ImprovementResult; ``score.improvement`` may be zero or negative
        """
        if analysis is None:
            analysis = self.analyzer.analyze(content, title)

        rewritten = self._provider_rewrite(content, title, analysis)
        if rewritten is not None:
            improved, source = rewritten
            changes = self._rewrite_changes(analysis, source)
        else:
            improved, changes = apply_substitutions(content)
            source = LOCAL_SOURCE

        before = analysis
        if improved == content:
            after = before
        else:
            after = self.analyzer.rescore(improved, title, before)
            if after.source != before.source:
                # Scores from different analyzers are not comparable
                before = analyze_locally(content, title)
                after = analyze_locally(improved, title)

        result = ImprovementResult(
            original=content,
            improved=improved,
            changes=changes,
            score=ScoreDelta(before=before.human_like_score, after=after.human_like_score),
            source=source
        )

        logger.info(f"Improvement for '{title[:50]}' via {source}: "
                    f"{result.score.before} -> {result.score.after} ({len(changes)} changes)")
        return result
