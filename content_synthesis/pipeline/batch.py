"""
Batch runners.

This module drives listing creation over image groups and quality
improvement over stored content. Items are processed one at a time with
a fixed pause between them; a failing item is counted and the batch moves
on. A stop event, checked before each item, ends a run early.
"""

import logging
import time
from datetime import datetime
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Union

from ..core.models.batch import (
    BatchResult, ItemOutcome, ItemState,
    ImprovementBatchResult, ImprovementItemResult, ImprovementOutcome
)
from ..core.models.content import ContentItem, MediaGroup
from ..core.models.errors import ValidationError
from ..utils.logging import BatchLogger
from . import facts as fact_extractor
from . import slugs
from .grouping import GroupingOrchestrator
from .improvement import ImprovementEngine
from .listing import ListingSynthesizer, reconcile
from .quality import QualityAnalyzer


logger = logging.getLogger(__name__)

DEFAULT_DELAY = 2.0


def _stop_requested(stop_event) -> bool:
    return stop_event is not None and stop_event.is_set()


class BatchRunner:
    """Creates one listing per image group."""

    def __init__(
        self,
        router,
        store,
        synthesizer: ListingSynthesizer = None,
        slug_max_length: int = slugs.DEFAULT_MAX_LENGTH,
        delay: float = DEFAULT_DELAY,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], int] = None
    ):
        """
        Initialize the runner.

        Args:
            router: ProviderRouter
            store: Content datastore with ``find_by_slug`` and ``insert``
            synthesizer: Listing request/record builder
            slug_max_length: Maximum slug length
            delay: Seconds to pause after each created listing
            sleep: Pause function
            clock: Slug suffix source
        """
        self.router = router
        self.store = store
        self.synthesizer = synthesizer or ListingSynthesizer()
        self.slug_max_length = slug_max_length
        self.delay = delay
        self.sleep = sleep
        self.clock = clock

    def _ensure_unique(self, slug: str) -> str:
        if self.clock is None:
            return slugs.ensure_unique(slug, self.store.find_by_slug)
        return slugs.ensure_unique(slug, self.store.find_by_slug, self.clock)

    def process_group(self, group: MediaGroup, outcome: ItemOutcome) -> None:
        """
        Run one group through every stage.

        ``outcome.state`` tracks the stage so a failure can be attributed.
        Nothing is written before the persisting stage.
        """
        outcome.state = ItemState.EXTRACTING
        facts = fact_extractor.extract(group.folder_key)

        outcome.state = ItemState.GENERATING
        request = self.synthesizer.build_request(facts, group)
        generated = self.router.generate(request)

        outcome.state = ItemState.RECONCILING
        merged = reconcile(facts, generated.facts)

        outcome.state = ItemState.SLUGGING
        slug = self._ensure_unique(slugs.resolve(generated.title, self.slug_max_length))

        outcome.state = ItemState.PERSISTING
        record = self.synthesizer.build_record(generated, merged, group, slug)
        outcome.record_id = self.store.insert(record.to_row())
        outcome.slug = slug

        outcome.state = ItemState.DONE

    def run_batch(
        self,
        groups: Union[Mapping[str, MediaGroup], Sequence[MediaGroup]],
        skipped: int = 0,
        stop_event=None
    ) -> BatchResult:
        """
        Create listings for a set of groups.

        Args:
            groups: Groups to process, in order
            skipped: Groups already filtered out before the run
            stop_event: Optional object with ``is_set()``; checked before each item

        Returns:
            BatchResult where ``total`` counts processed and skipped groups
        """
        group_list = list(groups.values()) if isinstance(groups, Mapping) else list(groups)
        batch_logger = BatchLogger("create-listings")

        result = BatchResult(skipped=skipped, total=len(group_list) + skipped)
        batch_logger.log_batch_start(len(group_list), skipped)

        for index, group in enumerate(group_list):
            if _stop_requested(stop_event):
                logger.info(f"Stop requested, {len(group_list) - index} groups left unprocessed")
                result.stopped_early = True
                break

            outcome = ItemOutcome(key=group.folder_key)
            result.items.append(outcome)

            try:
                self.process_group(group, outcome)
            except Exception as e:
                outcome.failed_stage = outcome.state
                outcome.state = ItemState.FAILED
                outcome.error = str(e)
                result.errors += 1
                batch_logger.log_item_error(group.folder_key, outcome.failed_stage, str(e))
                continue

            result.created += 1
            batch_logger.log_item_done(group.folder_key, outcome.slug)

            if self.delay and index < len(group_list) - 1:
                self.sleep(self.delay)

        result.completed_at = datetime.utcnow()
        result.message = (f"{result.created} listings created, {result.skipped} skipped, "
                          f"{result.errors} errors")
        batch_logger.log_batch_complete(result.summary())
        return result


def create_listings_from_storage(
    grouper: GroupingOrchestrator,
    storage,
    runner: BatchRunner,
    stop_event=None
) -> BatchResult:
    """
    List storage, group images and create a listing per group.

    Raises:
        StorageError: If the storage listing fails before any item runs
    """
    grouping = grouper.list_and_group(storage)
    for key, reason in grouping.discarded.items():
        logger.debug(f"Skipped group '{key}': {reason}")

    if not grouping.groups:
        result = BatchResult(skipped=grouping.skipped, total=grouping.skipped,
                             completed_at=datetime.utcnow())
        result.message = "No image groups found to create listings from"
        return result

    return runner.run_batch(grouping.groups, skipped=grouping.skipped, stop_event=stop_event)


class ImprovementBatchRunner:
    """Analyzes stored content and persists rewrites that score higher."""

    def __init__(
        self,
        analyzer: QualityAnalyzer,
        engine: ImprovementEngine,
        sources: Dict[str, Any],
        delay: float = DEFAULT_DELAY,
        sleep: Callable[[float], None] = time.sleep
    ):
        """
        Initialize the runner.

        Args:
            analyzer: Quality analyzer
            engine: Improvement engine
            sources: Source name to store; each store exposes ``fetch_improvable``,
                ``update`` and ``body_field``
            delay: Seconds to pause between items
            sleep: Pause function
        """
        self.analyzer = analyzer
        self.engine = engine
        self.sources = dict(sources)
        self.delay = delay
        self.sleep = sleep

    def collect(self, sources: Optional[Sequence[str]] = None, limit: Optional[int] = None) -> List[ContentItem]:
        """
        Fetch candidate items.

        Raises:
            ValidationError: If a source name is unknown
            DatastoreError: If a fetch fails
        """
        names = list(sources) if sources else list(self.sources)
        unknown = [name for name in names if name not in self.sources]
        if unknown:
            raise ValidationError(f"Unknown content source(s): {', '.join(unknown)}",
                                  field="sources", value=unknown)

        items: List[ContentItem] = []
        for name in names:
            fetched = self.sources[name].fetch_improvable(name, limit)
            logger.info(f"Fetched {len(fetched)} improvable items from {name}")
            items.extend(fetched)
        return items

    def improve_item(self, item: ContentItem, min_score: int, dry_run: bool) -> ImprovementItemResult:
        report = self.analyzer.analyze(item.body, item.title)
        entry = ImprovementItemResult(
            id=item.id,
            source=item.source,
            title=item.title,
            score_before=report.human_like_score,
            score_after=report.human_like_score,
            outcome=ImprovementOutcome.SKIPPED
        )

        if report.human_like_score >= min_score:
            entry.reason = f"score {report.human_like_score} already at or above {min_score}"
            return entry

        result = self.engine.improve(item.body, item.title, report)
        entry.score_before = result.score.before
        entry.score_after = result.score.after

        if not result.should_persist:
            entry.reason = f"no improvement ({result.score.improvement:+d})"
            return entry

        entry.outcome = ImprovementOutcome.IMPROVED
        if dry_run:
            entry.reason = "dry run, not persisted"
            return entry

        store = self.sources[item.source]
        store.update(item.id, {
            store.body_field: result.improved,
            "updated_at": datetime.utcnow().isoformat(),
        })
        return entry

    def run(
        self,
        sources: Optional[Sequence[str]] = None,
        limit: Optional[int] = None,
        min_score: int = 70,
        dry_run: bool = False,
        stop_event=None
    ) -> ImprovementBatchResult:
        """
        Improve every candidate below ``min_score``.

        Args:
            sources: Source names; all configured sources when empty
            limit: Maximum items fetched per source
            min_score: Items scoring at or above this are skipped
            dry_run: Analyze and rewrite without persisting
            stop_event: Optional object with ``is_set()``

        Returns:
            ImprovementBatchResult
        """
        items = self.collect(sources, limit)
        batch_logger = BatchLogger("improve-content")

        result = ImprovementBatchResult(total=len(items), dry_run=dry_run)
        batch_logger.log_batch_start(len(items))

        for index, item in enumerate(items):
            if _stop_requested(stop_event):
                result.stopped_early = True
                break

            key = f"{item.source}:{item.id}"
            try:
                entry = self.improve_item(item, min_score, dry_run)
            except Exception as e:
                result.errors += 1
                result.items.append(ImprovementItemResult(
                    id=item.id,
                    source=item.source,
                    title=item.title,
                    outcome=ImprovementOutcome.ERROR,
                    error=str(e)
                ))
                batch_logger.log_item_error(key, "improving", str(e))
            else:
                result.items.append(entry)
                if entry.outcome == ImprovementOutcome.IMPROVED.value:
                    result.improved += 1
                    batch_logger.log_item_done(key, f"{entry.score_before} -> {entry.score_after}")
                else:
                    result.skipped += 1
                    batch_logger.log_item_skipped(key, entry.reason)

            if self.delay and index < len(items) - 1:
                self.sleep(self.delay)

        result.message = (f"{result.improved} improved, {result.skipped} skipped, "
                          f"{result.errors} errors" + (" (dry run)" if dry_run else ""))
        batch_logger.log_batch_complete(result.model_dump(exclude={"items"}))
        return result
