"""
Service container.

Wires configuration into the router, analyzers, runners and Supabase
collaborators. The HTTP app and the Celery tasks both build their
pipeline through here.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from .integrations.llm.router import ProviderRouter, build_router
from .integrations.supabase import get_supabase_client, SupabaseStorage, SupabaseContentStore
from .pipeline.batch import BatchRunner, ImprovementBatchRunner
from .pipeline.grouping import GroupingOrchestrator
from .pipeline.improvement import ImprovementEngine
from .pipeline.listing import ListingSynthesizer
from .pipeline.quality import QualityAnalyzer
from .utils.config import Config


logger = logging.getLogger(__name__)


@dataclass
class PipelineServices:
    """Everything one batch or request needs."""
    config: Config
    router: ProviderRouter
    analyzer: QualityAnalyzer
    improver: ImprovementEngine
    storage: Any = None
    listing_store: Any = None
    content_stores: Dict[str, Any] = field(default_factory=dict)

    def grouper(self) -> GroupingOrchestrator:
        return GroupingOrchestrator(
            roots=self.config.STORAGE_ROOTS,
            prefix_aliases=self.config.STORAGE_PREFIX_ALIASES,
            min_files=self.config.MIN_GROUP_FILES,
            page_size=self.config.STORAGE_PAGE_SIZE
        )

    def synthesizer(self) -> ListingSynthesizer:
        return ListingSynthesizer(
            city=self.config.DEFAULT_CITY,
            locale=self.config.DEFAULT_LOCALE,
            target_word_count=self.config.DEFAULT_WORD_COUNT
        )

    def batch_runner(self, **overrides) -> BatchRunner:
        options = dict(
            synthesizer=self.synthesizer(),
            slug_max_length=self.config.SLUG_MAX_LENGTH,
            delay=self.config.BATCH_ITEM_DELAY
        )
        options.update(overrides)
        return BatchRunner(self.router, self.listing_store, **options)

    def improvement_runner(self, **overrides) -> ImprovementBatchRunner:
        options = dict(delay=self.config.BATCH_ITEM_DELAY)
        options.update(overrides)
        return ImprovementBatchRunner(self.analyzer, self.improver, self.content_stores, **options)


def build_content_stores(client, config: Config) -> Dict[str, SupabaseContentStore]:
    """Improvable content sources by name."""
    return {
        "articles": SupabaseContentStore(client, config.ARTICLES_TABLE, body_field="content"),
        "news": SupabaseContentStore(client, config.NEWS_TABLE, body_field="emlak_analysis"),
        "listings": SupabaseContentStore(client, config.LISTINGS_TABLE, body_field="body"),
    }


def build_services(config: Config, client: Optional[Any] = None) -> PipelineServices:
    """
    Build the service container from configuration.

    Args:
        config: Application configuration
        client: Supabase client; created from config when omitted and
            credentials are configured

    Returns:
        PipelineServices; storage and stores are None without Supabase
    """
    router = build_router(config)
    analyzer = QualityAnalyzer(router)
    improver = ImprovementEngine(analyzer, router)

    if client is None and config.SUPABASE_URL and config.SUPABASE_KEY:
        client = get_supabase_client(config.SUPABASE_URL, config.SUPABASE_KEY)

    services = PipelineServices(config=config, router=router, analyzer=analyzer, improver=improver)

    if client is not None:
        services.storage = SupabaseStorage(client, config.STORAGE_BUCKET)
        services.content_stores = build_content_stores(client, config)
        services.listing_store = services.content_stores["listings"]
    else:
        logger.warning("Supabase is not configured; storage and datastore operations are unavailable")

    return services
