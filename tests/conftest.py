"""
Shared fixtures. No test touches the network: providers, storage and
tables are replaced with in-memory fakes.
"""

import pytest

from content_synthesis.api.app import create_app
from content_synthesis.integrations.llm.router import ProviderRouter
from content_synthesis.pipeline.improvement import ImprovementEngine
from content_synthesis.pipeline.quality import QualityAnalyzer
from content_synthesis.services import PipelineServices
from content_synthesis.utils.config import TestingConfig

from tests.fakes import FakeStorage, InMemoryStore, folder, image


POOR_CONTENT = (
    "Bu makalede Karasu anlatılıyor. Sonuç olarak deniz güzel. "
    "Kısacası burada yaşamak keyifli. Bu yazıda ayrıca plajlar var."
)

GOOD_CONTENT = (
    "Karasu sahili yaz aylarında oldukça hareketli olur ve ziyaretçiler "
    "plajlarda uzun saatler geçirir."
)


@pytest.fixture
def config():
    return TestingConfig()


@pytest.fixture
def local_router():
    return ProviderRouter([])


@pytest.fixture
def no_sleep():
    calls = []
    return calls, calls.append


@pytest.fixture
def storage_tree():
    return {
        "": [folder("listings"), folder("gorseller"), image("loose.jpg")],
        "listings": [folder("yali-mahallesi-2+1-850000"), folder("tek")],
        "listings/yali-mahallesi-2+1-850000": [image("a.jpg"), image("b.png"), image("notes.txt")],
        "listings/tek": [image("one.jpg")],
        "gorseller": [folder("yali-mahallesi-2+1-850000"), folder("aziziye-kiralik-3+1")],
        "gorseller/yali-mahallesi-2+1-850000": [image("c.webp")],
        "gorseller/aziziye-kiralik-3+1": [image("x.jpg"), image("y.jpeg")],
    }


@pytest.fixture
def storage(storage_tree):
    return FakeStorage(storage_tree)


@pytest.fixture
def content_stores():
    return {
        "articles": InMemoryStore(body_field="content", rows=[
            {"id": "a1", "title": "Karasu Rehberi", "content": POOR_CONTENT},
            {"id": "a2", "title": "Sahil", "content": GOOD_CONTENT},
        ]),
        "news": InMemoryStore(body_field="emlak_analysis"),
        "listings": InMemoryStore(body_field="body"),
    }


@pytest.fixture
def services(config, local_router, storage, content_stores):
    analyzer = QualityAnalyzer(local_router)
    return PipelineServices(
        config=config,
        router=local_router,
        analyzer=analyzer,
        improver=ImprovementEngine(analyzer, local_router),
        storage=storage,
        listing_store=content_stores["listings"],
        content_stores=content_stores
    )


@pytest.fixture
def app(services):
    return create_app(services=services)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def auth_headers():
    return {"X-API-Key": "test-api-key"}
