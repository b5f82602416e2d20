"""
Tests for the listing batch trigger.
"""

from types import SimpleNamespace
from unittest.mock import patch

from content_synthesis.core.models.errors import StorageError
from tests.fakes import FakeStorage


URL = "/api/v1/listings/create-from-images"


def test_requires_api_key(client):
    response = client.post(URL)

    assert response.status_code == 401
    assert response.get_json()["error"] == "authentication_required"


def test_rejects_unknown_api_key(client):
    response = client.post(URL, headers={"X-API-Key": "wrong"})

    assert response.status_code == 401
    assert response.get_json()["error"] == "invalid_api_key"


def test_runs_batch_and_returns_counts(client, auth_headers, content_stores):
    response = client.post(URL, headers=auth_headers)

    assert response.status_code == 200
    assert response.get_json() == {
        "message": "2 listings created, 2 skipped, 0 errors",
        "created": 2,
        "skipped": 2,
        "errors": 0,
        "total": 4,
    }
    assert len(content_stores["listings"].rows) == 2
    assert response.headers["X-Request-ID"].startswith("req_")


def test_storage_failure_is_service_unavailable(client, auth_headers, services):
    services.storage = FakeStorage({}, error=StorageError("bucket unreachable", bucket="media"))

    response = client.post(URL, headers=auth_headers)

    body = response.get_json()
    assert response.status_code == 503
    assert body["error"] == "service_unavailable"
    assert body["details"]["bucket"] == "media"


def test_missing_storage_is_configuration_error(client, auth_headers, services):
    services.storage = None

    response = client.post(URL, headers=auth_headers)

    assert response.status_code == 500
    assert response.get_json()["error"] == "configuration_error"


def test_async_mode_queues_task(client, auth_headers):
    with patch("content_synthesis.tasks.batch.create_listings_from_images_task.delay") as delay:
        delay.return_value = SimpleNamespace(id="task-123")
        response = client.post(URL + "?async=true", headers=auth_headers)

    body = response.get_json()
    assert response.status_code == 202
    assert body == {
        "task_id": "task-123",
        "status": "queued",
        "status_url": "/api/v1/tasks/task-123",
    }
