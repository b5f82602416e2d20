"""
Tests for task status, health probes and error rendering.
"""

from unittest.mock import patch


def test_health_is_public(client):
    response = client.get("/api/v1/health")

    body = response.get_json()
    assert response.status_code == 200
    assert body["status"] == "healthy"
    assert body["service"] == "content-synthesis"


def test_liveness(client):
    assert client.get("/api/v1/health/live").get_json()["status"] == "alive"


def test_readiness_requires_redis_and_supabase(client):
    with patch("content_synthesis.utils.health.HealthChecker.check_redis",
               return_value={"status": "unhealthy", "error": "refused"}):
        response = client.get("/api/v1/health/ready")

    body = response.get_json()
    assert response.status_code == 503
    assert body["status"] == "not_ready"
    assert set(body["issues"]) == {"redis", "supabase"}


def test_detailed_health_is_unhealthy_without_redis(client):
    with patch("content_synthesis.utils.health.HealthChecker.check_redis",
               return_value={"status": "unhealthy", "error": "refused"}), \
         patch("content_synthesis.utils.health.HealthChecker.check_celery",
               return_value={"status": "healthy", "workers": 1}):
        response = client.get("/api/v1/health/detailed")

    body = response.get_json()
    assert response.status_code == 503
    assert body["components"]["providers"] == {
        "providers": [], "terminal": "local", "status": "degraded"
    }


def test_task_status(client, auth_headers):
    with patch("content_synthesis.tasks.batch.get_task_status",
               return_value={"task_id": "t1", "status": "PROGRESS", "stage": "grouping"}):
        response = client.get("/api/v1/tasks/t1", headers=auth_headers)

    assert response.status_code == 200
    assert response.get_json()["stage"] == "grouping"


def test_cancel_task(client, auth_headers):
    with patch("content_synthesis.tasks.batch.cancel_task", return_value=True) as cancel:
        response = client.post("/api/v1/tasks/t1/cancel", headers=auth_headers)

    assert response.status_code == 202
    assert response.get_json() == {"task_id": "t1", "status": "stopping"}
    cancel.assert_called_once_with("t1")


def test_cancel_failure(client, auth_headers):
    with patch("content_synthesis.tasks.batch.cancel_task", return_value=False):
        response = client.post("/api/v1/tasks/t1/cancel", headers=auth_headers)

    assert response.status_code == 503


def test_unknown_route_is_json_404(client):
    response = client.get("/api/v1/nope")

    assert response.status_code == 404
    assert response.get_json()["error"] == "not_found"


def test_root_lists_endpoints(client):
    body = client.get("/").get_json()

    assert body["status"] == "running"
    assert body["endpoints"]["create_listings"] == "/api/v1/listings/create-from-images"
