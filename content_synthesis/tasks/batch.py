"""
Batch tasks for the content synthesis service.

This module runs the listing batch and the improvement batch on a
Celery worker. Each task still processes its items one at a time.
"""

import logging
import time
from typing import Dict, Any, List, Optional

import redis

from .celery_app import celery_app, config
from ..core.models.errors import ConfigurationError, TaskError
from ..pipeline.batch import create_listings_from_storage
from ..services import build_services
from ..utils.logging import TaskLogger

logger = logging.getLogger(__name__)
task_logger = TaskLogger()

STOP_KEY_PREFIX = 'content_synthesis:stop:'
STOP_KEY_TTL = 24 * 3600


class RedisStopFlag:
    """
    Stop flag shared between the API and a worker.

    ``is_set`` is checked before each batch item, so a stop request takes
    effect once the current item finishes.
    """

    def __init__(self, task_id: str, client=None):
        self.key = f"{STOP_KEY_PREFIX}{task_id}"
        self.client = client or redis.Redis.from_url(config.CELERY_BROKER_URL)

    def set(self) -> None:
        self.client.set(self.key, 1, ex=STOP_KEY_TTL)

    def is_set(self) -> bool:
        try:
            return bool(self.client.exists(self.key))
        except redis.RedisError as e:
            logger.warning(f"Could not read stop flag {self.key}: {e}")
            return False


def _services():
    services = build_services(config)
    if services.storage is None:
        raise ConfigurationError("Supabase is not configured", config_key="SUPABASE_URL")
    return services


@celery_app.task(bind=True, name='content_synthesis.tasks.batch.create_listings_from_images_task')
def create_listings_from_images_task(self) -> Dict[str, Any]:
    """
    Create listings from every image folder in storage.

    Returns:
        {message, created, skipped, errors, total}
    """
    task_id = self.request.id
    start_time = time.time()

    try:
        task_logger.log_task_start(task_id, 'create_listings_from_images_task')
        self.update_state(state='PROGRESS', meta={'stage': 'grouping', 'message': 'Listing storage...'})

        services = _services()
        result = create_listings_from_storage(
            services.grouper(),
            services.storage,
            services.batch_runner(),
            stop_event=RedisStopFlag(task_id)
        )

        summary = result.summary()
        summary['stopped_early'] = result.stopped_early
        task_logger.log_task_complete(task_id, 'create_listings_from_images_task',
                                      time.time() - start_time, counts=summary)
        return summary

    except Exception as e:
        task_logger.log_task_error(task_id, 'create_listings_from_images_task', str(e))
        raise TaskError(f"Listing batch failed: {e}", task_id=task_id)


@celery_app.task(bind=True, name='content_synthesis.tasks.batch.improve_content_batch_task')
def improve_content_batch_task(self, sources: Optional[List[str]] = None, limit: Optional[int] = None,
                               min_score: int = 70, dry_run: bool = False) -> Dict[str, Any]:
    """
    Improve stored content below ``min_score``.

    Returns:
        {message, improved, skipped, errors, total, dry_run, items}
    """
    task_id = self.request.id
    start_time = time.time()

    try:
        task_logger.log_task_start(task_id, 'improve_content_batch_task',
                                   sources=sources, limit=limit, min_score=min_score, dry_run=dry_run)
        self.update_state(state='PROGRESS', meta={'stage': 'improving', 'message': 'Improving content...'})

        services = _services()
        result = services.improvement_runner().run(
            sources=sources,
            limit=limit,
            min_score=min_score,
            dry_run=dry_run,
            stop_event=RedisStopFlag(task_id)
        )

        task_logger.log_task_complete(task_id, 'improve_content_batch_task', time.time() - start_time,
                                      improved=result.improved, errors=result.errors)
        return result.model_dump(mode='json')

    except Exception as e:
        task_logger.log_task_error(task_id, 'improve_content_batch_task', str(e))
        raise TaskError(f"Improvement batch failed: {e}", task_id=task_id)


def get_task_status(task_id: str) -> Dict[str, Any]:
    """
    Get task status.

    Args:
        task_id: Task ID

    Returns:
        {task_id, status, result?, error?, stage?}
    """
    task = celery_app.AsyncResult(task_id)
    status = {
        'task_id': task_id,
        'status': task.status,
    }

    if task.successful():
        status['result'] = task.result
    elif task.failed():
        status['error'] = str(task.result)
    elif isinstance(task.info, dict):
        status['stage'] = task.info.get('stage', '')
        status['message'] = task.info.get('message', '')

    return status


def cancel_task(task_id: str) -> bool:
    """
    Ask a batch to stop before its next item.

    A queued task is revoked; a running task sees the stop flag between
    items.
    """
    try:
        celery_app.control.revoke(task_id)
        RedisStopFlag(task_id).set()
        return True

    except Exception as e:
        logger.error(f"Error cancelling task {task_id}: {str(e)}")
        return False
