"""
Listing API endpoints.

This module exposes the batch trigger that creates listings from image
folders in storage.
"""

import logging
from flask import Blueprint, jsonify, url_for

from ...core.models.errors import ConfigurationError
from ...pipeline.batch import create_listings_from_storage
from ..extensions import limiter, batch_limit, get_services, wants_async
from ..schemas import TaskAcceptedSchema


logger = logging.getLogger(__name__)

# Create blueprint
listings_bp = Blueprint('listings', __name__, url_prefix='/api/v1')


@listings_bp.route('/listings/create-from-images', methods=['POST'])
@limiter.limit(batch_limit)
def create_from_images():
    """
    Create one listing per image folder in storage.

    Query parameters:
        async: ``true`` to run the batch on a Celery worker

    Returns:
        200 with {message, created, skipped, errors, total}, or 202 with a
        task id. Item failures are reported in ``errors``, never as a
        non-2xx status.
    """
    if wants_async():
        from ...tasks.batch import create_listings_from_images_task

        task = create_listings_from_images_task.delay()
        logger.info(f"Queued listing batch as task {task.id}")
        return jsonify(TaskAcceptedSchema(
            task_id=task.id,
            status_url=url_for('tasks.task_status', task_id=task.id)
        ).model_dump()), 202

    services = get_services()
    if services.storage is None or services.listing_store is None:
        raise ConfigurationError("Supabase storage is not configured", config_key="SUPABASE_URL")

    result = create_listings_from_storage(
        services.grouper(),
        services.storage,
        services.batch_runner()
    )
    return jsonify(result.summary()), 200
