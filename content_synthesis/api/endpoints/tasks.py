"""
Task API endpoints.

This module reports the status of batches queued on Celery and lets
callers stop them between items.
"""

import logging
from flask import Blueprint, jsonify

from ...core.models.errors import ErrorResponse


logger = logging.getLogger(__name__)

# Create blueprint
tasks_bp = Blueprint('tasks', __name__, url_prefix='/api/v1')


@tasks_bp.route('/tasks/<task_id>', methods=['GET'])
def task_status(task_id: str):
    """
    Get status of a queued batch.

    Returns:
        {task_id, status, result?, error?}
    """
    from ...tasks.batch import get_task_status

    return jsonify(get_task_status(task_id)), 200


@tasks_bp.route('/tasks/<task_id>/cancel', methods=['POST'])
def cancel_batch(task_id: str):
    """
    Stop a batch before its next item.
    """
    from ...tasks.batch import cancel_task

    if not cancel_task(task_id):
        return jsonify(ErrorResponse(
            error="cancel_failed",
            message=f"Could not cancel task {task_id}",
            status=503,
            task_id=task_id
        ).model_dump(mode='json')), 503

    logger.info(f"Stop requested for task {task_id}")
    return jsonify({"task_id": task_id, "status": "stopping"}), 202
