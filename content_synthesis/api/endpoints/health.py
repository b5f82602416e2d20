"""
Health check endpoints for the content synthesis service.

This module provides health check and monitoring endpoints
for the system.
"""

import logging
from datetime import datetime
from flask import Blueprint, jsonify, current_app

from ... import __version__
from ...core.models.errors import ErrorResponse
from ...utils.health import HealthChecker
from ..extensions import get_services


logger = logging.getLogger(__name__)

# Create blueprint
health_bp = Blueprint('health', __name__, url_prefix='/api/v1')

SERVICE_NAME = "content-synthesis"


def _checker() -> HealthChecker:
    return HealthChecker(current_app.config['PIPELINE_CONFIG'], get_services())


@health_bp.route('/health', methods=['GET'])
def health_check():
    """
    Basic health check endpoint.

    Returns:
        System health status
    """
    return jsonify({
        "status": "healthy",
        "timestamp": datetime.utcnow().isoformat(),
        "version": __version__,
        "service": SERVICE_NAME
    }), 200


@health_bp.route('/health/detailed', methods=['GET'])
def detailed_health_check():
    """
    Detailed health check endpoint.

    Returns:
        Detailed system health information
    """
    try:
        health_status = _checker().get_detailed_status()

        overall_status = "healthy"
        if health_status["celery"]["status"] != "healthy":
            overall_status = "degraded"
        if health_status["providers"]["status"] != "healthy":
            overall_status = "degraded"
        if health_status["supabase"]["status"] == "unhealthy":
            overall_status = "unhealthy"
        if health_status["redis"]["status"] != "healthy":
            overall_status = "unhealthy"

        return jsonify({
            "status": overall_status,
            "timestamp": datetime.utcnow().isoformat(),
            "version": __version__,
            "service": SERVICE_NAME,
            "components": health_status
        }), 200 if overall_status in ["healthy", "degraded"] else 503

    except Exception as e:
        logger.error(f"Detailed health check failed: {str(e)}")
        return jsonify(ErrorResponse(
            error="detailed_health_check_failed",
            message="Detailed health check failed",
            status=500
        ).model_dump(mode='json')), 500


@health_bp.route('/health/ready', methods=['GET'])
def readiness_check():
    """
    Readiness check endpoint.

    Ready means Redis and Supabase both answer.

    Returns:
        Readiness status
    """
    try:
        checker = _checker()
        redis_status = checker.check_redis()
        supabase_status = checker.check_supabase()

        if redis_status["status"] == "healthy" and supabase_status["status"] == "healthy":
            return jsonify({
                "status": "ready",
                "timestamp": datetime.utcnow().isoformat()
            }), 200

        return jsonify({
            "status": "not_ready",
            "timestamp": datetime.utcnow().isoformat(),
            "issues": {
                name: check for name, check in
                (("redis", redis_status), ("supabase", supabase_status))
                if check["status"] != "healthy"
            }
        }), 503

    except Exception as e:
        logger.error(f"Readiness check failed: {str(e)}")
        return jsonify(ErrorResponse(
            error="readiness_check_failed",
            message="Readiness check failed",
            status=500
        ).model_dump(mode='json')), 500


@health_bp.route('/health/live', methods=['GET'])
def liveness_check():
    """
    Liveness check endpoint.

    Returns:
        Liveness status
    """
    return jsonify({
        "status": "alive",
        "timestamp": datetime.utcnow().isoformat()
    }), 200
