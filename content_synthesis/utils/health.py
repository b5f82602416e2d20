"""
Health check utilities for the content synthesis service.

This module provides health check functionality for
monitoring system components.
"""

import logging
import time
from typing import Dict, Any

import psutil
import redis

from .config import Config


logger = logging.getLogger(__name__)

_PROCESS_START = time.time()


class HealthChecker:
    """Health checker for system components."""

    def __init__(self, config: Config, services=None):
        """
        Initialize the checker.

        Args:
            config: Application configuration
            services: PipelineServices, when already built
        """
        self.config = config
        self.services = services
        self._redis_client = None
        self._celery_app = None

    def check_redis(self) -> Dict[str, Any]:
        """Check Redis connectivity."""
        try:
            if not self._redis_client:
                self._redis_client = redis.Redis.from_url(
                    self.config.CELERY_BROKER_URL, socket_connect_timeout=2, socket_timeout=2
                )

            self._redis_client.ping()
            info = self._redis_client.info()

            return {
                "status": "healthy",
                "version": info.get("redis_version", "unknown"),
                "uptime": info.get("uptime_in_seconds", 0),
                "memory_used": info.get("used_memory_human", "unknown"),
                "connected_clients": info.get("connected_clients", 0)
            }

        except Exception as e:
            logger.error(f"Redis health check failed: {str(e)}")
            return {
                "status": "unhealthy",
                "error": str(e)
            }

    def check_celery(self) -> Dict[str, Any]:
        """Check Celery worker status."""
        try:
            if not self._celery_app:
                from ..tasks.celery_app import celery_app
                self._celery_app = celery_app

            stats = self._celery_app.control.inspect(timeout=1.0).stats()

            if not stats:
                return {
                    "status": "unhealthy",
                    "error": "No Celery workers found"
                }

            return {
                "status": "healthy",
                "workers": len(stats),
                "total_tasks": sum(sum((worker.get('total') or {}).values()) for worker in stats.values())
            }

        except Exception as e:
            logger.error(f"Celery health check failed: {str(e)}")
            return {
                "status": "unhealthy",
                "error": str(e)
            }

    def check_supabase(self) -> Dict[str, Any]:
        """Check storage bucket and listings table reachability."""
        if not self.config.SUPABASE_URL or not self.config.SUPABASE_KEY:
            return {"status": "not_configured"}

        if self.services is None or self.services.storage is None:
            return {"status": "unhealthy", "error": "Supabase services not initialized"}

        try:
            self.services.storage.ping()
            self.services.listing_store.ping()
            return {
                "status": "healthy",
                "bucket": self.config.STORAGE_BUCKET,
                "tables": sorted(self.services.content_stores)
            }

        except Exception as e:
            logger.error(f"Supabase health check failed: {str(e)}")
            return {
                "status": "unhealthy",
                "error": str(e)
            }

    def check_providers(self) -> Dict[str, Any]:
        """Configured provider chain; names only."""
        if self.services is None:
            return {"status": "unknown", "providers": []}

        description = self.services.router.describe()
        description["status"] = "healthy" if description["providers"] else "degraded"
        return description

    def get_system_metrics(self) -> Dict[str, Any]:
        """Get process and host metrics."""
        try:
            process = psutil.Process()
            memory = psutil.virtual_memory()

            return {
                "cpu_percent": psutil.cpu_percent(interval=None),
                "memory_percent": memory.percent,
                "process_memory_mb": round(process.memory_info().rss / (1024 * 1024), 1),
                "uptime_seconds": round(time.time() - _PROCESS_START, 1)
            }

        except Exception as e:
            logger.error(f"Failed to collect system metrics: {str(e)}")
            return {"error": str(e)}

    def get_detailed_status(self) -> Dict[str, Any]:
        """Get status of every component."""
        return {
            "redis": self.check_redis(),
            "celery": self.check_celery(),
            "supabase": self.check_supabase(),
            "providers": self.check_providers(),
            "system": self.get_system_metrics()
        }
