"""
API endpoints for the content synthesis service.

This module contains all the REST API endpoints for the system.
"""

from .listings import listings_bp
from .content import content_bp
from .tasks import tasks_bp
from .health import health_bp

__all__ = [
    'listings_bp',
    'content_bp',
    'tasks_bp',
    'health_bp'
]
