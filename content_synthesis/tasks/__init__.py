"""
Celery tasks for asynchronous batch runs.
"""

from .celery_app import celery_app

__all__ = ['celery_app']
