"""
HTTP API for the content synthesis service.
"""

from .app import create_app, run_app

__all__ = ['create_app', 'run_app']
