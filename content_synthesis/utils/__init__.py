"""
Utility helpers: configuration, logging, text processing and health checks.
"""
