"""
Core domain layer for the content synthesis pipeline.
"""
