"""
External service integrations for the content synthesis service.

This module contains clients for integrating with external services
like LLM providers and Supabase storage and tables.
"""
