"""
Configuration management for the content synthesis service.

This module provides configuration loading and management
for the application.
"""

import os
from typing import Optional, List, Tuple
from dataclasses import dataclass, field
from dotenv import load_dotenv

# Load environment variables
load_dotenv()


def _split_env(name: str, default: str) -> List[str]:
    raw = os.environ.get(name, default)
    return [item.strip() for item in raw.split(',') if item.strip()]


@dataclass
class Config:
    """Base configuration class."""

    # Flask settings
    SECRET_KEY: str = os.environ.get('SECRET_KEY', 'dev-secret-key-change-in-production')
    DEBUG: bool = os.environ.get('DEBUG', 'false').lower() == 'true'
    TESTING: bool = os.environ.get('TESTING', 'false').lower() == 'true'

    # API settings
    API_TITLE: str = 'Content Synthesis Service'
    API_VERSION: str = '1.0.0'

    # Authentication
    API_KEY_HEADER: str = 'X-API-Key'
    API_KEYS: frozenset = field(default_factory=lambda: frozenset(_split_env('API_KEYS', '')))

    # Rate limiting
    RATELIMIT_STORAGE_URI: str = os.environ.get('RATELIMIT_STORAGE_URI', 'memory://')
    RATELIMIT_ENABLED: bool = os.environ.get('RATELIMIT_ENABLED', 'true').lower() == 'true'
    RATELIMIT_BATCH: str = os.environ.get('RATELIMIT_BATCH', '5 per minute')

    # Logging
    LOG_LEVEL: str = os.environ.get('LOG_LEVEL', 'INFO')
    LOG_FILE: str = os.environ.get('LOG_FILE', 'logs/app.log')
    LOG_MAX_BYTES: int = int(os.environ.get('LOG_MAX_BYTES', 10485760))  # 10MB
    LOG_BACKUP_COUNT: int = int(os.environ.get('LOG_BACKUP_COUNT', 5))
    LOG_REQUESTS: bool = os.environ.get('LOG_REQUESTS', 'true').lower() == 'true'

    # Supabase
    SUPABASE_URL: Optional[str] = os.environ.get('SUPABASE_URL')
    SUPABASE_KEY: Optional[str] = os.environ.get('SUPABASE_KEY') or os.environ.get('SUPABASE_SERVICE_ROLE_KEY')

    # Storage listing
    STORAGE_BUCKET: str = os.environ.get('STORAGE_BUCKET', 'media')
    STORAGE_ROOTS: List[str] = field(default_factory=lambda: [
        root.strip() for root in os.environ.get('STORAGE_ROOTS', '').split(',')
    ] or [''])
    STORAGE_PAGE_SIZE: int = int(os.environ.get('STORAGE_PAGE_SIZE', 1000))
    STORAGE_PREFIX_ALIASES: List[str] = field(default_factory=lambda: _split_env(
        'STORAGE_PREFIX_ALIASES', 'listings,gorseller,görseller,media'
    ))
    MIN_GROUP_FILES: int = int(os.environ.get('MIN_GROUP_FILES', 2))

    # Content tables
    LISTINGS_TABLE: str = os.environ.get('LISTINGS_TABLE', 'listings')
    ARTICLES_TABLE: str = os.environ.get('ARTICLES_TABLE', 'articles')
    NEWS_TABLE: str = os.environ.get('NEWS_TABLE', 'news_articles')

    # Generation providers, highest priority first
    PROVIDER_CHAIN: List[str] = field(default_factory=lambda: _split_env(
        'PROVIDER_CHAIN', 'openai/gpt-4o-mini,gemini/gemini-1.5-flash'
    ))
    PROVIDER_TIMEOUT: int = int(os.environ.get('PROVIDER_TIMEOUT', 60))
    OPENAI_API_KEY: Optional[str] = os.environ.get('OPENAI_API_KEY')
    GEMINI_API_KEY: Optional[str] = os.environ.get('GEMINI_API_KEY')
    ANTHROPIC_API_KEY: Optional[str] = os.environ.get('ANTHROPIC_API_KEY')
    DEEPSEEK_API_KEY: Optional[str] = os.environ.get('DEEPSEEK_API_KEY')
    MISTRAL_API_KEY: Optional[str] = os.environ.get('MISTRAL_API_KEY')
    OLLAMA_BASE_URL: Optional[str] = os.environ.get('OLLAMA_BASE_URL')

    # Pipeline
    BATCH_ITEM_DELAY: float = float(os.environ.get('BATCH_ITEM_DELAY', 2.0))
    SLUG_MAX_LENGTH: int = int(os.environ.get('SLUG_MAX_LENGTH', 100))
    IMPROVE_MIN_SCORE: int = int(os.environ.get('IMPROVE_MIN_SCORE', 70))
    DEFAULT_LOCALE: str = os.environ.get('DEFAULT_LOCALE', 'tr-TR')
    DEFAULT_CITY: str = os.environ.get('DEFAULT_CITY', 'Karasu')
    DEFAULT_WORD_COUNT: int = int(os.environ.get('DEFAULT_WORD_COUNT', 600))

    # Celery configuration
    CELERY_BROKER_URL: str = os.environ.get('CELERY_BROKER_URL', 'redis://localhost:6379/0')
    CELERY_RESULT_BACKEND: str = os.environ.get('CELERY_RESULT_BACKEND', 'redis://localhost:6379/0')
    CELERY_TASK_TIME_LIMIT: int = int(os.environ.get('CELERY_TASK_TIME_LIMIT', '7200'))  # 2 hours
    CELERY_TASK_SOFT_TIME_LIMIT: int = int(os.environ.get('CELERY_TASK_SOFT_TIME_LIMIT', '7000'))
    CELERY_WORKER_PREFETCH_MULTIPLIER: int = int(os.environ.get('CELERY_WORKER_PREFETCH_MULTIPLIER', '1'))

    # Request settings
    MAX_CONTENT_LENGTH: int = int(os.environ.get('MAX_CONTENT_LENGTH', 1048576))  # 1MB

    # CORS settings
    CORS_ORIGINS: List[str] = field(default_factory=lambda: os.environ.get('CORS_ORIGINS', '*').split(','))

    def provider_api_key(self, provider: str) -> Optional[str]:
        """API key configured for a provider name."""
        return {
            'openai': self.OPENAI_API_KEY,
            'gemini': self.GEMINI_API_KEY,
            'anthropic': self.ANTHROPIC_API_KEY,
            'deepseek': self.DEEPSEEK_API_KEY,
            'mistral': self.MISTRAL_API_KEY,
        }.get(provider)


@dataclass
class DevelopmentConfig(Config):
    """Development configuration."""
    DEBUG: bool = True
    LOG_LEVEL: str = 'DEBUG'


@dataclass
class ProductionConfig(Config):
    """Production configuration."""
    DEBUG: bool = False
    LOG_LEVEL: str = 'WARNING'


@dataclass
class TestingConfig(Config):
    """Testing configuration."""
    TESTING: bool = True
    DEBUG: bool = True
    LOG_LEVEL: str = 'CRITICAL'
    LOG_FILE: str = ''
    LOG_REQUESTS: bool = False
    RATELIMIT_ENABLED: bool = False
    API_KEYS: frozenset = field(default_factory=lambda: frozenset(['test-api-key']))
    BATCH_ITEM_DELAY: float = 0.0
    PROVIDER_CHAIN: List[str] = field(default_factory=list)
    SUPABASE_URL: Optional[str] = None
    SUPABASE_KEY: Optional[str] = None


def get_config(config_name: str = None) -> Config:
    """
    Get configuration based on environment.

    Args:
        config_name: Configuration name (development, production, testing)

    Returns:
        Configuration object
    """
    if config_name is None:
        config_name = os.environ.get('FLASK_ENV', 'development').lower()

    config_map = {
        'development': DevelopmentConfig,
        'production': ProductionConfig,
        'testing': TestingConfig
    }

    config_class = config_map.get(config_name, DevelopmentConfig)
    return config_class()


def parse_provider_chain(chain: List[str]) -> List[Tuple[str, str]]:
    """
    Split ``provider/model`` entries into pairs.

    Raises:
        ValueError: If an entry has no provider or no model part
    """
    pairs = []
    for entry in chain:
        if '/' not in entry:
            raise ValueError(f"Provider chain entry '{entry}' must look like provider/model")
        provider, model = entry.split('/', 1)
        if not provider or not model:
            raise ValueError(f"Provider chain entry '{entry}' must look like provider/model")
        pairs.append((provider.lower(), model))
    return pairs


def validate_config(config: Config) -> List[str]:
    """
    Validate configuration.

    Args:
        config: Configuration to validate

    Returns:
        List of validation errors
    """
    errors = []

    if not config.API_KEYS:
        errors.append("API_KEYS must be configured")

    if config.SECRET_KEY == 'dev-secret-key-change-in-production' and config.DEBUG is False:
        errors.append("SECRET_KEY must be changed in production")

    if config.SUPABASE_URL and not config.SUPABASE_KEY:
        errors.append("SUPABASE_KEY is required when SUPABASE_URL is set")

    try:
        parse_provider_chain(config.PROVIDER_CHAIN)
    except ValueError as e:
        errors.append(str(e))

    if config.MIN_GROUP_FILES < 1:
        errors.append("MIN_GROUP_FILES must be at least 1")

    if config.SLUG_MAX_LENGTH < 10:
        errors.append("SLUG_MAX_LENGTH must be at least 10")

    if config.BATCH_ITEM_DELAY < 0:
        errors.append("BATCH_ITEM_DELAY cannot be negative")

    if not 0 <= config.IMPROVE_MIN_SCORE <= 100:
        errors.append("IMPROVE_MIN_SCORE must be between 0 and 100")

    return errors
