"""
Logging configuration for the content synthesis service.

This module provides centralized logging setup and
configuration for the application.
"""

import logging
import logging.handlers
import os
from datetime import datetime
from typing import Dict, Any


def setup_logging(config: Dict[str, Any]):
    """
    Setup logging configuration.

    Args:
        config: Configuration dictionary
    """
    level = getattr(logging, str(config.get('LOG_LEVEL', 'INFO')).upper(), logging.INFO)

    log_file = config.get('LOG_FILE', 'logs/app.log')
    log_dir = os.path.dirname(log_file) if log_file else ''
    if log_dir and not os.path.exists(log_dir):
        os.makedirs(log_dir)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    # File handler with rotation
    if log_file:
        file_handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=config.get('LOG_MAX_BYTES', 10485760),
            backupCount=config.get('LOG_BACKUP_COUNT', 5)
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    configure_loggers()


def configure_loggers():
    """Configure specific loggers for different components."""
    logging.getLogger('werkzeug').setLevel(logging.WARNING)
    logging.getLogger('celery').setLevel(logging.INFO)
    logging.getLogger('litellm').setLevel(logging.WARNING)
    logging.getLogger('LiteLLM').setLevel(logging.WARNING)
    logging.getLogger('httpx').setLevel(logging.WARNING)
    logging.getLogger('urllib3').setLevel(logging.WARNING)


class StructuredLogger:
    """Structured logger for better log formatting."""

    def __init__(self, name: str):
        self.logger = logging.getLogger(name)

    def info(self, message: str, **kwargs):
        """Log info message with structured data."""
        self._log(logging.INFO, message, **kwargs)

    def warning(self, message: str, **kwargs):
        """Log warning message with structured data."""
        self._log(logging.WARNING, message, **kwargs)

    def error(self, message: str, **kwargs):
        """Log error message with structured data."""
        self._log(logging.ERROR, message, **kwargs)

    def debug(self, message: str, **kwargs):
        """Log debug message with structured data."""
        self._log(logging.DEBUG, message, **kwargs)

    def _log(self, level: int, message: str, **kwargs):
        """Log message with structured data."""
        extra = {
            'timestamp': datetime.utcnow().isoformat(),
            **kwargs
        }

        self.logger.log(level, message, extra=extra)


def get_logger(name: str) -> StructuredLogger:
    """
    Get a structured logger.

    Args:
        name: Logger name

    Returns:
        Structured logger instance
    """
    return StructuredLogger(name)


class BatchLogger:
    """Logger for per-item batch outcomes."""

    def __init__(self, batch_name: str):
        self.batch_name = batch_name
        self.logger = get_logger(f'batch.{batch_name}')

    def log_batch_start(self, total: int, skipped: int = 0):
        self.logger.info(
            f"Batch {self.batch_name} started: {total} items, {skipped} skipped up front",
            batch=self.batch_name,
            total=total,
            skipped=skipped
        )

    def log_item_done(self, item_key: str, detail: str = ""):
        self.logger.info(
            f"Item done: {item_key} {detail}".rstrip(),
            batch=self.batch_name,
            item_key=item_key
        )

    def log_item_skipped(self, item_key: str, reason: str):
        self.logger.info(
            f"Item skipped: {item_key} ({reason})",
            batch=self.batch_name,
            item_key=item_key,
            reason=reason
        )

    def log_item_error(self, item_key: str, stage: str, error: str):
        self.logger.error(
            f"Item failed at {stage}: {item_key}: {error}",
            batch=self.batch_name,
            item_key=item_key,
            stage=stage,
            error=error
        )

    def log_batch_complete(self, counts: Dict[str, Any]):
        self.logger.info(
            f"Batch {self.batch_name} finished: {counts}",
            batch=self.batch_name,
            counts=counts
        )


class TaskLogger:
    """Logger for Celery tasks."""

    def __init__(self):
        self.logger = get_logger('task')

    def log_task_start(self, task_id: str, task_name: str, **kwargs):
        """Log task start."""
        self.logger.info(
            f"Task started: {task_name}",
            task_id=task_id,
            task_name=task_name,
            **kwargs
        )

    def log_task_complete(self, task_id: str, task_name: str, duration: float, **kwargs):
        """Log task completion."""
        self.logger.info(
            f"Task completed: {task_name}",
            task_id=task_id,
            task_name=task_name,
            duration=duration,
            **kwargs
        )

    def log_task_error(self, task_id: str, task_name: str, error: str, **kwargs):
        """Log task error."""
        self.logger.error(
            f"Task error: {error}",
            task_id=task_id,
            task_name=task_name,
            error=error,
            **kwargs
        )
