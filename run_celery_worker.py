#!/usr/bin/env python3
"""
Celery worker runner for the content synthesis service.

This script starts a Celery worker to process batch tasks.
"""

import sys
import logging

from content_synthesis.tasks.celery_app import celery_app

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='[%(asctime)s: %(levelname)s/%(processName)s] %(message)s'
)
logger = logging.getLogger(__name__)


def main():
    """Start the Celery worker."""
    try:
        logger.info("Starting content synthesis Celery worker...")
        logger.info("Worker will process tasks from the 'content' queue")

        # One worker process: batch items must stay sequential
        worker = celery_app.Worker(
            queues=['content'],
            concurrency=1,
            loglevel='info',
            hostname='content-synthesis-worker@%h'
        )

        worker.start()

    except KeyboardInterrupt:
        logger.info("Worker stopped by user")
        sys.exit(0)
    except Exception as e:
        logger.error(f"Worker failed to start: {str(e)}")
        sys.exit(1)


if __name__ == '__main__':
    main()
