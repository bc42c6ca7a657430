"""Test configuration for pytest."""

import logging
import os
import pytest


@pytest.fixture(autouse=True)
def configure_test_logging():
    """Configure logging for tests to be minimal."""
    # Set environment variable to ensure minimal logging during tests
    os.environ['ENVBIND_LOG_LEVEL'] = 'WARNING'

    logging.getLogger().setLevel(logging.WARNING)

    for logger_name in ['envbind.discovery', 'envbind.population', 'envbind.resolver']:
        logging.getLogger(logger_name).setLevel(logging.WARNING)
