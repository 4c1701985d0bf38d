"""Shared fixtures."""

from __future__ import annotations

import logging

import pytest


@pytest.fixture(autouse=True)
def reset_loggers():
    """Undo setup_logging() so caplog sees records in later tests."""
    yield
    for name in ("netlify_ddns", "httpx"):
        logger = logging.getLogger(name)
        logger.handlers.clear()
        logger.setLevel(logging.NOTSET)
        logger.propagate = True
