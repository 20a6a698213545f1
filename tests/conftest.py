# Author: PB & Claude
# Maintainer: PB
# Original date: 2026.01.13
# License: (c) HRDAG, 2026, GPL-2 or newer
#
# ------
# tests/conftest.py
"""Pytest configuration for rsync-analyzer tests."""

import pytest

from rsync_analyzer import RsyncOutputAnalyzer


def pytest_addoption(parser):
    """Add custom command-line options."""
    parser.addoption(
        "--run-rsync-tests",
        action="store_true",
        default=False,
        help="Run tests that spawn a real rsync binary",
    )


def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers",
        "rsync_required: mark test as requiring an rsync executable on PATH",
    )


def pytest_collection_modifyitems(config, items):
    """Skip rsync tests unless --run-rsync-tests is passed."""
    if not config.getoption("--run-rsync-tests"):
        skip_rsync = pytest.mark.skip(
            reason="need --run-rsync-tests option to run"
        )
        for item in items:
            if "rsync_required" in item.keywords:
                item.add_marker(skip_rsync)


@pytest.fixture
def analyzer():
    """A fresh analyzer with an empty cache."""
    return RsyncOutputAnalyzer()
