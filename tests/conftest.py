"""Pytest configuration and shared fixtures.

Makes the project root importable so ``import webnify`` works when tests are
run from the repository root without installing the package.
"""

import os
import sys

import pytest

# Project root = parent directory of this tests/ folder
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from webnify.core.dependencies import reset_dependencies


SAMPLE_HTML = """
    <!DOCTYPE html>
    <html>
        <head>
            <title>Test</title>
        </head>
        <body>
            <h1>Hello World</h1>
        </body>
    </html>
"""


@pytest.fixture
def sample_html() -> str:
    return SAMPLE_HTML


@pytest.fixture(autouse=True)
def _fresh_dependencies():
    """Drop cached settings so environment changes in one test don't leak."""
    reset_dependencies()
    yield
    reset_dependencies()
