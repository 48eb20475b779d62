"""
Static fixture data served by the demo application.

These are read-only literals: the page configuration object and the four
records shown in the demo table.
"""
from __future__ import annotations

from typing import List

from webnify.domain.models import AppConfig, FeatureFlags, SamplePackage


APP_CONFIG = AppConfig(
    api_endpoint="https://api.example.com/data",
    max_retries=3,
    timeout=5000,
    features=FeatureFlags(dark_mode=True, animations=True, analytics=False),
)

SAMPLE_PACKAGES: List[SamplePackage] = [
    SamplePackage(id=1, name="HTML Minifier", version="1.2.0", downloads=12500),
    SamplePackage(id=2, name="CSS Optimizer", version="2.1.3", downloads=8900),
    SamplePackage(id=3, name="JS Compressor", version="3.0.5", downloads=21500),
    SamplePackage(id=4, name="Image Compressor", version="1.0.8", downloads=17800),
]

# Rows rendered on first page load, before the user asks for a refresh.
INITIAL_ROW_COUNT = 2


def get_sample_packages() -> List[SamplePackage]:
    return list(SAMPLE_PACKAGES)
