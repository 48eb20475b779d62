"""
Demo API endpoints backing the fixture page.

The table endpoint waits before answering so the page's loading state is
visible; the JSON endpoints return the static fixture data.
"""

from __future__ import annotations

import asyncio
import logging
from typing import List

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse

from webnify.core.dependencies import get_fetch_delay
from webnify.data.sample_data import APP_CONFIG, get_sample_packages
from webnify.domain.models import AppConfig, SamplePackage
from webnify.services.rendering import render_package_table

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/config", response_model=AppConfig)
async def get_config() -> AppConfig:
    return APP_CONFIG


@router.get("/packages", response_model=List[SamplePackage])
async def list_packages() -> List[SamplePackage]:
    return get_sample_packages()


@router.get("/packages/table", response_class=HTMLResponse)
async def package_table(delay: float = Depends(get_fetch_delay)) -> HTMLResponse:
    """
    Render the full package table after a simulated network delay.
    """
    logger.info(f"Fetching data from: {APP_CONFIG.api_endpoint}")
    await asyncio.sleep(delay)
    return HTMLResponse(render_package_table(get_sample_packages()))
