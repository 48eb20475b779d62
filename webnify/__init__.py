"""
webnify: response minification middleware for Starlette and FastAPI.

Typical use::

    from fastapi import FastAPI
    from webnify import MinifyMiddleware, MinifySettings

    app = FastAPI()
    app.add_middleware(MinifyMiddleware, settings=MinifySettings(minify_json=True))
"""

__version__ = "0.1.0"

from webnify.domain.models import MinifySettings
from webnify.middleware.minify import MinifyMiddleware
from webnify.services.minifier import Minifier, MinifyError, create_minifier

__all__ = [
    "Minifier",
    "MinifyError",
    "MinifyMiddleware",
    "MinifySettings",
    "create_minifier",
]
