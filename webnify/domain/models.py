"""
Pydantic models for webnify.

This module defines the data models used throughout the application, including:
- Minification settings for the response middleware
- The demo application's configuration object
- The fixed sample records rendered by the demo page

All models use Pydantic for validation, serialization, and type safety.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, ConfigDict


# ---------------------------------------------------------------------------
# Minification Settings
# ---------------------------------------------------------------------------


class MinifySettings(BaseModel):
    """
    Settings controlling which responses the middleware minifies and how.

    JSON, XML and SVG minification are opt-in; HTML, CSS and JavaScript are
    enabled by default.
    """

    suppress_warnings: bool = Field(
        default=False,
        description="Do not log warnings for unparsable media types or minifier failures.",
    )

    minify_html: bool = Field(default=True, description="Minify text/html responses.")
    minify_css: bool = Field(default=True, description="Minify text/css responses.")
    minify_js: bool = Field(default=True, description="Minify JavaScript responses.")
    minify_json: bool = Field(default=False, description="Minify JSON responses.")
    minify_xml: bool = Field(default=False, description="Minify XML, Atom and RSS responses.")
    minify_svg: bool = Field(default=False, description="Minify image/svg+xml responses.")

    html_keep_document_tags: bool = Field(
        default=True,
        description="Keep the opening <html> and <head> tags.",
    )
    html_keep_end_tags: bool = Field(
        default=True,
        description="Keep closing tags that HTML allows to be omitted.",
    )
    html_keep_comments: bool = Field(
        default=False,
        description="Keep HTML comments.",
    )
    html_minify_inline: bool = Field(
        default=True,
        description="Minify inline <style> and <script> contents inside HTML documents.",
    )
    keep_bang_comments: bool = Field(
        default=False,
        description="Keep /*! ... */ comments (usually licence notices) in CSS and JavaScript.",
    )

    model_config = ConfigDict(frozen=True)


# ---------------------------------------------------------------------------
# Demo Application Models
# ---------------------------------------------------------------------------


class DemoSettings(BaseModel):
    """Runtime settings of the demo application."""

    fetch_delay: float = Field(
        default=1.5,
        ge=0,
        allow_inf_nan=False,
        description="Seconds the table endpoint waits before answering.",
    )

    model_config = ConfigDict(frozen=True)


class FeatureFlags(BaseModel):
    """Feature toggles advertised by the demo page."""

    dark_mode: bool = True
    animations: bool = True
    analytics: bool = False


class AppConfig(BaseModel):
    """
    Configuration object of the demo page.

    ``max_retries`` and ``timeout`` are advertised to the client but the
    refresh flow performs a single attempt.
    """

    api_endpoint: str = Field(
        default="https://api.example.com/data",
        description="Endpoint the page claims to fetch its data from.",
    )
    max_retries: int = Field(default=3, ge=0)
    timeout: int = Field(default=5000, ge=0, description="Request timeout in milliseconds.")
    features: FeatureFlags = Field(default_factory=FeatureFlags)


class SamplePackage(BaseModel):
    """A single row of the demo table."""

    id: int
    name: str
    version: str
    downloads: int = Field(ge=0)

    model_config = ConfigDict(frozen=True)
