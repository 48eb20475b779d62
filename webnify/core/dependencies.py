from typing import Mapping, Optional
import os

from webnify.domain.models import DemoSettings, MinifySettings
from webnify.services.minifier import Minifier, create_minifier

ENV_PREFIX = "WEBNIFY_"
FETCH_DELAY_ENV_VAR = "WEBNIFY_FETCH_DELAY"

_minify_settings: Optional[MinifySettings] = None
_minifier: Optional[Minifier] = None
_demo_settings: Optional[DemoSettings] = None


def load_minify_settings(environ: Optional[Mapping[str, str]] = None) -> MinifySettings:
    """
    Build MinifySettings from WEBNIFY_<FIELD> environment variables.

    Values are coerced by pydantic, so "1", "true", "yes" and "on" all enable
    a flag. Unknown variables are ignored.
    """
    if environ is None:
        environ = os.environ
    values = {}
    for name in MinifySettings.model_fields:
        env_name = f"{ENV_PREFIX}{name.upper()}"
        if env_name in environ:
            values[name] = environ[env_name]
    return MinifySettings(**values)


def load_demo_settings(environ: Optional[Mapping[str, str]] = None) -> DemoSettings:
    """Build DemoSettings from WEBNIFY_FETCH_DELAY; bad values raise ValidationError."""
    if environ is None:
        environ = os.environ
    value = environ.get(FETCH_DELAY_ENV_VAR)
    if value:
        return DemoSettings(fetch_delay=value)
    return DemoSettings()


def get_minify_settings() -> MinifySettings:
    global _minify_settings
    if _minify_settings is None:
        _minify_settings = load_minify_settings()
    return _minify_settings


def get_minifier() -> Minifier:
    global _minifier
    if _minifier is None:
        _minifier = create_minifier(get_minify_settings())
    return _minifier


def get_demo_settings() -> DemoSettings:
    global _demo_settings
    if _demo_settings is None:
        _demo_settings = load_demo_settings()
    return _demo_settings


def get_fetch_delay() -> float:
    return get_demo_settings().fetch_delay


def reset_dependencies() -> None:
    """Forget cached settings and minifier so the next call re-reads the environment."""
    global _minify_settings, _minifier, _demo_settings
    _minify_settings = None
    _minifier = None
    _demo_settings = None
