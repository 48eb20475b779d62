import logging

from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse
from fastapi.staticfiles import StaticFiles

from webnify import __version__
from webnify.api.demo import router as demo_router
from webnify.core.dependencies import get_demo_settings, get_minifier, get_minify_settings
from webnify.data.sample_data import APP_CONFIG, INITIAL_ROW_COUNT, get_sample_packages
from webnify.middleware.minify import MinifyMiddleware
from webnify.services.rendering import STATIC_DIR, render_package_table, templates

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    """
    Build the demo application with the minification middleware installed.

    Settings are read from WEBNIFY_* environment variables; invalid values
    raise pydantic.ValidationError here rather than on the first request.
    """
    app = FastAPI(
        title="webnify demo",
        version=__version__,
        description="Demo page whose HTML, CSS and JavaScript are minified by MinifyMiddleware.",
    )

    settings = get_minify_settings()
    app.add_middleware(MinifyMiddleware, settings=settings, minifier=get_minifier())
    logger.info(f"Minification enabled with settings: {settings.model_dump()}")
    demo_settings = get_demo_settings()
    logger.info(f"Simulated fetch delay: {demo_settings.fetch_delay}s")

    # Static files (CSS, JS)
    app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")

    @app.get("/", response_class=HTMLResponse)
    async def index(request: Request) -> HTMLResponse:
        """
        Landing page with the first rows of the package table pre-rendered.
        """
        initial_rows = get_sample_packages()[:INITIAL_ROW_COUNT]
        return templates.TemplateResponse(
            request,
            "index.html",
            {
                "title": "Minification Test Project",
                "config": APP_CONFIG,
                "table": render_package_table(initial_rows),
                "table_url": request.url_for("package_table").path,
            },
        )

    @app.get("/health")
    async def health() -> dict:
        """
        Lightweight health check endpoint.
        """
        return {"status": "ok"}

    app.include_router(demo_router, prefix="/api", tags=["demo"])

    return app


app = create_app()


if __name__ == "__main__":
    """
    Allow running `python -m webnify.main` to start the Uvicorn development server.
    """
    import uvicorn

    uvicorn.run(
        "webnify.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )
