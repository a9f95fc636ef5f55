import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request

from reverse_proxy_url.core.logging import setup_logging
from reverse_proxy_url.proxy.middleware import ReverseProxyMiddleware
from reverse_proxy_url.settings import Settings

setup_logging()


logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Log application startup and shutdown.

    Args:
        app: The FastAPI application instance.

    Yields:
        None: After startup procedures are complete, allowing the application to run.
    """
    logger.info("Application startup sequence initiated.")
    yield
    logger.info("Application shutdown complete.")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the demo app with ReverseProxyMiddleware installed.

    Args:
        settings: Settings to read the middleware configuration from. Loaded
            from the environment if not given.

    Returns:
        The FastAPI application.
    """
    settings = settings or Settings()

    app = FastAPI(
        title="Reverse Proxy URL",
        description="Demo app that reports its request URL as corrected from X-Forwarded-* headers.",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        ReverseProxyMiddleware,
        error_status_code=settings.get_rewrite_error_status_code(),
    )

    @app.get("/health", tags=["General"], status_code=200)
    async def health_check():
        """Perform a basic health check."""
        return {"status": "ok"}

    @app.get("/")
    async def read_root():
        """Provide a simple root endpoint."""
        return {"message": "Reverse Proxy URL demo is running."}

    @app.get("/whoami", name="whoami", tags=["General"])
    async def whoami(request: Request):
        """Report the request URL as the app sees it.

        Returns:
            The request URL, the base URL and an absolute URL generated for this route.
        """
        return {
            "url": str(request.url),
            "base_url": str(request.base_url),
            "url_for": str(request.url_for("whoami")),
        }

    return app


app = create_app()
