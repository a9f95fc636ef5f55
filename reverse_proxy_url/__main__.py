"""
Main entry point for running the reverse_proxy_url demo server.
"""

import uvicorn

from reverse_proxy_url.settings import Settings


def main():
    """Run the demo server."""
    settings = Settings()
    uvicorn.run(
        "reverse_proxy_url.main:app",
        host=settings.get_app_host(),
        port=settings.get_app_port(),
        reload=settings.get_app_reload(),
        log_level=settings.get_log_level().lower(),
    )


if __name__ == "__main__":
    main()
