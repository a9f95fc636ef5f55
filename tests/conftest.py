import os
from typing import Any, Callable, Dict, List, Optional, Tuple
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from reverse_proxy_url.core.headers import RequestHeaders
from reverse_proxy_url.core.request_context import RequestContext
from reverse_proxy_url.core.url import RequestUrl
from reverse_proxy_url.settings import Settings


@pytest.fixture(autouse=True)
def override_environment(request):
    """AUTOUSE: Applies test-specific environment variables from the 'envvars' marker,
    then restores the original environment after the test.
    """
    original_environ = os.environ.copy()

    marker = request.node.get_closest_marker("envvars")
    if marker:
        for key, value in marker.args[0].items():
            os.environ[key] = value

    yield

    os.environ.clear()
    os.environ.update(original_environ)


@pytest.fixture
def make_context() -> Callable[..., RequestContext]:
    """Builds a RequestContext from a URL string and a header mapping."""

    def _make(url: str = "http://localhost:3000/", headers: Optional[Dict[str, Any]] = None) -> RequestContext:
        return RequestContext(headers=RequestHeaders.from_mapping(headers or {}), url=RequestUrl.parse(url))

    return _make


@pytest.fixture
def make_scope() -> Callable[..., Dict[str, Any]]:
    """Builds a minimal ASGI connection scope."""

    def _make(
        scope_type: str = "http",
        scheme: str = "http",
        server: Optional[Tuple[str, int]] = ("localhost", 3000),
        path: str = "/",
        query_string: bytes = b"",
        headers: Optional[List[Tuple[bytes, bytes]]] = None,
    ) -> Dict[str, Any]:
        scope: Dict[str, Any] = {
            "type": scope_type,
            "scheme": scheme,
            "path": path,
            "root_path": "",
            "query_string": query_string,
            "headers": list(headers) if headers is not None else [(b"host", b"localhost:3000")],
        }
        if server is not None:
            scope["server"] = server
        return scope

    return _make


@pytest.fixture
def client():
    """Pytest fixture for the FastAPI TestClient wrapping the demo app."""
    from reverse_proxy_url.main import create_app

    with TestClient(create_app()) as test_client:
        yield test_client


@pytest.fixture
def mock_settings() -> MagicMock:
    """Provides a mock Settings instance."""
    settings = MagicMock(spec=Settings)
    settings.get_rewrite_error_status_code.return_value = None
    settings.get_log_level.return_value = "INFO"
    return settings
