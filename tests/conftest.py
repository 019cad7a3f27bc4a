import pytest
from unittest.mock import MagicMock

from robyn_website.core.config import SiteConfig
from robyn_website.core.request import RequestContext


class FakeApp:
    """记录路由注册的 Robyn 替身"""

    def __init__(self):
        self.routes = {}

    def _register(self, method, route):
        def decorator(handler):
            self.routes[(method, route)] = handler
            return handler
        return decorator

    def get(self, route, *args, **kwargs):
        return self._register("GET", route)

    def post(self, route, *args, **kwargs):
        return self._register("POST", route)

    def put(self, route, *args, **kwargs):
        return self._register("PUT", route)

    def delete(self, route, *args, **kwargs):
        return self._register("DELETE", route)


@pytest.fixture
def make_request():
    def factory(url="/index.html", **kwargs):
        return RequestContext.from_url(url, **kwargs)
    return factory


@pytest.fixture
def config():
    return SiteConfig(page_title="Test Site")


@pytest.fixture
def fake_app():
    return FakeApp()


@pytest.fixture
def robyn_request():
    """构造一个 Robyn Request 的 MagicMock"""
    def factory(path="/", query=None, method="GET", headers=None, body="", path_params=None):
        headers = headers or {}
        request = MagicMock()
        request.url.path = path
        request.url.host = "www.example.com"
        request.method = method
        request.body = body
        request.headers.get.side_effect = lambda name: headers.get(name)
        request.query_params.to_dict.return_value = query or {}
        request.path_params = path_params or {}
        return request
    return factory


@pytest.fixture
def nav_items():
    return [
        (1, 0, 'Home', '/index.html'),
        (2, 0, 'About', '/about.html'),
        (3, 0, 'Services'),
        (4, 3, 'more', '/services/more.html'),
        (5, 3, 'any', '/services/load.html'),
        (6, 5, 'deep', '/services/load/deep.html'),
        (7, 0, 'Contact', '/contact.html'),
    ]
