import asyncio
import json

import pytest
from robyn import Response

from robyn_website.core.site import WebsiteSite, serialize_menu_tree


@pytest.fixture
def site(fake_app, config, nav_items):
    return WebsiteSite(fake_app, config=config, menu_items=nav_items)


def test_routes_registered(site, fake_app):
    assert ("GET", "/") in fake_app.routes
    assert ("GET", "/menu.json") in fake_app.routes
    assert ("POST", "/set_language") in fake_app.routes
    assert ("GET", "/:page") in fake_app.routes


def test_register_resource(site, fake_app):
    site.register_resource("products", lambda controller: [])
    for method in ("GET", "POST", "PUT", "DELETE"):
        assert (method, "/api/products") in fake_app.routes
        assert (method, "/api/products/:id") in fake_app.routes


def test_content_template(site):
    assert site.content_template("about.html") == "pages/about.html"
    assert site.content_template("about-fr.html") == "pages/about.html"
    assert site.content_template("") == "pages/index.html"
    assert site.content_template("missing.html") is None


def test_page_context(site, make_request):
    context = site.build_page_context(make_request("/about.html?lang=en"), "about.html")
    assert context["language"] == "en"
    assert context["site_title"] == "Test Site"
    assert context["content_template"] == "pages/about.html"
    assert "menuActive" in context["menu"]
    assert 'href="/about.html"' in context["menu"]
    assert context["language_menu"].startswith('<ul class="nav">')


def test_render_page(site, make_request):
    html = site.render_page(make_request("/about.html"), "about.html")
    assert '<html lang="de">' in html
    assert "<title>Test Site</title>" in html
    assert "About this website." in html
    assert "<footer>" not in html
    assert site.render_page(make_request("/missing.html"), "missing.html") is None


def test_render_page_with_last_update(fake_app, make_request, config):
    config.last_update = "27.02.2017"
    site = WebsiteSite(fake_app, config=config)
    html = site.render_page(make_request("/index.html?lang=fr"), "index.html")
    assert "<footer>Dernière mise à jour: 27.02.2017</footer>" in html


def test_page_route_not_found(site, fake_app, robyn_request):
    handler = fake_app.routes[("GET", "/:page")]
    response = asyncio.run(handler(robyn_request(path="/missing.html", path_params={"page": "missing.html"})))
    assert response.status_code == 404


def test_page_route(site, fake_app, robyn_request):
    handler = fake_app.routes[("GET", "/")]
    response = asyncio.run(handler(robyn_request(path="/")))
    assert response.status_code == 200


def test_set_language(site, fake_app, robyn_request):
    handler = fake_app.routes[("POST", "/set_language")]
    response = asyncio.run(handler(robyn_request(method="POST", body="language=fr")))
    assert response.status_code == 200
    response = asyncio.run(handler(robyn_request(method="POST", body="language=es")))
    assert response.status_code == 400


def test_menu_json(site, fake_app, robyn_request):
    handler = fake_app.routes[("GET", "/menu.json")]
    data = json.loads(asyncio.run(handler(robyn_request(path="/services/more.html"))))["data"]
    assert [node["label"] for node in data] == ["Home", "About", "Services", "Contact"]
    services = data[2]
    assert [child["id"] for child in services["children"]] == [4, 5]
    assert services["children"][0]["active"] is True


def test_serialize_empty_tree():
    assert serialize_menu_tree({}) == []


def test_handle_resource(site, make_request):
    def products(controller):
        resource = controller.get_resource()
        if len(resource) > 1:
            controller.not_found = True
            return None
        return [{"id": 1}]

    site.register_resource("products", products)
    response = asyncio.run(site.handle_resource("products", make_request("/api/products", path_info="/products")))
    assert response.status_code == 200
    response = asyncio.run(site.handle_resource("products", make_request("/api/products/9", path_info="/products/9")))
    assert response.status_code == 404
    response = asyncio.run(site.handle_resource(
        "products", make_request("/api/products", method="POST", path_info="/products")))
    assert response.status_code == 201


def test_handle_resource_errors(site, make_request):
    def broken(controller):
        raise RuntimeError("database offline")

    site.register_resource("broken", broken)
    response = asyncio.run(site.handle_resource("broken", make_request("/api/broken", path_info="/broken")))
    assert response.status_code == 500


def test_handle_resource_async_and_response(site, make_request):
    async def custom(controller):
        return Response(status_code=204, headers={}, description="")

    site.register_resource("custom", custom)
    response = asyncio.run(site.handle_resource("custom", make_request("/api/custom", path_info="/custom")))
    assert response.status_code == 204
