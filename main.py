from robyn import Robyn
from robyn_website import SiteConfig, WebsiteSite

app = Robyn(__file__)

# 导航菜单, 每个菜单项都需要唯一的id
main_nav = [
    (1, 0, 'Home', '/index.html'),
    (2, 0, 'About', '/about.html'),
    (3, 0, 'Services'),
        (4, 3, 'more', '/services/more.html'),
        (5, 3, 'any', '/services/load.html'),
        (6, 3, 'some', '/services/save.html'),
    (7, 0, 'Contact', '/contact.html'),
]

config = SiteConfig(
    name="website",
    page_title="Website Template",
    last_update="27.02.2017",
    all_children_rendered=True,
)

site = WebsiteSite(app, config=config, menu_items=main_nav)

PRODUCTS = [
    {"id": "1", "name": "Keyboard"},
    {"id": "2", "name": "Mouse"},
]


def products(controller):
    """示例资源: /api/products 和 /api/products/:id"""
    resource = controller.get_resource()
    if len(resource) > 1:
        for product in PRODUCTS:
            if product["id"] == resource[1]:
                return product
        controller.not_found = True
        return None
    return PRODUCTS


site.register_resource("products", products)

if __name__ == "__main__":
    app.start(host="127.0.0.1", port=8100)
