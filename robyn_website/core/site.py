import asyncio
import logging
import os
from pathlib import Path
from typing import Any, Callable, Dict, Hashable, Iterable, List, Optional, Sequence
from urllib.parse import parse_qs

from robyn import Robyn, Request, Response, jsonify
from robyn.templating import JinjaTemplate

from ..i18n.translations import get_text
from .config import SiteConfig
from .controller import Controller
from .header import Header
from .language import Language
from .language_menu import LanguageMenu
from .menu import Menu
from .request import RequestContext
from .website import Website

logger = logging.getLogger(__name__)


class WebsiteSite:
    """站点主类, 负责页面和REST资源的路由"""

    def __init__(
        self,
        app: Robyn,
        config: Optional[SiteConfig] = None,
        menu_items: Optional[Iterable[Sequence[Any]]] = None,
        templates_dir: Optional[str] = None,
    ):
        """
        初始化站点

        :param app: Robyn应用实例
        :param config: 站点配置
        :param menu_items: 导航菜单项 (id, parent_id, label[, url])
        :param templates_dir: 模板目录, 默认使用包内的 templates
        """
        self.app = app
        self.config = config or SiteConfig()
        self.menu_items: List[Sequence[Any]] = list(menu_items or [])
        self.resources: Dict[str, Callable] = {}

        self._setup_templates(templates_dir)
        self._setup_routes()

    def _setup_templates(self, templates_dir: Optional[str]):
        """设置模板目录"""
        if templates_dir is None:
            templates_dir = os.path.join(Path(__file__).parent.parent, 'templates')
        self.template_dir = templates_dir
        # 创建 Jinja2 环境并添加全局函数
        self.jinja_template = JinjaTemplate(templates_dir)
        self.jinja_template.env.globals.update({
            'get_text': get_text
        })

    def build_menu(self, request: RequestContext) -> Menu:
        return Menu.from_config(self.menu_items, self.config, request)

    def content_template(self, page: str) -> Optional[str]:
        """页面对应的内容模板, 页面名中的语言后缀被去掉"""
        language = Language.from_config(self.config)
        page = language.create_page(page or self.config.index_page, self.config.default_language)
        name = f"pages/{page}"
        if os.path.isfile(os.path.join(self.template_dir, name)):
            return name
        return None

    def build_page_context(self, request: RequestContext, page: str) -> Dict[str, Any]:
        """构建页面模板的上下文"""
        website = Website(request, self.config)
        language = Language.from_config(self.config)
        language.auto_set(request, save=False)
        website.lang = language.get()

        language_menu = LanguageMenu(language, website)
        return {
            "site_title": self.config.page_title or get_text("site_title", website.lang),
            "language": website.lang,
            "charset": website.charset,
            "web_root": website.web_root,
            "last_update": website.last_update,
            "menu": self.build_menu(request).render(),
            "language_menu": language_menu.render(),
            "content_template": self.content_template(page),
            "page": page,
        }

    def render_page(self, request: RequestContext, page: str) -> Optional[str]:
        """渲染页面, 页面不存在时返回None"""
        context = self.build_page_context(request, page)
        if context["content_template"] is None:
            return None
        return self.jinja_template.env.get_template("page.html").render(**context)

    def _page_response(self, request: Request, page: str) -> Response:
        context = RequestContext.from_robyn(request)
        try:
            html = self.render_page(context, page)
        except Exception as e:
            logger.exception("rendering page %s failed", page)
            return Response(
                status_code=500,
                headers={"Content-Type": f"text/plain; charset={self.config.charset}"},
                description=f"rendering page failed: {e}"
            )
        if html is None:
            language = Language.from_config(self.config)
            language.auto_set(context, save=False)
            return Response(
                status_code=404,
                headers={"Content-Type": f"text/html; charset={self.config.charset}"},
                description=get_text("not_found", language.get())
            )
        return Response(
            status_code=200,
            headers={"Content-Type": f"text/html; charset={self.config.charset}"},
            description=html
        )

    def _setup_routes(self):
        """设置路由"""
        @self.app.get("/")
        async def index(request: Request):
            return self._page_response(request, self.config.index_page)

        @self.app.get("/menu.json")
        async def menu_data(request: Request):
            menu = self.build_menu(RequestContext.from_robyn(request))
            if menu.auto_active:
                menu.set_active()
            return jsonify({"data": serialize_menu_tree(menu.get_menu_tree())})

        @self.app.post("/set_language")
        async def set_language(request: Request):
            """设置语言"""
            body = request.body
            if isinstance(body, bytes):
                body = body.decode("utf-8")
            params = parse_qs(body or "")
            lang = params.get("language", [self.config.default_language])[0]
            language = Language.from_config(self.config)
            if not language.is_valid(lang):
                logger.warning("set_language called with unknown language %s", lang)
                return Response(status_code=400, headers={}, description=f"unknown language: {lang}")
            context = RequestContext.from_robyn(request)
            return Response(
                status_code=200,
                headers={"Set-Cookie": language.cookie_header(lang, context.host)},
                description=get_text("language_changed", lang)
            )

        @self.app.get("/:page")
        async def page_view(request: Request):
            page = request.path_params.get("page")
            return self._page_response(request, page)

    def register_resource(self, name: str, handler: Callable[[Controller], Any]):
        """
        注册REST资源

        挂载 GET/POST/PUT/DELETE /{api_prefix}/{name} 和 /{api_prefix}/{name}/:id,
        handler 接收 Controller, 返回响应数据或 Response
        """
        self.resources[name] = handler
        base = f"/{self.config.api_prefix}/{name}"

        async def dispatch(request: Request):
            object_id = request.path_params.get("id")
            path_info = f"/{name}/{object_id}" if object_id else f"/{name}"
            return await self.handle_resource(name, RequestContext.from_robyn(request, path_info=path_info))

        for route in (base, f"{base}/:id"):
            for method in ("get", "post", "put", "delete"):
                getattr(self.app, method)(route)(dispatch)
        logger.debug("resource %s registered at %s", name, base)

    async def handle_resource(self, name: str, request: RequestContext) -> Response:
        """调用资源处理函数并生成响应"""
        handler = self.resources[name]
        controller = Controller(request, Header("json", self.config.charset))
        try:
            data = handler(controller)
            if asyncio.iscoroutine(data):
                data = await data
        except Exception as e:
            logger.exception("resource %s failed", name)
            controller.errors.add(str(e), 500)
            data = None
        if isinstance(data, Response):
            return data
        return controller.respond(data)


def serialize_menu_tree(tree: Dict[Hashable, Dict]) -> List[Dict[str, Any]]:
    """把菜单树转换为可以JSON序列化的列表"""
    return [
        {
            "id": node["item"].id,
            "label": node["item"].label,
            "url": node["item"].url,
            "active": node["item"].active,
            "children": serialize_menu_tree(node["children"]),
        }
        for node in tree.values()
    ]
