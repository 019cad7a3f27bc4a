import html
import logging
import posixpath
from typing import Any, Mapping, MutableMapping, Optional

from .config import SiteConfig
from .query import encode_query, parse_query
from .request import RequestContext

logger = logging.getLogger(__name__)


class Website:
    """
    当前请求范围内的站点辅助类

    path: 从根开始含页面的路径, 如 /library/global.html
    page: 不含路径的页面, 如 global.html
    dir:  不含页面的路径, 如 /library
    """

    def __init__(self, request: RequestContext, config: Optional[SiteConfig] = None):
        self.config = config or SiteConfig()
        self.request = request
        self.host = request.host
        self.query: Optional[str] = request.query_string or None

        if request.path is not None:
            self.path: Optional[str] = request.path
            trimmed = request.path.rstrip('/') or '/'
            self.page: Optional[str] = posixpath.basename(trimmed)
            self.dir: Optional[str] = posixpath.dirname(trimmed)
        else:
            self.path = None
            self.page = None
            self.dir = None

        # 开发版本在子目录中运行时通过 set_web_root/set_doc_root 修改
        self.web_root = self.config.web_root
        self.doc_root = self.config.doc_root
        self.charset = self.config.charset
        self.namespace = self.config.namespace
        self.lang = self.config.default_language
        self.page_title = self.config.page_title
        self.last_update = self.config.last_update

    def add_query(self, pairs: Mapping[str, Any]) -> str:
        """
        把键值合并到当前查询字符串并保存, 相同的键被新值覆盖

        :return: 以 ? 开头且已做HTML转义的查询字符串, 没有查询变量时为空字符串
        """
        query_vars = parse_query(self.query) if self.query else {}
        query_vars.update(pairs)
        self.query = encode_query(query_vars)[1:] or None
        return f"?{html.escape(self.query)}" if self.query else ''

    def set_web_root(self, path: str):
        self.web_root = path

    def set_doc_root(self, path: str):
        """把文档根目录指向子目录"""
        self.doc_root = f"{self.doc_root.rstrip('/')}/{path.strip('/')}"

    def set_last_page(self, session: MutableMapping, url: Optional[str] = None,
                      namespace: Optional[str] = None):
        """在session中记录返回页面, 默认为当前URL"""
        namespace = namespace or self.namespace
        session.setdefault(namespace, {})['back_page'] = url if url is not None else self.request.request_uri
        logger.debug("last page stored in namespace %s", namespace)

    def get_last_page(self, session: Mapping, namespace: Optional[str] = None) -> Optional[str]:
        namespace = namespace or self.namespace
        return session.get(namespace, {}).get('back_page')

    def reset_last_page(self, session: MutableMapping, namespace: Optional[str] = None):
        namespace = namespace or self.namespace
        session.get(namespace, {}).pop('back_page', None)
