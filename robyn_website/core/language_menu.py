import html
import os
from typing import Iterable, Optional

from .language import Language
from .query import QueryString
from .website import Website


class LanguageMenu:
    """渲染切换语言的菜单"""

    def __init__(self, language: Language, website: Website):
        self.language = language
        self.website = website
        self.css_id: Optional[str] = None
        self.css_class = 'nav'
        self.li_class_active = 'navActive'
        # 页面没有对应语言版本时跳转的地址
        self.redirect = f"/{website.config.index_page}"
        self.use_label = False  # 链接文字使用语言名称而不是缩写
        self.whitelist: list = list(website.config.language_query_whitelist)

    def set_whitelist(self, whitelist: Iterable[str]):
        """设置查询字符串中允许的键"""
        self.whitelist = list(whitelist)

    def page_exists(self, path: str, page: str) -> bool:
        return os.path.isfile(os.path.join(self.website.doc_root, path.lstrip('/'), page))

    def render(self) -> str:
        """
        返回当前页面所有语言版本的链接

        页面不存在对应语言版本时链接指向 redirect 页面, 并通过 url 参数传递目标页面
        """
        query = QueryString.from_request(self.website.request, self.whitelist)
        path = self.website.dir or '/'
        if not path.endswith('/'):
            path = f"{path}/"
        css_id = '' if self.css_id is None else f' id="{self.css_id}"'
        parts = [f'<ul{css_id} class="{self.css_class}">']
        for lang, label in self.language.languages.items():
            page = self.language.create_page(self.website.page or self.website.config.index_page, lang)
            text = label if self.use_label else lang.upper()
            if lang == self.language.get():
                parts.append(f'<li class="{self.li_class_active}">{text}</li>')
                continue
            if self.page_exists(path, page):
                url = f"{path}{page}{query.with_string({'lang': lang})}"
            else:
                url = f"{self.redirect}{query.with_string({'lang': lang, 'url': path + page})}"
            parts.append(f'<li><a href="{html.escape(url)}" title="{label}">{text}</a></li>')
        parts.append('</ul>')
        return ''.join(parts)
