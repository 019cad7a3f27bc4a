import logging
import re
from collections import OrderedDict
from typing import Dict, Optional, Tuple

logger = logging.getLogger(__name__)

ACCEPT_LANGUAGE = re.compile(r"([a-z]{1,8}(-[a-z]{1,8})?)\s*(;\s*q\s*=\s*(1|0\.\d+))?", re.IGNORECASE)

COOKIE_MAX_AGE = 3600 * 24 * 365


class Language:
    """
    多语言辅助类

    语言可以来自查询字符串、目录(/en/)、页面名称(page-en.html)、cookie 或 Accept-Language 请求头。
    默认语言的页面名称不带语言后缀。
    """

    page_extensions: Tuple[str, ...] = ('html', 'php', 'gif', 'jpg', 'pdf')

    def __init__(self, languages: Optional[Dict[str, str]] = None, default: str = 'de'):
        self.languages: Dict[str, str] = dict(languages) if languages else {
            'de': 'Deutsch', 'fr': 'Français', 'it': 'Italiano', 'en': 'English'
        }
        self.default = default
        self.lang = ''
        codes = '|'.join(re.escape(code) for code in self.languages)
        extensions = '|'.join(self.page_extensions)
        self.page_pattern = re.compile(rf"-({codes})\.({extensions})$")
        self.dir_pattern = re.compile(rf"/({codes})/")

    @classmethod
    def from_config(cls, config) -> 'Language':
        return cls(config.languages, config.default_language)

    def get(self) -> str:
        return self.lang

    def set(self, lang: str):
        self.lang = lang

    def is_valid(self, lang: Optional[str]) -> bool:
        return lang is not None and lang in self.languages

    @staticmethod
    def get_header_languages(accept_language: Optional[str]) -> "OrderedDict[str, float]":
        """
        解析 Accept-Language 请求头, 按q值从高到低排序

        如 'en-ca,en;q=0.8,de;q=0.2' -> {'en-ca': 1.0, 'en': 0.8, 'de': 0.2}
        """
        result: "OrderedDict[str, float]" = OrderedDict()
        if not accept_language:
            return result
        entries = []
        for match in ACCEPT_LANGUAGE.finditer(accept_language):
            q = match.group(4)
            entries.append((match.group(1), float(q) if q else 1.0))
        for lang, q in sorted(entries, key=lambda entry: entry[1], reverse=True):
            result[lang] = q
        return result

    def from_header(self, request) -> Optional[str]:
        """返回请求头中第一个可用的语言"""
        accept = request.header('Accept-Language') if request is not None else None
        for lang in self.get_header_languages(accept):
            primary = lang.split('-')[0].lower()
            if primary in self.languages:
                return primary
        return None

    @staticmethod
    def get_page(request) -> str:
        """当前URL中的页面名称"""
        if request is None or not request.path:
            return ''
        return request.path.rstrip('/').rsplit('/', 1)[-1]

    def auto_detect(self, request) -> Optional[str]:
        """按 查询字符串 > 目录 > 页面名称 > cookie > 请求头 的顺序检测语言"""
        lang: Optional[str] = None
        query_lang = request.query_vars().get('lang') if request is not None else None
        path = (request.path or '') if request is not None else ''

        if isinstance(query_lang, str):
            lang = re.sub(r"\W", '', query_lang)
        elif self.dir_pattern.search(path):
            lang = self.dir_pattern.search(path).group(1)
        elif self.page_pattern.search(self.get_page(request)):
            lang = self.page_pattern.search(self.get_page(request)).group(1)
        elif request is not None and request.cookie('lang'):
            lang = request.cookie('lang')
        else:
            lang = self.from_header(request)

        if not self.is_valid(lang):
            if lang:
                logger.warning("unknown language requested: %s", lang)
            return None
        return lang

    def cookie_header(self, lang: str, host: str = '') -> str:
        """生成保存语言的 Set-Cookie 值, 去掉 www 避免和子域名的cookie冲突"""
        cookie_attrs = [
            f"lang={lang}",
            f"Max-Age={COOKIE_MAX_AGE}",
            "Path=/",
        ]
        domain = host.split(':')[0].replace('www.', '.', 1)
        if domain:
            cookie_attrs.append(f"Domain={domain}")
        cookie_attrs.extend(["HttpOnly", "SameSite=Strict"])
        return "; ".join(cookie_attrs)

    def auto_set(self, request, save: bool = True) -> Optional[str]:
        """
        自动检测并设置语言, 检测失败时使用默认语言

        :return: save 为True时返回 Set-Cookie 的值
        """
        lang = self.auto_detect(request)
        self.lang = lang if lang is not None else self.default
        if save:
            return self.cookie_header(self.lang, request.host if request is not None else '')
        return None

    def create_page(self, page: str, lang: Optional[str] = None) -> str:
        """
        生成当前语言的页面名称

        除默认语言外, 在页面名和扩展名之间插入 -语言, 如 mypage.html -> mypage-fr.html
        """
        extensions = '|'.join(self.page_extensions)
        page = re.sub(rf"-[a-z]{{2}}\.({extensions})$", r".\1", page)
        if lang is None:
            lang = self.get()
        if lang != self.default:
            page = re.sub(rf"\.({extensions})$", rf"-{lang}.\1", page)
        return page
