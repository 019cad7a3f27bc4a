from .config import SiteConfig
from .request import RequestContext
from .menu import Menu, MenuItem, ActiveState, MatchMode
from .query import QueryString, QueryEncoding
from .website import Website
from .header import Header
from .controller import Controller, ErrorList
from .language import Language
from .language_menu import LanguageMenu
from .paged_nav import PagedNav
from .site import WebsiteSite

__all__ = [
    'SiteConfig',
    'RequestContext',
    'Menu',
    'MenuItem',
    'ActiveState',
    'MatchMode',
    'QueryString',
    'QueryEncoding',
    'Website',
    'Header',
    'Controller',
    'ErrorList',
    'Language',
    'LanguageMenu',
    'PagedNav',
    'WebsiteSite'
]
