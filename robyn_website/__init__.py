from .core import (
    SiteConfig, RequestContext, Menu, MenuItem, QueryString,
    Website, Header, Controller, Language, LanguageMenu, PagedNav, WebsiteSite
)

__all__ = [
    'SiteConfig',
    'RequestContext',
    'Menu',
    'MenuItem',
    'QueryString',
    'Website',
    'Header',
    'Controller',
    'Language',
    'LanguageMenu',
    'PagedNav',
    'WebsiteSite'
]
