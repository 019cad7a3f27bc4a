from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple
from urllib.parse import urlencode, urlsplit

from .query import QueryValue, parse_query

# 从 Robyn 请求中转发的请求头
FORWARDED_HEADERS: Tuple[str, ...] = (
    'Host',
    'Accept-Language',
    'Cookie',
    'Range',
    'Content-Type',
    'Content-Disposition',
    'User-Agent',
)


def parse_cookies(cookie_header: Optional[str]) -> Dict[str, str]:
    """解析 Cookie 请求头, 如 session={"user_id": 1}; lang=fr"""
    cookies: Dict[str, str] = {}
    if not cookie_header:
        return cookies
    for item in cookie_header.split(";"):
        if "=" in item:  # 确保有等号
            key, value = item.split("=", 1)  # 只分割一个等号
            cookies[key.strip()] = value.strip()
    return cookies


@dataclass(frozen=True)
class RequestContext:
    """当前请求的只读快照, 显式传给需要请求信息的组件"""
    path: Optional[str] = None
    query_string: str = ''
    method: str = 'GET'
    headers: Dict[str, str] = field(default_factory=dict)
    cookies: Dict[str, str] = field(default_factory=dict)
    host: str = ''
    protocol: str = 'HTTP/1.1'
    path_info: Optional[str] = None
    body: str = ''

    @classmethod
    def from_url(
        cls,
        url: str,
        method: str = 'GET',
        headers: Optional[Dict[str, str]] = None,
        cookies: Optional[Dict[str, str]] = None,
        body: str = '',
        path_info: Optional[str] = None,
    ) -> 'RequestContext':
        """由完整或相对URL创建, 主要用于测试和脚本"""
        parts = urlsplit(url)
        headers = dict(headers or {})
        if cookies is None:
            cookies = parse_cookies(_lookup(headers, 'Cookie'))
        host = parts.netloc or _lookup(headers, 'Host') or ''
        return cls(
            path=parts.path or None,
            query_string=parts.query,
            method=method.upper(),
            headers=headers,
            cookies=dict(cookies),
            host=host,
            path_info=path_info,
            body=body,
        )

    @classmethod
    def from_robyn(cls, request, path_info: Optional[str] = None) -> 'RequestContext':
        """适配 Robyn 的 Request 对象"""
        headers = {}
        for name in FORWARDED_HEADERS:
            value = request.headers.get(name)
            if value is not None:
                headers[name] = value

        params: dict = request.query_params.to_dict()
        body = request.body
        if isinstance(body, bytes):
            body = body.decode('utf-8', errors='replace')

        url = request.url
        return cls(
            path=url.path or None,
            query_string=urlencode(params, doseq=True),
            method=request.method.upper(),
            headers=headers,
            cookies=parse_cookies(headers.get('Cookie')),
            host=url.host or headers.get('Host', ''),
            path_info=path_info,
            body=body or '',
        )

    @property
    def request_uri(self) -> str:
        if self.path is None:
            return ''
        return f"{self.path}?{self.query_string}" if self.query_string else self.path

    def header(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """按名称查找请求头, 不区分大小写"""
        value = _lookup(self.headers, name)
        return default if value is None else value

    def cookie(self, name: str, default: Optional[str] = None) -> Optional[str]:
        return self.cookies.get(name, default)

    def query_vars(self) -> Dict[str, QueryValue]:
        return parse_query(self.query_string)


def _lookup(headers: Dict[str, str], name: str) -> Optional[str]:
    name = name.lower()
    for key, value in headers.items():
        if key.lower() == name:
            return value
    return None
