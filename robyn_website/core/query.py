import logging
from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union
from urllib.parse import quote, quote_plus, unquote_plus, urlencode

logger = logging.getLogger(__name__)

QueryValue = Union[str, List[str]]

ARRAY_SUFFIX = '[]'


class QueryEncoding(Enum):
    """查询字符串编码方式"""
    RFC1738 = 'rfc1738'  # 空格编码为 +
    RFC3986 = 'rfc3986'  # 空格编码为 %20


def parse_query(raw: Optional[str], whitelist: Optional[Iterable[str]] = None) -> Dict[str, QueryValue]:
    """
    解析查询字符串

    :param raw: 原始查询字符串, 可带前导 ?
    :param whitelist: 允许的键, 为None时保留全部
    :return: 键值字典, 以 [] 结尾的键对应列表
    """
    query_vars: Dict[str, QueryValue] = {}
    if not raw:
        return query_vars
    if raw.startswith('?'):
        raw = raw[1:]

    for segment in raw.split('&'):
        if not segment:
            continue
        # 没有等号的片段视为空值
        key, _, value = segment.partition('=')
        key = unquote_plus(key)
        value = unquote_plus(value)
        if not key:
            continue
        if key.endswith(ARRAY_SUFFIX):
            current = query_vars.get(key)
            if isinstance(current, list):
                current.append(value)
            else:
                query_vars[key] = [value]
        else:
            # 重复的普通键以最后一个为准
            query_vars[key] = value

    if whitelist is not None:
        # 按白名单顺序重建
        query_vars = {key: query_vars[key] for key in whitelist if key in query_vars}
    return query_vars


def _format_value(value: Any) -> str:
    if isinstance(value, bool):
        return '1' if value else '0'
    return str(value)


def _to_pairs(query_vars: Mapping[str, Any]) -> List[Tuple[str, str]]:
    """展开为键值对列表, 数组键统一使用字面量 []"""
    pairs = []
    for key, value in query_vars.items():
        if value is None:
            continue
        if isinstance(value, (list, tuple)):
            name = key if key.endswith(ARRAY_SUFFIX) else f"{key}{ARRAY_SUFFIX}"
            pairs.extend((name, _format_value(item)) for item in value if item is not None)
        else:
            pairs.append((key, _format_value(value)))
    return pairs


def encode_query(query_vars: Mapping[str, Any], encoding: QueryEncoding = QueryEncoding.RFC1738) -> str:
    """编码为查询字符串, 非空时带 ? 前缀"""
    quote_via = quote_plus if encoding is QueryEncoding.RFC1738 else quote
    encoded = urlencode(_to_pairs(query_vars), quote_via=quote_via)
    return f"?{encoded}" if encoded else ''


class QueryString:
    """
    查询字符串管理

    构造时从请求中取一次快照, 之后只有 add/remove 会修改快照,
    with_vars/with_string 只返回派生结果, 不改动快照。
    添加类方法接收键值字典, 删除类方法只接收键列表。
    """

    def __init__(self, query_string: Optional[str] = '', whitelist: Optional[Iterable[str]] = None):
        self.whitelist = list(whitelist) if whitelist is not None else None
        self._vars: Dict[str, QueryValue] = parse_query(query_string, self.whitelist)

    @classmethod
    def from_request(cls, request, whitelist: Optional[Iterable[str]] = None) -> 'QueryString':
        """从 RequestContext 创建"""
        query_string = request.query_string if request is not None else ''
        return cls(query_string, whitelist)

    def add(self, pairs: Mapping[str, Any]):
        """合并键值, 已存在的键被新值覆盖"""
        self._vars.update(pairs)
        logger.debug("query vars after add: %s", self._vars)

    def remove(self, keys: Optional[Iterable[str]] = None):
        """删除指定键, 不传参数时清空"""
        if keys is None:
            self._vars = {}
        else:
            for key in keys:
                self._vars.pop(key, None)
        logger.debug("query vars after remove: %s", self._vars)

    def get(self) -> Dict[str, QueryValue]:
        return dict(self._vars)

    def get_string(self, encoding: QueryEncoding = QueryEncoding.RFC1738) -> str:
        return encode_query(self._vars, encoding)

    def with_vars(self, add: Optional[Mapping[str, Any]] = None,
                  remove: Optional[Iterable[str]] = None) -> Dict[str, Any]:
        """返回添加/删除后的副本, 快照保持不变"""
        query_vars: Dict[str, Any] = dict(self._vars)
        if add is not None:
            query_vars.update(add)
        if remove is not None:
            for key in remove:
                query_vars.pop(key, None)
        return query_vars

    def with_string(self, add: Optional[Mapping[str, Any]] = None,
                    remove: Optional[Iterable[str]] = None,
                    encoding: QueryEncoding = QueryEncoding.RFC1738) -> str:
        return encode_query(self.with_vars(add, remove), encoding)

    def includes(self, values: Union[Mapping[str, Any], Iterable[str]]) -> bool:
        """
        检查查询变量是否包含给定内容

        列表: 每个值都必须作为键存在
        字典: 每个键都必须存在且值相等
        """
        if isinstance(values, Mapping):
            for key, value in values.items():
                if key not in self._vars:
                    return False
                if not _same_value(self._vars[key], value):
                    return False
            return True
        return all(key in self._vars for key in values)

    def __contains__(self, key: str) -> bool:
        return key in self._vars

    def __len__(self) -> int:
        return len(self._vars)

    def __repr__(self) -> str:
        return f"QueryString({self.get_string()!r})"


def _same_value(stored: QueryValue, value: Any) -> bool:
    if isinstance(value, (list, tuple)):
        return isinstance(stored, list) and stored == [_format_value(v) for v in value]
    if isinstance(stored, list):
        return False
    return stored == _format_value(value)
