import logging
import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Union

logger = logging.getLogger(__name__)

STATUS_LINE = re.compile(r"HTTP/[0-9.]+\s+([0-9]+)")


@dataclass
class ResponseHead:
    """HTTP响应头解析结果"""
    message: str
    status_code: Optional[int]
    headers: Dict[str, str] = field(default_factory=dict)
    cookies: List[str] = field(default_factory=list)


def to_canonical(name: str) -> str:
    """响应头名称转为规范形式, 如 content-type -> Content-Type"""
    return '-'.join(part[:1].upper() + part[1:] for part in name.split('-'))


def parse_header(header: Union[str, List[str]]) -> ResponseHead:
    """
    解析原始响应头

    第一行总是状态行; Set-Cookie 可能出现多次, 收集为列表。
    重定向时会出现第二个状态行, 它没有冒号, 值为空字符串。
    """
    lines = list(header) if isinstance(header, (list, tuple)) else header.split("\r\n")
    if not lines:
        return ResponseHead(message='', status_code=None)

    message = lines.pop(0).strip()
    match = STATUS_LINE.search(message)
    status_code = int(match.group(1)) if match else None
    if status_code is None:
        logger.warning("no status code in response line: %r", message)

    head = ResponseHead(message=message, status_code=status_code)
    for line in lines:
        if not line:
            continue
        name, _, value = line.partition(':')
        key = to_canonical(name.strip())
        value = value.strip()
        if key == 'Set-Cookie':
            head.cookies.append(value)
        else:
            head.headers[key] = value
    return head


def decode_chunked(body: Union[str, bytes], charset: str = 'utf-8') -> Union[str, bytes]:
    """
    解码 chunked 传输编码的内容

    块长度按字节计算, str 先用 charset 编码, 结果再解码回 str;
    传入 bytes 时返回 bytes。
    """
    raw = body.encode(charset) if isinstance(body, str) else body
    result = bytearray()
    pos = 0
    while pos < len(raw):
        line_end = raw.find(b"\r\n", pos)
        if line_end == -1:
            break
        size = raw[pos:line_end].split(b';')[0].strip()
        if not size:
            pos = line_end + 2
            continue
        length = int(size, 16)
        if length == 0:
            break
        start = line_end + 2
        result += raw[start:start + length]
        pos = start + length
        if raw.startswith(b"\r\n", pos):
            pos += 2
    if isinstance(body, str):
        return result.decode(charset)
    return bytes(result)


def split_header_body(response: str) -> Dict[str, str]:
    """把原始HTTP响应拆分为头和正文"""
    header, _, body = response.partition("\r\n\r\n")
    return {'header': header, 'body': body}
