import json
import logging
from typing import Any, Dict, List, Optional, Union

from robyn import Response

from .header import Header
from .query import parse_query
from .request import RequestContext

logger = logging.getLogger(__name__)


class ErrorList:
    """收集一次请求中出现的错误"""

    def __init__(self):
        self.errors: List[Dict[str, Any]] = []

    def add(self, message: str, code: Optional[int] = None):
        self.errors.append({'code': code, 'message': message})

    def get(self) -> List[Dict[str, Any]]:
        return list(self.errors)

    def as_json(self) -> str:
        return json.dumps({'errors': self.errors}, ensure_ascii=False)

    def as_string(self) -> str:
        return "\n".join(
            f"{error['code']}: {error['message']}" if error['code'] is not None else error['message']
            for error in self.errors
        )

    def __len__(self) -> int:
        return len(self.errors)


class Controller:
    """
    REST控制器

    路径信息被拆分为资源列表, 例如 /user/1 得到 ['user', '1']。
    """

    def __init__(self, request: RequestContext, header: Optional[Header] = None,
                 errors: Optional[ErrorList] = None):
        self.request = request
        self.header = header or Header()
        self.errors = errors if errors is not None else ErrorList()
        self.protocol = request.protocol
        self.method = request.method
        self.resources = request.path_info
        self.not_found = False  # 返回 404

    def get_resource(self, as_string: bool = False) -> Optional[Union[str, List[str]]]:
        """
        返回拆分后的路径信息

        没有路径信息时返回None; 路径只有 / 时返回 ['']
        """
        if self.resources is None or as_string:
            return self.resources
        return self.resources.strip('/').split('/')

    def get_data(self, as_json: bool = False) -> Optional[Dict[str, Any]]:
        """把请求数据转为字典, 没有数据时返回None"""
        data: Any = {}
        if self.method in ('POST', 'PUT'):
            if as_json:
                try:
                    data = json.loads(self.request.body) if self.request.body else {}
                except json.JSONDecodeError as e:
                    logger.warning("invalid json body: %s", e)
                    self.errors.add(f"invalid json body: {e}", 400)
                    return None
            else:
                # POST 请求需要设置正确的 Content-Type
                data = parse_query(self.request.body)
        elif self.method in ('GET', 'DELETE'):
            # DELETE 没有请求体, 但可以有查询字符串
            data = self.request.query_vars()
        if not isinstance(data, dict):
            data = {'data': data}
        return data if data else None

    def get_status(self) -> int:
        """根据错误和响应头确定状态码"""
        if len(self.errors) > 0:
            return 500
        if self.not_found:
            return 404
        if self.method == 'POST' and not self.header.has('Content-Disposition'):
            # IE/Edge 在 201 时无法下载
            return 201
        if self.header.has('Content-Range'):
            return 206
        return 200

    def get_headers(self) -> Dict[str, str]:
        content_type = 'text/html' if self.not_found else self.header.content_type
        headers = {'Content-Type': self.header.content_type_header(content_type)}
        headers.update(self.header.get())
        return headers

    def get_body(self, data: Any = None) -> str:
        """生成响应正文"""
        is_json = self.header.content_type == 'application/json'
        if len(self.errors) > 0:
            return self.errors.as_json() if is_json else self.errors.as_string()
        if data:
            if isinstance(data, (str, bytes)):
                return data.decode(self.header.charset) if isinstance(data, bytes) else data
            return json.dumps(data, ensure_ascii=False, default=str)
        # 没有数据时只返回状态
        return '{}' if is_json else ''

    def respond(self, data: Any = None) -> Response:
        body = self.get_body(data)
        status_code = self.get_status()
        logger.debug("%s %s -> %s", self.method, self.resources, status_code)
        return Response(
            status_code=status_code,
            headers=self.get_headers(),
            description=body
        )
