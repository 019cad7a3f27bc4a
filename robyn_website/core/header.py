from typing import Dict, Optional, Tuple


class Header:
    """HTTP响应头辅助类"""

    # MIME类型缩写
    content_types: Dict[str, str] = {
        'text': 'text/plain',
        'csv': 'text/csv',
        'json': 'application/json',
        'pdf': 'application/pdf',
        'html': 'text/html',
        'svg': 'image/svg+xml',
    }

    def __init__(self, content_type: str = 'text/html', charset: str = 'utf-8'):
        self.content_type = self.content_types.get(content_type, content_type)
        self.charset = charset
        self.headers: Dict[str, str] = {}

    def set_content_type(self, content_type: str):
        """设置MIME类型, 可以使用缩写"""
        self.content_type = self.content_types.get(content_type, content_type)

    def content_type_header(self, content_type: Optional[str] = None) -> str:
        return f"{content_type or self.content_type}; charset={self.charset}"

    def add(self, name: str, value):
        """添加响应头, 同名(不区分大小写)的头被覆盖"""
        self.headers = {
            key: val for key, val in self.headers.items()
            if key.lower() != name.lower()
        }
        self.headers[name] = str(value)

    def add_download(self, file_name: str, extension: str):
        """让浏览器弹出下载对话框, Content-Type 需要另外设置"""
        self.add('Expires', 0)
        self.add('Cache-Control', 'must-revalidate, post-check=0, pre-check=0')
        self.add('Content-Disposition', f'attachment; filename="{file_name}.{extension}"')

    def get(self) -> Dict[str, str]:
        return dict(self.headers)

    def has(self, name: str) -> bool:
        return any(key.lower() == name.lower() for key in self.headers)

    @staticmethod
    def get_range(request) -> Optional[Dict[str, str]]:
        """解析 Range 请求头, 如 items=0-24, 没有时返回None"""
        value = request.header('Range') if request is not None else None
        if not value or '=' not in value:
            return None
        spec = value.split('=', 1)[1]
        start, _, end = spec.partition('-')
        return {'start': start.strip(), 'end': end.strip()}

    @staticmethod
    def create_range(range_: Dict[str, str], total: int) -> Tuple[str, str]:
        """
        生成 Content-Range 响应头

        使用 items 而不是 bytes 作为单位
        """
        end = int(range_['end']) if range_.get('end') else total
        end = min(end, total)
        return 'Content-Range', f"items={range_['start']}-{end}/{total}"
