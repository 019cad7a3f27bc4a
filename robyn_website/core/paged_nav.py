import math
from typing import List, Tuple

from ..i18n.translations import get_text
from .website import Website


class PagedNav:
    """
    分页导航条

    :param website: 当前请求的 Website, 用于生成带页码的查询字符串
    :param current_page: 当前页码, 从1开始
    :param num_records: 当前查询的总记录数
    :param per_page: 每页记录数
    """

    def __init__(self, website: Website, current_page: int, num_records: int, per_page: int):
        if per_page <= 0:
            raise ValueError("per_page must be a positive number")
        self.website = website
        self.current_page = current_page
        self.num_records = num_records
        self.per_page = per_page
        self.range = 6          # 直接可达的页码数量, 必须为偶数
        self.step_small = 10    # [-10] [+10] 跳转
        self.step_big = 50      # [-50] [+50] 跳转
        self.language = website.lang
        self.var_name = 'pgNav'  # 查询字符串中页码的变量名
        self.css_class = 'pagedNavBar'

    def set_range(self, range_: int):
        if range_ % 2:
            raise ValueError(f"range must be an even number, got {range_}")
        self.range = range_

    def set_step(self, step_small: int, step_big: int):
        if step_small % 2 or step_big % 2:
            raise ValueError(f"steps must be even numbers, got {step_small} and {step_big}")
        self.step_small = step_small
        self.step_big = step_big

    @property
    def num_pages(self) -> int:
        return math.ceil(self.num_records / self.per_page)

    def get_page_window(self) -> Tuple[int, int]:
        """返回直接显示的第一个和最后一个页码"""
        half = self.range // 2
        num_pages = self.num_pages
        start = self.current_page - half if self.current_page - half > 0 else 1
        end = min(self.current_page + half, num_pages)
        if num_pages < self.range:
            end = num_pages
        elif end < self.range:
            end = self.range
        return start, end

    def _link(self, page_num: int) -> str:
        query = self.website.add_query({self.var_name: page_num})
        return f"{self.website.page or ''}{query}"

    def _jump(self, page_num: int, css_class: str, icon: str, title_key: str, step: int) -> str:
        sign = '-' if page_num < self.current_page else '+'
        title = f"{get_text(title_key, self.language)} [{sign}{step}]"
        return (
            f'<div><a class="{css_class}" href="{self._link(page_num)}">'
            f'<img src="{self.website.web_root}layout/images/{icon}" alt="{icon}" title="{title}"></a></div>'
        )

    def render(self) -> str:
        """返回分页导航的HTML"""
        current = self.current_page
        num_pages = self.num_pages
        parts: List[str] = [f'<div class="{self.css_class}">']

        if current > self.step_big / 2:
            step = self.step_big if current > self.step_big else current - 1
            parts.append(self._jump(current - step, 'linkJumpBig', 'icon_backfast.gif', 'jump_back_fast', step))
        if current > self.step_small / 2:
            step = self.step_small if current > self.step_small else current - 1
            parts.append(self._jump(current - step, 'linkJumpSmall', 'icon_back.gif', 'jump_back', step))

        if num_pages > 1:
            start, end = self.get_page_window()
            for page_num in range(start, end + 1):
                if page_num == current:
                    parts.append(f'<div class="linkCurPageNum">{page_num}</div>')
                else:
                    parts.append(
                        f'<div class="pages"><a class="linkJumpPage" href="{self._link(page_num)}">{page_num}</a></div>'
                    )

        if num_pages > current + self.step_small / 2:
            step = self.step_small if num_pages > current + self.step_small else num_pages - current
            parts.append(self._jump(current + step, 'linkJumpSmall', 'icon_forward.gif', 'jump_forward', step))
        if num_pages >= current + self.step_big / 2:
            step = self.step_big if num_pages > current + self.step_big else num_pages - current
            parts.append(self._jump(current + step, 'linkJumpBig', 'icon_forwardfast.gif', 'jump_forward_fast', step))

        parts.append(f'<div class="numRec">{self.num_records} {get_text("records", self.language)}</div>')
        parts.append('</div>')
        return ''.join(parts)
