import html
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Hashable, Iterable, List, Optional, Sequence
from urllib.parse import urlsplit

from .query import parse_query

logger = logging.getLogger(__name__)


class ActiveState(Enum):
    """菜单项激活状态"""
    AUTO = 'auto'          # 根据当前URL自动判断
    ACTIVE = 'active'      # 强制激活
    EXCLUDED = 'excluded'  # 强制不激活, 不参与URL匹配


class MatchMode:
    """URL匹配方式"""
    PATH = 1            # 只比较路径
    PATH_QUERY = 2      # 路径和全部查询变量都相同
    PATH_SUBQUERY = 3   # 路径相同, 菜单URL中的查询变量都出现在当前请求中


@dataclass
class MenuItem:
    """菜单项配置"""
    id: Hashable                       # 唯一标识
    parent_id: Hashable                # 父菜单标识
    label: str                         # 显示文字
    url: Optional[str] = None          # 没有URL时渲染为不可点击的分组
    target: str = ''                   # 链接 target 属性
    state: ActiveState = ActiveState.AUTO
    children_rendered: bool = False
    has_active_child: bool = False
    css_classes: List[str] = field(default_factory=list)

    @property
    def active(self) -> bool:
        return self.state is ActiveState.ACTIVE

    def set_active(self, active: Optional[bool] = True):
        """True 强制激活, False 排除, None 恢复自动判断"""
        if active is None:
            self.state = ActiveState.AUTO
        elif active:
            self.state = ActiveState.ACTIVE
        else:
            self.state = ActiveState.EXCLUDED

    def add_css_class(self, *names: str):
        """添加CSS类, 重复的类名只保留一个"""
        for name in names:
            if name and name not in self.css_classes:
                self.css_classes.append(name)

    @property
    def css_class(self) -> Optional[str]:
        return ' '.join(self.css_classes) if self.css_classes else None


class Menu:
    """
    递归导航菜单, 层级不限, 输出为嵌套的无序列表

    默认只递归展开激活的菜单项, 设置 all_children_rendered = True 时展开全部。
    菜单项可以是打开状态但不激活(all_children_rendered 为 True 时)。
    """

    def __init__(
        self,
        items: Optional[Iterable[Sequence[Any]]] = None,
        request=None,
        match_mode: int = MatchMode.PATH,
        css_class: str = 'menu',
        css_id: Optional[str] = None,
    ):
        """
        :param items: 菜单项列表, 每项为 (id, parent_id, label[, url])
        :param request: 当前请求 RequestContext, 为None时不会自动激活任何菜单项
        :param match_mode: 默认URL匹配方式
        """
        self.items: Dict[Hashable, MenuItem] = {}
        self.request = request
        self.match_mode = match_mode
        self.auto_active = True
        self.all_children_rendered = False

        self.css_class = css_class
        self.css_id = css_id
        self.item_id_prefix: Optional[str] = None
        self.css_item_has_children = 'menuHasChild'
        self.css_item_active = 'menuActive'
        self.css_item_open = 'menuOpen'
        self.css_item_active_child = 'menuHasActiveChild'

        self._html: List[str] = []

        for item in items or []:
            self.add(item)

    @classmethod
    def from_config(cls, items, config, request=None) -> 'Menu':
        """按站点配置创建菜单"""
        menu = cls(items, request=request, match_mode=config.menu_match_mode,
                   css_class=config.menu_css_class, css_id=config.menu_css_id)
        menu.auto_active = config.auto_active
        menu.all_children_rendered = config.all_children_rendered
        menu.item_id_prefix = config.menu_item_id_prefix
        return menu

    def add(self, item: Sequence[Any]) -> MenuItem:
        """添加菜单项 (id, parent_id, label[, url]), 相同id覆盖之前的项"""
        url = item[3] if len(item) > 3 else None
        return self.add_item(MenuItem(id=item[0], parent_id=item[1], label=item[2], url=url))

    def add_item(self, item: MenuItem) -> MenuItem:
        self.items[item.id] = item
        return item

    def has_children(self, item_id: Hashable) -> bool:
        """菜单项是否至少有一个子菜单"""
        return any(item.parent_id == item_id for item in self.items.values())

    def _children_index(self) -> Dict[Hashable, List[MenuItem]]:
        index: Dict[Hashable, List[MenuItem]] = {}
        for item in self.items.values():
            index.setdefault(item.parent_id, []).append(item)
        return index

    def _ancestors(self, item: MenuItem):
        """沿 parent_id 向上遍历祖先"""
        seen = {item.id}
        parent_id = item.parent_id
        while parent_id in self.items and parent_id not in seen:
            seen.add(parent_id)
            parent = self.items[parent_id]
            yield parent
            parent_id = parent.parent_id

    def is_active(self, item: MenuItem, match_mode: Optional[int] = None) -> bool:
        """
        判断菜单项是否应被激活

        被排除的菜单项直接返回 False, 强制激活的返回 True,
        其余按匹配方式比较菜单URL和当前请求URL。
        """
        if item.state is ActiveState.EXCLUDED:
            return False
        if item.state is ActiveState.ACTIVE:
            return True
        if item.url is None or self.request is None or self.request.path is None:
            return False

        if match_mode is None:
            match_mode = self.match_mode
        menu_url = urlsplit(html.unescape(item.url))
        page_path = self.request.path

        if match_mode == MatchMode.PATH:
            return page_path == menu_url.path
        if match_mode == MatchMode.PATH_QUERY:
            # 按解码后的查询变量比较, 不受编码方式影响
            return page_path == menu_url.path and self.request.query_vars() == parse_query(menu_url.query)
        if match_mode == MatchMode.PATH_SUBQUERY:
            current_vars = self.request.query_vars()
            for key, value in parse_query(menu_url.query).items():
                if key not in current_vars or current_vars[key] != value:
                    return False
            return page_path == menu_url.path
        return False

    def set_auto_active_matching(self, match_mode: int):
        """设置 set_active() 默认使用的匹配方式, 见 MatchMode"""
        self.match_mode = match_mode

    def get_active(self) -> List[Hashable]:
        """返回所有激活菜单项的id"""
        return [item.id for item in self.items.values() if item.active]

    def set_active(self, url: Optional[str] = None):
        """
        根据URL匹配激活菜单项, 并把激活状态传递给所有祖先

        不传url时按当前请求匹配; 传入url时激活URL与之完全相同的菜单项。
        如果没有关闭 auto_active, render() 会自动调用本方法。
        """
        if url is None:
            for item in self.items.values():
                if self.is_active(item):
                    item.set_active()

                # 展开全部时祖先都需要渲染子菜单
                if self.all_children_rendered:
                    for parent in self._ancestors(item):
                        parent.children_rendered = True

                if item.active:
                    for parent in self._ancestors(item):
                        parent.set_active()
        else:
            for item in self.items.values():
                if item.url == url:
                    item.set_active()
                    logger.debug("menu item %r activated by url %s", item.id, url)
                    for parent in self._ancestors(item):
                        parent.children_rendered = True
                        parent.set_active()

    def set_has_active_children(self):
        """标记至少有一个激活子菜单的菜单项"""
        for item in self.items.values():
            item.has_active_child = False
        for child in self.items.values():
            if child.active and child.parent_id in self.items:
                self.items[child.parent_id].has_active_child = True

    def _is_open(self, item: MenuItem) -> bool:
        return self.all_children_rendered or item.active or item.children_rendered

    def _item_css_classes(self, item: MenuItem, has_children: bool) -> List[str]:
        classes = list(item.css_classes)
        state_classes = []
        if has_children:
            state_classes.append(self.css_item_has_children)
            if self._is_open(item):
                # 没有激活项时子菜单也可以是打开的
                state_classes.append(self.css_item_open)
        if item.active:
            state_classes.append(self.css_item_active)
        if item.has_active_child:
            state_classes.append(self.css_item_active_child)
        for name in state_classes:
            if name not in classes:
                classes.append(name)
        return classes

    def _create_html(self, parent_id: Hashable, children: Dict[Hashable, List[MenuItem]],
                     first: bool, rendered: set):
        """递归生成一层菜单"""
        self._html.append('<ul')
        if first:
            self._html.append(f' class="{self.css_class}"')
            if self.css_id is not None:
                self._html.append(f' id="{self.css_id}"')
        self._html.append('>')

        for item in children.get(parent_id, []):
            if item.id in rendered:
                continue
            rendered.add(item.id)
            has_children = item.id in children
            item_id = '' if self.item_id_prefix is None else f' id="{self.item_id_prefix}{item.id}"'
            classes = self._item_css_classes(item, has_children)
            css_class = f' class="{" ".join(classes)}"' if classes else ''
            self._html.append(f'<li{item_id}{css_class}>')
            if item.url is None:
                self._html.append(f'<div>{item.label}</div>')
            else:
                target = f' target="{item.target}"' if item.target else ''
                self._html.append(f'<a href="{item.url}"{target}>{item.label}</a>')
            if has_children and self._is_open(item):
                self._create_html(item.id, children, False, rendered)
            self._html.append('</li>')

        self._html.append('</ul>')

    def render(self) -> str:
        """返回菜单的HTML字符串"""
        self.reset()
        if self.auto_active:
            self.set_active()
        if not self.items:
            return ''
        self.set_has_active_children()
        root_parent = next(iter(self.items.values())).parent_id
        self._create_html(root_parent, self._children_index(), True, set())
        return ''.join(self._html)

    def reset(self):
        """清空渲染缓存"""
        self._html = []

    def get_menu_tree(self) -> Dict[Hashable, Dict]:
        """获取菜单树结构"""
        if not self.items:
            return {}
        children = self._children_index()

        def build(parent_id, seen):
            tree = {}
            for item in children.get(parent_id, []):
                if item.id in seen:
                    continue
                seen.add(item.id)
                tree[item.id] = {
                    'item': item,
                    'children': build(item.id, seen)
                }
            return tree

        return build(next(iter(self.items.values())).parent_id, set())

    def validate(self) -> List[str]:
        """检查孤立的菜单项和循环引用, 只报告不修改"""
        problems = []
        if not self.items:
            return problems
        root_parent = next(iter(self.items.values())).parent_id
        for item in self.items.values():
            if item.parent_id != root_parent and item.parent_id not in self.items:
                problems.append(f"menu item {item.id!r} references missing parent {item.parent_id!r}")

        for item in self.items.values():
            parent_id = item.parent_id
            seen = {item.id}
            while parent_id in self.items:
                if parent_id in seen:
                    problems.append(f"menu item {item.id!r} is part of a parent cycle")
                    break
                seen.add(parent_id)
                parent_id = self.items[parent_id].parent_id
        return problems
