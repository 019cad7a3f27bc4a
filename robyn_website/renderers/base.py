from abc import ABC, abstractmethod
from enum import Enum
from typing import List, Optional, Union


class LabelPosition(Enum):
    """标签相对表单元素的位置"""
    BEFORE = 1
    AFTER = 2


class Html(ABC):
    """HTML元素基类, 处理 id、class、title、style 等公共属性"""

    def __init__(self):
        self.id: Optional[Union[str, int]] = None
        self.css_classes: List[str] = []
        self.title: str = ''
        self.css_style: Optional[str] = None

    def add_css_class(self, *names: str):
        """添加一个或多个CSS类, 已存在的类名不重复添加"""
        for name in names:
            for part in name.split():
                if part not in self.css_classes:
                    self.css_classes.append(part)

    def render_css_class(self) -> str:
        return f' class="{" ".join(self.css_classes)}"' if self.css_classes else ''

    def render_id(self) -> str:
        return f' id="{self.id}"' if self.id not in (None, '') else ''

    def render_style(self) -> str:
        return f' style="{self.css_style}"' if self.css_style else ''

    @abstractmethod
    def render(self) -> str:
        """渲染为HTML字符串"""
        pass

    def __str__(self) -> str:
        return self.render()


class FormElement(Html):
    """表单元素基类, 处理 label、disabled、checked、required 等属性"""

    def __init__(self):
        super().__init__()
        self.label: Optional[str] = None
        self.label_position = LabelPosition.BEFORE
        self.disabled = False
        self.checked = False
        self.required = False
        self.tab_index: Optional[int] = None
        self.name: Optional[str] = None

    def set_label(self, label: str, position: LabelPosition = LabelPosition.BEFORE):
        self.label = label
        self.label_position = position

    def remove_label(self):
        self.label = None

    def render_label(self) -> str:
        if self.label is None:
            return ''
        return f'<label for="{self.id}"{self.render_css_class()}>{self.label}</label>'

    def render_attributes(self) -> str:
        """渲染 checked/disabled/tabindex/class/required 属性"""
        attrs = ''
        if self.checked:
            attrs += ' checked="checked"'
        if self.disabled:
            attrs += ' disabled="disabled"'
        if self.tab_index:
            attrs += f' tabindex="{self.tab_index}"'
        attrs += self.render_css_class()
        if self.required:
            attrs += ' required="required"'
        return attrs

    def wrap_label(self, element: str) -> str:
        """按标签位置拼接标签和元素"""
        if self.label_position is LabelPosition.BEFORE:
            return f"{self.render_label()}{element}"
        return f"{element}{self.render_label()}"
