from enum import Enum
from typing import Any, Iterable, List, Optional, Sequence, Union

from ..i18n.translations import get_text
from .base import FormElement, Html, LabelPosition


class CheckBox(FormElement):
    """复选框"""

    def __init__(self, id: str, value: str):
        super().__init__()
        self.id = id
        self.name = id
        self.value = value

    def render(self) -> str:
        element = (
            f'<input id="{self.id}" name="{self.name}" type="checkbox" value="{self.value}"'
            f'{self.render_attributes()}>'
        )
        return self.wrap_label(element)


class RadioButton(FormElement):
    """单选按钮, 同一组的按钮使用相同的 name"""

    def __init__(self, id: str, value: str):
        super().__init__()
        self.id = id
        self.value = value

    def render(self) -> str:
        name = f' name="{self.name}"' if self.name else ''
        element = (
            f'<input id="{self.id}"{name} type="radio" value="{self.value}"'
            f'{self.render_attributes()}>'
        )
        return self.wrap_label(element)


class RadioLayout(Enum):
    HORIZONTAL = 1
    VERTICAL = 2


class RadioGroup(FormElement):
    """
    单选按钮组

    按钮的 id 为 name 加上从1开始的序号
    """

    def __init__(self, name: str, values: Sequence[str]):
        super().__init__()
        self.name = name
        self.css_class = 'radiogroup'
        self.css_class_vertical = 'layout-vertical'
        self.radios: List[RadioButton] = []
        for index, value in enumerate(values, start=1):
            radio = RadioButton(f"{name}{index}", value)
            radio.name = name
            self.radios.append(radio)

    def set_labels(self, labels: Sequence[str], position: LabelPosition = LabelPosition.BEFORE):
        for radio, label in zip(self.radios, labels):
            radio.set_label(label, position)

    def set_tab_indices(self, indices: Sequence[int]):
        for radio, index in zip(self.radios, indices):
            radio.tab_index = index

    def set_checked(self, value: str):
        """选中值等于 value 的按钮, 其它按钮取消选中"""
        for radio in self.radios:
            radio.checked = radio.value == value

    def set_disabled(self, disabled: bool = True):
        for radio in self.radios:
            radio.disabled = disabled

    def render(self, layout: RadioLayout = RadioLayout.HORIZONTAL) -> str:
        if not isinstance(layout, RadioLayout):
            raise ValueError(f"unknown radio group layout: {layout!r}")
        self.add_css_class(self.css_class)
        if layout is RadioLayout.VERTICAL:
            self.add_css_class(self.css_class_vertical)
        radios = ''.join(radio.render() for radio in self.radios)
        return f'<div{self.render_id()}{self.render_css_class()}>{radios}</div>'


class OptionElement:
    """下拉框选项"""

    def __init__(self, text: str = '', value: Optional[Any] = None, title: Optional[str] = None,
                 selected: bool = False):
        self.text = text
        self.value = value
        self.title = title
        self.selected = selected

    def render(self) -> str:
        value = '' if self.value is None else f' value="{self.value}"'
        selected = ' selected="selected"' if self.selected else ''
        title = '' if self.title is None else f' title="{self.title}"'
        return f'<option{value}{selected}{title}>{self.text}</option>'


class SelectBy(Enum):
    VALUE = 1  # 按 value 属性选中
    TEXT = 2   # 按选项文字选中


class SelectField(FormElement):
    """
    下拉选择框

    options 可以是一维列表(选项文字, value 自动从0编号),
    也可以是 (value, text) 的二维列表。
    """

    def __init__(self, options: Iterable[Union[str, Sequence[Any]]], id: Optional[str] = None,
                 language: str = 'de', auto_option_values: bool = True):
        super().__init__()
        if id is not None:
            self.id = id
            self.name = id
        self.options: List[OptionElement] = []
        self.multiple = False
        self.size = 1  # 不设置 multiple 又要用css高度时至少设为2
        self.default_text: Optional[str] = get_text('please_select', language)
        self.default_value = ''
        self.auto_option_title: Optional[SelectBy] = None
        self.auto_option_values = auto_option_values
        self._init_options(options)

    def _init_options(self, options):
        index = 0
        for row in options:
            if isinstance(row, (list, tuple)) and len(row) > 1:
                option = OptionElement(text=row[1], value=row[0])
            else:
                option = OptionElement(text=row)
                if self.auto_option_values:
                    option.value = index
                    index += 1
            self.options.append(option)

    def set_selected(self, value: Any = None, by: SelectBy = SelectBy.VALUE):
        """选中匹配的选项, value 为None或False时取消所有选中"""
        if value is None or value is False:
            for option in self.options:
                option.selected = False
            return
        for option in self.options:
            test_value = option.text if by is SelectBy.TEXT else option.value
            if test_value == value:
                option.selected = True

    def get_selected(self, by: SelectBy = SelectBy.VALUE) -> Optional[Any]:
        """返回第一个选中项的 value 或文字"""
        for option in self.options:
            if option.selected:
                return option.text if by is SelectBy.TEXT else option.value
        return None

    def get_selected_options(self) -> List[OptionElement]:
        return [option for option in self.options if option.selected]

    def render_select(self) -> str:
        attrs = self.render_id()
        if self.name:
            attrs += f' name="{self.name}"'
        if self.multiple:
            attrs += ' multiple="multiple"'
        if self.size > 1:
            attrs += f' size="{self.size}"'
        if self.disabled:
            attrs += ' disabled="disabled"'
        if self.tab_index:
            attrs += f' tabindex="{self.tab_index}"'
        attrs += self.render_css_class()
        if self.required:
            attrs += ' required="required"'
        return f'<select{attrs}>'

    def render_options(self) -> str:
        parts = []
        if self.default_text is not None:
            parts.append(OptionElement(text=self.default_text, value=self.default_value).render())
        for option in self.options:
            if self.auto_option_title is not None:
                option.title = option.text if self.auto_option_title is SelectBy.TEXT else option.value
            parts.append(option.render())
        return ''.join(parts)

    def render(self, options_only: bool = False) -> str:
        """options_only 为True时只渲染 option 元素"""
        if options_only:
            return self.render_options()
        element = f"{self.render_select()}{self.render_options()}</select>"
        return self.wrap_label(element)


class DivList(Html):
    """
    用 div 模拟的列表

    items 可以是文字, 也可以是 (href, text), 后者渲染为链接
    """

    def __init__(self, id: str, items: Iterable[Union[str, Sequence[str]]]):
        super().__init__()
        self.id = id
        self.items = list(items)
        self.label: Optional[str] = None

    def render(self) -> str:
        parts = [f'<div{self.render_id()}{self.render_css_class()}>']
        if self.label is not None:
            parts.append(f'<div>{self.label}</div>')
        for item in self.items:
            if isinstance(item, (list, tuple)):
                parts.append(f'<div><a href="{item[0]}">{item[1]}</a></div>')
            else:
                parts.append(f'<div>{item}</div>')
        parts.append('</div>')
        return ''.join(parts)
