from .base import Html, FormElement, LabelPosition
from .widgets import (
    CheckBox, RadioButton, RadioGroup, RadioLayout,
    OptionElement, SelectField, SelectBy, DivList
)

__all__ = [
    'Html',
    'FormElement',
    'LabelPosition',
    'CheckBox',
    'RadioButton',
    'RadioGroup',
    'RadioLayout',
    'OptionElement',
    'SelectField',
    'SelectBy',
    'DivList'
]
