import pytest

from robyn_website.renderers import (
    CheckBox, DivList, LabelPosition, RadioGroup, RadioLayout, SelectBy, SelectField,
)


def test_checkbox():
    checkbox = CheckBox('newsletter', '1')
    checkbox.checked = True
    checkbox.add_css_class('chk big', 'chk')
    checkbox.set_label('Newsletter', LabelPosition.AFTER)
    assert checkbox.render() == (
        '<input id="newsletter" name="newsletter" type="checkbox" value="1" checked="checked" class="chk big">'
        '<label for="newsletter" class="chk big">Newsletter</label>'
    )
    checkbox.remove_label()
    assert str(checkbox).endswith('class="chk big">')


def test_radio_group():
    group = RadioGroup('size', ['s', 'm'])
    group.set_labels(['Small', 'Medium'])
    group.set_checked('m')
    group.set_tab_indices([3, 4])
    html = group.render(RadioLayout.VERTICAL)
    assert html == (
        '<div class="radiogroup layout-vertical">'
        '<label for="size1">Small</label>'
        '<input id="size1" name="size" type="radio" value="s" tabindex="3">'
        '<label for="size2">Medium</label>'
        '<input id="size2" name="size" type="radio" value="m" checked="checked" tabindex="4">'
        '</div>'
    )


def test_radio_group_invalid_layout():
    with pytest.raises(ValueError):
        RadioGroup('size', ['s']).render('diagonal')


def test_select_with_auto_values():
    select = SelectField(['red', 'green'], id='color', language='en')
    select.set_selected(1)
    assert select.get_selected() == 1
    assert select.get_selected(SelectBy.TEXT) == 'green'
    assert select.render() == (
        '<select id="color" name="color">'
        '<option value="">Please select</option>'
        '<option value="0">red</option>'
        '<option value="1" selected="selected">green</option>'
        '</select>'
    )


def test_select_with_value_pairs():
    select = SelectField([('ch', 'Schweiz'), ('de', 'Deutschland')])
    select.default_text = None
    select.auto_option_title = SelectBy.TEXT
    select.set_selected('Schweiz', SelectBy.TEXT)
    assert [option.value for option in select.get_selected_options()] == ['ch']
    assert select.render(options_only=True) == (
        '<option value="ch" selected="selected" title="Schweiz">Schweiz</option>'
        '<option value="de" title="Deutschland">Deutschland</option>'
    )
    select.set_selected(None)
    assert select.get_selected() is None


def test_select_attributes():
    select = SelectField(['a'], id='list')
    select.multiple = True
    select.size = 3
    select.required = True
    select.set_label('List')
    assert select.render().startswith(
        '<label for="list">List</label><select id="list" name="list" multiple="multiple" size="3" required="required">'
        '<option value="">Bitte auswählen</option>'
    )


def test_div_list():
    div_list = DivList('links', ['plain', ('/a.html', 'A')])
    div_list.label = 'Links'
    div_list.add_css_class('list')
    assert div_list.render() == (
        '<div id="links" class="list"><div>Links</div><div>plain</div>'
        '<div><a href="/a.html">A</a></div></div>'
    )
