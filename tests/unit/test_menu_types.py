import pytest

from termkit.core.errors import ConfigError
from termkit.menu.builders import MenuItems, checkbox_text
from termkit.menu.types import ItemState, MenuItem, MenuSeparator, MenuSettings, SelectableTag


def test_item_state_from_evaluator_result():
    assert ItemState.from_result(None) is ItemState.HIDDEN
    assert ItemState.from_result(False) is ItemState.DISABLED
    assert ItemState.from_result(True) is ItemState.ENABLED
    assert not ItemState.HIDDEN.visible
    assert ItemState.DISABLED.visible and not ItemState.DISABLED.enabled


def test_item_without_evaluator_is_enabled():
    assert MenuItem("a").evaluate() is ItemState.ENABLED


def test_items_compare_by_identity():
    assert MenuItem("same") != MenuItem("same")
    item = MenuItem("same")
    assert item in [item]


@pytest.mark.parametrize("key", ["ESC", "Esc", "EsC", "esc"])
def test_escape_key_is_case_insensitive(key):
    assert MenuItem("Cancel", key=key).is_escape()


def test_separator_is_not_selectable():
    separator = MenuSeparator("----")
    assert not separator.selectable
    assert separator.key is None
    assert MenuItem("x").selectable


def test_with_max_item_count_leaves_original():
    settings = MenuSettings(indent="  ")
    capped = settings.with_max_item_count(10)
    assert capped.max_item_count == 10
    assert capped.indent == "  "
    assert settings.max_item_count == 1001


def test_settings_from_mapping():
    settings = MenuSettings.from_mapping({"start_index": 0, "select_blank_line": False})
    assert settings.start_index == 0
    assert not settings.select_blank_line
    assert MenuSettings.from_mapping(None) == MenuSettings()


@pytest.mark.parametrize(
    "data",
    [
        {"colour": "red"},
        {"start_index": "1"},
        {"start_index": True},
        {"indent": 2},
        {"max_item_count": 0},
    ],
)
def test_settings_from_mapping_rejects_bad_values(data):
    with pytest.raises(ConfigError):
        MenuSettings.from_mapping(data)


def test_checkbox_text():
    assert checkbox_text(True, "On") == "[X] On"
    assert checkbox_text(False, "Off") == "[ ] Off"
    assert checkbox_text(None, "Maybe") == "[?] Maybe"


def test_menu_items_add_and_separator():
    items = MenuItems()
    first = items.add("Run", key="r", admin_required=True, tag=1)
    separator = items.add_separator("--")
    assert items == [first, separator]
    assert first.admin_required and first.tag == 1
    assert isinstance(separator, MenuSeparator)


def test_add_checkbox_reports_flipped_state():
    changes = []
    items = MenuItems()
    item = items.add_checkbox("c", "Colours", True, changes.append)
    assert item.text == "[X] Colours"
    item.action()
    assert changes == [False]


def test_add_checkbox_nullable_cycles():
    changes = []
    items = MenuItems()
    for state in (True, None, False):
        items.add_checkbox_nullable(None, "Strict", state, changes.append).action()
    assert changes == [None, False, True]
    assert [item.text for item in items] == ["[X] Strict", "[?] Strict", "[ ] Strict"]


def test_add_selectable_toggles_tag_and_text():
    tag = SelectableTag(False, "de")
    items = MenuItems()
    item = items.add_selectable(None, "German", tag)
    item.action()
    assert tag.selected
    assert item.text == "[X] German"
    assert item.tag is tag


def test_add_selectable_respects_should_flip():
    tag = SelectableTag(True, "en")
    item = MenuItems().add_selectable(None, "English", tag, should_flip=lambda t: False)
    item.action()
    assert tag.selected
    assert item.text == "[X] English"
