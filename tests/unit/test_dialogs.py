import pytest

from termkit.core.errors import InputCancelled
from termkit.core.keys import Key
from termkit.menu.types import MenuItem
from termkit.utils.cancellation import CancellationToken


@pytest.mark.parametrize(
    "script, expected",
    [
        (["y", Key.ENTER], True),
        (["N", Key.ENTER], False),
        ([Key.ESCAPE], None),
        (["maybe", Key.ENTER, "y", Key.ENTER], True),
    ],
)
def test_boolean_question(dialogs, keys, script, expected):
    keys.feed(*script)
    assert dialogs.boolean_question("Continue?") is expected


def test_boolean_question_default(dialogs, keys, screen):
    keys.feed(Key.ENTER)
    assert dialogs.boolean_question("Save?", default=False) is False
    assert screen.line(0) == "Save? [y|n|Esc] n"


def test_boolean_question_cancelled_by_token(dialogs, keys):
    token = CancellationToken()
    token.cancel()
    with pytest.raises(InputCancelled):
        dialogs.boolean_question("Continue?", cancel_token=token)


def test_confirm_overwrite(dialogs, keys, screen):
    keys.feed("y", Key.ENTER)
    assert dialogs.confirm_overwrite("out.json")
    assert "File already exists: out.json" in screen.text()

    keys.feed(Key.ESCAPE)
    assert not dialogs.confirm_overwrite("out.json")


def test_input_query(dialogs, keys):
    keys.feed("hello", Key.ENTER)
    assert dialogs.input_query("Name") == "hello"
    keys.feed("x", Key.ESCAPE)
    assert dialogs.input_query("Name") is None


def test_input_query2_with_default(dialogs, keys, screen):
    keys.feed(Key.ENTER)
    result = dialogs.input_query2("Name", "abc")
    assert result.text == "abc"
    assert not result.cancelled
    assert screen.line(0) == "Name (Esc to cancel):abc"


def test_input_password(dialogs, keys, screen):
    keys.feed("secret", Key.ENTER)
    assert dialogs.input_password("Password") == ("secret", False)
    assert screen.line(1) == "******"

    keys.feed(Key.ENTER)
    assert dialogs.input_password("Password") == (None, True)
    keys.feed("abc", Key.ESCAPE)
    assert dialogs.input_password("Password") == (None, True)


def test_select_item_with_text(dialogs, keys):
    keys.feed("2", Key.ENTER)
    assert dialogs.select_item_with_text("Pick", [("One", 1), ("Two", 2)]) == (True, 2)

    keys.feed(Key.ESCAPE)
    assert dialogs.select_item_with_text("Pick", [("One", 1)]) == (False, None)


def test_select_item_prefills_default(dialogs, keys, screen):
    keys.feed(Key.ENTER)
    assert dialogs.select_item(["a", "b", "c"], "Letter", "b", str.upper) == (True, "b")
    assert "  2 : B" in screen.text()
    assert "Esc : Cancel" in screen.text()


def test_select_menu_item_with_tags(dialogs, keys):
    keys.feed("1", Key.ENTER)
    items = [MenuItem("First", tag="f"), MenuItem("Second", tag="s")]
    assert dialogs.select_menu_item("Which", items) == (True, "f")


def test_build_menu_items_with_text():
    from termkit.menu.dialogs import Dialogs

    items = Dialogs.build_menu_items_with_text([1, 2], lambda n: None if n == 2 else f"#{n}")
    assert [(item.text, item.tag) for item in items] == [("#1", 1), ("", 2)]


def test_confirm_with_1_or_back(dialogs, keys):
    keys.feed("1", Key.ENTER)
    assert dialogs.confirm_with_1_or_back("Delete all")
    keys.feed(Key.ESCAPE)
    assert not dialogs.confirm_with_1_or_back("Delete all")


def test_confirm_with_enter_or_back(dialogs, keys, screen):
    keys.feed(Key.ENTER)
    assert dialogs.confirm_with_enter_or_back("Go on")
    assert screen.line(1) == " Go on"
    keys.feed(Key.ESCAPE)
    assert not dialogs.confirm_admin_restart()


def test_write_title(dialogs, screen):
    dialogs.write_title("Settings")
    assert screen.lines() == ["Settings", "========"]
    assert screen.position == (0, 3)


def test_write_status_colours(dialogs, screen):
    dialogs.write_status(True, "done")
    dialogs.write_status(False, "done", "failed")
    assert screen.lines() == ["done", "failed"]
    assert screen.style_at(0, 0).color.name == "bright_green"
    assert screen.style_at(0, 1).color.name == "bright_red"


def test_messages(dialogs, keys, screen):
    dialogs.error_message("bad", enter_to_continue=False)
    dialogs.warn_message("careful", enter_to_continue=False)
    keys.feed(Key.ENTER)
    dialogs.success_message("good")
    assert screen.style_at(0, 0).color.name == "bright_red"
    assert screen.style_at(0, 1).color.name == "yellow"
    assert "Hit <Enter> or <Esc> to continue." in screen.text()
    assert keys.remaining == 0
