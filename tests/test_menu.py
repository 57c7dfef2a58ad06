import pytest

from dynmenu.config import Config
from dynmenu.matching import Item
from dynmenu.menu import MAX_TEXT_BYTES, Action, Menu


def _width(s):
    return 10 * len(s)


def make_menu(items=(), lines=0, **attrs):
    menu = Menu(list(items), Config(lines=lines), _width)
    for name, value in attrs.items():
        setattr(menu, name, value)
    menu.match()
    return menu


def type_text(menu, text):
    for char in text:
        menu.handle_key(char)


def texts(items):
    return [item.text for item in items]


def test_strings_become_items():
    menu = make_menu(["one", "two"])
    assert texts(menu.items) == ["one", "two"]
    assert texts(menu.matches) == ["one", "two"]


def test_typing_filters_matches():
    menu = make_menu(["apple", "banana", "apricot"])
    assert menu.handle_key("a") is Action.REDRAW
    menu.handle_key("p")
    assert menu.text == "ap"
    assert menu.cursor == len("ap")
    assert texts(menu.matches) == ["apple", "apricot"]


def test_control_character_not_inserted():
    menu = make_menu()
    menu.handle_key("\x01")
    assert menu.text == ""


def test_backspace_and_delete_at_limits():
    menu = make_menu()
    assert menu.handle_key("BackSpace") is Action.NONE
    type_text(menu, "ab")
    assert menu.handle_key("Delete") is Action.NONE


def test_backspace_removes_before_cursor():
    menu = make_menu()
    type_text(menu, "abc")
    menu.handle_key("Left")
    menu.handle_key("BackSpace")
    assert menu.text == "ac"
    assert menu.text[menu.cursor:] == "c"


def test_delete_removes_at_cursor():
    menu = make_menu()
    type_text(menu, "abc")
    menu.handle_key("Home")
    menu.handle_key("Delete")
    assert menu.text == "bc"
    assert menu.cursor == 0


def test_ctrl_u_deletes_to_start():
    menu = make_menu()
    type_text(menu, "hello")
    menu.handle_key("Left")
    menu.handle_key("Left")
    menu.handle_key("u", ctrl=True)
    assert menu.text == "lo"
    assert menu.cursor == 0


def test_ctrl_k_deletes_to_end():
    menu = make_menu()
    type_text(menu, "hello")
    menu.handle_key("a", ctrl=True)
    menu.handle_key("Right")
    menu.handle_key("Right")
    menu.handle_key("k", ctrl=True)
    assert menu.text == "he"


def test_ctrl_w_deletes_words():
    menu = make_menu()
    type_text(menu, "foo bar")
    menu.handle_key("w", ctrl=True)
    assert menu.text == "foo "
    menu.handle_key("w", ctrl=True)
    assert menu.text == ""


def test_move_word_edge():
    menu = make_menu()
    type_text(menu, "foo bar baz")
    menu.move_word_edge(-1)
    assert menu.text[menu.cursor:] == "baz"
    menu.move_word_edge(-1)
    assert menu.text[menu.cursor:] == "bar baz"
    menu.move_word_edge(1)
    assert menu.text[menu.cursor:] == " baz"


def test_alt_word_moves():
    menu = make_menu()
    type_text(menu, "foo bar")
    assert menu.handle_key("b", alt=True) is Action.REDRAW
    assert menu.text[menu.cursor:] == "bar"
    menu.handle_key("f", alt=True)
    assert menu.cursor == len(menu.text)
    assert menu.handle_key("z", alt=True) is Action.NONE


def test_ctrl_arrows_move_by_word():
    menu = make_menu()
    type_text(menu, "foo bar")
    menu.handle_key("Left", ctrl=True)
    assert menu.text[menu.cursor:] == "bar"


def test_tab_completes_selection():
    menu = make_menu(["alpha", "beta"])
    menu.handle_key("b")
    menu.handle_key("Tab")
    assert menu.text == "beta"
    assert menu.cursor == len("beta")


def test_tab_without_selection():
    menu = make_menu([])
    assert menu.handle_key("Tab") is Action.NONE


def test_return_selects_item():
    menu = make_menu(["alpha", "beta"])
    type_text(menu, "be")
    assert menu.handle_key("Return") is Action.SELECT
    assert menu.output == "beta"


def test_shift_return_outputs_text():
    menu = make_menu(["alpha", "beta"])
    type_text(menu, "be")
    assert menu.handle_key("Return", shift=True) is Action.SELECT
    assert menu.output == "be"


def test_ctrl_return_outputs_and_marks():
    menu = make_menu(["alpha", "beta"])
    assert menu.handle_key("Return", ctrl=True) is Action.OUTPUT
    assert menu.output == "alpha"
    assert menu.items[0].out is True
    assert menu.items[1].out is False


def test_ctrl_j_selects():
    menu = make_menu(["alpha"])
    assert menu.handle_key("j", ctrl=True) is Action.SELECT
    assert menu.output == "alpha"


@pytest.mark.parametrize("key, ctrl", [("Escape", False), ("c", True), ("g", True), ("[", True)])
def test_cancel_keys(key, ctrl):
    menu = make_menu(["alpha"])
    assert menu.handle_key(key, ctrl=ctrl) is Action.CANCEL


def test_unmapped_ctrl_key_does_nothing():
    menu = make_menu()
    assert menu.handle_key("z", ctrl=True) is Action.NONE
    assert menu.text == ""


def test_paste_requests():
    menu = make_menu()
    assert menu.handle_key("y", ctrl=True) is Action.PASTE_PRIMARY
    assert menu.handle_key("Y", ctrl=True, shift=True) is Action.PASTE_CLIPBOARD


def test_lines_clamped_to_item_count():
    menu = make_menu(["a", "b", "c"], lines=10)
    assert menu.lines == len(menu.items)


def test_vertical_paging_with_arrows():
    menu = make_menu("abcde", lines=2)
    assert texts(menu.visible_items()) == ["a", "b"]
    menu.handle_key("Down")
    assert menu.selected.text == "b"
    menu.handle_key("Down")
    assert texts(menu.visible_items()) == ["c", "d"]
    menu.handle_key("Up")
    assert menu.selected.text == "b"
    assert texts(menu.visible_items()) == ["a", "b"]


def test_vertical_left_at_start_does_nothing():
    menu = make_menu("abc", lines=2)
    assert menu.handle_key("Left") is Action.NONE
    assert menu.handle_key("Right") is Action.NONE


def test_next_and_prior_pages():
    menu = make_menu("abcde", lines=2)
    menu.handle_key("Next")
    assert menu.selected.text == "c"
    assert texts(menu.visible_items()) == ["c", "d"]
    menu.handle_key("Prior")
    assert menu.selected.text == "a"
    assert texts(menu.visible_items()) == ["a", "b"]


def test_end_and_home():
    menu = make_menu("abcde", lines=2)
    menu.handle_key("End")
    assert menu.selected.text == "e"
    assert texts(menu.visible_items()) == ["d", "e"]
    assert menu.handle_key("Next") is Action.NONE
    menu.handle_key("Home")
    assert menu.selected.text == "a"
    assert texts(menu.visible_items()) == ["a", "b"]


def test_horizontal_right_moves_selection():
    menu = make_menu(["a", "b", "c"], width=400)
    menu.handle_key("Right")
    assert menu.selected.text == "b"
    menu.handle_key("Left")
    assert menu.selected.text == "a"


def test_horizontal_page_fits_width():
    items = [f"item{n}" for n in range(20)]
    menu = make_menu(items, width=300)
    available = menu.width - (
        menu.prompt_width + menu.input_width + _width("<") + _width(">")
    )
    visible = menu.visible_items()
    used = sum(min(_width(i.text), available) for i in visible)
    assert visible
    assert used <= available
    assert used + _width(menu.matches[menu.next_page].text) > available


def test_case_insensitive_attribute():
    menu = make_menu(["Apple"], case_insensitive=True)
    type_text(menu, "app")
    assert texts(menu.matches) == ["Apple"]


def test_text_length_limit():
    menu = make_menu()
    menu.insert_text("x" * MAX_TEXT_BYTES)
    menu.insert_text("y")
    assert menu.text == "x" * MAX_TEXT_BYTES


def test_items_passed_as_item_objects_are_kept():
    item = Item("keep")
    menu = make_menu([item])
    assert menu.matches[0] is item