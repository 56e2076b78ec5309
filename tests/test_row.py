"""Tests for row rendering and the column map."""

import pytest

from kisyu.row import Row, render_text, is_wide


def test_single_tab_renders_four_spaces():
    """A lone tab fills the first tab stop."""
    row = Row("\t")
    assert row.render == "    "
    assert row.columns == [0, 4]


def test_tab_between_characters():
    """'a\\tb' renders a, three spaces, b."""
    row = Row("a\tb")
    assert row.render == "a   b"
    assert row.columns == [0, 1, 4, 5]


def test_tab_at_stop_takes_full_width():
    """A tab starting exactly on a stop still advances a whole stop."""
    row = Row("abcd\tx")
    assert row.render == "abcd    x"
    assert row.columns == [0, 1, 2, 3, 4, 8, 9]


def test_wide_characters_get_padding_cell():
    """Multi-byte code points take two cells: glyph plus padding."""
    row = Row("日本")
    assert row.render == "日 本 "
    assert row.columns == [0, 2, 4]


def test_multibyte_latin_counts_as_wide():
    """The width test is byte-based, so 'é' is also two cells."""
    assert is_wide("é")
    assert not is_wide("e")
    assert Row("é").columns == [0, 2]


def test_tab_after_wide_character():
    """Tab stops are measured in rendered cells."""
    rendering = render_text("日\t")
    assert rendering.cells == "日   "
    assert rendering.columns == [0, 2, 4]


@pytest.mark.parametrize("text", ["", "a", "\t\t", "a\tb\tc", "日本語\tx", "mixé\t日"])
def test_column_map_invariants(text):
    """The column map has one entry per index plus the end, non-decreasing."""
    row = Row(text)
    columns = row.columns
    assert len(columns) == len(text) + 1
    assert columns[0] == 0
    assert all(a <= b for a, b in zip(columns, columns[1:]))
    assert columns[-1] == len(row.render) == row.width


def test_new_row_is_dirty():
    row = Row("abc")
    assert row.dirty
    row.update_render()
    assert not row.dirty


def test_render_is_cached_while_clean():
    """Rendering twice without a mutation returns the same objects."""
    row = Row("a\tb")
    first = row.update_render()
    second = row.update_render()
    assert first is second
    assert row.render is first.cells


def test_insert_marks_dirty_and_rerenders():
    row = Row("ac")
    row.update_render()
    row.insert_rune(1, "b")
    assert row.dirty
    assert row.text == "abc"
    assert row.render == "abc"


def test_insert_at_end_and_start():
    row = Row("b")
    row.insert_rune(1, "c")
    row.insert_rune(0, "a")
    assert row.text == "abc"


def test_insert_out_of_range_is_ignored():
    row = Row("ab")
    row.update_render()
    row.insert_rune(5, "x")
    row.insert_rune(-1, "x")
    assert row.text == "ab"
    assert not row.dirty


def test_delete_removes_character_before_column():
    row = Row("abc")
    row.delete_rune(2)
    assert row.text == "ac"
    assert row.dirty


def test_delete_at_column_zero_removes_last():
    row = Row("abc")
    row.delete_rune(0)
    assert row.text == "ab"


def test_delete_on_empty_row_or_past_end_is_noop():
    row = Row("")
    row.delete_rune(0)
    assert row.text == ""
    row = Row("ab")
    row.delete_rune(3)
    assert row.text == "ab"
