"""Tests for Buffer reads, mutations and their contract checks."""

import pytest

from bufed import Buffer, BufCursor, ContractViolation


def test_new_buffer_empty():
    """An empty buffer has no lines and a zero-width virtual line."""
    buf = Buffer()
    assert buf.height() == 0
    assert buf.width(0) == 0


def test_virtual_line_width_is_zero():
    """The row one past the end is always 0 wide."""
    for lines in ([], ["abc"], ["123", "45", "678"]):
        buf = Buffer(lines)
        assert buf.width(buf.height()) == 0


def test_width_past_virtual_line_fails():
    buf = Buffer(["abc"])
    with pytest.raises(ContractViolation):
        buf.width(2)


def test_line_and_char_bounds():
    buf = Buffer(["ab", "c"])
    assert buf.line(1) == "c"
    assert buf.char(BufCursor(0, 1)) == "b"
    with pytest.raises(ContractViolation):
        buf.line(2)
    with pytest.raises(ContractViolation):
        buf.char(BufCursor(0, 2))
    with pytest.raises(ContractViolation):
        buf.char(BufCursor(2, 0))


def test_lines_must_not_contain_line_breaks():
    with pytest.raises(ContractViolation):
        Buffer(["a\nb"])


@pytest.mark.parametrize("line", ["x\ry", "x\r", "x\u2028y", "\x0c"])
def test_lines_must_not_contain_carriage_returns_or_other_breaks(line):
    with pytest.raises(ContractViolation):
        Buffer([line])


def test_from_text():
    """A trailing newline terminates the last line."""
    assert Buffer.from_text("123\n45\n678").lines() == ["123", "45", "678"]
    assert Buffer.from_text("a\nb\n").lines() == ["a", "b"]
    assert Buffer.from_text("a\r\n\r\nb").lines() == ["a", "", "b"]
    assert Buffer.from_text("a\rb").lines() == ["a", "b"]
    assert Buffer.from_text("").height() == 0


def test_lines_returns_a_copy():
    buf = Buffer(["a"])
    lines = buf.lines()
    lines.append("b")
    assert buf.height() == 1


def test_insert_at_contract():
    """Inserting more than one row or column past the end fails."""
    with pytest.raises(ContractViolation):
        Buffer().insert_at('a', BufCursor(1, 0))

    buf = Buffer()
    buf.insert_at('a', BufCursor(0, 0))
    with pytest.raises(ContractViolation):
        buf.insert_at('b', BufCursor(0, 2))

    # One column past the start of the virtual line
    with pytest.raises(ContractViolation):
        Buffer().insert_at('a', BufCursor(0, 1))


def test_insert_at_empty_buffer():
    """Each insert pushes previously inserted characters right."""
    buf = Buffer()
    cur = BufCursor()

    buf.insert_at('a', cur)
    assert buf.height() == 1
    assert buf.width(0) == 1
    assert buf.char(cur) == 'a'

    cur.col = 1
    buf.insert_at('b', cur)
    assert buf.height() == 1
    assert buf.width(0) == 2
    assert buf.char(cur) == 'b'

    buf.insert_at('c', cur)
    buf.insert_at('d', cur)
    buf.insert_at('e', cur)
    assert buf.line(0) == "aedcb"


def test_insert_at_end_of_line_then_read():
    buf = Buffer(["123", "45"])
    for row in range(buf.height()):
        width = buf.width(row)
        buf.insert_at('x', BufCursor(row, width))
        assert buf.width(row) == width + 1
        assert buf.char(BufCursor(row, width)) == 'x'


def test_insert_rejects_line_breaks():
    with pytest.raises(ContractViolation):
        Buffer(["a"]).insert_at('\n', BufCursor(0, 0))


def test_delete_before_contract():
    with pytest.raises(ContractViolation):
        Buffer().delete_before(BufCursor(0, 0))
    with pytest.raises(ContractViolation):
        Buffer(["a"]).delete_before(BufCursor(0, 0))
    with pytest.raises(ContractViolation):
        Buffer(["a"]).delete_before(BufCursor(0, 2))
    with pytest.raises(ContractViolation):
        Buffer(["a"]).delete_before(BufCursor(1, 1))


def test_delete_before():
    buf = Buffer()
    cur = BufCursor()
    buf.insert_at('a', cur)
    cur.col = 1
    buf.delete_before(cur)
    assert buf.width(0) == 0

    cur.col = 0
    buf.insert_at('b', cur)
    buf.insert_at('c', cur)
    buf.insert_at('d', cur)
    assert buf.line(0) == "dcb"
    cur.col = 1
    buf.delete_before(cur)
    assert buf.line(0) == "cb"
    cur.col = 2
    buf.delete_before(cur)
    buf.delete_before(BufCursor(0, 1))
    assert buf.width(0) == 0


def test_insert_then_delete_restores_width():
    buf = Buffer(["hello"])
    cur = BufCursor(0, 2)
    buf.insert_at('x', cur)
    buf.delete_before(BufCursor(0, 3))
    assert buf.line(0) == "hello"


def test_delete_at():
    buf = Buffer(["abc"])
    buf.delete_at(BufCursor(0, 1))
    assert buf.line(0) == "ac"
    with pytest.raises(ContractViolation):
        buf.delete_at(BufCursor(0, 2))
    with pytest.raises(ContractViolation):
        buf.delete_at(BufCursor(1, 0))


def test_merge_next_line_up():
    with pytest.raises(ContractViolation):
        Buffer().merge_next_line_up(BufCursor())
    with pytest.raises(ContractViolation):
        Buffer(["a"]).merge_next_line_up(BufCursor())

    buf = Buffer()
    cur = BufCursor()
    buf.insert_at('a', cur)
    cur.row = 1
    buf.insert_at('b', cur)
    cur.row = 0
    buf.merge_next_line_up(cur)
    assert buf.height() == 1
    assert buf.line(0) == "ab"


def test_break_line_at_contract():
    with pytest.raises(ContractViolation):
        Buffer().break_line_at(BufCursor(1, 0))
    with pytest.raises(ContractViolation):
        Buffer(["a"]).break_line_at(BufCursor(0, 2))
    # Column is checked before the append-a-line shortcut
    with pytest.raises(ContractViolation):
        Buffer().break_line_at(BufCursor(0, 1))


def test_break_line_at_virtual_line_appends():
    buf = Buffer()
    buf.break_line_at(BufCursor(0, 0))
    assert buf.lines() == [""]
    buf.break_line_at(BufCursor(0, 0))
    assert buf.lines() == ["", ""]
    buf.break_line_at(BufCursor(2, 0))
    assert buf.lines() == ["", "", ""]


def test_break_line_at():
    buf = Buffer(["ba"])
    buf.break_line_at(BufCursor(0, 1))
    assert buf.lines() == ["b", "a"]

    buf.merge_next_line_up(BufCursor(0, 0))
    buf.break_line_at(BufCursor(0, 2))
    assert buf.lines() == ["ba", ""]


def test_break_then_merge_restores_line():
    original = "split me here"
    for col in range(len(original) + 1):
        buf = Buffer(["before", original, "after"])
        buf.break_line_at(BufCursor(1, col))
        assert buf.height() == 4
        buf.merge_next_line_up(BufCursor(1, 0))
        assert buf.lines() == ["before", original, "after"]
