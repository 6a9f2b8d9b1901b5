"""Tests for window coordinate translation and borrowing."""

import pytest

from bufed import ContractViolation, Position, RecordingScreen, Size, WindowManager
from bufed.screen import PutAtCall


def test_put_at_translates_to_screen_position():
    scr = RecordingScreen(rows=24, cols=80)
    wm = WindowManager(scr)
    wid = wm.create(Size(10, 10), Position(2, 4))
    with wm.borrow(wid) as win:
        win.put_at("abc", Position(0, 0))
        win.put_at("abc", Position(2, 3))
    assert scr.calls == [
        PutAtCall("abc", Position(2, 4)),
        PutAtCall("abc", Position(4, 7)),
    ]


def test_put_at_full_window_is_identity():
    scr = RecordingScreen(rows=24, cols=80)
    wm = WindowManager(scr)
    wid = wm.create_full()
    with wm.borrow(wid) as win:
        assert win.size == Size(24, 80)
        win.put_at("def", Position(2, 5))
    assert scr.calls == [PutAtCall("def", Position(2, 5))]


def test_blank_window():
    """One space per cell, row-major."""
    scr = RecordingScreen(rows=10, cols=10)
    wm = WindowManager(scr)
    wid = wm.create(Size(3, 2), Position(2, 4))
    with wm.borrow(wid) as win:
        win.blank()
    assert scr.calls == [
        PutAtCall(" ", Position(2, 4)),
        PutAtCall(" ", Position(2, 5)),
        PutAtCall(" ", Position(3, 4)),
        PutAtCall(" ", Position(3, 5)),
        PutAtCall(" ", Position(4, 4)),
        PutAtCall(" ", Position(4, 5)),
    ]


def test_bounds_checked_against_real_screen_size():
    """A window may claim more than the screen has; only real writes fail."""
    scr = RecordingScreen(rows=5, cols=5)
    wm = WindowManager(scr)
    wid = wm.create(Size(10, 10))
    with wm.borrow(wid) as win:
        win.put_at("x", Position(4, 4))
        with pytest.raises(ContractViolation):
            win.put_at("x", Position(5, 0))
        with pytest.raises(ContractViolation):
            win.put_at("x", Position(0, 5))


def test_screen_put_at_out_of_bounds():
    scr = RecordingScreen(rows=2, cols=3)
    with pytest.raises(ContractViolation):
        scr.put_at("x", Position(2, 0))
    with pytest.raises(ContractViolation):
        scr.put_at("x", Position(-1, 0))
    assert scr.calls == []


def test_only_one_window_borrowed_at_a_time():
    scr = RecordingScreen()
    wm = WindowManager(scr)
    top = wm.create(Size(1, 80))
    bottom = wm.create(Size(1, 80), Position(1, 0))
    with wm.borrow(top):
        with pytest.raises(ContractViolation):
            with wm.borrow(bottom):
                pass
    # Released at the end of the block
    with wm.borrow(bottom) as win:
        win.put_at("ok", Position(0, 0))
    assert scr.calls == [PutAtCall("ok", Position(1, 0))]


def test_borrow_released_after_exception():
    wm = WindowManager(RecordingScreen())
    wid = wm.create_full()
    with pytest.raises(RuntimeError):
        with wm.borrow(wid):
            raise RuntimeError("boom")
    with wm.borrow(wid):
        pass


def test_window_unusable_after_borrow_ends():
    wm = WindowManager(RecordingScreen())
    wid = wm.create_full()
    with wm.borrow(wid) as win:
        pass
    with pytest.raises(ContractViolation):
        win.put_at("x", Position(0, 0))


def test_create_full_follows_screen_size():
    scr = RecordingScreen(rows=24, cols=80)
    wm = WindowManager(scr)
    first = wm.create_full()
    scr.resize(10, 40)
    second = wm.create_full()
    assert wm.size_of(first) == Size(24, 80)
    assert wm.size_of(second) == Size(10, 40)


def test_reset_invalidates_handles():
    wm = WindowManager(RecordingScreen())
    wid = wm.create_full()
    wm.reset()
    with pytest.raises(ContractViolation):
        wm.region(wid)
    with pytest.raises(ContractViolation):
        with wm.borrow(wid):
            pass


def test_recording_screen_grid():
    scr = RecordingScreen(rows=2, cols=4)
    scr.put_at("hello", Position(0, 1))
    scr.put_at("x", Position(1, 0))
    scr.flush()
    assert scr.text() == ["hell", "x"]
    assert scr.flushes == 1
