# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
import gc
import logging
import weakref

import pytest

from osklayout import boundary
from osklayout.action import IconName, Submit, Symbol, Text
from osklayout.keystate import BorrowError, KeyState, KeyStateCell


@pytest.fixture
def key():
    handle = boundary.key_new(42)
    yield handle
    boundary.key_free(handle)


def test_new_key(key):
    assert boundary.key_get_keycode(key) == 42
    assert not boundary.key_is_pressed(key)
    assert not boundary.key_is_locked(key)
    assert boundary.key_get_symbol(key) is None


def test_flags(key):
    boundary.key_set_pressed(key, 1)
    boundary.key_set_locked(key, True)
    assert boundary.key_is_pressed(key)
    assert boundary.key_is_locked(key)
    boundary.key_set_pressed(key, 0)
    assert not boundary.key_is_pressed(key)


def test_keycode(key):
    boundary.key_set_keycode(key, 17)
    assert boundary.key_get_keycode(key) == 17


def test_add_symbol(key):
    boundary.key_add_symbol(key, "symbol", "a", 0x61, "A", None, "letter a")
    assert boundary.key_get_symbol(key) == Symbol(action=Submit(text=b"a"), label=Text("A"), tooltip="letter a")


def test_icon_wins_over_label(key):
    boundary.key_add_symbol(key, "symbol", "", 0, "A", "key-shift", None)
    symbol = boundary.key_get_symbol(key)
    assert symbol.label == IconName("key-shift")
    assert symbol.action == Submit(text=None)


def test_symbol_attached_once(key, caplog: pytest.LogCaptureFixture):
    boundary.key_add_symbol(key, "symbol", "a", 0x61, "a", None, None)
    with caplog.at_level(logging.WARNING, logger="osklayout.boundary"):
        boundary.key_add_symbol(key, "symbol", "b", 0x62, "b", None, None)
    assert "already has a symbol defined" in caplog.text
    assert boundary.key_get_symbol(key).action == Submit(text=b"a")


def test_unsupported_element(key):
    with pytest.raises(boundary.BoundaryError):
        boundary.key_add_symbol(key, "keysym", "a", 0x61, "a", None, None)


def test_keymap_entry(key):
    assert boundary.key_to_keymap_entry("AC01", key) == "        key <AC01> { [ ] };\n"
    boundary.key_add_symbol(key, "symbol", "a", 0x61, "a", None, None)
    assert boundary.key_to_keymap_entry("AC01", key) == "        key <AC01> { [ a ] };\n"


def test_double_free():
    handle = boundary.key_new(9)
    boundary.key_free(handle)
    with pytest.raises(boundary.BoundaryError):
        boundary.key_free(handle)
    with pytest.raises(boundary.BoundaryError):
        boundary.key_is_pressed(handle)


def test_export_counts_references():
    cell = KeyStateCell(KeyState(action=Submit(text=b"a", keys=("a",)), keycodes=[9]))
    before = boundary.live_handle_count()
    first = boundary.export_key(cell)
    second = boundary.export_key(cell)
    assert cell.boundary_refs == 2
    assert boundary.live_handle_count() == before + 2
    boundary.key_set_pressed(first, True)
    assert boundary.key_is_pressed(second)
    boundary.key_free(first)
    boundary.key_free(second)
    assert cell.boundary_refs == 0
    assert boundary.live_handle_count() == before


def test_boundary_keeps_cell_alive():
    cell = KeyStateCell(KeyState(action=Submit(text=None)))
    ref = weakref.ref(cell)
    handle = boundary.export_key(cell)
    del cell
    gc.collect()
    assert ref() is not None
    boundary.key_free(handle)
    del handle
    gc.collect()
    assert ref() is None


def test_mutation_during_mutation_is_fatal(key):
    with boundary._cell(key).borrow_mut():
        with pytest.raises(BorrowError):
            boundary.key_set_pressed(key, True)
