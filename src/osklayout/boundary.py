"""Key state handles for C callers.

A handle is a `void *` made with ffi.new_handle. It stays valid from the call that returned it (key_new or
export_key) until the matching key_free, and each live handle counts as one reference in the cell's
boundary_refs. C code must free each handle exactly once and must not run two mutating calls on the same key at
the same time; the cell raises BorrowError if it does.
"""
from __future__ import annotations

import logging
import typing

import cffi

from .action import IconName, Label, Submit, Symbol, Text
from .commontypes import OskLayoutError
from .keystate import KeyState, KeyStateCell

logger = logging.getLogger(__name__)

ffi = cffi.FFI()

SYMBOL_ELEMENT = "symbol"

# handle address -> handle; the cdata must stay alive for ffi.from_handle to work
_live_handles: dict[int, typing.Any] = {}


class BoundaryError(OskLayoutError):
    pass


def _address(handle) -> int:
    return int(ffi.cast("uintptr_t", handle))


def export_key(cell: KeyStateCell):
    handle = ffi.new_handle(cell)
    _live_handles[_address(handle)] = handle
    cell.boundary_refs += 1
    return handle


def _cell(handle) -> KeyStateCell:
    if handle == ffi.NULL or _address(handle) not in _live_handles:
        raise BoundaryError(f"Unknown or already freed key handle {handle!r}")
    return ffi.from_handle(handle)


def key_new(keycode: int):
    return export_key(KeyStateCell(KeyState.for_keycode(keycode)))


def key_free(handle) -> None:
    cell = _cell(handle)
    del _live_handles[_address(handle)]
    cell.boundary_refs -= 1


def live_handle_count() -> int:
    return len(_live_handles)


def key_is_pressed(handle) -> bool:
    return _cell(handle).snapshot().pressed


def key_set_pressed(handle, pressed: bool) -> None:
    with _cell(handle).borrow_mut() as state:
        state.pressed = bool(pressed)


def key_is_locked(handle) -> bool:
    return _cell(handle).snapshot().locked


def key_set_locked(handle, locked: bool) -> None:
    with _cell(handle).borrow_mut() as state:
        state.locked = bool(locked)


def key_get_keycode(handle) -> int:
    keycodes = _cell(handle).snapshot().keycodes
    return keycodes[0] if keycodes else 0


def key_set_keycode(handle, code: int) -> None:
    with _cell(handle).borrow_mut() as state:
        state.keycodes = [code]


def _make_label(label: typing.Optional[str], icon: typing.Optional[str]) -> Label:
    # only read the label if there's no icon
    if icon is not None:
        return IconName(icon)
    if label is None:
        logger.warning("Label missing")
        return Text(" ")
    return Text(label)


def key_add_symbol(
    handle,
    element: str,
    text: typing.Optional[str],
    keyval: int,
    label: typing.Optional[str],
    icon: typing.Optional[str],
    tooltip: typing.Optional[str],
) -> None:
    if element != SYMBOL_ELEMENT:
        raise BoundaryError(f"unsupported element type {element!r}")
    encoded = text.encode("utf-8") if text else None
    symbol = Symbol(action=Submit(text=encoded), label=_make_label(label, icon), tooltip=tooltip)
    with _cell(handle).borrow_mut() as state:
        if state.symbol is not None:
            logger.warning("Key %r already has a symbol defined", text)
            return
        state.symbol = symbol
    logger.debug("Attached symbol %r (keyval %#x)", symbol, keyval)


def key_get_symbol(handle) -> typing.Optional[Symbol]:
    with _cell(handle).borrow() as state:
        return state.symbol


def key_to_keymap_entry(key_name: str, handle) -> str:
    symbol = key_get_symbol(handle)
    symbol_name = None
    if symbol is None:
        logger.warning("Key %s has no symbol", key_name)
    else:
        match symbol.action:
            case Submit(text=bytes(text)):
                symbol_name = text.decode("utf-8")
    inner = f"[ {symbol_name} ]" if symbol_name is not None else "[ ]"
    return f"        key <{key_name}> {{ {inner} }};\n"
