"""Runtime key state shared between buttons, the input emitter and C callers.

One KeyStateCell exists per distinct button id. Every Button with that id holds the same cell, and C code can hold
it too through osklayout.boundary. Access is checked while the program runs: any number of readers, or exactly one
writer. Breaking that rule raises BorrowError, which is a programming error and is never caught by this package.
"""
from __future__ import annotations

import contextlib
import typing

import msgspec
import msgspec.structs

from .action import Action, Submit, Symbol


class KeyState(msgspec.Struct):
    action: Action
    keycodes: list[int] = []
    pressed: bool = False
    locked: bool = False
    # attached at most once, by callers that build keys one by one
    symbol: typing.Optional[Symbol] = None

    @classmethod
    def for_keycode(cls, keycode: int):
        return cls(action=Submit(text=None), keycodes=[keycode])


class BorrowError(RuntimeError):
    pass


class KeyStateCell:
    __slots__ = ("_value", "_readers", "_writing", "boundary_refs", "__weakref__")

    def __init__(self, state: KeyState):
        self._value = state
        self._readers = 0
        self._writing = False
        # handles currently held by C code, see osklayout.boundary
        self.boundary_refs = 0

    @contextlib.contextmanager
    def borrow(self) -> typing.Iterator[KeyState]:
        if self._writing:
            raise BorrowError("KeyState already mutably borrowed")
        self._readers += 1
        try:
            yield self._value
        finally:
            self._readers -= 1

    @contextlib.contextmanager
    def borrow_mut(self) -> typing.Iterator[KeyState]:
        if self._writing:
            raise BorrowError("KeyState already mutably borrowed")
        if self._readers:
            raise BorrowError("KeyState already borrowed")
        self._writing = True
        try:
            yield self._value
        finally:
            self._writing = False

    def snapshot(self) -> KeyState:
        with self.borrow() as state:
            return msgspec.structs.replace(state, keycodes=list(state.keycodes))

    def __eq__(self, other):
        if not isinstance(other, KeyStateCell):
            return NotImplemented
        if other is self:
            return True
        return self.snapshot() == other.snapshot()

    __hash__ = None

    def __repr__(self):
        if self._writing:
            return f"KeyStateCell(<borrowed>, boundary_refs={self.boundary_refs})"
        return f"KeyStateCell({self._value!r}, boundary_refs={self.boundary_refs})"
