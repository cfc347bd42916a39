"""The layout file format.

A layout is a YAML document with four top-level keys:

    bounds: { x: 0, y: 0, width: 360, height: 210 }
    views:
        base:
            - "q w e r t y u i o p"
            - "Shift_L   z x c v b n m  BackSpace"
    buttons:
        Shift_L:
            action:
                locking: { lock_view: "upper", unlock_view: "base" }
            outline: "altline"
            icon: "key-shift"
    outlines:
        default: { bounds: { x: 0, y: 0, width: 37, height: 52 } }

Every struct forbids unknown fields and every field without a default is required, so a document that drifts
from this schema fails when it is loaded rather than when it is used.
"""
from __future__ import annotations

import pathlib
import re
import typing

import msgspec
import msgspec.yaml

from . import resources
from .commontypes import Bounds, LoadError


# ids may contain non-ASCII whitespace such as U+00A0
ROW_SEPARATOR = re.compile(r"[ \t\n\r\f]+")


def split_row(row: str) -> list[str]:
    return [name for name in ROW_SEPARATOR.split(row) if name]


class DataError(LoadError):
    pass


class LayoutFileMissing(DataError):
    pass


class LayoutIOError(DataError):
    pass


class LayoutSyntaxError(DataError):
    pass


class MissingResource(LoadError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Missing resource {name}")


class BadResource(LoadError):
    pass


class BadKeymap(LoadError):
    pass


class Outline(msgspec.Struct, frozen=True, forbid_unknown_fields=True):
    bounds: Bounds


class Locking(msgspec.Struct, frozen=True, forbid_unknown_fields=True):
    lock_view: str
    unlock_view: str


class ViewAction(msgspec.Struct, frozen=True, forbid_unknown_fields=True):
    set_view: typing.Optional[str] = None
    locking: typing.Optional[Locking] = None

    def __post_init__(self):
        if (self.set_view is None) == (self.locking is None):
            raise ValueError("action must have exactly one of `set_view`, `locking`")


ShowPrefs = typing.Literal["show_prefs"]
ActionMeta = ShowPrefs | ViewAction


class ButtonMeta(msgspec.Struct, frozen=True, forbid_unknown_fields=True):
    # action, keysym and text conflict with each other
    action: typing.Optional[ActionMeta] = None
    keysym: typing.Optional[str] = None
    # derived from the button id when nothing else is present
    text: typing.Optional[str] = None
    label: typing.Optional[str] = None
    icon: typing.Optional[str] = None
    # "default" when absent
    outline: typing.Optional[str] = None


class LayoutDocument(msgspec.Struct, frozen=True, forbid_unknown_fields=True):
    bounds: Bounds
    views: dict[str, list[str]]
    outlines: dict[str, Outline]
    buttons: dict[str, typing.Optional[ButtonMeta]] = {}

    def button_meta(self, name: str) -> ButtonMeta:
        meta = self.buttons.get(name)
        return meta if meta is not None else ButtonMeta()

    def button_names(self) -> set[str]:
        return {name for rows in self.views.values() for row in rows for name in split_row(row)}

    @classmethod
    def decode(cls, data: str | bytes) -> LayoutDocument:
        return msgspec.yaml.decode(data, type=cls)

    @classmethod
    def from_file(cls, path: pathlib.Path) -> LayoutDocument:
        try:
            data = path.read_bytes()
        except FileNotFoundError as exc:
            raise LayoutFileMissing(f"Missing: {exc}") from exc
        except OSError as exc:
            raise LayoutIOError(f"IO: {exc}") from exc
        try:
            return cls.decode(data)
        except msgspec.DecodeError as exc:
            raise LayoutSyntaxError(f"YAML: {exc}") from exc

    @classmethod
    def from_resource(cls, name: str) -> LayoutDocument:
        data = resources.get_keyboard(name)
        if data is None:
            raise MissingResource(name)
        try:
            return cls.decode(data)
        except msgspec.DecodeError as exc:
            raise BadResource(f"Bad resource {name}: {exc}") from exc
