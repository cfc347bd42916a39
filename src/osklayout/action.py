import typing

import msgspec


class SetLevel(msgspec.Struct, frozen=True, tag=True):
    view: str


class LockLevel(msgspec.Struct, frozen=True, tag=True):
    lock: str
    unlock: str


class ShowPreferences(msgspec.Struct, frozen=True, tag=True):
    pass


class Submit(msgspec.Struct, frozen=True, tag=True):
    # UTF-8 without NUL bytes, or None when the text could not be represented
    text: typing.Optional[bytes]
    keys: tuple[str, ...] = ()


Action = SetLevel | LockLevel | ShowPreferences | Submit


class Text(msgspec.Struct, frozen=True, tag=True):
    text: str


class IconName(msgspec.Struct, frozen=True, tag=True):
    name: str


Label = Text | IconName


class Symbol(msgspec.Struct, frozen=True):
    action: Action
    label: Label
    tooltip: typing.Optional[str] = None
