# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
"""Turns button metadata from a layout document into canonical actions.

Nothing in here rejects a layout. Conflicting fields, views that do not exist, unknown keysym names and text
that cannot be submitted are all reported to the warning handler and replaced with a usable default.
"""
from __future__ import annotations

import collections.abc
import dataclasses
import typing

from . import symbols
from .action import Action, LockLevel, SetLevel, ShowPreferences, Submit
from .commontypes import DEFAULT_VIEW_NAME
from .schema import ButtonMeta, ViewAction

if typing.TYPE_CHECKING:
    from .reporting import WarningHandler
    from .schema import ActionMeta


@dataclasses.dataclass(frozen=True)
class ActionData:
    action: ActionMeta


@dataclasses.dataclass(frozen=True)
class KeysymData:
    keysym: str


@dataclasses.dataclass(frozen=True)
class TextData:
    text: str


SubmitData = ActionData | KeysymData | TextData


def classify(meta: ButtonMeta, name: str, warning_handler: WarningHandler) -> SubmitData:
    match (meta.action, meta.keysym, meta.text):
        case (action, None, None) if action is not None:
            return ActionData(action)
        case (None, keysym, None) if keysym is not None:
            return KeysymData(keysym)
        case (None, None, text) if text is not None:
            return TextData(text)
        case (None, None, None):
            return TextData(name)
        case _:
            warning_handler.handle(f"Button {name} has more than one of (action, keysym, text)")
            return TextData("")


def filter_view_name(
    button_name: str,
    view_name: str,
    view_names: collections.abc.Container[str],
    warning_handler: WarningHandler,
) -> str:
    if view_name in view_names:
        return view_name
    warning_handler.handle(f"Button {button_name} switches to missing view {view_name}")
    return DEFAULT_VIEW_NAME


def encode_text(text: str, warning_handler: WarningHandler) -> typing.Optional[bytes]:
    try:
        encoded = text.encode("utf-8")
    except UnicodeEncodeError as exc:
        warning_handler.handle(f"Text {text!r} contains problems: {exc}")
        return None
    nul_position = encoded.find(b"\0")
    if nul_position >= 0:
        warning_handler.handle(f"Text {text!r} contains problems: nul byte found at position {nul_position}")
        return None
    return encoded


def create_action(
    button_info: collections.abc.Mapping[str, typing.Optional[ButtonMeta]],
    name: str,
    view_names: collections.abc.Container[str],
    warning_handler: WarningHandler,
) -> Action:
    meta = button_info.get(name) or ButtonMeta()

    match classify(meta, name, warning_handler):
        case ActionData("show_prefs"):
            return ShowPreferences()
        case ActionData(ViewAction(set_view=str(view_name))):
            return SetLevel(filter_view_name(name, view_name, view_names, warning_handler))
        case ActionData(ViewAction(locking=locking)) if locking is not None:
            return LockLevel(
                lock=filter_view_name(name, locking.lock_view, view_names, warning_handler),
                unlock=filter_view_name(name, locking.unlock_view, view_names, warning_handler),
            )
        case KeysymData(keysym):
            if not symbols.keysym_valid(keysym):
                warning_handler.handle(f"Keysym name invalid: {keysym}")
                keysym = symbols.PLACEHOLDER_KEYSYM
            return Submit(text=None, keys=(keysym,))
        case TextData(text):
            return Submit(
                text=encode_text(text, warning_handler),
                keys=tuple(symbols.keysym_name_for_codepoint(codepoint) for codepoint in text),
            )
        case other:
            raise ValueError(f"Unexpected button data {other!r}")


def resolve_actions(
    button_info: collections.abc.Mapping[str, typing.Optional[ButtonMeta]],
    button_names: collections.abc.Iterable[str],
    view_names: collections.abc.Container[str],
    warning_handler: WarningHandler,
) -> dict[str, Action]:
    return {name: create_action(button_info, name, view_names, warning_handler) for name in button_names}
