from __future__ import annotations

import collections.abc
import logging
import typing

import msgspec

from . import keymap
from .action import Action, IconName, Label, Submit, Text
from .commontypes import ArrangementKind, Bounds, KeycodeMissingError
from .keystate import KeyState, KeyStateCell
from .resolve import resolve_actions
from .schema import ButtonMeta, LayoutDocument, Outline, split_row

if typing.TYPE_CHECKING:
    from .reporting import WarningHandler

logger = logging.getLogger(__name__)

DEFAULT_OUTLINE_NAME = "default"


class Button(msgspec.Struct, frozen=True):
    name: str
    outline_name: str
    bounds: Bounds
    label: Label
    state: KeyStateCell


class Row(msgspec.Struct, frozen=True):
    buttons: tuple[Button, ...]
    angle: int = 0
    bounds: typing.Optional[Bounds] = None


class View(msgspec.Struct, frozen=True):
    bounds: Bounds
    rows: tuple[Row, ...]


class LayoutData(msgspec.Struct, frozen=True):
    views: dict[str, View]
    keymap_str: str

    def iter_buttons(self) -> collections.abc.Iterator[Button]:
        for view in self.views.values():
            for row in view.rows:
                yield from row.buttons


class Layout(msgspec.Struct, frozen=True):
    kind: ArrangementKind
    data: LayoutData


def collect_keysyms(actions: collections.abc.Iterable[Action]) -> list[str]:
    keysyms = []
    for action in actions:
        match action:
            case Submit(keys=keys):
                keysyms.extend(keys)
    return keysyms


def bind_keycodes(name: str, action: Action, keycodes: collections.abc.Mapping[str, int]) -> list[int]:
    match action:
        case Submit(keys=keys):
            try:
                return [keycodes[keysym] for keysym in keys]
            except KeyError as exc:
                raise KeycodeMissingError(exc.args[0], name) from exc
        case _:
            return []


def compile_keystates(actions: collections.abc.Mapping[str, Action]) -> tuple[dict[str, KeyState], str]:
    keycodes = keymap.generate_keycodes(collect_keysyms(actions.values()))
    states = {
        name: KeyState(action=action, keycodes=bind_keycodes(name, action, keycodes)) for name, action in actions.items()
    }
    return states, keymap.generate_keymap(states)


def create_label(meta: ButtonMeta, name: str) -> Label:
    if meta.icon is not None:
        return IconName(meta.icon)
    if meta.label is not None:
        return Text(meta.label)
    if meta.text is not None:
        return Text(meta.text)
    return Text(name)


def resolve_outline(
    meta: ButtonMeta, name: str, outlines: collections.abc.Mapping[str, Outline], warning_handler: WarningHandler
) -> tuple[str, Outline]:
    outline_name = DEFAULT_OUTLINE_NAME
    if meta.outline is not None:
        if meta.outline in outlines:
            outline_name = meta.outline
        else:
            warning_handler.handle(f"Outline named {meta.outline} does not exist! Using default for button {name}")
    outline = outlines.get(outline_name)
    if outline is None:
        warning_handler.handle("No default outline defined! Using 1x1!")
        outline = Outline(bounds=Bounds.unit())
    return outline_name, outline


def create_button(
    document: LayoutDocument, name: str, state: KeyStateCell, warning_handler: WarningHandler
) -> Button:
    meta = document.button_meta(name)
    outline_name, outline = resolve_outline(meta, name, document.outlines, warning_handler)
    return Button(
        name=name,
        outline_name=outline_name,
        bounds=outline.bounds,
        label=create_label(meta, name),
        state=state,
    )


def build(document: LayoutDocument, warning_handler: WarningHandler) -> LayoutData:
    """Compile a parsed layout into views of buttons plus the keymap text.

    Data problems are reported to warning_handler and patched over. Raises FormattingError when the keymap cannot
    be written, and KeycodeMissingError if the keycode generator skipped a keysym it was given.
    """
    actions = resolve_actions(document.buttons, sorted(document.button_names()), document.views, warning_handler)
    states, keymap_str = compile_keystates(actions)
    cells = {name: KeyStateCell(state) for name, state in states.items()}

    views = {
        view_name: View(
            bounds=document.bounds,
            rows=tuple(
                Row(
                    buttons=tuple(
                        create_button(document, name, cells[name], warning_handler) for name in split_row(row)
                    )
                )
                for row in rows
            ),
        )
        for view_name, rows in document.views.items()
    }
    return LayoutData(views=views, keymap_str=keymap_str)
