from __future__ import annotations

import collections.abc
import itertools
import logging
import typing

from .action import Submit
from .commontypes import FormattingError

if typing.TYPE_CHECKING:
    from .keystate import KeyState

logger = logging.getLogger(__name__)

XKB_KEYCODE_MIN = 8
XKB_KEYCODE_MAX = 255
FIRST_KEYCODE = XKB_KEYCODE_MIN + 1
# always present, so that the input method can delete and commit
SPECIAL_KEYSYMS = ("BackSpace", "Return")

KEYMAP_HEADER = """\
xkb_keymap {{
    xkb_keycodes "osklayout" {{
        minimum = {minimum};
        maximum = {maximum};
"""

KEYMAP_MIDDLE = """\
    }};

    xkb_symbols "osklayout" {{
        name[Group1] = "Letters";
"""

KEYMAP_FOOTER = """\
    };

    xkb_types "osklayout" {
        virtual_modifiers OSKLayout;

        type "ONE_LEVEL" {
            modifiers= none;
            level_name[Level1]= "Any";
        };
        type "TWO_LEVEL" {
            level_name[Level1]= "Base";
        };
        type "ALPHABETIC" {
            level_name[Level1]= "Base";
        };
        type "KEYPAD" {
            level_name[Level1]= "Base";
        };
        type "SHIFT+ALT" {
            level_name[Level1]= "Base";
        };
    };

    xkb_compatibility "osklayout" {
    };
};
"""


def generate_keycodes(key_names: collections.abc.Iterable[str]) -> dict[str, int]:
    # sorted, so that the same names always get the same keycodes
    names = sorted(set(itertools.chain(key_names, SPECIAL_KEYSYMS)))
    return {name: code for name, code in zip(names, itertools.count(FIRST_KEYCODE))}


def _collect_assignments(keystates: collections.abc.Mapping[str, KeyState]) -> dict[str, int]:
    assigned: dict[str, int] = {}
    for name, state in sorted(keystates.items()):
        match state.action:
            case Submit(keys=keys):
                if not keys:
                    logger.debug("Key %s has no keysyms", name)
                if len(keys) != len(state.keycodes):
                    raise FormattingError(f"Key {name} has {len(keys)} keysyms but {len(state.keycodes)} keycodes")
                for keysym, keycode in zip(keys, state.keycodes):
                    if not XKB_KEYCODE_MIN < keycode <= XKB_KEYCODE_MAX:
                        raise FormattingError(f"Keycode {keycode} for {keysym} is outside of the XKB range")
                    if assigned.get(keysym, keycode) != keycode:
                        raise FormattingError(f"Keysym {keysym} bound to both {assigned[keysym]} and {keycode}")
                    assigned[keysym] = keycode
    return assigned


def generate_keymap(keystates: collections.abc.Mapping[str, KeyState]) -> str:
    assigned = _collect_assignments(keystates)
    owners = {}
    for keysym, keycode in assigned.items():
        if keycode in owners:
            raise FormattingError(f"Keycode {keycode} claimed by both {owners[keycode]} and {keysym}")
        owners[keycode] = keysym
    for keysym in SPECIAL_KEYSYMS:
        if keysym not in assigned:
            # a layout built without generate_keycodes; park the special keys at the top of the range
            code = XKB_KEYCODE_MAX - SPECIAL_KEYSYMS.index(keysym)
            if code in owners:
                raise FormattingError(f"No free keycode left for {keysym}")
            assigned[keysym] = code
            owners[code] = keysym

    ordered = sorted(assigned.items(), key=lambda item: item[1])
    parts = [KEYMAP_HEADER.format(minimum=XKB_KEYCODE_MIN, maximum=XKB_KEYCODE_MAX)]
    parts.extend(f"        <{keysym}> = {keycode};\n" for keysym, keycode in ordered)
    parts.append(KEYMAP_MIDDLE.format())
    parts.extend(f"        key <{keysym}> {{ [ {keysym} ] }};\n" for keysym, _ in ordered)
    parts.append(KEYMAP_FOOTER)
    return "".join(parts)
