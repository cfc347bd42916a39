import functools

from xkbcommon import xkb

XKB_KEY_NoSymbol = 0
PLACEHOLDER_KEYSYM = "space"


@functools.cache
def keysym_from_name(name: str) -> int:
    return xkb.keysym_from_name(name)


def keysym_valid(name: str) -> bool:
    # keysym names are printable ASCII
    if not (name.isascii() and name.isprintable()):
        return False
    return keysym_from_name(name) != XKB_KEY_NoSymbol


def codepoint_keysym_name(codepoint: str) -> str:
    return "U{:04X}".format(ord(codepoint))


def keysym_name_for_codepoint(codepoint: str) -> str:
    "Use the character itself when it is a keysym name (letters, digits), otherwise its U+ form."
    if keysym_valid(codepoint):
        return codepoint
    return codepoint_keysym_name(codepoint)
