import enum

import msgspec

DEFAULT_VIEW_NAME = "base"
FALLBACK_LAYOUT_NAME = "us"


class Bounds(msgspec.Struct, frozen=True, forbid_unknown_fields=True):
    x: float
    y: float
    width: float
    height: float

    @classmethod
    def unit(cls):
        return cls(x=0.0, y=0.0, width=1.0, height=1.0)


@enum.unique
class ArrangementKind(enum.Enum):
    BASE = "base"
    WIDE = "wide"

    @enum.property
    def suffix(self):
        match self:
            case ArrangementKind.BASE:
                return ""
            case ArrangementKind.WIDE:
                return "_wide"

    def apply(self, name: str) -> str:
        "Derive the layout name used for this arrangement from a base layout name."
        return name + self.suffix


class OskLayoutError(Exception):
    pass


class LoadError(OskLayoutError):
    pass


class FormattingError(OskLayoutError):
    pass


class KeycodeMissingError(OskLayoutError):
    def __init__(self, keysym: str, button: str):
        self.keysym = keysym
        self.button = button
        super().__init__(f"keycode {keysym} in key {button} missing from keymap")
