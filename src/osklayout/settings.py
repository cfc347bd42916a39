import collections.abc
import dataclasses
import json
import os
import pathlib
import typing

import cattrs

from .commontypes import FALLBACK_LAYOUT_NAME
from .reporting import LogWarnings, RaiseWarnings, WarningHandler

KEYBOARDSDIR_VARIABLE = "OSKLAYOUT_KEYBOARDSDIR"
DATA_SUBDIRECTORY = pathlib.Path("osklayout") / "layouts"
DEFAULT_DATA_DIRS = "/usr/local/share:/usr/share"

settings_converter = cattrs.Converter()


def unstructure_optional_path(p: typing.Optional[pathlib.Path]):
    return None if p is None else str(p)


def structure_optional_path(v: typing.Optional[str], typ):
    return None if v is None else pathlib.Path(v)


settings_converter.register_unstructure_hook(typing.Optional[pathlib.Path], unstructure_optional_path)
settings_converter.register_structure_hook(typing.Optional[pathlib.Path], structure_optional_path)


def data_dirs(environ: collections.abc.Mapping[str, str]) -> list[pathlib.Path]:
    home = environ.get("XDG_DATA_HOME") or str(pathlib.Path(environ.get("HOME", "~")).expanduser() / ".local" / "share")
    system = environ.get("XDG_DATA_DIRS") or DEFAULT_DATA_DIRS
    return [pathlib.Path(home)] + [pathlib.Path(d) for d in system.split(":") if d]


def find_keyboards_path(environ: collections.abc.Mapping[str, str]) -> typing.Optional[pathlib.Path]:
    override = environ.get(KEYBOARDSDIR_VARIABLE)
    if override:
        return pathlib.Path(override)
    for data_dir in data_dirs(environ):
        candidate = data_dir / DATA_SUBDIRECTORY
        if candidate.is_dir():
            return candidate
    return None


@dataclasses.dataclass(kw_only=True)
class Settings:
    keyboards_path: typing.Optional[pathlib.Path] = None
    fallback_layout: str = FALLBACK_LAYOUT_NAME
    strict: bool = False
    _path: typing.Optional[pathlib.Path] = None

    def warning_handler(self) -> WarningHandler:
        if self.strict:
            return RaiseWarnings()
        return LogWarnings()

    def save(self, dest: typing.Optional[pathlib.Path] = None):
        if dest is None:
            dest = self._path
        if dest is None:
            raise ValueError("Settings were not loaded from a file; pass a destination")
        raw = settings_converter.unstructure(self)
        del raw["_path"]
        with dest.open("w") as f:
            json.dump(raw, f, indent=2)

    @classmethod
    def load(cls, src: pathlib.Path):
        with src.open() as f:
            raw = json.load(f)
        raw["_path"] = str(src)
        return settings_converter.structure(raw, cls)

    @classmethod
    def from_environ(cls, environ: typing.Optional[collections.abc.Mapping[str, str]] = None):
        if environ is None:
            environ = os.environ
        return cls(keyboards_path=find_keyboards_path(environ))


settings_converter.register_structure_hook(Settings, cattrs.gen.make_dict_structure_fn(Settings, settings_converter))
