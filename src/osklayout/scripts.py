import argparse
import logging
import pathlib

from .commontypes import ArrangementKind
from .layout import LayoutData
from .loader import list_layout_sources, load_layout
from .resources import list_keyboards
from .settings import Settings


def describe(data: LayoutData):
    for view_name, view in data.views.items():
        print(f"view {view_name}: {len(view.rows)} rows")
        for row in view.rows:
            print("   ", " ".join(button.name for button in row.buttons))


dump_layout_parser = argparse.ArgumentParser(description="Load a keyboard layout and print its keymap")
dump_layout_parser.add_argument("name", nargs="?", default=None)
dump_layout_parser.add_argument("--wide", action="store_true")
dump_layout_parser.add_argument("--keyboards-dir", type=pathlib.Path)
dump_layout_parser.add_argument("--settings", type=pathlib.Path)
dump_layout_parser.add_argument("--strict", action="store_true")
dump_layout_parser.add_argument("--sources", action="store_true", help="only list the sources that would be tried")
dump_layout_parser.add_argument("--list", action="store_true", help="list the bundled layouts and exit")
dump_layout_parser.add_argument("--verbose", "-v", action="store_true")


def dump_layout_cli():
    args = dump_layout_parser.parse_args()
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)
    if args.list:
        for name in list_keyboards():
            print(name)
        return
    if args.name is None:
        dump_layout_parser.error("a layout name is required")
    if args.settings is not None:
        settings = Settings.load(args.settings)
    else:
        settings = Settings.from_environ()
    if args.keyboards_dir is not None:
        settings.keyboards_path = args.keyboards_dir
    if args.strict:
        settings.strict = True
    kind = ArrangementKind.WIDE if args.wide else ArrangementKind.BASE

    if args.sources:
        for source_kind, source in list_layout_sources(args.name, kind, settings.keyboards_path, settings.fallback_layout):
            print(f"{source_kind.value}\t{source}")
        return

    layout = load_layout(args.name, kind, settings)
    print(f"arrangement: {layout.kind.value}")
    describe(layout.data)
    print(layout.data.keymap_str)
