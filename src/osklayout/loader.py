# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
from __future__ import annotations

import logging
import pathlib
import typing

import attr

from . import layout
from .commontypes import FALLBACK_LAYOUT_NAME, ArrangementKind, FormattingError, OskLayoutError
from .schema import BadKeymap, LayoutDocument, LayoutFileMissing, LoadError

if typing.TYPE_CHECKING:
    from .reporting import WarningHandler
    from .settings import Settings

logger = logging.getLogger(__name__)

LAYOUT_FILE_SUFFIX = ".yaml"


@attr.frozen
class FileSource:
    path: pathlib.Path

    def __str__(self):
        return f"Path: {self.path}"


@attr.frozen
class ResourceSource:
    name: str

    def __str__(self):
        return f"Resource: {self.name}"


LayoutSource = FileSource | ResourceSource


class NoLayoutFound(OskLayoutError):
    pass


def list_layout_sources(
    name: str,
    kind: ArrangementKind,
    keyboards_path: typing.Optional[pathlib.Path] = None,
    fallback_name: str = FALLBACK_LAYOUT_NAME,
) -> list[tuple[ArrangementKind, LayoutSource]]:
    """Candidate sources for a layout, most preferred first.

    The order is: requested name in the requested arrangement, requested name in the base arrangement, fallback
    name in the requested arrangement, fallback name in the base arrangement. For each of those an override file
    comes before the bundled resource.
    """
    sources: list[tuple[ArrangementKind, LayoutSource]] = []

    def add_by_name(source_name: str, source_kind: ArrangementKind):
        if keyboards_path is not None:
            sources.append((source_kind, FileSource(keyboards_path / (source_name + LAYOUT_FILE_SUFFIX))))
        sources.append((source_kind, ResourceSource(source_name)))

    if kind is not ArrangementKind.BASE:
        add_by_name(kind.apply(name), kind)
    add_by_name(name, ArrangementKind.BASE)
    if kind is not ArrangementKind.BASE:
        add_by_name(kind.apply(fallback_name), kind)
    add_by_name(fallback_name, ArrangementKind.BASE)
    return sources


def load_document(source: LayoutSource) -> LayoutDocument:
    match source:
        case FileSource(path):
            return LayoutDocument.from_file(path)
        case ResourceSource(name):
            return LayoutDocument.from_resource(name)
        case _:
            raise TypeError(f"Unknown layout source {source!r}")


def load_layout_data(source: LayoutSource, warning_handler: WarningHandler) -> layout.LayoutData:
    document = load_document(source)
    try:
        return layout.build(document, warning_handler)
    except FormattingError as exc:
        raise BadKeymap(f"Bad key map: {exc}") from exc


def load_layout_data_with_fallback(
    name: str,
    kind: ArrangementKind,
    keyboards_path: typing.Optional[pathlib.Path],
    warning_handler: WarningHandler,
    fallback_name: str = FALLBACK_LAYOUT_NAME,
) -> tuple[ArrangementKind, layout.LayoutData]:
    for source_kind, source in list_layout_sources(name, kind, keyboards_path, fallback_name):
        try:
            data = load_layout_data(source, warning_handler)
        except LayoutFileMissing as exc:
            logger.debug("Tried file %s, but it's missing: %s", source.path, exc)
        except LoadError as exc:
            logger.warning("Failed to load layout from %s: %s, skipping", source, exc)
        else:
            logger.debug("Loaded layout %s from %s", name, source)
            return source_kind, data
    raise NoLayoutFound(f"No useful layout found for {name} ({kind.value})")


def load_layout(name: str, kind: ArrangementKind, settings: Settings) -> layout.Layout:
    kind, data = load_layout_data_with_fallback(
        name,
        kind,
        settings.keyboards_path,
        settings.warning_handler(),
        fallback_name=settings.fallback_layout,
    )
    return layout.Layout(kind=kind, data=data)
