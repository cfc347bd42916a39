# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
import logging
import pathlib

import pytest

import osklayout.loader  # important to preserve the namespace for monkeypatching
from osklayout.commontypes import FALLBACK_LAYOUT_NAME, ArrangementKind, FormattingError, KeycodeMissingError
from osklayout.loader import (
    FileSource,
    NoLayoutFound,
    ResourceSource,
    list_layout_sources,
    load_layout,
    load_layout_data,
    load_layout_data_with_fallback,
)
from osklayout.reporting import RaiseWarnings
from osklayout.schema import BadKeymap, LayoutSyntaxError
from osklayout.settings import Settings

DATA = pathlib.Path(__file__).parent / "data"


def test_fallbacks_order():
    # the first fallback is the bundled layout, not FALLBACK_LAYOUT_NAME
    assert list_layout_sources("nb", ArrangementKind.BASE, None) == [
        (ArrangementKind.BASE, ResourceSource("nb")),
        (ArrangementKind.BASE, ResourceSource(FALLBACK_LAYOUT_NAME)),
    ]


def test_fallbacks_order_wide_with_override(tmp_path: pathlib.Path):
    assert list_layout_sources("nb", ArrangementKind.WIDE, tmp_path) == [
        (ArrangementKind.WIDE, FileSource(tmp_path / "nb_wide.yaml")),
        (ArrangementKind.WIDE, ResourceSource("nb_wide")),
        (ArrangementKind.BASE, FileSource(tmp_path / "nb.yaml")),
        (ArrangementKind.BASE, ResourceSource("nb")),
        (ArrangementKind.WIDE, FileSource(tmp_path / "us_wide.yaml")),
        (ArrangementKind.WIDE, ResourceSource("us_wide")),
        (ArrangementKind.BASE, FileSource(tmp_path / "us.yaml")),
        (ArrangementKind.BASE, ResourceSource("us")),
    ]


def test_fallbacks_order_wide_without_override():
    assert [source for _, source in list_layout_sources("nb", ArrangementKind.WIDE, None)] == [
        ResourceSource("nb_wide"),
        ResourceSource("nb"),
        ResourceSource("us_wide"),
        ResourceSource("us"),
    ]


def test_parsing_fallback():
    data = load_layout_data(ResourceSource(FALLBACK_LAYOUT_NAME), RaiseWarnings())
    assert "base" in data.views


def test_override_file_preferred(tmp_path: pathlib.Path):
    (tmp_path / "us.yaml").write_text((DATA / "layout.yaml").read_text())
    kind, data = load_layout_data_with_fallback("us", ArrangementKind.BASE, tmp_path, RaiseWarnings())
    assert kind is ArrangementKind.BASE
    assert list(data.views) == ["base"]
    assert data.views["base"].rows[0].buttons[0].name == "test"


def test_missing_wide_falls_back_to_base():
    kind, data = load_layout_data_with_fallback("nb", ArrangementKind.WIDE, None, RaiseWarnings())
    assert kind is ArrangementKind.BASE
    assert "å" in {button.name for button in data.iter_buttons()}


def test_bad_file_is_skipped(tmp_path: pathlib.Path, caplog: pytest.LogCaptureFixture):
    (tmp_path / "nb.yaml").write_text((DATA / "layout3.yaml").read_text())
    with caplog.at_level(logging.WARNING, logger="osklayout.loader"):
        kind, data = load_layout_data_with_fallback("nb", ArrangementKind.BASE, tmp_path, RaiseWarnings())
    assert "Failed to load layout from Path:" in caplog.text
    assert "ø" in {button.name for button in data.iter_buttons()}


def test_missing_file_is_quiet(tmp_path: pathlib.Path, caplog: pytest.LogCaptureFixture):
    with caplog.at_level(logging.WARNING, logger="osklayout.loader"):
        load_layout_data_with_fallback("nb", ArrangementKind.BASE, tmp_path, RaiseWarnings())
    assert caplog.text == ""


def test_unknown_layout_uses_fallback():
    kind, data = load_layout_data_with_fallback("xx", ArrangementKind.BASE, None, RaiseWarnings())
    assert kind is ArrangementKind.BASE
    assert "q" in {button.name for button in data.iter_buttons()}


def test_bad_keymap_is_a_load_error(monkeypatch: pytest.MonkeyPatch):
    def broken_keymap(keystates):
        raise FormattingError("broken")

    monkeypatch.setattr(osklayout.layout.keymap, "generate_keymap", broken_keymap)
    with pytest.raises(BadKeymap):
        load_layout_data(ResourceSource(FALLBACK_LAYOUT_NAME), RaiseWarnings())


def test_nothing_loads(tmp_path: pathlib.Path, monkeypatch: pytest.MonkeyPatch):
    def no_resources(name):
        return None

    (tmp_path / "us.yaml").write_text("views: [")
    monkeypatch.setattr(osklayout.schema.resources, "get_keyboard", no_resources)
    with pytest.raises(NoLayoutFound):
        load_layout_data_with_fallback("nb", ArrangementKind.WIDE, tmp_path, RaiseWarnings())


def test_syntax_error_message(tmp_path: pathlib.Path):
    path = tmp_path / "broken.yaml"
    path.write_text("views: [")
    with pytest.raises(LayoutSyntaxError):
        load_layout_data(FileSource(path), RaiseWarnings())


def test_load_layout_with_settings(tmp_path: pathlib.Path):
    (tmp_path / "de.yaml").write_text((DATA / "layout_key1.yaml").read_text())
    layout = load_layout("de", ArrangementKind.BASE, Settings(keyboards_path=tmp_path, strict=True))
    assert layout.kind is ArrangementKind.BASE
    assert layout.data.views["base"].rows[0].buttons[0].name == "test"


def test_strict_settings_skip_anomalous_sources(tmp_path: pathlib.Path):
    (tmp_path / "de.yaml").write_text((DATA / "layout_missing_outline.yaml").read_text())
    layout = load_layout("de", ArrangementKind.BASE, Settings(keyboards_path=tmp_path, strict=True))
    assert "q" in {button.name for button in layout.data.iter_buttons()}
    lenient = load_layout("de", ArrangementKind.BASE, Settings(keyboards_path=tmp_path))
    assert list(lenient.data.views) == ["base"]


def test_missing_keycode_is_not_skipped(monkeypatch: pytest.MonkeyPatch):
    def no_keycodes(names):
        return {}

    monkeypatch.setattr(osklayout.layout.keymap, "generate_keycodes", no_keycodes)
    with pytest.raises(KeycodeMissingError):
        load_layout_data_with_fallback("nb", ArrangementKind.BASE, None, RaiseWarnings())
