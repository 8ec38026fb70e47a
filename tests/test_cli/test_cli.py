"""Tests for the command-line entry point and file sources."""

import pytest

from tests.conftest import BROKEN_SVG, CIRCLE_SVG, HOME_SVG, ZERO_WIDTH_SVG

from iconmosaic.cli import infer_format, main
from iconmosaic.models.layout import OutputFormat
from iconmosaic.sources import collect_svg_paths, load_sources

SMALL = ["--cell-size", "64", "--cell-gap", "16"]


@pytest.fixture(autouse=True)
def _isolated_cwd(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def icon_dir(tmp_path):
    d = tmp_path / "icons"
    d.mkdir()
    (d / "b_home.svg").write_text(HOME_SVG)
    (d / "a_circle.svg").write_text(CIRCLE_SVG)
    (d / "notes.txt").write_text("not an icon")
    return d


def test_sources_are_sorted_and_filtered(icon_dir):
    paths = collect_svg_paths([icon_dir])
    assert [p.name for p in paths] == ["a_circle.svg", "b_home.svg"]

    sources = load_sources([icon_dir / "b_home.svg", icon_dir])
    assert [s.locator.rsplit("/", 1)[-1] for s in sources] == ["b_home.svg", "a_circle.svg", "b_home.svg"]
    assert sources[1].markup == CIRCLE_SVG


def test_missing_input_raises():
    with pytest.raises(FileNotFoundError):
        collect_svg_paths(["does-not-exist"])


def test_vector_output(icon_dir, tmp_path):
    out = tmp_path / "out" / "grid.svg"
    assert main([str(icon_dir), "-o", str(out), *SMALL]) == 0
    text = out.read_text()
    assert text.startswith("<?xml")
    # 2 icons -> 2x2 grid: 2*64 + 16 + 2*16
    assert 'width="176"' in text
    assert "mosaic-cell-1" in text


def test_skipped_icons_do_not_fail_the_run(icon_dir, tmp_path):
    (icon_dir / "c_broken.svg").write_text(BROKEN_SVG)
    out = tmp_path / "grid.svg"
    assert main([str(icon_dir), "-o", str(out), *SMALL]) == 0
    text = out.read_text()
    assert "mosaic-cell-2" not in text
    assert "mosaic-cell-1" in text


def test_all_icons_dropped_exits_nonzero(tmp_path):
    (tmp_path / "bad.svg").write_text(BROKEN_SVG)
    (tmp_path / "flat.svg").write_text(ZERO_WIDTH_SVG)
    out = tmp_path / "grid.svg"
    assert main([str(tmp_path / "bad.svg"), str(tmp_path / "flat.svg"), "-o", str(out)]) == 1
    assert not out.exists()


def test_empty_folder_is_not_an_error(tmp_path):
    empty = tmp_path / "empty"
    empty.mkdir()
    out = tmp_path / "grid.svg"
    assert main([str(empty), "-o", str(out)]) == 0
    assert not out.exists()


def test_missing_input_exits_nonzero(tmp_path):
    assert main([str(tmp_path / "nope"), "-o", str(tmp_path / "grid.svg")]) == 1


def test_invalid_configuration_exits_2(icon_dir, tmp_path):
    out = tmp_path / "grid.svg"
    assert main([str(icon_dir), "-o", str(out), "--background", "#zzz"]) == 2
    assert main([str(icon_dir), "-o", str(out), "--cell-size", "64", "--border-cell-size", "32"]) == 2
    assert not out.exists()


@pytest.mark.parametrize(
    "output,explicit,expected",
    [
        ("grid.svg", None, OutputFormat.VECTOR),
        ("grid.SVG", None, OutputFormat.VECTOR),
        ("grid.png", None, OutputFormat.RASTER),
        ("grid", None, OutputFormat.RASTER),
        ("grid.png", "vector", OutputFormat.VECTOR),
    ],
)
def test_infer_format(output, explicit, expected):
    assert infer_format(output, explicit) == expected
