"""Tests for environment-driven settings."""

import pytest
from pydantic import ValidationError

from iconmosaic.config import Settings
from iconmosaic.models.layout import OutputFormat


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    for name in ("CELL_SIZE", "CELL_GAP", "PADDING", "BORDER_CELL_SIZE", "BORDER_COLOR", "OUTPUT_FORMAT"):
        monkeypatch.delenv(f"ICONMOSAIC_{name}", raising=False)


def test_defaults_match_layout_spec():
    spec = Settings().layout_spec()
    assert (spec.cell_size, spec.cell_gap, spec.padding) == (512, 256, 256)
    assert spec.border_cell_size is None


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("ICONMOSAIC_CELL_SIZE", "64")
    monkeypatch.setenv("ICONMOSAIC_CELL_GAP", "16")
    monkeypatch.setenv("ICONMOSAIC_OUTPUT_FORMAT", "vector")
    settings = Settings()
    spec = settings.layout_spec()
    assert (spec.cell_size, spec.cell_gap, spec.padding) == (64, 16, 16)
    assert settings.pipeline_config().output_format == OutputFormat.VECTOR


def test_dotenv_file_is_read(tmp_path):
    (tmp_path / ".env").write_text("ICONMOSAIC_BORDER_CELL_SIZE=600\n")
    assert Settings().layout_spec().border_cell_size == 600


def test_none_overrides_are_ignored():
    spec = Settings().layout_spec(cell_size=None, cell_gap=8)
    assert spec.cell_size == 512
    assert spec.cell_gap == 8
    assert spec.padding == 8


def test_invalid_environment_value_fails_validation(monkeypatch):
    monkeypatch.setenv("ICONMOSAIC_BORDER_COLOR", "not-a-colour")
    with pytest.raises(ValidationError):
        Settings().layout_spec()
