# -*- coding: utf-8 -*-
"""Tests for the headless CLI."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import Mock, patch

import pytest
from typer.testing import CliRunner

from conftest import StubPublisher
from frameexporter.cli.frames_cli import app
from frameexporter.core.controller import FrameExporterController

runner = CliRunner()


@pytest.fixture
def stub_controller(make_controller, monkeypatch):
    controller = make_controller()
    monkeypatch.setattr(FrameExporterController, "from_config", classmethod(lambda cls, settings: controller))
    return controller


def test_extract_lists_frames(stub_controller, sample_video, tmp_path: Path) -> None:
    result = runner.invoke(app, ["extract", str(sample_video), "--settings", str(tmp_path / "settings.json")])

    assert result.exit_code == 0, result.output
    assert "Extracted 2 frames" in result.output
    assert "f1.png" in result.output


def test_extract_and_export_all(stub_controller, sample_video, publisher, tmp_path: Path) -> None:
    result = runner.invoke(
        app, ["extract", str(sample_video), "--export-all", "--settings", str(tmp_path / "settings.json")]
    )

    assert result.exit_code == 0, result.output
    assert "Frames exported successfully" in result.output
    assert len(publisher.published) == 2


def test_extract_missing_video_fails(stub_controller, tmp_path: Path) -> None:
    result = runner.invoke(app, ["extract", str(tmp_path / "missing.mp4"), "--settings", str(tmp_path / "s.json")])

    assert result.exit_code == 1
    assert "Failed to extract frames" in result.output


def test_extract_reports_partial_export(make_controller, monkeypatch, sample_video, tmp_path: Path) -> None:
    controller = make_controller(publisher=StubPublisher(fail_for={"f2.png"}))
    monkeypatch.setattr(FrameExporterController, "from_config", classmethod(lambda cls, settings: controller))

    result = runner.invoke(
        app, ["extract", str(sample_video), "--export-all", "--settings", str(tmp_path / "settings.json")]
    )

    assert result.exit_code == 0, result.output
    assert "Exported 1 of 2 frames, 1 failed" in result.output
    assert "failed: f2.png" in result.output


def test_invalid_settings_exit_code(tmp_path: Path, sample_video) -> None:
    settings = tmp_path / "settings.json"
    settings.write_text('{"extraction": {"fps": -1}}', encoding="utf-8")

    result = runner.invoke(app, ["extract", str(sample_video), "--settings", str(settings)])

    assert result.exit_code == 2


@pytest.mark.parametrize("fps", ["0", "500"])
def test_out_of_range_fps_option_exit_code(fps: str, sample_video, tmp_path: Path, monkeypatch) -> None:
    from_config = Mock()
    monkeypatch.setattr(FrameExporterController, "from_config", from_config)

    result = runner.invoke(
        app, ["extract", str(sample_video), "--fps", fps, "--settings", str(tmp_path / "settings.json")]
    )

    assert result.exit_code == 2
    assert result.exception is None or isinstance(result.exception, SystemExit)
    from_config.assert_not_called()


@patch("subprocess.run")
def test_info_prints_probe_data(mock_run, sample_video, tmp_path: Path) -> None:
    mock_run.return_value = Mock(
        returncode=0,
        stdout='{"format": {"duration": "2.0"}, "streams": [{"codec_type": "video", "width": 640, '
        '"height": 360, "r_frame_rate": "25/1"}]}',
        stderr="",
    )

    result = runner.invoke(app, ["info", str(sample_video), "--settings", str(tmp_path / "settings.json")])

    assert result.exit_code == 0, result.output
    assert "640x360" in result.output
    assert "~60" in result.output


@patch("subprocess.run")
def test_info_failure(mock_run, sample_video, tmp_path: Path) -> None:
    mock_run.return_value = Mock(returncode=1, stdout="", stderr="bad")
    result = runner.invoke(app, ["info", str(sample_video), "--settings", str(tmp_path / "settings.json")])
    assert result.exit_code == 1
