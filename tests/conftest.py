# -*- coding: utf-8 -*-
"""Shared pytest fixtures."""

from __future__ import annotations

import base64
import os
import sys
import threading
from concurrent.futures import Executor, Future
from pathlib import Path

import pytest


SRC_DIR = Path(__file__).resolve().parents[1] / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from frameexporter.core.controller import FrameExporterController  # noqa: E402
from frameexporter.pipeline.content_resolver import ContentResolver, ResolvedVideo  # noqa: E402
from frameexporter.pipeline.frame_extractor import FrameExtractionError  # noqa: E402
from frameexporter.pipeline.publisher import PublishedFrame, PublishError  # noqa: E402
from frameexporter.utils.file_utils import list_files  # noqa: E402


# 1x1 opaque RGB(200, 40, 40)
PNG_1X1_BYTES = base64.b64decode(
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAIAAACQd1PeAAAADElEQVR4nGM4oaEBAALUARkFUI+kAAAAAElFTkSuQmCC"
)


def write_png(path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(PNG_1X1_BYTES)
    return path


class ImmediateExecutor(Executor):
    """Run submitted jobs inline so GUI tests need no event-loop waiting."""

    def submit(self, fn, /, *args, **kwargs):
        future: Future = Future()
        try:
            future.set_result(fn(*args, **kwargs))
        except Exception as exc:
            future.set_exception(exc)
        return future


class StubExtractor:
    """Writes fixed frame files into the output folder like ffmpeg would."""

    def __init__(self, names: tuple[str, ...] = ("f1.png", "f2.png"), fail: bool = False) -> None:
        self.names = names
        self.fail = fail
        self.gate: threading.Event | None = None
        self.calls: list[tuple[Path, Path, str]] = []

    def extract_frames(self, video_path: Path, output_dir: Path, name_prefix: str = "frame") -> list[Path]:
        self.calls.append((video_path, output_dir, name_prefix))
        if self.gate is not None:
            self.gate.wait(5)
        if self.fail:
            raise FrameExtractionError("ffmpeg exited with code 1")
        for name in self.names:
            write_png(output_dir / name)
        return list_files(output_dir)


class StubPublisher:
    """Records published frames; fails for the configured file names."""

    def __init__(self, fail_for: set[str] | None = None) -> None:
        self.fail_for = fail_for or set()
        self.gate: threading.Event | None = None
        self.published: list[Path] = []

    def publish(self, frame: Path) -> PublishedFrame:
        if self.gate is not None:
            self.gate.wait(5)
        if frame.name in self.fail_for:
            raise PublishError(f"Could not copy {frame.name}")
        self.published.append(frame)
        return PublishedFrame(source=frame, destination=Path("/downloads") / frame.name, mime_type="image/png")


class FailingResolver:
    def resolve(self, source) -> ResolvedVideo:
        return ResolvedVideo(path=None, display_name=None)


@pytest.fixture
def sample_video(tmp_path: Path) -> Path:
    path = tmp_path / "clip.mp4"
    path.write_bytes(b"\x00" * 2048)
    return path


@pytest.fixture
def scratch_dir(tmp_path: Path) -> Path:
    return tmp_path / "cache" / "framesTemp"


@pytest.fixture
def extractor() -> StubExtractor:
    return StubExtractor()


@pytest.fixture
def publisher() -> StubPublisher:
    return StubPublisher()


@pytest.fixture
def make_controller(scratch_dir: Path, extractor: StubExtractor, publisher: StubPublisher):
    created: list[FrameExporterController] = []

    def _make(resolver=None, executor=None, **overrides) -> FrameExporterController:
        controller = FrameExporterController(
            extractor=overrides.get("extractor", extractor),
            publisher=overrides.get("publisher", publisher),
            resolver=resolver or ContentResolver(),
            scratch_dir=scratch_dir,
            executor=executor,
        )
        created.append(controller)
        return controller

    yield _make
    for controller in created:
        if extractor.gate is not None:
            extractor.gate.set()
        if publisher.gate is not None:
            publisher.gate.set()
        controller.shutdown()


@pytest.fixture
def default_config() -> dict:
    from frameexporter.config import get_default_config

    return get_default_config()


@pytest.fixture(scope="session")
def qt_app():
    pytest.importorskip("PyQt6")
    from PyQt6.QtWidgets import QApplication

    app = QApplication.instance() or QApplication([])
    yield app
