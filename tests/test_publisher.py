# -*- coding: utf-8 -*-
"""Tests for publishing frames into the downloads folder."""

from __future__ import annotations

from pathlib import Path

import pytest

from conftest import PNG_1X1_BYTES, write_png
from frameexporter.pipeline.publisher import DownloadsPublisher, PublishError, guess_image_type


def test_publish_copies_frame_keeping_its_name(tmp_path: Path) -> None:
    frame = write_png(tmp_path / "scratch" / "clip_frame_0001.png")
    downloads = tmp_path / "Downloads"

    published = DownloadsPublisher(downloads).publish(frame)

    assert published.destination == downloads / "clip_frame_0001.png"
    assert published.destination.read_bytes() == PNG_1X1_BYTES
    assert published.source == frame
    assert published.mime_type == "image/png"
    assert frame.exists()


def test_publish_does_not_overwrite_existing_download(tmp_path: Path) -> None:
    frame = write_png(tmp_path / "scratch" / "clip_frame_0001.png")
    downloads = tmp_path / "Downloads"
    (downloads).mkdir()
    (downloads / "clip_frame_0001.png").write_bytes(b"mine")

    publisher = DownloadsPublisher(downloads)
    first = publisher.publish(frame)
    second = publisher.publish(frame)

    assert first.destination == downloads / "clip_frame_0001 (1).png"
    assert second.destination == downloads / "clip_frame_0001 (2).png"
    assert (downloads / "clip_frame_0001.png").read_bytes() == b"mine"


def test_publish_missing_frame_raises(tmp_path: Path) -> None:
    with pytest.raises(PublishError, match="not found"):
        DownloadsPublisher(tmp_path / "Downloads").publish(tmp_path / "gone.png")


def test_publish_into_unwritable_target_raises(tmp_path: Path) -> None:
    frame = write_png(tmp_path / "scratch" / "f1.png")
    blocker = tmp_path / "Downloads"
    blocker.write_text("a file, not a folder")

    with pytest.raises(PublishError):
        DownloadsPublisher(blocker).publish(frame)


@pytest.mark.parametrize(
    ("name", "expected"),
    [("a.png", "image/png"), ("a.jpg", "image/jpeg"), ("a.jpeg", "image/jpeg"), ("a.bin", "image/png")],
)
def test_guess_image_type(name: str, expected: str) -> None:
    assert guess_image_type(Path(name)) == expected
