# -*- coding: utf-8 -*-
"""Headless commands for extracting and exporting frames."""

from __future__ import annotations

import logging
from pathlib import Path

import typer

from frameexporter.config import load_config, validate_config
from frameexporter.core.controller import FrameExporterController
from frameexporter.core.state import Error, ExportSuccess, ExtractionSuccess, state_name
from frameexporter.pipeline.frame_extractor import FrameExtractionError, FrameExtractor

app = typer.Typer(help="Extract video frames with ffmpeg and export them")
logger = logging.getLogger(__name__)


def _load_settings(settings: Path | None) -> dict:
    try:
        return load_config(settings)
    except ValueError as e:
        typer.echo(f"Invalid settings: {e}", err=True)
        raise typer.Exit(2)


@app.command()
def extract(
    video: Path = typer.Argument(..., help="Path to the source video"),
    fps: float = typer.Option(None, help="Frames per second to sample (default from settings)"),
    scratch_dir: Path = typer.Option(None, help="Folder receiving the extracted frames"),
    export_all: bool = typer.Option(False, "--export-all", help="Copy every frame to the downloads folder"),
    downloads_dir: Path = typer.Option(None, help="Downloads folder used by --export-all"),
    settings: Path = typer.Option(None, help="Settings JSON file"),
    verbose: bool = typer.Option(False, help="Verbose output"),
) -> None:
    """Extract frames from a video and optionally export all of them."""
    if verbose:
        logging.basicConfig(level=logging.INFO)

    config = _load_settings(settings)
    if fps is not None:
        config["extraction"]["fps"] = fps
    if scratch_dir is not None:
        config["extraction"]["scratch_dir"] = str(scratch_dir)
    if downloads_dir is not None:
        config["export"]["downloads_dir"] = str(downloads_dir)
    try:
        validate_config(config)
    except ValueError as e:
        typer.echo(f"Invalid options: {e}", err=True)
        raise typer.Exit(2)

    controller = FrameExporterController.from_config(config)
    try:
        typer.echo(f"Extracting frames from: {video}")
        state = controller.pick_video(video).result()
        if isinstance(state, Error):
            typer.echo(state.message, err=True)
            raise typer.Exit(1)
        if not isinstance(state, ExtractionSuccess):
            typer.echo(f"Unexpected state: {state_name(state)}", err=True)
            raise typer.Exit(1)

        typer.echo(f"Extracted {len(state.frames)} frames into {controller.scratch_dir}")
        for frame in state.frames:
            typer.echo(f"  {frame.name}")

        if export_all:
            state = controller.export_frames(state.frames).result()
            if isinstance(state, Error):
                typer.echo(state.message, err=True)
                raise typer.Exit(1)
            typer.echo(state.message)
            if isinstance(state, ExportSuccess):
                for failed in state.failed:
                    typer.echo(f"  failed: {failed.name}", err=True)
    finally:
        controller.shutdown()


@app.command()
def info(
    video: Path = typer.Argument(..., help="Path to the video"),
    settings: Path = typer.Option(None, help="Settings JSON file"),
) -> None:
    """Show duration, resolution and frame rate reported by ffprobe."""
    extraction = _load_settings(settings)["extraction"]
    extractor = FrameExtractor(
        fps=extraction["fps"],
        image_format=extraction["image_format"],
        ffmpeg_path=extraction["ffmpeg_path"] or None,
        ffprobe_path=extraction["ffprobe_path"] or None,
    )
    try:
        details = extractor.get_video_info(video)
    except FrameExtractionError as e:
        typer.echo(f"Failed to read video info: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(f"Video: {video}")
    typer.echo(f"  duration: {details['duration']:.2f}s")
    typer.echo(f"  resolution: {details['width']}x{details['height']}")
    typer.echo(f"  fps: {details['fps']:.2f}")
    estimated = int(details["duration"] * float(extraction["fps"]))
    typer.echo(f"  frames at {extraction['fps']:g} fps: ~{estimated}")


if __name__ == "__main__":
    app()
