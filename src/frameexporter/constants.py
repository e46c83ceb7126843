# -*- coding: utf-8 -*-
"""Application constants."""

APP_NAME = "frame-exporter"
APP_VERSION = "0.1.0"

DEFAULT_SETTINGS_FILE = "settings.json"

DEFAULT_FPS = 30
IMAGE_FORMATS = ("png", "jpg")
FRAME_NAME_PATTERN = "{prefix}_frame_%04d.{ext}"
DEFAULT_FRAME_PREFIX = "video"
SCRATCH_FOLDER_NAME = "framesTemp"

EXTRACTION_FAILED_MESSAGE = "Failed to extract frames"
EXPORT_SUCCESS_MESSAGE = "Frames exported successfully"
EXPORT_FAILED_MESSAGE = "Failed to export frames"
PARTIAL_EXPORT_MESSAGE = "Exported {exported} of {total} frames, {failed} failed"

EXTRACTING_LABEL = "Extracting"
EXPORTING_LABEL = "Exporting"

VIDEO_FILE_FILTER = "Videos (*.mp4 *.mov *.m4v *.mkv *.avi *.webm *.3gp);;All files (*)"
