# -*- coding: utf-8 -*-
"""State controller driving the pick -> extract -> select -> export workflow."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterable
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from pathlib import Path
from typing import Any

from frameexporter.config import resolve_downloads_dir, resolve_scratch_dir
from frameexporter.constants import (
    EXPORT_FAILED_MESSAGE,
    EXPORT_SUCCESS_MESSAGE,
    EXTRACTION_FAILED_MESSAGE,
    PARTIAL_EXPORT_MESSAGE,
)
from frameexporter.core.state import (
    Error,
    Exporting,
    ExportSuccess,
    Extracting,
    ExtractionSuccess,
    ScreenState,
    Start,
    is_busy,
    state_name,
)
from frameexporter.pipeline.content_resolver import ContentResolver
from frameexporter.pipeline.frame_extractor import FrameExtractionError, FrameExtractor
from frameexporter.pipeline.publisher import DownloadsPublisher, PublishError
from frameexporter.utils.file_utils import reset_dir

logger = logging.getLogger(__name__)


StateCallback = Callable[[ScreenState], None]


class ControllerBusyError(RuntimeError):
    """Raised when a command needs the workflow while an operation is running."""


class FrameExporterController:
    """
    Single source of truth for what the user sees.
    Commands replace the current state and notify subscribers in order.
    Extraction and export run on a single background worker.
    """

    def __init__(
        self,
        extractor: FrameExtractor,
        publisher: DownloadsPublisher,
        resolver: ContentResolver,
        scratch_dir: Path,
        executor: Executor | None = None,
    ) -> None:
        self._extractor = extractor
        self._publisher = publisher
        self._resolver = resolver
        self.scratch_dir = Path(scratch_dir)
        self._executor = executor or ThreadPoolExecutor(max_workers=1, thread_name_prefix="frameexporter")
        self._lock = threading.RLock()
        self._subscribers: list[StateCallback] = []
        self._state: ScreenState = Start()
        self._version = 0

    @classmethod
    def from_config(cls, settings: dict[str, Any]) -> FrameExporterController:
        extraction = settings.get("extraction", {})
        extractor = FrameExtractor(
            fps=extraction.get("fps", 30),
            image_format=str(extraction.get("image_format", "png")),
            ffmpeg_path=extraction.get("ffmpeg_path") or None,
            ffprobe_path=extraction.get("ffprobe_path") or None,
            timeout_seconds=int(extraction.get("timeout_seconds", 3600)),
        )
        return cls(
            extractor=extractor,
            publisher=DownloadsPublisher(resolve_downloads_dir(settings)),
            resolver=ContentResolver(),
            scratch_dir=resolve_scratch_dir(settings),
        )

    @property
    def state(self) -> ScreenState:
        with self._lock:
            return self._state

    def subscribe(self, callback: StateCallback) -> Callable[[], None]:
        """Register `callback`, call it with the current state and return an unsubscribe function."""
        with self._lock:
            self._subscribers.append(callback)
            self._notify(callback, self._state)

        def unsubscribe() -> None:
            with self._lock:
                if callback in self._subscribers:
                    self._subscribers.remove(callback)

        return unsubscribe

    # Commands

    def pick_video(self, source: str | Path) -> Future:
        """Start extracting frames from `source`. The future resolves to the final state."""
        logger.info("Extraction requested for %s", source)
        return self._start_job("pick a video", Extracting(), self._run_extraction, source)

    def select_frame(self, frame: Path) -> None:
        with self._lock:
            current = self._state
            if not isinstance(current, ExtractionSuccess):
                logger.debug("Ignoring frame selection in state %s", state_name(current))
                return
            self._transition(current.toggled(Path(frame)))

    def clear_selection(self) -> None:
        with self._lock:
            self._transition(Start())

    def export_frames(self, frames: Iterable[Path]) -> Future:
        """Publish `frames` one by one. The future resolves to the final state."""
        frame_list = [Path(frame) for frame in frames]
        logger.info("Export requested for %d frames", len(frame_list))
        return self._start_job("export frames", Exporting(), self._run_export, frame_list)

    def shutdown(self, wait: bool = True) -> None:
        with self._lock:
            self._subscribers.clear()
        self._executor.shutdown(wait=wait)

    # Background jobs

    def _run_extraction(self, token: int, source: str | Path) -> ScreenState:
        try:
            video = self._resolver.resolve(source)
            if video.path is None:
                raise FrameExtractionError(f"Could not resolve a local file for {source}")
            output_dir = reset_dir(self.scratch_dir)
            frames = self._extractor.extract_frames(video.path, output_dir, name_prefix=video.frame_prefix)
        except (FrameExtractionError, OSError) as exc:
            logger.warning("Frame extraction failed: %s", exc)
            return self._finish(token, Error(EXTRACTION_FAILED_MESSAGE))
        except Exception:
            logger.exception("Frame extraction crashed")
            return self._finish(token, Error(EXTRACTION_FAILED_MESSAGE))
        return self._finish(token, ExtractionSuccess(frames=tuple(frames)))

    def _run_export(self, token: int, frames: list[Path]) -> ScreenState:
        exported: list[Path] = []
        failed: list[Path] = []
        for frame in frames:
            try:
                published = self._publisher.publish(frame)
            except (PublishError, OSError) as exc:
                logger.warning("Could not publish %s: %s", frame, exc)
                failed.append(frame)
                continue
            except Exception:
                logger.exception("Publishing %s crashed", frame)
                failed.append(frame)
                continue
            exported.append(published.destination)

        logger.info("Export finished: %d published, %d failed", len(exported), len(failed))
        if not failed:
            outcome: ScreenState = ExportSuccess(EXPORT_SUCCESS_MESSAGE, exported=tuple(exported))
        elif not exported:
            outcome = Error(EXPORT_FAILED_MESSAGE)
        else:
            message = PARTIAL_EXPORT_MESSAGE.format(exported=len(exported), total=len(frames), failed=len(failed))
            outcome = ExportSuccess(message, exported=tuple(exported), failed=tuple(failed))
        return self._finish(token, outcome)

    # State handling

    def _ensure_idle(self, action: str) -> None:
        if is_busy(self._state):
            raise ControllerBusyError(f"Cannot {action} while in state {state_name(self._state)}")

    def _start_job(self, action: str, busy_state: ScreenState, job: Callable[..., ScreenState], argument: Any) -> Future:
        with self._lock:
            self._ensure_idle(action)
            previous = self._state
            token = self._transition(busy_state)
            try:
                return self._executor.submit(job, token, argument)
            except RuntimeError as exc:
                # Nothing will ever finish the job, so the busy state is undone here.
                logger.error("Could not schedule job to %s: %s", action, exc)
                self._transition(previous)
                raise

    def _transition(self, new_state: ScreenState) -> int:
        self._state = new_state
        self._version += 1
        logger.debug("State -> %s", state_name(new_state))
        for callback in list(self._subscribers):
            self._notify(callback, new_state)
        return self._version

    def _finish(self, token: int, new_state: ScreenState) -> ScreenState:
        # Apply a job result only if nothing else replaced the state meanwhile.
        with self._lock:
            if self._version != token:
                logger.info("Discarding stale %s result, state is %s", state_name(new_state), state_name(self._state))
                return self._state
            self._transition(new_state)
            return new_state

    def _notify(self, callback: StateCallback, state: ScreenState) -> None:
        try:
            callback(state)
        except Exception:
            logger.exception("State subscriber %r failed", callback)
