# -*- coding: utf-8 -*-
"""Screen states of the frame exporter.

Exactly one state value is current at a time. Every variant is immutable;
the controller moves between them by replacing the whole value.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Union


@dataclass(frozen=True)
class Start:
    """No video chosen yet."""


@dataclass(frozen=True)
class Extracting:
    """Frame extraction is running."""


@dataclass(frozen=True)
class ExtractionSuccess:
    """Frames are available for selection."""

    frames: tuple[Path, ...]
    selected: frozenset[Path] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        if not self.selected <= set(self.frames):
            raise ValueError("selected frames must be a subset of frames")

    def toggled(self, frame: Path) -> ExtractionSuccess:
        """Return a copy with `frame` added to or removed from the selection."""
        frame = Path(frame)
        if frame not in self.frames:
            return self
        if frame in self.selected:
            return replace(self, selected=self.selected - {frame})
        return replace(self, selected=self.selected | {frame})

    def selected_in_order(self) -> list[Path]:
        return [frame for frame in self.frames if frame in self.selected]


@dataclass(frozen=True)
class Exporting:
    """Frames are being copied to the downloads folder."""


@dataclass(frozen=True)
class ExportSuccess:
    message: str
    exported: tuple[Path, ...] = ()
    failed: tuple[Path, ...] = ()


@dataclass(frozen=True)
class Error:
    message: str


ScreenState = Union[Start, Extracting, ExtractionSuccess, Exporting, ExportSuccess, Error]


def state_name(state: ScreenState) -> str:
    return type(state).__name__


def is_busy(state: ScreenState) -> bool:
    """True while a background operation owns the workflow."""
    return isinstance(state, (Extracting, Exporting))
