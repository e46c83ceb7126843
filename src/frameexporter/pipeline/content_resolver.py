# -*- coding: utf-8 -*-
"""Resolve a picked video handle into a local path and display name."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from urllib.parse import urlparse
from urllib.request import url2pathname

from frameexporter.constants import DEFAULT_FRAME_PREFIX


@dataclass(frozen=True)
class ResolvedVideo:
    """Result of resolving a video handle. Either field may be missing."""

    path: Path | None
    display_name: str | None

    @property
    def frame_prefix(self) -> str:
        """File-name-safe prefix for the frames extracted from this video."""
        if not self.display_name:
            return DEFAULT_FRAME_PREFIX
        stem = Path(self.display_name).stem
        safe = re.sub(r"[^A-Za-z0-9._-]+", "_", stem).strip("._")
        return safe or DEFAULT_FRAME_PREFIX


class ContentResolver:
    """Accept `Path` objects, plain path strings and `file://` URIs."""

    def resolve(self, source: str | Path) -> ResolvedVideo:
        candidate = self._to_path(source)
        if candidate is None:
            return ResolvedVideo(path=None, display_name=None)
        path = candidate if candidate.is_file() else None
        return ResolvedVideo(path=path, display_name=candidate.name or None)

    def _to_path(self, source: str | Path) -> Path | None:
        if isinstance(source, Path):
            return source.expanduser()
        text = str(source).strip()
        if not text:
            return None
        if "://" not in text:
            return Path(text).expanduser()
        parsed = urlparse(text)
        if parsed.scheme != "file":
            return None
        if parsed.netloc and parsed.netloc != "localhost":
            return None
        return Path(url2pathname(parsed.path))
