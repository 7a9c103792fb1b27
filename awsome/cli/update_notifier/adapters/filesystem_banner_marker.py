from __future__ import annotations

import asyncio
from logging import getLogger
import os
from pathlib import Path

from awsome.cli.update_notifier.ports.banner_marker import BannerMarker
from awsome.core.paths.global_paths import AWSOME_HOME

logger = getLogger(__name__)


class FileSystemBannerMarker(BannerMarker):
    """Records when the update banner was last shown as the mtime of a file."""

    def __init__(self, base_path: Path | str | None = None) -> None:
        self._base_path = (
            Path(base_path) if base_path is not None else AWSOME_HOME.path
        )
        self._marker_file = self._base_path / "update_banner_shown"

    async def last_shown(self) -> int | None:
        try:
            stat = await asyncio.to_thread(self._marker_file.stat)
        except OSError:
            return None
        return int(stat.st_mtime)

    async def touch(self, timestamp: int) -> None:
        try:
            await asyncio.to_thread(self._touch, timestamp)
        except OSError:
            logger.warning(
                "Could not update banner marker %s", self._marker_file, exc_info=True
            )

    def _touch(self, timestamp: int) -> None:
        self._marker_file.parent.mkdir(parents=True, exist_ok=True)
        self._marker_file.touch()
        os.utime(self._marker_file, (timestamp, timestamp))
