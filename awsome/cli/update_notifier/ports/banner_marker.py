from __future__ import annotations

from typing import Protocol


class BannerMarker(Protocol):
    async def last_shown(self) -> int | None: ...
    async def touch(self, timestamp: int) -> None: ...
