from __future__ import annotations

from awsome.cli.update_notifier.ports.banner_marker import BannerMarker


class FakeBannerMarker(BannerMarker):
    def __init__(self, shown_at: int | None = None) -> None:
        self.shown_at = shown_at
        self.touch_calls = 0

    async def last_shown(self) -> int | None:
        return self.shown_at

    async def touch(self, timestamp: int) -> None:
        self.touch_calls += 1
        self.shown_at = timestamp
