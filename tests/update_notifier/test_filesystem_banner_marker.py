from __future__ import annotations

from pathlib import Path

import pytest

from awsome.cli.update_notifier.adapters.filesystem_banner_marker import (
    FileSystemBannerMarker,
)


@pytest.mark.asyncio
async def test_returns_none_when_the_banner_was_never_shown(tmp_path: Path) -> None:
    marker = FileSystemBannerMarker(base_path=tmp_path)

    assert await marker.last_shown() is None


@pytest.mark.asyncio
async def test_touch_records_the_given_timestamp(tmp_path: Path) -> None:
    marker = FileSystemBannerMarker(base_path=tmp_path)

    await marker.touch(1_700_000_000)

    assert await marker.last_shown() == 1_700_000_000
    assert (tmp_path / "update_banner_shown").exists()


@pytest.mark.asyncio
async def test_touch_refreshes_an_existing_marker(tmp_path: Path) -> None:
    marker = FileSystemBannerMarker(base_path=tmp_path)
    await marker.touch(1_700_000_000)

    await marker.touch(1_700_000_030)

    assert await marker.last_shown() == 1_700_000_030


@pytest.mark.asyncio
async def test_touch_creates_missing_directories(tmp_path: Path) -> None:
    marker = FileSystemBannerMarker(base_path=tmp_path / "a" / "b")

    await marker.touch(1_700_000_000)

    assert await marker.last_shown() == 1_700_000_000
