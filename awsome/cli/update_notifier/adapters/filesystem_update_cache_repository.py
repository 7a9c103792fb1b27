from __future__ import annotations

import asyncio
import json
from logging import getLogger
from pathlib import Path
from typing import Any

from awsome.cli.update_notifier.ports.update_cache_repository import (
    UpdateCache,
    UpdateCacheRepository,
)
from awsome.core.paths.global_paths import AWSOME_HOME

logger = getLogger(__name__)

_INT_FIELDS = (
    "last_check",
    "last_successful_check",
    "failed_checks",
    "behind_count",
    "expires_at",
)


def _non_negative_int(data: dict[str, Any], key: str) -> int:
    value = data.get(key)
    # bool is an int subclass
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        return 0
    return value


class FileSystemUpdateCacheRepository(UpdateCacheRepository):
    def __init__(self, base_path: Path | str | None = None) -> None:
        self._base_path = (
            Path(base_path) if base_path is not None else AWSOME_HOME.path
        )
        self._cache_file = self._base_path / "update_cache.json"

    async def get(self) -> UpdateCache | None:
        try:
            content = await asyncio.to_thread(
                self._cache_file.read_text, encoding="utf-8"
            )
        except OSError:
            return None
        except UnicodeDecodeError:
            logger.debug("Ignoring undecodable update cache at %s", self._cache_file)
            return None

        try:
            data = json.loads(content)
        except (TypeError, json.JSONDecodeError):
            logger.debug("Ignoring corrupted update cache at %s", self._cache_file)
            return None

        if not isinstance(data, dict):
            return None

        remote_head = data.get("remote_head")
        if not isinstance(remote_head, str):
            remote_head = ""

        fields = {key: _non_negative_int(data, key) for key in _INT_FIELDS}
        return UpdateCache(remote_head=remote_head, **fields)

    async def set(self, update_cache: UpdateCache) -> None:
        try:
            payload = json.dumps({
                "last_check": update_cache.last_check,
                "last_successful_check": update_cache.last_successful_check,
                "failed_checks": update_cache.failed_checks,
                "remote_head": update_cache.remote_head,
                "behind_count": update_cache.behind_count,
                "expires_at": update_cache.expires_at,
            })
            await asyncio.to_thread(self._write, payload)
        except OSError:
            logger.warning(
                "Could not write update cache to %s", self._cache_file, exc_info=True
            )
            return None

    def _write(self, payload: str) -> None:
        self._cache_file.parent.mkdir(parents=True, exist_ok=True)
        self._cache_file.write_text(payload, encoding="utf-8")
