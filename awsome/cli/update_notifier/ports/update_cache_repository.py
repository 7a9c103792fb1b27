from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True, slots=True)
class UpdateCache:
    last_check: int = 0
    last_successful_check: int = 0
    failed_checks: int = 0
    remote_head: str = ""
    behind_count: int = 0
    expires_at: int = 0

    def is_fresh(self, now: int) -> bool:
        return now < self.expires_at


class UpdateCacheRepository(Protocol):
    async def get(self) -> UpdateCache | None: ...
    async def set(self, update_cache: UpdateCache) -> None: ...
