from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from logging import getLogger
import time

from awsome.cli.update_notifier.ports.banner_marker import BannerMarker
from awsome.cli.update_notifier.ports.update_cache_repository import (
    UpdateCache,
    UpdateCacheRepository,
)
from awsome.cli.update_notifier.ports.update_gateway import (
    DEFAULT_GATEWAY_MESSAGES,
    UpdateGateway,
    UpdateGatewayCause,
    UpdateGatewayError,
)
from awsome.core.config import UpdateCheckerConfig

logger = getLogger(__name__)


@dataclass(frozen=True, slots=True)
class UpdateStatus:
    behind_count: int
    remote_head: str
    checks_failing: bool = False

    @property
    def update_available(self) -> bool:
        return self.behind_count > 0

    @property
    def should_notify(self) -> bool:
        return self.update_available or self.checks_failing


@dataclass(frozen=True, slots=True)
class ForcedCheckResult:
    status: UpdateStatus | None
    cause: UpdateGatewayCause | None = None
    message: str | None = None
    branch: str | None = None

    @property
    def ok(self) -> bool:
        return self.cause is None


@dataclass(frozen=True, slots=True)
class UpdateApplyResult:
    updated: bool
    message: str
    cause: UpdateGatewayCause | None = None
    stash_restored: bool = True


@dataclass(frozen=True, slots=True)
class _Comparison:
    branch: str
    remote_head: str
    behind_count: int


def _describe_gateway_error(error: UpdateGatewayError) -> str:
    if message := getattr(error, "user_message", None):
        return message

    cause = getattr(error, "cause", UpdateGatewayCause.UNKNOWN)
    if isinstance(cause, UpdateGatewayCause):
        return DEFAULT_GATEWAY_MESSAGES.get(
            cause, DEFAULT_GATEWAY_MESSAGES[UpdateGatewayCause.UNKNOWN]
        )

    return DEFAULT_GATEWAY_MESSAGES[UpdateGatewayCause.UNKNOWN]


class UpdateChecker:
    """Tells whether the local AWsome checkout is behind its remote.

    The outcome of every live comparison is persisted in the update cache.
    While the cache is fresh no git command touches the network. Failures
    never propagate: they bump ``failed_checks`` and keep the last known-good
    ``remote_head``/``behind_count``.
    """

    def __init__(
        self,
        gateway: UpdateGateway,
        cache_repository: UpdateCacheRepository,
        banner_marker: BannerMarker,
        config: UpdateCheckerConfig,
        get_current_timestamp: Callable[[], int] = lambda: int(time.time()),
    ) -> None:
        self._gateway = gateway
        self._cache_repository = cache_repository
        self._banner_marker = banner_marker
        self._config = config
        self._get_current_timestamp = get_current_timestamp

    async def check_for_updates(self) -> UpdateStatus | None:
        if not self._config.enabled:
            return None

        if not await self._gateway.is_available():
            logger.debug("git is not available, skipping update check")
            return None

        now = self._get_current_timestamp()
        if await self._is_banner_suppressed(now):
            return None

        cache = await self._load_cache()
        if cache.is_fresh(now):
            return await self._report(cache, now)

        try:
            comparison = await self._compare()
        except UpdateGatewayError as error:
            cache = await self._record_failure(cache, now, error)
            return self._failing_status(cache, now)

        cache = await self._record_success(now, comparison)
        return await self._report(cache, now)

    async def force_check(self) -> ForcedCheckResult:
        if not await self._gateway.is_available():
            return ForcedCheckResult(
                status=None,
                cause=UpdateGatewayCause.TOOL_UNAVAILABLE,
                message=DEFAULT_GATEWAY_MESSAGES[UpdateGatewayCause.TOOL_UNAVAILABLE],
            )

        now = self._get_current_timestamp()
        cache = await self._load_cache()
        try:
            comparison = await self._compare()
        except UpdateGatewayError as error:
            cache = await self._record_failure(cache, now, error)
            return ForcedCheckResult(
                status=self._failing_status(cache, now),
                cause=error.cause,
                message=_describe_gateway_error(error),
            )

        await self._record_success(now, comparison)
        if comparison.behind_count > 0:
            await self._banner_marker.touch(now)

        return ForcedCheckResult(
            status=UpdateStatus(
                behind_count=comparison.behind_count,
                remote_head=comparison.remote_head,
            ),
            branch=comparison.branch,
        )

    async def apply_update(self) -> UpdateApplyResult:
        result = await self.force_check()
        if not result.ok or result.status is None or result.branch is None:
            return UpdateApplyResult(
                updated=False,
                message=result.message
                or DEFAULT_GATEWAY_MESSAGES[UpdateGatewayCause.UNKNOWN],
                cause=result.cause,
            )

        if not result.status.update_available:
            return UpdateApplyResult(
                updated=False, message="AWsome is already up to date."
            )

        now = self._get_current_timestamp()
        cache = await self._load_cache()
        stashed = False
        try:
            if await self._gateway.has_local_changes():
                stashed = await self._gateway.stash()
                if not stashed:
                    logger.warning("Could not stash local changes before pulling")
            await self._gateway.pull(
                self._config.remote, result.branch, self._config.pull_timeout_seconds
            )
            head = await self._gateway.resolve_local_head()
        except UpdateGatewayError as error:
            return await self._abort_update(cache, now, error, stashed)
        except Exception as e:
            logger.warning("Unexpected error while applying update", exc_info=True)
            error = UpdateGatewayError(cause=UpdateGatewayCause.UNKNOWN)
            error.__cause__ = e
            return await self._abort_update(cache, now, error, stashed)

        restored = await self._restore_stash(stashed)
        await self._record_success(
            now, _Comparison(branch=result.branch, remote_head=head, behind_count=0)
        )
        return UpdateApplyResult(
            updated=True,
            message=f"AWsome has been updated to the latest version ({head[:7]}).",
            stash_restored=restored,
        )

    async def _abort_update(
        self,
        cache: UpdateCache,
        now: int,
        error: UpdateGatewayError,
        stashed: bool,
    ) -> UpdateApplyResult:
        restored = await self._restore_stash(stashed)
        await self._record_failure(cache, now, error)
        return UpdateApplyResult(
            updated=False,
            message=_describe_gateway_error(error),
            cause=error.cause,
            stash_restored=restored,
        )

    async def _is_banner_suppressed(self, now: int) -> bool:
        last_shown = await self._banner_marker.last_shown()
        if last_shown is None:
            return False
        return now - last_shown <= self._config.suppression_window_seconds

    async def _load_cache(self) -> UpdateCache:
        return await self._cache_repository.get() or UpdateCache()

    async def _report(self, cache: UpdateCache, now: int) -> UpdateStatus | None:
        checks_failing = self._checks_failing(cache, now)
        if cache.behind_count <= 0 and not checks_failing:
            return None

        if cache.behind_count > 0:
            await self._banner_marker.touch(now)

        return UpdateStatus(
            behind_count=cache.behind_count,
            remote_head=cache.remote_head,
            checks_failing=checks_failing,
        )

    def _failing_status(self, cache: UpdateCache, now: int) -> UpdateStatus | None:
        if not self._checks_failing(cache, now):
            return None
        return UpdateStatus(behind_count=0, remote_head="", checks_failing=True)

    def _checks_failing(self, cache: UpdateCache, now: int) -> bool:
        return (
            cache.failed_checks > self._config.failure_threshold
            and now - cache.last_successful_check > self._config.backoff_window_seconds
        )

    async def _compare(self) -> _Comparison:
        try:
            return await self._run_comparison()
        except UpdateGatewayError:
            raise
        except Exception as e:
            logger.warning("Unexpected error while checking for updates", exc_info=True)
            raise UpdateGatewayError(cause=UpdateGatewayCause.UNKNOWN) from e

    async def _run_comparison(self) -> _Comparison:
        remote = self._config.remote
        timeout = self._config.network_timeout_seconds

        await self._gateway.resolve_local_head()
        await self._gateway.get_remote_url(remote)
        # fail fast before fetching when the network is down
        await self._gateway.list_remote_branches(remote, timeout)
        await self._gateway.fetch(remote, timeout)

        branch, remote_head = await self._resolve_branch(remote)
        behind_count = await self._gateway.count_commits_behind(f"{remote}/{branch}")
        return _Comparison(
            branch=branch, remote_head=remote_head, behind_count=behind_count
        )

    async def _resolve_branch(self, remote: str) -> tuple[str, str]:
        for branch in self._config.branch_candidates:
            if remote_head := await self._gateway.resolve_remote_branch(remote, branch):
                return branch, remote_head

        candidates = ", ".join(self._config.branch_candidates)
        raise UpdateGatewayError(
            cause=UpdateGatewayCause.BRANCH_UNRESOLVABLE,
            message=f"branch not found: none of {candidates} exist on {remote}.",
        )

    async def _restore_stash(self, stashed: bool) -> bool:
        if not stashed:
            return True
        if await self._gateway.stash_pop():
            return True
        logger.warning("Could not restore stashed changes after pulling")
        return False

    async def _record_failure(
        self, cache: UpdateCache, now: int, error: UpdateGatewayError
    ) -> UpdateCache:
        logger.info("Update check failed (%s): %s", error.cause, error)
        return await self._write_update_cache(
            now,
            last_successful_check=cache.last_successful_check,
            failed_checks=cache.failed_checks + 1,
            remote_head=cache.remote_head,
            behind_count=cache.behind_count,
        )

    async def _record_success(self, now: int, comparison: _Comparison) -> UpdateCache:
        return await self._write_update_cache(
            now,
            last_successful_check=now,
            failed_checks=0,
            remote_head=comparison.remote_head,
            behind_count=comparison.behind_count,
        )

    async def _write_update_cache(
        self,
        now: int,
        *,
        last_successful_check: int,
        failed_checks: int,
        remote_head: str,
        behind_count: int,
    ) -> UpdateCache:
        # expires_at always moves a full TTL past this attempt, failures included
        update_cache = UpdateCache(
            last_check=now,
            last_successful_check=last_successful_check,
            failed_checks=failed_checks,
            remote_head=remote_head,
            behind_count=behind_count,
            expires_at=now + self._config.cache_ttl_seconds,
        )
        await self._cache_repository.set(update_cache)
        return update_cache
