from __future__ import annotations

from enum import StrEnum, auto
from typing import Protocol


class UpdateGatewayCause(StrEnum):
    @staticmethod
    def _generate_next_value_(
        name: str, start: int, count: int, last_values: list[str]
    ) -> str:
        return name.lower()

    TOOL_UNAVAILABLE = auto()
    NOT_A_REPOSITORY = auto()
    REMOTE_UNCONFIGURED = auto()
    NETWORK_UNREACHABLE = auto()
    FETCH_FAILED = auto()
    BRANCH_UNRESOLVABLE = auto()
    PULL_FAILED = auto()
    UNKNOWN = auto()


DEFAULT_GATEWAY_MESSAGES: dict[UpdateGatewayCause, str] = {
    UpdateGatewayCause.TOOL_UNAVAILABLE: "git missing: install git to enable update checks.",
    UpdateGatewayCause.NOT_A_REPOSITORY: "not a repository: the AWsome install directory is not a git checkout.",
    UpdateGatewayCause.REMOTE_UNCONFIGURED: "no remote configured: the AWsome checkout has no remote to compare against.",
    UpdateGatewayCause.NETWORK_UNREACHABLE: "remote unreachable: could not reach the remote, check your network connection.",
    UpdateGatewayCause.FETCH_FAILED: "fetch failed: could not fetch the latest changes from the remote.",
    UpdateGatewayCause.BRANCH_UNRESOLVABLE: "branch not found: the remote has none of the expected branches.",
    UpdateGatewayCause.PULL_FAILED: "pull failed: could not apply the latest changes to the checkout.",
    UpdateGatewayCause.UNKNOWN: "Unable to determine whether an update is available.",
}


class UpdateGatewayError(Exception):
    def __init__(
        self, *, cause: UpdateGatewayCause, message: str | None = None
    ) -> None:
        self.cause = cause
        self.user_message = message
        detail = message or DEFAULT_GATEWAY_MESSAGES.get(
            cause, DEFAULT_GATEWAY_MESSAGES[UpdateGatewayCause.UNKNOWN]
        )
        super().__init__(detail)


class UpdateGateway(Protocol):
    """Version-control operations needed to compare a checkout with its remote.

    Every method raises ``UpdateGatewayError`` on failure. Methods that talk to
    the remote take an explicit timeout in seconds.
    """

    async def aclose(self) -> None: ...
    async def is_available(self) -> bool: ...
    async def resolve_local_head(self) -> str: ...
    async def get_remote_url(self, remote: str) -> str: ...
    async def list_remote_branches(self, remote: str, timeout: float) -> list[str]: ...
    async def fetch(self, remote: str, timeout: float) -> None: ...
    async def resolve_remote_branch(self, remote: str, branch: str) -> str | None: ...
    async def count_commits_behind(self, remote_ref: str) -> int: ...
    async def has_local_changes(self) -> bool: ...
    async def stash(self) -> bool: ...
    async def stash_pop(self) -> bool: ...
    async def pull(self, remote: str, branch: str, timeout: float) -> None: ...
