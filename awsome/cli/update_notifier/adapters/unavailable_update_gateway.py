from __future__ import annotations

from awsome.cli.update_notifier.ports.update_gateway import (
    UpdateGateway,
    UpdateGatewayCause,
    UpdateGatewayError,
)


class UnavailableUpdateGateway(UpdateGateway):
    """Stands in for the git gateway when no git executable is installed."""

    async def aclose(self) -> None:
        return None

    async def is_available(self) -> bool:
        return False

    async def resolve_local_head(self) -> str:
        raise UpdateGatewayError(cause=UpdateGatewayCause.TOOL_UNAVAILABLE)

    async def get_remote_url(self, remote: str) -> str:
        raise UpdateGatewayError(cause=UpdateGatewayCause.TOOL_UNAVAILABLE)

    async def list_remote_branches(self, remote: str, timeout: float) -> list[str]:
        raise UpdateGatewayError(cause=UpdateGatewayCause.TOOL_UNAVAILABLE)

    async def fetch(self, remote: str, timeout: float) -> None:
        raise UpdateGatewayError(cause=UpdateGatewayCause.TOOL_UNAVAILABLE)

    async def resolve_remote_branch(self, remote: str, branch: str) -> str | None:
        raise UpdateGatewayError(cause=UpdateGatewayCause.TOOL_UNAVAILABLE)

    async def count_commits_behind(self, remote_ref: str) -> int:
        raise UpdateGatewayError(cause=UpdateGatewayCause.TOOL_UNAVAILABLE)

    async def has_local_changes(self) -> bool:
        raise UpdateGatewayError(cause=UpdateGatewayCause.TOOL_UNAVAILABLE)

    async def stash(self) -> bool:
        raise UpdateGatewayError(cause=UpdateGatewayCause.TOOL_UNAVAILABLE)

    async def stash_pop(self) -> bool:
        raise UpdateGatewayError(cause=UpdateGatewayCause.TOOL_UNAVAILABLE)

    async def pull(self, remote: str, branch: str, timeout: float) -> None:
        raise UpdateGatewayError(cause=UpdateGatewayCause.TOOL_UNAVAILABLE)
