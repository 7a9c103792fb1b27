from __future__ import annotations

import asyncio
from collections.abc import Callable
from pathlib import Path
import shutil
from typing import TypeVar

from git import InvalidGitRepositoryError, NoSuchPathError, Repo
from git.exc import GitCommandError

from awsome.cli.update_notifier.ports.update_gateway import (
    UpdateGateway,
    UpdateGatewayCause,
    UpdateGatewayError,
)

T = TypeVar("T")


class GitUpdateGateway(UpdateGateway):
    def __init__(self, repo_path: Path) -> None:
        self._repo_path = repo_path
        self._repo: Repo | None = None

    async def __aenter__(self) -> GitUpdateGateway:
        return self

    async def __aexit__(self, *_: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._repo is not None:
            self._repo.close()
            self._repo = None

    async def is_available(self) -> bool:
        return shutil.which("git") is not None

    async def resolve_local_head(self) -> str:
        repo = self._repo_or_raise()
        try:
            commit = await self._run(lambda: repo.head.commit.hexsha)
        except (ValueError, TypeError, GitCommandError) as e:
            raise UpdateGatewayError(
                cause=UpdateGatewayCause.NOT_A_REPOSITORY,
                message="not a repository: could not resolve the current revision.",
            ) from e

        if not commit:
            raise UpdateGatewayError(cause=UpdateGatewayCause.NOT_A_REPOSITORY)
        return commit

    async def get_remote_url(self, remote: str) -> str:
        repo = self._repo_or_raise()
        try:
            urls = await self._run(lambda: list(repo.remote(remote).urls))
        except (ValueError, GitCommandError) as e:
            raise UpdateGatewayError(
                cause=UpdateGatewayCause.REMOTE_UNCONFIGURED,
                message=f"no remote configured: no remote named '{remote}'.",
            ) from e

        if not urls:
            raise UpdateGatewayError(cause=UpdateGatewayCause.REMOTE_UNCONFIGURED)
        return urls[0]

    async def list_remote_branches(self, remote: str, timeout: float) -> list[str]:
        repo = self._repo_or_raise()
        try:
            out = await self._run(
                lambda: repo.git.ls_remote("--heads", remote, kill_after_timeout=timeout)
            )
        except GitCommandError as e:
            raise UpdateGatewayError(
                cause=UpdateGatewayCause.NETWORK_UNREACHABLE
            ) from e
        return _parse_heads(out)

    async def fetch(self, remote: str, timeout: float) -> None:
        repo = self._repo_or_raise()
        try:
            await self._run(
                lambda: repo.git.fetch("--quiet", remote, kill_after_timeout=timeout)
            )
        except GitCommandError as e:
            raise UpdateGatewayError(cause=UpdateGatewayCause.FETCH_FAILED) from e

    async def resolve_remote_branch(self, remote: str, branch: str) -> str | None:
        repo = self._repo_or_raise()
        ref = f"refs/remotes/{remote}/{branch}"
        try:
            out = await self._run(
                lambda: repo.git.rev_parse("--verify", "--quiet", ref)
            )
        except GitCommandError:
            return None
        return out.strip() or None

    async def count_commits_behind(self, remote_ref: str) -> int:
        repo = self._repo_or_raise()
        try:
            out = await self._run(
                lambda: repo.git.rev_list("--count", f"HEAD..{remote_ref}")
            )
            return int(out)
        except (GitCommandError, ValueError) as e:
            raise UpdateGatewayError(
                cause=UpdateGatewayCause.UNKNOWN,
                message=f"Could not count commits behind {remote_ref}.",
            ) from e

    async def has_local_changes(self) -> bool:
        repo = self._repo_or_raise()
        try:
            return await self._run(lambda: repo.is_dirty(untracked_files=False))
        except GitCommandError as e:
            raise UpdateGatewayError(cause=UpdateGatewayCause.UNKNOWN) from e

    async def stash(self) -> bool:
        repo = self._repo_or_raise()
        try:
            await self._run(lambda: repo.git.stash("push"))
            return True
        except GitCommandError:
            return False

    async def stash_pop(self) -> bool:
        repo = self._repo_or_raise()
        try:
            await self._run(lambda: repo.git.stash("pop"))
            return True
        except GitCommandError:
            return False

    async def pull(self, remote: str, branch: str, timeout: float) -> None:
        repo = self._repo_or_raise()
        try:
            await self._run(
                lambda: repo.git.pull(
                    "--ff-only", "--quiet", remote, branch, kill_after_timeout=timeout
                )
            )
        except GitCommandError as e:
            raise UpdateGatewayError(cause=UpdateGatewayCause.PULL_FAILED) from e

    def _repo_or_raise(self) -> Repo:
        if self._repo is None:
            try:
                self._repo = Repo(self._repo_path)
            except (InvalidGitRepositoryError, NoSuchPathError) as e:
                raise UpdateGatewayError(
                    cause=UpdateGatewayCause.NOT_A_REPOSITORY,
                    message=f"not a repository: {self._repo_path} is not a git checkout.",
                ) from e
        return self._repo

    @staticmethod
    async def _run(fn: Callable[[], T]) -> T:
        return await asyncio.to_thread(fn)


def _parse_heads(ls_remote_output: str) -> list[str]:
    branches = []
    for line in ls_remote_output.splitlines():
        _, _, ref = line.partition("\t")
        if ref.startswith("refs/heads/"):
            branches.append(ref.removeprefix("refs/heads/"))
    return branches
