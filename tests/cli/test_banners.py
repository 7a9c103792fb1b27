from __future__ import annotations

import io
from pathlib import Path

from rich.console import Console

from awsome.cli.banners import (
    render_apply_result,
    render_config,
    render_forced_check,
    render_update_status,
)
from awsome.cli.update_notifier import (
    ForcedCheckResult,
    UpdateApplyResult,
    UpdateGatewayCause,
    UpdateStatus,
)
from awsome.core.config import AwsomeConfig, UpdateCheckerConfig


def render(fn, *args) -> str:
    buffer = io.StringIO()
    fn(Console(file=buffer, width=100), *args)
    return buffer.getvalue()


def test_update_banner_shows_the_number_of_commits() -> None:
    output = render(render_update_status, UpdateStatus(behind_count=1, remote_head="abc"))

    assert "1 commit behind" in output
    assert "awsome update" in output
    assert "network issue" not in output


def test_failing_hint_is_shown_on_its_own() -> None:
    output = render(
        render_update_status,
        UpdateStatus(behind_count=0, remote_head="", checks_failing=True),
    )

    assert "Possible network issue?" in output
    assert "awsome update" not in output


def test_forced_check_shows_the_short_remote_head() -> None:
    result = ForcedCheckResult(
        status=UpdateStatus(behind_count=2, remote_head="0123456789abcdef"),
        branch="master",
    )

    output = render(render_forced_check, result)

    assert "2 commits behind on master (0123456)" in output


def test_forced_check_shows_the_failure_reason() -> None:
    result = ForcedCheckResult(
        status=None,
        cause=UpdateGatewayCause.FETCH_FAILED,
        message="fetch failed: could not fetch the latest changes from the remote.",
    )

    output = render(render_forced_check, result)

    assert "fetch failed" in output


def test_apply_result_warns_about_unrestored_changes() -> None:
    result = UpdateApplyResult(
        updated=True, message="AWsome has been updated.", stash_restored=False
    )

    output = render(render_apply_result, result)

    assert "git stash list" in output


def test_config_lists_regions_and_update_settings(tmp_path: Path) -> None:
    config = AwsomeConfig(
        sso_region="eu-west-1",
        update=UpdateCheckerConfig(repo_path=tmp_path, enabled=False),
    )

    output = render(render_config, config)

    assert "eu-west-1" in output
    assert "not set" in output
    assert "disabled" in output
    assert "origin (main, master)" in output
