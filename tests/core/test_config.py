from __future__ import annotations

from pathlib import Path
import tomllib

import pytest

from awsome.core.config import AwsomeConfig, ConfigError, UpdateCheckerConfig
from awsome.core.paths.global_paths import CONFIG_FILE


class TestUpdateCheckerConfigDefaults:
    def test_uses_the_documented_defaults(self) -> None:
        config = UpdateCheckerConfig()

        assert config.enabled is True
        assert config.remote == "origin"
        assert config.branch_candidates == ["main", "master"]
        assert config.cache_ttl_seconds == 86400
        assert config.network_timeout_seconds == 2.0
        assert config.suppression_window_seconds == 30
        assert config.failure_threshold == 3
        assert config.backoff_window_seconds == 3 * 86400

    def test_defaults_repo_path_to_the_install_directory(
        self, awsome_home: Path
    ) -> None:
        config = UpdateCheckerConfig()

        assert config.repo_path == awsome_home.parent.parent / "repo"

    def test_respects_awsome_repo_dir_env_var(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("AWSOME_REPO_DIR", str(tmp_path))

        assert UpdateCheckerConfig().repo_path == tmp_path.resolve()

    def test_expands_user_in_repo_path(self) -> None:
        config = UpdateCheckerConfig(repo_path=Path("~/awsome"))

        assert config.repo_path == Path.home() / "awsome"

    @pytest.mark.parametrize(
        "overrides",
        [
            {"cache_ttl_seconds": 0},
            {"network_timeout_seconds": -1},
            {"branch_candidates": []},
            {"remote": "  "},
            {"backoff_ttl_multiplier": 0},
        ],
    )
    def test_rejects_invalid_values(self, overrides: dict[str, object]) -> None:
        with pytest.raises(ValueError):
            UpdateCheckerConfig.model_validate(overrides)


class TestAwsomeConfigLoad:
    def test_returns_defaults_when_the_file_is_missing(self) -> None:
        config = AwsomeConfig.load()

        assert config.default_region == "us-west-2"
        assert config.sso_start_url == ""
        assert config.update.enabled is True

    def test_reads_values_from_toml(self, awsome_home: Path) -> None:
        CONFIG_FILE.path.write_text(
            "\n".join([
                'sso_start_url = "https://example.awsapps.com/start"',
                'sso_region = "eu-west-1"',
                "",
                "[update]",
                "cache_ttl_seconds = 3600",
                'branch_candidates = ["trunk"]',
            ]),
            encoding="utf-8",
        )

        config = AwsomeConfig.load()

        assert config.sso_start_url == "https://example.awsapps.com/start"
        assert config.sso_region == "eu-west-1"
        assert config.default_region == "us-west-2"
        assert config.update.cache_ttl_seconds == 3600
        assert config.update.branch_candidates == ["trunk"]

    def test_raises_on_invalid_toml(self, tmp_path: Path) -> None:
        config_file = tmp_path / "config.toml"
        config_file.write_text("sso_region = ", encoding="utf-8")

        with pytest.raises(ConfigError, match="Invalid TOML"):
            AwsomeConfig.load(config_file)

    def test_raises_on_invalid_values(self, tmp_path: Path) -> None:
        config_file = tmp_path / "config.toml"
        config_file.write_text("[update]\ncache_ttl_seconds = -5\n", encoding="utf-8")

        with pytest.raises(ConfigError, match="Invalid configuration"):
            AwsomeConfig.load(config_file)


class TestAwsomeConfigSave:
    def test_round_trips_through_the_config_file(self, tmp_path: Path) -> None:
        config_file = tmp_path / "nested" / "config.toml"
        config = AwsomeConfig(
            sso_start_url="https://example.awsapps.com/start",
            update=UpdateCheckerConfig(repo_path=tmp_path / "repo", enabled=False),
        )

        config.save(config_file)

        assert AwsomeConfig.load(config_file) == config
        data = tomllib.loads(config_file.read_text(encoding="utf-8"))
        assert data["update"]["repo_path"] == str(tmp_path / "repo")
