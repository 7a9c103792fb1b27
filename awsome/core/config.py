from __future__ import annotations

from pathlib import Path
import tomllib

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
import tomli_w

from awsome.core.paths.global_paths import CONFIG_FILE, REPO_DIR

DEFAULT_REGION = "us-west-2"


class ConfigError(Exception):
    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class UpdateCheckerConfig(BaseModel):
    model_config = ConfigDict(extra="ignore")

    enabled: bool = True
    repo_path: Path = Field(default_factory=lambda: REPO_DIR.path)
    remote: str = "origin"
    branch_candidates: list[str] = Field(
        default_factory=lambda: ["main", "master"], min_length=1
    )
    cache_ttl_seconds: int = Field(default=24 * 60 * 60, gt=0)
    network_timeout_seconds: float = Field(default=2.0, gt=0)
    pull_timeout_seconds: float = Field(default=60.0, gt=0)
    suppression_window_seconds: int = Field(default=30, ge=0)
    failure_threshold: int = Field(default=3, ge=0)
    backoff_ttl_multiplier: int = Field(default=3, ge=1)

    @field_validator("repo_path", mode="after")
    @classmethod
    def _expand_repo_path(cls, value: Path) -> Path:
        return value.expanduser()

    @field_validator("remote")
    @classmethod
    def _check_remote(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("remote name must not be empty")
        return value.strip()

    @property
    def backoff_window_seconds(self) -> int:
        return self.backoff_ttl_multiplier * self.cache_ttl_seconds


class AwsomeConfig(BaseModel):
    model_config = ConfigDict(extra="ignore")

    default_region: str = DEFAULT_REGION
    sso_region: str = DEFAULT_REGION
    sso_start_url: str = ""
    update: UpdateCheckerConfig = Field(default_factory=UpdateCheckerConfig)

    @classmethod
    def load(cls, path: Path | None = None) -> AwsomeConfig:
        config_file = path or CONFIG_FILE.path
        try:
            content = config_file.read_text(encoding="utf-8")
        except FileNotFoundError:
            return cls()
        except OSError as e:
            raise ConfigError(f"Could not read {config_file}: {e}") from e

        try:
            data = tomllib.loads(content)
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(f"Invalid TOML in {config_file}: {e}") from e

        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise ConfigError(f"Invalid configuration in {config_file}:\n{e}") from e

    def save(self, path: Path | None = None) -> None:
        config_file = path or CONFIG_FILE.path
        config_file.parent.mkdir(parents=True, exist_ok=True)
        config_file.write_text(
            tomli_w.dumps(self.model_dump(mode="json")), encoding="utf-8"
        )
