from __future__ import annotations

from collections.abc import Callable
import os
from pathlib import Path


class GlobalPath:
    def __init__(self, resolver: Callable[[], Path]) -> None:
        self._resolver = resolver

    @property
    def path(self) -> Path:
        return self._resolver()


_DEFAULT_AWSOME_HOME = Path.home() / ".config" / "awsome"
_DEFAULT_REPO_DIR = Path.home() / ".local" / "share" / "awsome"


def _get_awsome_home() -> Path:
    if awsome_home := os.getenv("AWSOME_HOME"):
        return Path(awsome_home).expanduser().resolve()
    return _DEFAULT_AWSOME_HOME


def _get_repo_dir() -> Path:
    if repo_dir := os.getenv("AWSOME_REPO_DIR"):
        return Path(repo_dir).expanduser().resolve()
    return _DEFAULT_REPO_DIR


AWSOME_HOME = GlobalPath(_get_awsome_home)
REPO_DIR = GlobalPath(_get_repo_dir)
CONFIG_FILE = GlobalPath(lambda: AWSOME_HOME.path / "config.toml")
LOG_FILE = GlobalPath(lambda: AWSOME_HOME.path / "awsome.log")
