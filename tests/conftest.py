from __future__ import annotations

from collections.abc import Iterator
import logging
from pathlib import Path

import pytest

from awsome.core.paths import global_paths
from awsome.core.utils import logger


@pytest.fixture(autouse=True)
def tmp_working_directory(
    monkeypatch: pytest.MonkeyPatch, tmp_path_factory: pytest.TempPathFactory
) -> Path:
    tmp_working_directory = tmp_path_factory.mktemp("test_cwd")
    monkeypatch.chdir(tmp_working_directory)
    return tmp_working_directory


@pytest.fixture(autouse=True)
def awsome_home(
    monkeypatch: pytest.MonkeyPatch, tmp_path_factory: pytest.TempPathFactory
) -> Path:
    tmp_path = tmp_path_factory.mktemp("awsome")
    awsome_home = tmp_path / ".config" / "awsome"
    awsome_home.mkdir(parents=True, exist_ok=True)

    monkeypatch.delenv("AWSOME_HOME", raising=False)
    monkeypatch.delenv("AWSOME_REPO_DIR", raising=False)
    monkeypatch.setattr(global_paths, "_DEFAULT_AWSOME_HOME", awsome_home)
    monkeypatch.setattr(global_paths, "_DEFAULT_REPO_DIR", tmp_path / "repo")
    return awsome_home


@pytest.fixture(autouse=True)
def awsome_logger() -> Iterator[logging.Logger]:
    handlers = logger.handlers[:]
    level, propagate = logger.level, logger.propagate
    yield logger
    for handler in logger.handlers:
        if handler not in handlers:
            handler.close()
    logger.handlers = handlers
    logger.setLevel(level)
    logger.propagate = propagate
