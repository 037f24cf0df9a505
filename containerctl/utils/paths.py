"""Пути рабочей директории containerctl."""

from __future__ import annotations

import os
from pathlib import Path

HOME_ENV_VAR = "CONTAINERCTL_HOME"
WORKDIR_NAME = ".containerctl"


def resolve_workdir() -> Path:
    """Возвращает ``$CONTAINERCTL_HOME/.containerctl`` или ``~/.containerctl``."""

    home_dir = Path(os.environ.get(HOME_ENV_VAR) or Path.home())
    return home_dir / WORKDIR_NAME


def default_config_path() -> Path:
    return resolve_workdir() / "config.json"
