"""設定ファイルの探索。

プロジェクト設定 (.grepdiff/config.toml) と pyproject.toml は
開始ディレクトリから親方向に探し、最も近いものを採用する。
"""

from __future__ import annotations

import os
from collections.abc import Iterator
from pathlib import Path
from typing import Final

_PROJECT_DIR: Final[str] = ".grepdiff"
_CONFIG_FILE: Final[str] = "config.toml"
_PYPROJECT_FILE: Final[str] = "pyproject.toml"


def _ancestors(start: Path) -> Iterator[Path]:
    """start 自身とその親ディレクトリをルートまで順に返す。"""
    current = start.resolve()
    yield current
    yield from current.parents


def find_project_config(start: Path) -> Path | None:
    """最も近い .grepdiff/ ディレクトリ内の config.toml のパスを返す。

    .grepdiff/ が見つかれば config.toml の有無にかかわらずそのパスを返す。
    ルートまで .grepdiff/ がなければ None。

    Raises:
        OSError: 探索パス上のアクセス権限エラー等。
    """
    for directory in _ancestors(start):
        if (directory / _PROJECT_DIR).is_dir():
            return directory / _PROJECT_DIR / _CONFIG_FILE
    return None


def find_pyproject(start: Path) -> Path | None:
    """最も近い pyproject.toml のパスを返す。見つからなければ None。"""
    for directory in _ancestors(start):
        candidate = directory / _PYPROJECT_FILE
        if candidate.is_file():
            return candidate
    return None


def user_config_path() -> Path:
    """ユーザー設定ファイルのパス。

    $XDG_CONFIG_HOME/grepdiff/config.toml、未設定なら
    ~/.config/grepdiff/config.toml。存在チェックは行わない。
    """
    xdg_home = os.environ.get("XDG_CONFIG_HOME")
    base = Path(xdg_home) if xdg_home else Path.home() / ".config"
    return base / "grepdiff" / _CONFIG_FILE
