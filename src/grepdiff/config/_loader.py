"""TOML 設定ファイルの読み込み。

値の検証は行わず、辞書をそのまま返す。検証は GrepdiffConfig が担当する。
"""

from __future__ import annotations

import tomllib
from pathlib import Path


def read_config_file(path: Path) -> dict[str, object] | None:
    """設定ファイルを読み込む。ファイルが存在しなければ None。

    Raises:
        tomllib.TOMLDecodeError: TOML 構文エラーの場合。
        UnicodeDecodeError: UTF-8 として読めない場合。
        OSError: ディレクトリである、読み取り権限がない等。
    """
    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except FileNotFoundError:
        return None


def read_pyproject_section(path: Path) -> dict[str, object] | None:
    """pyproject.toml の [tool.grepdiff] テーブルを返す。

    テーブルがない、またはテーブルでない場合は None。
    """
    data = read_config_file(path)
    if data is None:
        return None
    tool = data.get("tool")
    section = tool.get("grepdiff") if isinstance(tool, dict) else None
    return section if isinstance(section, dict) else None
