"""設定リゾルバー。

優先順位 (高 → 低):
    CLI オプション > .grepdiff/config.toml > pyproject.toml [tool.grepdiff]
    > ユーザー設定 > GrepdiffConfig のデフォルト値
"""

from __future__ import annotations

from pathlib import Path

from grepdiff.config._loader import read_config_file, read_pyproject_section
from grepdiff.config._locator import (
    find_project_config,
    find_pyproject,
    user_config_path,
)
from grepdiff.models.config import GrepdiffConfig


def merge_config_layers(
    *layers: dict[str, object] | None,
) -> dict[str, object]:
    """低優先度から順に並んだレイヤーをキー単位で上書きマージする。None は無視。"""
    result: dict[str, object] = {}
    for layer in layers:
        if layer is not None:
            result.update(layer)
    return result


def filter_cli_overrides(cli_options: dict[str, object]) -> dict[str, object]:
    """CLI オプション辞書から None 値（未指定）を除外する。"""
    return {k: v for k, v in cli_options.items() if v is not None}


def resolve_config(
    start_dir: Path | None = None,
    cli_overrides: dict[str, object] | None = None,
) -> GrepdiffConfig:
    """設定ソースを解決し GrepdiffConfig を構築する。

    存在しない設定ファイルは単にスキップする。

    Args:
        start_dir: 探索開始ディレクトリ。None の場合はカレントディレクトリ。
        cli_overrides: CLI オプションの辞書。None 値は未指定扱い。

    Returns:
        解決済みの GrepdiffConfig。

    Raises:
        pydantic.ValidationError: マージ後の設定が不正な場合。
        tomllib.TOMLDecodeError: 設定ファイルの TOML 構文が不正な場合。
        UnicodeDecodeError: 設定ファイルが UTF-8 でない場合。
        OSError: 設定ファイルを読めない場合。
    """
    start = start_dir if start_dir is not None else Path.cwd()

    pyproject_path = find_pyproject(start)
    project_path = find_project_config(start)

    merged = merge_config_layers(
        read_config_file(user_config_path()),
        read_pyproject_section(pyproject_path) if pyproject_path else None,
        read_config_file(project_path) if project_path else None,
        filter_cli_overrides(cli_overrides) if cli_overrides else None,
    )
    return GrepdiffConfig.model_validate(merged)
