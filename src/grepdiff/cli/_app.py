"""CliApp — Typer アプリケーション定義。

位置引数: PATTERN と 0 個以上の SOURCE。
終了コード: 0 = マッチあり, 1 = マッチなし, 2 = エラー。
stdout にはマッチしたヘッダーとハンクのみを出力し、エラーは stderr に出す。
"""

from __future__ import annotations

import importlib.metadata
import logging
import os
import sys
import tomllib
from typing import Annotated, BinaryIO

import typer
from pydantic import ValidationError

from grepdiff.cli._source_reader import (
    STDIN_SOURCE,
    SourceOpenError,
    read_source,
)
from grepdiff.config import resolve_config
from grepdiff.engine import HunkMatcher, PatternError, compile_pattern, grep_diff
from grepdiff.models.config import GrepdiffConfig
from grepdiff.models.exit_code import ExitCode

_PROG_NAME = "grepdiff"

logger = logging.getLogger(__name__)

app = typer.Typer(
    name=_PROG_NAME,
    help=(
        "Print only the hunks of a unified diff that match PATTERN.\n\n"
        "The pattern is searched across the whole hunk, starting with its @@ line, "
        "so multiline matches are possible. ^ and $ match at every line; "
        "wrap the pattern in (?-m:...) to anchor to the whole hunk instead."
    ),
    add_completion=False,
)


def _report(message: str) -> None:
    print(f"{_PROG_NAME}: {message}", file=sys.stderr)


def _version_callback(value: bool) -> None:
    """--version 指定時にバージョン番号を出力して終了する。"""
    if value:
        print(importlib.metadata.version(_PROG_NAME))
        raise typer.Exit()


def _configure_logging(verbose: bool) -> None:
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format=f"{_PROG_NAME}: %(name)s: %(message)s",
            stream=sys.stderr,
        )


def grep_sources(
    matcher: HunkMatcher,
    sources: list[str],
    config: GrepdiffConfig,
    stdin: BinaryIO,
    stdout: BinaryIO,
) -> ExitCode:
    """各入力ソースを順に処理し、集約した終了コードを返す。

    ソースを開けない・読めない場合はエラーを報告して処理を継続する。
    読み込み途中のエラーでは、読めた分のデータに対してマッチングを行う。

    Args:
        matcher: コンパイル済みの HunkMatcher。
        sources: ソース名のリスト。空の場合は標準入力を読む。
        config: 解決済みの設定。
        stdin: 標準入力のバイナリストリーム。
        stdout: 出力先のバイナリストリーム。

    Returns:
        全ソースの結果を集約した ExitCode。
    """
    status = ExitCode.NO_MATCH
    try:
        for source in sources or [STDIN_SOURCE]:
            try:
                source_data = read_source(source, stdin)
            except SourceOpenError as e:
                _report(str(e))
                status = status.merge(ExitCode.ERROR)
                continue

            result = grep_diff(
                source_data.data,
                matcher,
                stdout,
                file_marker=config.file_marker,
                hunk_marker=config.hunk_marker,
            )
            logger.debug(
                "%s: %d hunk(s) matched in %d file section(s)",
                source_data.name,
                result.matched_hunks,
                result.file_sections,
            )
            status = status.merge(result.status)

            if source_data.error is not None:
                _report(f"{source_data.name}: {source_data.error}")
                status = status.merge(ExitCode.ERROR)
        stdout.flush()
    except BrokenPipeError:
        # 読み手が先に終了した (grepdiff ... | head)。書き込みはマッチ時のみ
        logger.debug("stdout closed by reader, stopping")
        _discard_stdout(stdout)
        return status.merge(ExitCode.MATCHED)
    return status


def _discard_stdout(stdout: BinaryIO) -> None:
    """閉じられた stdout を /dev/null に差し替え、終了時の flush 失敗を防ぐ。"""
    try:
        fd = stdout.fileno()
    except (OSError, ValueError):
        # 実ファイルを持たないストリーム (テスト用 BytesIO など)
        return
    devnull = os.open(os.devnull, os.O_WRONLY)
    try:
        os.dup2(devnull, fd)
    finally:
        os.close(devnull)


def main() -> None:
    """CLI エントリポイント。pyproject.toml の [project.scripts] から呼び出される。"""
    app()


@app.command()
def grep(
    pattern: Annotated[
        str,
        typer.Argument(help="Regular expression (Python re syntax).", show_default=False),
    ],
    sources: Annotated[
        list[str] | None,
        typer.Argument(
            help="Diff files to read. Reads standard input when omitted or '-'.",
            show_default=False,
        ),
    ] = None,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            help="Show version and exit.",
            callback=_version_callback,
            is_eager=True,
        ),
    ] = None,
    # 設定上書きオプション
    ignore_case: Annotated[
        bool | None,
        typer.Option(
            "--ignore-case/--no-ignore-case",
            "-i",
            help="Match case-insensitively.",
        ),
    ] = None,
    multiline: Annotated[
        bool | None,
        typer.Option(
            "--multiline/--no-multiline",
            help="Let ^ and $ match at every line of a hunk.",
        ),
    ] = None,
    file_marker: Annotated[
        str | None,
        typer.Option("--file-marker", help="Line prefix that starts a file section."),
    ] = None,
    hunk_marker: Annotated[
        str | None,
        typer.Option("--hunk-marker", help="Line prefix that starts a hunk."),
    ] = None,
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Log diagnostics to stderr.")
    ] = False,
) -> None:
    """Print the hunks of unified diffs that match PATTERN."""
    _configure_logging(verbose)

    # 1. config 解決
    config_overrides: dict[str, object] = {
        "ignore_case": ignore_case,
        "multiline": multiline,
        "file_marker": file_marker,
        "hunk_marker": hunk_marker,
    }
    try:
        config = resolve_config(cli_overrides=config_overrides)
    except (ValidationError, tomllib.TOMLDecodeError, UnicodeDecodeError) as e:
        _report(
            f"invalid configuration: {e}\n"
            "Check .grepdiff/config.toml or [tool.grepdiff] in pyproject.toml."
        )
        raise typer.Exit(code=ExitCode.ERROR) from None
    except OSError as e:
        _report(f"cannot read configuration file: {e}")
        raise typer.Exit(code=ExitCode.ERROR) from None

    # 2. パターンのコンパイル（入力を読む前に失敗させる）
    try:
        matcher = compile_pattern(
            pattern,
            ignore_case=config.ignore_case,
            multiline=config.multiline,
        )
    except PatternError as e:
        _report(str(e))
        raise typer.Exit(code=ExitCode.ERROR) from None

    # 3. 入力ソースの処理
    status = grep_sources(
        matcher,
        sources or [],
        config,
        stdin=sys.stdin.buffer,
        stdout=sys.stdout.buffer,
    )
    raise typer.Exit(code=status)
