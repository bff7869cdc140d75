"""Matcher — ハンク全体に対する正規表現マッチング。

パターンは bytes 正規表現としてコンパイルし、デフォルトで re.MULTILINE を付与する。
これにより ^ と $ はハンク内の各行頭・行末にマッチする。
ハンク全体の先頭・末尾に限定したい場合は (?-m:...) でパターンを囲む。
re はフラグを外す大域形式 (?-m) を受け付けず "missing :" エラーになる。
"""

from __future__ import annotations

import logging
import re

logger = logging.getLogger(__name__)


class PatternError(Exception):
    """正規表現パターンのコンパイルエラー。

    Attributes:
        pattern: コンパイルに失敗したパターン文字列。
    """

    def __init__(self, pattern: str, reason: str) -> None:
        self.pattern = pattern
        super().__init__(f"invalid pattern {pattern!r}: {reason}")


class HunkMatcher:
    """コンパイル済み正規表現をラップし、ハンク単位の判定を提供する。"""

    def __init__(self, regex: re.Pattern[bytes]) -> None:
        self._regex = regex

    @property
    def regex(self) -> re.Pattern[bytes]:
        return self._regex

    def test(self, data: bytes | memoryview) -> bool:
        """data 内のいずれかの位置でパターンがマッチすれば True。"""
        return self._regex.search(data) is not None


def compile_pattern(
    pattern: str,
    *,
    ignore_case: bool = False,
    multiline: bool = True,
) -> HunkMatcher:
    """パターン文字列を HunkMatcher にコンパイルする。

    argv 由来のデコード不能バイトを保持するため surrogateescape で
    エンコードする。

    Args:
        pattern: Python re 構文の正規表現。
        ignore_case: 大文字小文字を区別しない場合 True。
        multiline: ^ と $ を各行にマッチさせる場合 True。

    Returns:
        コンパイル済みの HunkMatcher。

    Raises:
        PatternError: パターンが不正な場合。
    """
    flags = 0
    if multiline:
        flags |= re.MULTILINE
    if ignore_case:
        flags |= re.IGNORECASE
    try:
        regex = re.compile(pattern.encode("utf-8", "surrogateescape"), flags)
    except re.error as e:
        raise PatternError(pattern, str(e)) from e
    logger.debug("compiled pattern %r (flags=%d)", pattern, flags)
    return HunkMatcher(regex)
