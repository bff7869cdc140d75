"""差分フィルタリングエンジン。

公開 API:
    grep_diff: マッチしたハンクとヘッダーを書き出すドライバー。
    compile_pattern: パターン文字列から HunkMatcher を構築する。
    iter_segments / first_boundary: 行頭プレフィックスによる区間分割。
"""

from grepdiff.engine._emitter import GrepResult, HeaderState, grep_diff
from grepdiff.engine._matcher import HunkMatcher, PatternError, compile_pattern
from grepdiff.engine._segmenter import first_boundary, iter_segments

__all__ = [
    "GrepResult",
    "HeaderState",
    "HunkMatcher",
    "PatternError",
    "compile_pattern",
    "first_boundary",
    "grep_diff",
    "iter_segments",
]
